"""Textbook RSA, end to end, on top of a small number theory toolbox.

Provides RSA key generation, encryption and decryption on integer message representatives, without padding.
Furthermore, provides the number theory utilities underneath: gcd/lcm, Bezout coefficients, modular exponentiation,
Miller-Rabin, random primes, factorisation and primitive roots. For learning purposes only.

Typical usage example:

    pub, priv = generate_keys(16)
    c = encrypt(200, pub)
    m = decrypt(c, priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa.errors import DegenerateKeyPair
from textbookrsa.errors import InvalidModulus
from textbookrsa.errors import MessageOutOfRange
from textbookrsa.errors import RSAError
from textbookrsa.errors import SearchExhausted
from textbookrsa.numtheory import extended_gcd
from textbookrsa.numtheory import gcd
from textbookrsa.numtheory import get_prime_factors
from textbookrsa.numtheory import get_random_prime
from textbookrsa.numtheory import get_random_primitive_root
from textbookrsa.numtheory import is_prime
from textbookrsa.numtheory import is_primitive
from textbookrsa.numtheory import lcm
from textbookrsa.numtheory import pow_mod
from textbookrsa.numtheory import power
from textbookrsa.rsa import decrypt
from textbookrsa.rsa import encrypt
from textbookrsa.rsa import generate_keys
from textbookrsa.rsa import RSAKey
from textbookrsa.rsa import RSAPrivKey
from textbookrsa.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "RSAKey",
    "RSAPubKey",
    "RSAPrivKey",
    "generate_keys",
    "encrypt",
    "decrypt",
    "gcd",
    "extended_gcd",
    "lcm",
    "pow_mod",
    "power",
    "is_prime",
    "get_random_prime",
    "get_prime_factors",
    "is_primitive",
    "get_random_primitive_root",
    "RSAError",
    "InvalidModulus",
    "MessageOutOfRange",
    "DegenerateKeyPair",
    "SearchExhausted",
]
