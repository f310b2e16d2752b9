"""Provides core RSA functionalities: key generation, encryption and decryption.

Facilitates textbook RSA only, no padding and no hardening, on plain integer message representatives. Keys are small
named tuples so a public and a private key can't be mixed up silently while still unpacking as `(n, e)`/`(n, d)`.

Typical usage example:

    pub, priv = generate_keys(16)
    c = encrypt(200, pub)
    m = decrypt(c, priv)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random
import typing

from textbookrsa import keygen
from textbookrsa import numtheory
from textbookrsa.errors import InvalidModulus
from textbookrsa.errors import MessageOutOfRange


class RSAKey(typing.NamedTuple):
    """The overall RSA key implementation.

    Holds the components shared by a public and a private key.

    Attributes:
        modulus: The modulus of the keypair.
        exponent: The exponent of the key, whether private or public.
    """
    modulus: int
    exponent: int

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation. (Encrypt/Decrypt)

        Args:
            message: The integer message representative.

        Returns:
            `message**exponent % modulus`

        Raises:
            InvalidModulus: If the key's modulus is below 1.
            MessageOutOfRange: If the message is out of range for the current key.
        """
        if self.modulus < 1:
            raise InvalidModulus(f"Key modulus must be >= 1, got {self.modulus}")
        if not 0 <= message < self.modulus:
            raise MessageOutOfRange("Message representative must be in range [0, mod-1]")
        return numtheory.pow_mod(message, self.exponent, self.modulus)


class RSAPubKey(RSAKey):
    """Public half of a key pair, `(n, e)`."""
    __slots__ = ()

    def encrypt(self, message: int) -> int:
        """Use the public key to encrypt the message.

        Args:
            message: The message to encrypt, in range [0, n).

        Returns:
            The ciphertext, in range [0, n).
        """
        return self.c_rsa(message)


class RSAPrivKey(RSAKey):
    """Private half of a key pair, `(n, d)`."""
    __slots__ = ()

    def decrypt(self, ciphertext: int) -> int:
        """Decrypts the ciphertext using the private key.

        Args:
            ciphertext: The ciphertext to decrypt, in range [0, n).

        Returns:
            The recovered message.
        """
        return self.c_rsa(ciphertext)


def generate_keys(bit_length: int,
                  rng: random.Random | None = None,
                  max_tries: int | None = None) -> tuple[RSAPubKey, RSAPrivKey]:
    """Generates an RSA key pair.

    Args:
        bit_length: Size of each of the two primes in bits. Must be >= 2.
        rng: Random source. Defaults to the system CSPRNG.
        max_tries: Optional cap for each of the underlying random searches.

    Returns:
        A tuple of (public key, private key) sharing one modulus.

    Raises:
        ValueError: If `bit_length` is below 1.
        DegenerateKeyPair: If `bit_length` is 1, or no key pair can be formed otherwise.
        SearchExhausted: If a search ran into `max_tries`.
    """
    (n, e), (_, d) = keygen.generate_key_pair(bit_length, rng, max_tries)
    return RSAPubKey(n, e), RSAPrivKey(n, d)


def encrypt(message: int, public_key: RSAPubKey | tuple[int, int]) -> int:
    """Encrypts `message` with `public_key`, an `RSAPubKey` or a plain `(n, e)` tuple.

    Raises:
        TypeError: If handed an `RSAPrivKey`.
    """
    if isinstance(public_key, RSAPrivKey):
        raise TypeError("encrypt needs a public key, got an RSAPrivKey")
    return RSAPubKey(*public_key).encrypt(message)


def decrypt(ciphertext: int, private_key: RSAPrivKey | tuple[int, int]) -> int:
    """Decrypts `ciphertext` with `private_key`, an `RSAPrivKey` or a plain `(n, d)` tuple.

    Raises:
        TypeError: If handed an `RSAPubKey`.
    """
    if isinstance(private_key, RSAPubKey):
        raise TypeError("decrypt needs a private key, got an RSAPubKey")
    return RSAPrivKey(*private_key).decrypt(ciphertext)
