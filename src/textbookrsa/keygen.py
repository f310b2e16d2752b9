"""Key pair derivation, from a pair of random primes to the public and private exponent.

Generates the two primes, the Carmichael totient `lcm(p-1, q-1)`, a random public exponent coprime to it and the
matching private exponent from the Bezout coefficients. Everything is plain integers here, the key types live in
`textbookrsa.rsa`.

Typical usage example:

    p, q = generate_primes(16)
    (n, e), (n, d) = generate_key_pair(16, random.Random(7))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random

from textbookrsa import numtheory
from textbookrsa.errors import DegenerateKeyPair
from textbookrsa.errors import SearchExhausted

logger = logging.getLogger(__name__)


def generate_primes(bit_length: int, rng: random.Random | None = None, max_tries: int | None = None) -> tuple[int, int]:
    """Generates a pair of distinct primes of the given bit length.

    Should both draws coincide, `q` is drawn again until they differ.

    Args:
        bit_length: The size of each prime in bits. Must be >= 2.
        rng: Random source. Defaults to the system CSPRNG.
        max_tries: Optional cap, applied to each prime search and to the number of redraws of `q`.

    Returns:
        Two distinct probable primes (p, q).

    Raises:
        ValueError: If `bit_length` is below 1.
        DegenerateKeyPair: If `bit_length` is 1, where the only prime available is 2.
        SearchExhausted: If a search ran into `max_tries`.
    """
    if bit_length < 1:
        raise ValueError("Bit length must be at least 1.")
    if bit_length == 1:
        raise DegenerateKeyPair("1-bit primes are always 2, p and q would be equal.")
    p = numtheory.get_random_prime(bit_length, rng, max_tries)
    q = numtheory.get_random_prime(bit_length, rng, max_tries)
    redraws = 0
    while p == q:  # (Un)Likely story, unless the bit length is tiny.
        if max_tries is not None and redraws >= max_tries:
            raise SearchExhausted(f"Could not draw a prime distinct from {p} in {redraws} redraws.", redraws)
        redraws += 1
        logger.debug("Drew p == q == %d, redrawing q (%d).", p, redraws)
        q = numtheory.get_random_prime(bit_length, rng, max_tries)
    return p, q


def find_public_exponent(totient: int, rng: random.Random | None = None, max_tries: int | None = None) -> int:
    """Draws a public exponent uniformly from [2, totient-1] until it is coprime to `totient`.

    Raises:
        DegenerateKeyPair: If `totient` leaves no candidate, i.e. is below 3.
        SearchExhausted: If `max_tries` draws found no coprime exponent.
    """
    if totient < 3:
        raise DegenerateKeyPair(f"Totient {totient} leaves no room for a public exponent.")
    rng = numtheory.random_source(rng)
    tries = 0
    for tries in numtheory.attempts(max_tries):
        e = rng.randint(2, totient - 1)
        if numtheory.gcd(e, totient) == 1:
            logger.debug("Public exponent found after %d draw(s).", tries)
            return e
    raise SearchExhausted(f"No public exponent coprime to {totient} found in {tries} draws.", tries)


def private_exponent(pub: int, totient: int) -> int:
    """Inverse of `pub` modulo `totient`, normalised into [0, totient)."""
    _, x, _ = numtheory.extended_gcd(pub, totient)
    return ((x % totient) + totient) % totient


def generate_key_pair(bit_length: int,
                      rng: random.Random | None = None,
                      max_tries: int | None = None) -> tuple[tuple[int, int], tuple[int, int]]:
    """Generates an RSA key pair.

    Fully generates a textbook RSA key: modulus, random public exponent and private exponent.

    Args:
        bit_length: The size of each of the two primes in bits. The modulus has about twice as many.
        rng: Random source. Defaults to the system CSPRNG.
        max_tries: Optional cap for each of the underlying random searches.

    Returns:
        A tuple of (public, private) sub-tuples (modulus, exponent).

    Raises:
        ValueError: If `bit_length` is below 1.
        DegenerateKeyPair: If no key pair can be formed for `bit_length`.
        SearchExhausted: If a search ran into `max_tries`.
    """
    p, q = generate_primes(bit_length, rng, max_tries)
    n = p * q
    totient = numtheory.lcm(p - 1, q - 1)
    e = find_public_exponent(totient, rng, max_tries)
    d = private_exponent(e, totient)
    logger.info("Generated %d-bit modulus from two %d-bit primes.", n.bit_length(), bit_length)
    return (n, e), (n, d)
