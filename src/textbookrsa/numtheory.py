"""Number theory toolbox underneath the RSA implementation.

Holds the integer primitives the key generation and the RSA operations are built from: greatest common divisors,
Bezout coefficients, modular exponentiation by repeated squaring, a single-base Miller-Rabin test, random prime
generation, trial-division factorisation and primitive roots. Every randomised function takes an optional `rng`
(anything with a `randint(a, b)` method, e.g. `random.Random(seed)`) and falls back to the system CSPRNG. Every
randomised search takes an optional `max_tries`, and is unbounded without it.

Typical usage example:

    gcd(48, 18)
    p = get_random_prime(16, random.Random(42))
    g = get_random_primitive_root(p, max_tries=1000)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import itertools
import logging
import random
import secrets
from typing import Iterable

from textbookrsa.errors import InvalidModulus
from textbookrsa.errors import SearchExhausted

logger = logging.getLogger(__name__)

_SYSTEM_RANDOM: random.Random = secrets.SystemRandom()


def random_source(rng: random.Random | None) -> random.Random:
    return _SYSTEM_RANDOM if rng is None else rng


def attempts(max_tries: int | None) -> Iterable[int]:
    """Counts attempts from 1, stopping after `max_tries` if given."""
    if max_tries is None:
        return itertools.count(1)
    return range(1, max_tries + 1)


def gcd(a: int, b: int) -> int:
    """Greatest common divisor via the Euclidean algorithm.

    Args:
        a: First integer.
        b: Second integer.

    Returns:
        The non-negative gcd of `a` and `b`. `gcd(a, 0)` is `abs(a)`.
    """
    while b != 0:
        a, b = b, a % b
    return abs(a)


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = g. Runs iteratively, so the number of Euclid steps is not bound by the recursion limit. For
    `b == 0` this gives (a, 1, 0). The sign of `g` follows Python's floor division and is left to the caller, so is
    the reduction of the coefficients.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        Tuple of (g, x, y) where g is the gcd up to sign, and x, y the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def lcm(a: int, b: int) -> int:
    """Least common multiple of `a` and `b`.

    Raises:
        InvalidModulus: If both `a` and `b` are zero.
    """
    g = gcd(a, b)
    if g == 0:
        raise InvalidModulus("lcm is undefined for two zeroes")
    return a * b // g


def pow_mod(base: int, exponent: int, modulus: int) -> int:
    """Modular exponentiation by left-to-right repeated squaring.

    Scans the bits of `exponent` from the most significant one down, squaring the running result at every bit and
    multiplying in `base` where the bit is set.

    Args:
        base: The base, any integer.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        `base**exponent % modulus`, in range [0, modulus).

    Raises:
        ValueError: If `exponent` is negative.
        InvalidModulus: If `modulus` is below 1.
    """
    if modulus < 1:
        raise InvalidModulus(f"Modulus must be >= 1, got {modulus}")
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    result = 1 % modulus
    for i in reversed(range(exponent.bit_length())):
        result = result * result % modulus
        if (exponent >> i) & 1:
            result = result * base % modulus
    return result


def power(base: int, exponent: int) -> int:
    """Plain exponentiation with the same bit scan as `pow_mod`, without any reduction.

    Meant for small exponents only, e.g. powers of two for search bounds.

    Raises:
        ValueError: If `exponent` is negative.
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    result = 1
    for i in reversed(range(exponent.bit_length())):
        result = result * result
        if (exponent >> i) & 1:
            result = result * base
    return result


def is_prime(candidate: int, base: int = 2) -> bool:
    """Perform a single-base Miller-Rabin primality test.

    Decomposes `candidate - 1` into `2**s * t` with `t` odd and checks whether `base**t` is 1, or whether one of the
    following squarings (up to s+1 of them) hits `candidate - 1`.

    This is a probable-prime test: strong pseudoprimes to `base` pass as prime. For base 2 the smallest of those are
    2047, 3277, 4033, 4681 and 8321.

    Args:
        candidate: The integer to test.
        base: The Miller-Rabin witness. Defaults to 2.

    Returns:
        True if `candidate` is probably prime, False if it is certainly composite.
    """
    if candidate <= 1:
        return False
    if candidate == 2:
        return True
    s = 0
    t = candidate - 1
    while t % 2 == 0:
        t //= 2
        s += 1
    b = pow_mod(base, t, candidate)
    if b == 1:
        return True
    for _ in range(s + 1):
        if b == candidate - 1:
            return True
        b = pow_mod(b, 2, candidate)
    return False


def get_random_prime(bit_length: int, rng: random.Random | None = None, max_tries: int | None = None) -> int:
    """Generate a random (probable) prime of roughly `bit_length` bits.

    Draws `x` uniformly from [2**(bit_length-2), 2**(bit_length-1)] and tests the odd candidate `(x << 1) | 1`, until
    one passes `is_prime`. The top of the range lets a candidate spill one bit over `bit_length`.

    Args:
        bit_length: Target size in bits. Must be >= 1. A length of 1 always yields 2.
        rng: Random source. Defaults to the system CSPRNG.
        max_tries: Optional cap on the number of candidates drawn.

    Returns:
        A probable prime.

    Raises:
        ValueError: If `bit_length` is below 1.
        SearchExhausted: If `max_tries` candidates were drawn without a prime.
    """
    if bit_length < 1:
        raise ValueError("Bit length must be at least 1.")
    if bit_length == 1:
        return 2
    rng = random_source(rng)
    two_power = power(2, bit_length - 2)
    tries = 0
    for tries in attempts(max_tries):
        candidate = (rng.randint(two_power, 2 * two_power) << 1) | 1
        if is_prime(candidate):
            logger.debug("Found %d-bit prime after %d candidate(s).", bit_length, tries)
            return candidate
    raise SearchExhausted(f"No {bit_length}-bit prime found in {tries} candidates.", tries)


def get_prime_factors(n: int) -> list[tuple[int, int]]:
    """Factorise `n` by trial division.

    Powers of two come out first, then odd divisors in ascending order while `divisor**2 <= n`. What remains above 1
    afterward is itself prime and is appended last.

    Args:
        n: The integer to factorise. Must be >= 1.

    Returns:
        List of (prime, exponent) pairs, empty for 1.

    Raises:
        ValueError: If `n` is below 1.
    """
    if n < 1:
        raise ValueError("Only positive integers can be factorised.")
    factors: list[tuple[int, int]] = []
    count = 0
    while n % 2 == 0:
        count += 1
        n //= 2
    if count:
        factors.append((2, count))
    divisor = 3
    while divisor * divisor <= n:
        count = 0
        while n % divisor == 0:
            count += 1
            n //= divisor
        if count:
            factors.append((divisor, count))
        divisor += 2
    if n > 1:
        factors.append((n, 1))
    return factors


def is_primitive(candidate: int, modulus: int, textbook: bool = False) -> bool:
    """Check whether `candidate` is a primitive root modulo the prime `modulus`.

    For every prime factor `l` of `modulus - 1` with `k = (modulus - 1) // l`, the default check rejects when
    `k**k % modulus == 1`. Note that this never looks at `candidate` beyond rejecting 0, so it answers the same for
    every non-zero candidate. The standard test, rejecting when `candidate**k % modulus == 1`, is used with
    `textbook=True`.

    Args:
        candidate: The potential primitive root.
        modulus: A prime modulus.
        textbook: Use the standard primitive root test instead of the `k**k` variant.

    Returns:
        True if `candidate` passes the check, False otherwise.
    """
    if candidate == 0:
        return False
    for ell, _ in get_prime_factors(modulus - 1):
        k = (modulus - 1) // ell
        base = candidate if textbook else k
        if pow_mod(base, k, modulus) == 1:
            return False
    return True


def get_random_primitive_root(modulus: int,
                              rng: random.Random | None = None,
                              max_tries: int | None = None,
                              textbook: bool = False) -> int:
    """Find a random primitive root modulo the prime `modulus`.

    Samples uniformly from [1, modulus-1] until `is_primitive` accepts. With the default (`k**k`) check some moduli,
    3 among them, accept no candidate at all, so pass `max_tries` when that matters.

    Args:
        modulus: A prime modulus.
        rng: Random source. Defaults to the system CSPRNG.
        max_tries: Optional cap on the number of samples.
        textbook: Passed to `is_primitive`.

    Returns:
        A primitive root of `modulus`.

    Raises:
        InvalidModulus: If `modulus` is below 2.
        SearchExhausted: If `max_tries` samples were drawn without success.
    """
    if modulus < 2:
        raise InvalidModulus(f"Primitive roots need a modulus >= 2, got {modulus}")
    rng = random_source(rng)
    tries = 0
    for tries in attempts(max_tries):
        g = rng.randint(1, modulus - 1)
        if is_primitive(g, modulus, textbook):
            logger.debug("Found primitive root %d mod %d after %d sample(s).", g, modulus, tries)
            return g
    raise SearchExhausted(f"No primitive root modulo {modulus} found in {tries} samples.", tries)
