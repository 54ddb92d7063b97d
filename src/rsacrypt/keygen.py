"""Key Generation Utility, covering prime discovery and derivation of the key pair from two primes.

Primes are tested deterministically by trial division against a cached table of small primes. Since every candidate
fits in a 32-bit word, the primes up to 2**16 are all the divisors we will ever need. The key pair itself is derived
from two supplied primes by picking the smallest usable public exponent.

Typical usage example:

    p = find_next_prime(1500)
    q = find_next_prime(1700)
    (n, e), (n, d) = generate_key_pair(p, q)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
from typing import Callable

from rsacrypt.arith import bit_width
from rsacrypt.arith import INT_BITS
from rsacrypt.arith import inverse
from rsacrypt.arith import word
from rsacrypt.arith import WORD_MASK
from rsacrypt.errors import ModulusOverflowError
from rsacrypt.errors import NoValidExponentError
from rsacrypt.errors import SearchExhaustedError

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
_DIVISOR_CAP: int = 1 << (INT_BITS // 2)


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes to generate a set of primes up to `n`.
    Includes memory space optimization and sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(math.isqrt(n) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = _DIVISOR_CAP, change: bool = False) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    Uses `_SMALL_PRIMES` as a cache. Regeneration occurs if the requested range is greater, forced by `change` or
    the cache is empty.

    Args:
        n: The number up to which to generate primes. Defaults to enough to factor any word. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order. All primes at least to `n` or more unless `change` is True.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def check_prime(candidate: int) -> bool:
    """Deterministic primality test by trial division.

    Divides by every known small prime up to the square root of `candidate`.

    Args:
        candidate: The word to test.

    Returns:
        True if `candidate` is prime, False otherwise.
    """
    word(candidate)
    if candidate < 2:
        return False
    root = math.isqrt(candidate)
    for prime in get_pre_primes():
        if prime > root:
            return True
        if candidate % prime == 0:
            return False
    return True


def find_next_prime(n: int, prntr: Callable[[str], None] | None = None) -> int:
    """Finds the first prime at or after `n`, testing odd candidates only.

    Args:
        n: Where to start looking. If even, the search starts at `n + 1`.
        prntr: Optional callable receiving a line for every candidate tested and its verdict.

    Returns:
        The prime found.

    Raises:
        SearchExhaustedError: No prime between `n` and the end of the integer range.
    """
    n = word(n) | 1
    while n < WORD_MASK:
        if check_prime(n):
            if prntr is not None:
                prntr(f"Testing {n}... is a prime")
            return n
        if prntr is not None:
            prntr(f"Testing {n}... not prime")
        n += 2
    raise SearchExhaustedError("Could not find a prime before the end of the integer range.")


def generate_key_pair(p: int, q: int) -> tuple[tuple[int, int], tuple[int, int]]:
    """Generates an RSA key pair from two primes.

    The public exponent is the smallest integer from 2 upwards invertible modulo the totient, with the private
    exponent being that inverse. Primality of `p` and `q` is not verified here.

    Args:
        p: The first prime.
        q: The second prime.

    Returns:
        A tuple of (public, private) sub-tuples (modulus, exponent).

    Raises:
        ModulusOverflowError: If `p * q` would not fit in the integer width.
        NoValidExponentError: If no exponent in `[2, f)` has an inverse.
    """
    if bit_width(p) + bit_width(q) > INT_BITS:
        raise ModulusOverflowError(f"The product of {p} and {q} does not fit in {INT_BITS} bits, use smaller primes.")
    n = p * q
    totient = (p - 1) * (q - 1)
    for e in range(2, totient):
        d = inverse(e, totient)
        if d != 0:
            return (n, e), (n, d)
    raise NoValidExponentError(f"No public exponent is invertible modulo {totient}.")
