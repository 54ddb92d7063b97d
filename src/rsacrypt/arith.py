"""Fixed-width integer arithmetic underpinning the whole cryptosystem.

All arithmetic is carried out as if on an unsigned 32-bit word, with intermediate products kept in an accumulator
at least twice as wide. Python integers never overflow, so the word size is enforced explicitly: every public
function validates that its operands are words.

Typical usage example:

    bit_width(2582299)        # 22
    pow_mod(65, 3, 2582299)
    inverse(3, 2579080)       # 1719387
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0

INT_BITS: int = 32
WIDE_BITS: int = 64
WORD_MASK: int = (1 << INT_BITS) - 1
WIDE_MASK: int = (1 << WIDE_BITS) - 1

if WIDE_BITS < 2 * INT_BITS:
    raise RuntimeError(f"Accumulator of {WIDE_BITS} bits cannot hold the product of two {INT_BITS}-bit words.")


def word(value: int | str) -> int:
    """Converts the value into an unsigned word, validating its range.

    Usable as an argparse `type` as well as a plain validator.

    Args:
        value: An integer or a base-10 string representation of one.

    Returns:
        The value as an int.

    Raises:
        ValueError: If the value is not an integer in `[0, 2**INT_BITS)`.
    """
    res = int(value)
    if not 0 <= res <= WORD_MASK:
        raise ValueError(f"{res} does not fit in an unsigned {INT_BITS}-bit word")
    return res


def bit_width(x: int) -> int:
    """Determine how many bits are needed to represent `x`.

    Args:
        x: An unsigned word.

    Returns:
        The number of significant bits, 0 for 0.
    """
    word(x)
    for i in range(INT_BITS - 1, -1, -1):
        if x >> i:
            return i + 1
    return 0


def pow_mod(a: int, b: int, n: int) -> int:
    """Computes `a**b mod n` by binary square-and-multiply.

    The exponent is scanned from its most significant possible bit down. Products of two residues are formed in
    the wide accumulator before reduction, so nothing is lost for any word-sized modulus.

    Args:
        a: The base.
        b: The exponent.
        n: The modulus. Must be nonzero, which is the caller's responsibility.

    Returns:
        The result, always smaller than `n`.

    Raises:
        ValueError: If any argument is not a word.
    """
    wa, wb, wn = word(a), word(b), word(n)
    acc = 1
    for i in range(INT_BITS - 1, -1, -1):
        acc = ((acc * acc) & WIDE_MASK) % wn
        if wb & (1 << i):
            acc = ((acc * wa) & WIDE_MASK) % wn
    return acc & WORD_MASK


def inverse(d: int, f: int) -> int:
    """Finds the multiplicative inverse of `d` modulo `f` with the Extended Euclidean Algorithm.

    Runs on the triples (x1, x2, x3) and (y1, y2, y3), where x3 and y3 are the running remainders and x2, y2 the
    Bezout coefficients of `d`. Stops as soon as the remainder reaches 1.

    Args:
        d: The integer to invert.
        f: The modulus. Must be greater than 1.

    Returns:
        `x` in `[1, f)` such that `x * d % f == 1`, or 0 if `gcd(d, f) != 1`.
    """
    x1, x2, x3 = 1, 0, f
    y1, y2, y3 = 0, 1, d
    while y3 != 0:
        if y3 == 1:
            return f + y2 if y2 < 0 else y2
        q = x3 // y3
        x1, x2, x3, y1, y2, y3 = y1, y2, y3, x1 - q * y1, x2 - q * y2, x3 - q * y3
    # gcd is left in x3, no inverse.
    return 0
