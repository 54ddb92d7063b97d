"""Exceptions raised by rsacrypt.

Each error also derives from the closest built-in exception, so callers catching `OverflowError`, `RuntimeError`
or `IOError` keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSACryptError(Exception):
    """Base class for all rsacrypt failures."""


class ModulusOverflowError(RSACryptError, OverflowError):
    """The product of the primes would not fit in the integer width."""


class NoValidExponentError(RSACryptError, RuntimeError):
    """No public exponent below the totient has a multiplicative inverse."""


class SearchExhaustedError(RSACryptError, RuntimeError):
    """The prime search ran off the end of the integer range."""


class CorruptFileError(RSACryptError, IOError):
    """The ciphertext header is inconsistent with the payload length."""
