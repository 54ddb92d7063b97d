"""A 32-bit Textbook RSA Cryptosystem, in an Academic Sense.

Provides RSA key pair derivation from two primes, a prime search to pick them, and in-place file encryption and
decryption over a bit-packed block stream. All arithmetic is confined to 32-bit words, so don't take it too seriously.

Typical usage example:

    p, q = find_next_prime(1500), find_next_prime(1700)
    pk = RSAPrivKey.generate(p, q)
    c = pk.pub.encrypt(b"RSA demo")
    r = pk.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacrypt.arith import bit_width
from rsacrypt.arith import inverse
from rsacrypt.arith import pow_mod
from rsacrypt.errors import CorruptFileError
from rsacrypt.errors import ModulusOverflowError
from rsacrypt.errors import NoValidExponentError
from rsacrypt.errors import RSACryptError
from rsacrypt.errors import SearchExhaustedError
from rsacrypt.keygen import check_prime
from rsacrypt.keygen import find_next_prime
from rsacrypt.keygen import generate_key_pair
from rsacrypt.rsa import RSAPrivKey
from rsacrypt.rsa import RSAPubKey

__version__ = "0.0.1"
__all__ = [
    "RSAPrivKey",
    "RSAPubKey",
    "bit_width",
    "pow_mod",
    "inverse",
    "check_prime",
    "find_next_prime",
    "generate_key_pair",
    "RSACryptError",
    "ModulusOverflowError",
    "NoValidExponentError",
    "SearchExhaustedError",
    "CorruptFileError",
]
