# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets
import sys

import pytest

from rsacrypt import blocks
from rsacrypt.arith import pow_mod
from rsacrypt.bitstream import BitCursor
from rsacrypt.errors import CorruptFileError
from rsacrypt.keygen import generate_key_pair

DEMO = b"RSA demo"
DEMO_KEY = (2582299, 3, 1719387)
PRIME_PAIRS = [(2, 5), (3, 5), (61, 53), (1511, 1709), (46337, 46349), (65521, 65519)]


@pytest.fixture(scope="module", params=PRIME_PAIRS, ids=lambda pair: f"{pair[0]}x{pair[1]}")
def keyset(request) -> tuple[int, int, int]:
    (n, e), (_, d) = generate_key_pair(*request.param)
    return n, e, d


def expected_size(length: int, n: int) -> int:
    destbits = n.bit_length()
    count = (length * 8 + destbits - 2) // (destbits - 1)
    return blocks.HEADER_BYTES + (count * destbits + 7) // 8


def test_header_layout():
    assert blocks.pack_header(7) == (7).to_bytes(8, sys.byteorder, signed=True)
    assert blocks.unpack_header(blocks.pack_header(-3) + b"trailing") == -3
    assert len(blocks.pack_header(2**40)) == blocks.HEADER_BYTES


def test_unpack_header_too_short():
    with pytest.raises(CorruptFileError):
        blocks.unpack_header(b"\x00" * (blocks.HEADER_BYTES - 1))


def test_demo_scenario():
    n, e, d = DEMO_KEY
    ciphertext = blocks.encrypt_blocks(DEMO, e, n)
    assert blocks.unpack_header(ciphertext) == len(DEMO)
    assert ciphertext[:blocks.HEADER_BYTES] == len(DEMO).to_bytes(8, sys.byteorder, signed=True)
    # 64 plaintext bits make four 21-bit blocks, stored as four 22-bit fields.
    assert len(ciphertext) == blocks.HEADER_BYTES + 11
    assert blocks.decrypt_blocks(ciphertext, d, n) == DEMO


def test_ciphertext_fields():
    n, e, _ = DEMO_KEY
    ciphertext = blocks.encrypt_blocks(DEMO, e, n)
    plain = BitCursor(bytearray(DEMO) + bytearray(8))
    packed = BitCursor(bytearray(ciphertext[blocks.HEADER_BYTES:]) + bytearray(8))
    for _ in range(4):
        block = plain.read(21)
        assert block < n
        assert packed.read(22) == pow_mod(block, e, n)


def test_round_trip_short_lengths(keyset):
    n, e, d = keyset
    for length in range(0, 40):
        payload = secrets.token_bytes(length)
        ciphertext = blocks.encrypt_blocks(payload, e, n)
        assert len(ciphertext) == expected_size(length, n)
        assert blocks.decrypt_blocks(ciphertext, d, n) == payload


def test_round_trip_kilobytes(keyset):
    n, e, d = keyset
    payload = secrets.token_bytes(3000)
    assert blocks.decrypt_blocks(blocks.encrypt_blocks(payload, e, n), d, n) == payload


@pytest.mark.slow
def test_round_trip_large_full_width():
    (n, e), (_, d) = generate_key_pair(65521, 65519)
    payload = secrets.token_bytes(2**16)
    assert blocks.decrypt_blocks(blocks.encrypt_blocks(payload, e, n), d, n) == payload


def test_round_trip_extreme_bytes(keyset):
    n, e, d = keyset
    for payload in (b"\x00" * 64, b"\xff" * 64, bytes(range(256))):
        assert blocks.decrypt_blocks(blocks.encrypt_blocks(payload, e, n), d, n) == payload


def test_encrypt_empty():
    n, e, d = DEMO_KEY
    ciphertext = blocks.encrypt_blocks(b"", e, n)
    assert ciphertext == blocks.pack_header(0)
    assert blocks.decrypt_blocks(ciphertext, d, n) == b""


def test_encrypt_changes_payload():
    n, e, _ = DEMO_KEY
    payload = b"The quick brown fox jumps over the lazy dog"
    ciphertext = blocks.encrypt_blocks(payload, e, n)
    assert payload not in ciphertext
    assert len(ciphertext) > len(payload) + blocks.HEADER_BYTES


def test_decrypt_negative_header():
    n, e, d = DEMO_KEY
    ciphertext = bytearray(blocks.encrypt_blocks(DEMO, e, n))
    ciphertext[:blocks.HEADER_BYTES] = blocks.pack_header(-1)
    with pytest.raises(CorruptFileError):
        blocks.decrypt_blocks(bytes(ciphertext), d, n)


@pytest.mark.parametrize("claimed", [0, 10**6, 2**62])
def test_decrypt_inconsistent_header(claimed):
    n, e, d = DEMO_KEY
    payload = secrets.token_bytes(200)
    ciphertext = blocks.pack_header(claimed) + blocks.encrypt_blocks(payload, e, n)[blocks.HEADER_BYTES:]
    with pytest.raises(CorruptFileError):
        blocks.decrypt_blocks(ciphertext, d, n)


@pytest.mark.parametrize("data", [b"", b"\x01", b"\x00" * (blocks.HEADER_BYTES - 1)])
def test_decrypt_truncated_header(data):
    n, _, d = DEMO_KEY
    with pytest.raises(CorruptFileError):
        blocks.decrypt_blocks(data, d, n)


def test_decrypt_tolerates_rounding():
    n, e, d = DEMO_KEY
    payload = secrets.token_bytes(500)
    ciphertext = blocks.encrypt_blocks(payload, e, n)
    # A few bytes short is within tolerance: garbage at the tail, but the declared length is honoured.
    shortened = blocks.decrypt_blocks(ciphertext[:-5], d, n)
    assert len(shortened) == len(payload)
    assert shortened[:400] == payload[:400]
    padded = blocks.decrypt_blocks(ciphertext + b"\x00" * 3, d, n)
    assert padded == payload


def test_decrypt_wrong_key_yields_garbage():
    n, e, _ = DEMO_KEY
    payload = b"A" * 100
    result = blocks.decrypt_blocks(blocks.encrypt_blocks(payload, e, n), 5, n)
    assert len(result) == len(payload)
    assert result != payload


@pytest.mark.parametrize("n", [0, 1])
def test_modulus_too_small(n):
    with pytest.raises(ValueError):
        blocks.encrypt_blocks(DEMO, 1, n)
    with pytest.raises(ValueError):
        blocks.decrypt_blocks(blocks.pack_header(0), 1, n)


@pytest.mark.extreme
def test_round_trip_every_two_byte_plaintext():
    (n, e), (_, d) = generate_key_pair(65521, 65519)
    for value in range(2**16):
        payload = value.to_bytes(2, "little")
        assert blocks.decrypt_blocks(blocks.encrypt_blocks(payload, e, n), d, n) == payload
