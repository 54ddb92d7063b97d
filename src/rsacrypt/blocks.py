"""Block Cipher Driver turning whole buffers into ciphertext containers and back.

The plaintext is sliced into blocks one bit narrower than the modulus, guaranteeing that every block is smaller than
the modulus. Each block is raised to the key exponent and stored in a field as wide as the modulus. The result is
preceded by a header carrying the original length, so decryption can drop the padding of the last block.

Container layout:

    [length: HEADER_BYTES, signed, native byte order][blocks: bit_width(n) bits each, packed LSB first]

There is no magic number, algorithm identifier or checksum. Corruption is only detected heuristically by comparing
the header to the payload length.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import sys

from rsacrypt.arith import bit_width
from rsacrypt.arith import INT_BITS
from rsacrypt.arith import pow_mod
from rsacrypt.bitstream import BitCursor
from rsacrypt.errors import CorruptFileError

HEADER_BYTES: int = 8
SLACK_BYTES: int = 2 * INT_BITS // 8


def pack_header(length: int) -> bytes:
    """Encodes the original length header."""
    return length.to_bytes(HEADER_BYTES, byteorder=sys.byteorder, signed=True)


def unpack_header(data: bytes) -> int:
    """Decodes the original length header from the start of `data`.

    Raises:
        CorruptFileError: If `data` is too short to carry a header.
    """
    if len(data) < HEADER_BYTES:
        raise CorruptFileError("File is too short to carry a length header, cannot decrypt")
    return int.from_bytes(data[:HEADER_BYTES], byteorder=sys.byteorder, signed=True)


def modulus_width(n: int) -> int:
    """Gives the ciphertext block width for modulus `n`, refusing moduli that cannot carry data."""
    width = bit_width(n)
    if width < 2:
        raise ValueError(f"Modulus {n} is too small to carry any data")
    return width


def encrypt_blocks(data: bytes, e: int, n: int) -> bytes:
    """Encrypts a buffer into a ciphertext container.

    Args:
        data: The plaintext.
        e: The public exponent.
        n: The modulus.

    Returns:
        The length header followed by the packed ciphertext blocks.
    """
    destbits = modulus_width(n)
    srcbits = destbits - 1
    length = len(data)
    src = bytearray(data)
    src.extend(bytes(SLACK_BYTES))
    # One extra bit per source block, plus slack for the last block.
    dest = bytearray(length + length // srcbits + SLACK_BYTES)
    reader = BitCursor(src)
    writer = BitCursor(dest)
    while reader.pos < length:
        writer.write(destbits, pow_mod(reader.read(srcbits), e, n))
    return pack_header(length) + bytes(dest[:(writer.bitpos + 7) // 8])


def decrypt_blocks(data: bytes, d: int, n: int) -> bytes:
    """Decrypts a ciphertext container.

    The header is sanity-checked against the payload length, allowing for the rounding of the block stream. A file
    passing the check is decrypted whatever its content, so a damaged payload yields garbage rather than an error.

    Args:
        data: The ciphertext container.
        d: The private exponent.
        n: The modulus.

    Returns:
        The plaintext, exactly as long as the header states.

    Raises:
        CorruptFileError: If the header is missing, negative or inconsistent with the payload length.
    """
    srcbits = modulus_width(n)
    dstbits = srcbits - 1
    length = unpack_header(data)
    payload = len(data) - HEADER_BYTES
    lendiff = length - payload
    maxdiff = length // dstbits + 1 + SLACK_BYTES
    if length < 0 or not -maxdiff <= lendiff <= maxdiff:
        raise CorruptFileError("File is corrupted, cannot decrypt")
    blocks = (length * 8 + dstbits - 1) // dstbits
    needed = (blocks * srcbits + 7) // 8
    src = bytearray(data[HEADER_BYTES:])
    src.extend(bytes(max(needed - payload, 0) + SLACK_BYTES))
    dest = bytearray(length + SLACK_BYTES)
    reader = BitCursor(src)
    writer = BitCursor(dest)
    while writer.pos < length:
        writer.write(dstbits, pow_mod(reader.read(srcbits), d, n))
    return bytes(dest[:length])
