"""Bit-granular reading and writing of arbitrary width fields over a byte buffer.

Fields are packed least-significant-bit first: bit 0 of a field lands at the current cursor position, which itself
walks each byte from bit 0 to bit 7. Fields cross byte boundaries transparently.

Typical usage example:

    buf = bytearray(8)
    BitCursor(buf).write(21, 0x1ABCDE).write(3, 5)
    cur = BitCursor(buf)
    cur.read(21), cur.read(3)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class BitCursor:
    """A position within a bit-addressed buffer, advanced in place by reads and writes.

    No per-bit bounds checking is done. Callers allocate enough trailing slack for the cursor to run past the
    logical end of the data, and an `IndexError` means the allocation was too small.

    Attributes:
        buffer: The underlying buffer. Writes require it to be mutable.
        pos: Index of the current byte.
        bit: Offset of the next bit within the current byte, in `[0, 8)`.
    """

    def __init__(self, buffer: bytearray, pos: int = 0, bit: int = 0) -> None:
        if not 0 <= bit < 8:
            raise ValueError("Bit offset must be in range [0, 7]")
        self.buffer = buffer
        self.pos = pos
        self.bit = bit

    def __repr__(self) -> str:
        return f"BitCursor(pos={self.pos}, bit={self.bit})"

    @property
    def bitpos(self) -> int:
        """Absolute position of the cursor in bits."""
        return self.pos * 8 + self.bit

    def read(self, n: int) -> int:
        """Reads the next `n` bits.

        Args:
            n: The field width.

        Returns:
            The field, with the first bit read as bit 0.
        """
        result = 0
        for counter in range(n):
            result |= ((self.buffer[self.pos] >> self.bit) & 1) << counter
            self._advance()
        return result

    def write(self, n: int, value: int) -> "BitCursor":
        """ORs the low `n` bits of `value` into the buffer.

        Bits of the buffer outside the field are left alone, so the target area should be zeroed beforehand.

        Args:
            n: The field width.
            value: The field value. Bits above `n` are ignored.

        Returns:
            The cursor itself, for chaining.
        """
        for counter in range(n):
            self.buffer[self.pos] |= ((value >> counter) & 1) << self.bit
            self._advance()
        return self

    def _advance(self) -> None:
        self.bit += 1
        if self.bit >= 8:
            self.bit = 0
            self.pos += 1
