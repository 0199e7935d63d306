"""
Least-significant-bit-first reader over a byte buffer.
"""


class BitReader:
    """
    Read fixed-width unsigned integers from a byte buffer.

    The buffer is treated as one continuous bitstream: bit 0 of byte 0 comes
    first, then bits 1 to 7, then bit 0 of byte 1, and so on. Values that
    straddle byte boundaries take their low bits from the earlier byte.
    """

    def __init__(self, data):
        self._data = data
        self._index = 0
        self._accumulator = 0
        self._available = 0
        self.bit_length = len(data) * 8

    @property
    def remaining(self) -> int:
        """Bits left to read."""
        return self._available + (len(self._data) - self._index) * 8

    def read(self, width: int) -> int:
        """
        Read the next width-bit unsigned integer.

        :param width: Number of bits, at least 1
        :raises EOFError: If fewer than width bits are left
        """
        if width <= 0:
            raise ValueError(f"Bit width must be positive, got {width}")
        if width > self.remaining:
            raise EOFError(f"Cannot read {width} bits, {self.remaining} left")
        while self._available < width:
            self._accumulator |= self._data[self._index] << self._available
            self._index += 1
            self._available += 8
        value = self._accumulator & ((1 << width) - 1)
        self._accumulator >>= width
        self._available -= width
        return value

    def units(self, width: int):
        """
        Yield every complete width-bit value, discarding a trailing partial one.

        :param width: Number of bits per value
        """
        if width <= 0:
            raise ValueError(f"Bit width must be positive, got {width}")
        for _ in range(self.remaining // width):
            yield self.read(width)
