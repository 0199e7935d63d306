"""
Define BinaryReader class.
"""
import os
import struct
from typing import Union

from .errors import HeaderTooShortError

BufferLike = Union[bytes, bytearray, memoryview]


class BinaryReader:
    """Little-endian cursor over an immutable in-memory buffer."""

    def __init__(self, data: BufferLike, position: int = 0):
        """
        Wrap a buffer without copying it.

        :param data: Buffer to read from. Writable buffers are exposed read-only.
        :param position: Initial cursor position
        """
        view = data if isinstance(data, memoryview) else memoryview(data)
        self._view = view.toreadonly().cast("B")
        self._position = position

    @property
    def size(self) -> int:
        """Return the buffer size in bytes."""
        return len(self._view)

    @property
    def remaining(self) -> int:
        """Number of bytes between the cursor and the end of the buffer."""
        return max(self.size - self._position, 0)

    def seek(self, offset: int):
        """Go to seek point."""
        self._position = offset

    def tell(self) -> int:
        """Tell current pointer position."""
        return self._position

    def require(self, num_bytes: int, context: str = "") -> None:
        """
        Check that num_bytes can be read from the current position.

        :param num_bytes: Number of bytes needed
        :param context: Optional context string for error messages
        :raises HeaderTooShortError: If the buffer ends too early
        """
        if self._position < 0 or self.remaining < num_bytes:
            ctx = f" ({context})" if context else ""
            raise HeaderTooShortError(
                f"Need {num_bytes} bytes at offset 0x{self._position:x}, "
                f"only {self.remaining} available{ctx}"
            )

    def _unpack(self, fmt: str, size: int) -> int:
        self.require(size)
        value = struct.unpack_from(fmt, self._view, self._position)[0]
        self._position += size
        return value

    def read_u8(self) -> int:
        """Read next byte as an unsigned integer."""
        return self._unpack("<B", 1)

    def read_u16(self) -> int:
        """Read next 2 bytes as a little-endian unsigned integer."""
        return self._unpack("<H", 2)

    def read_u32(self) -> int:
        """Read next 4 bytes as a little-endian unsigned integer."""
        return self._unpack("<I", 4)

    def view(self, start: int, end: int) -> memoryview:
        """
        Return a zero-copy view of the buffer between two offsets.

        The view shares storage with the wrapped buffer and is read-only.
        """
        return self._view[start:end]


def load_file_data(file_path: str) -> bytes:
    """
    Read a whole file into memory.

    :param file_path: Input file path
    :return: File contents
    :raises FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"'{file_path}' does not exist.")
    with open(file_path, "rb") as f:
        return f.read()
