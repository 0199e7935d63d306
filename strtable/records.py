"""
Fixed-layout records of a string table file.

File layout (all integers little-endian):
- Header: magic u32 (0x73727473, "strs")
- Entry, repeated: size u16, offset u16, bits_per_unit u8, then size - 5
  bytes of payload
- Trailer: language u8, index u8
"""
from dataclasses import dataclass

from .binary_file import BinaryReader, BufferLike
from .errors import HeaderTooShortError, InvalidFileError, UnexpectedError

MAGIC = 0x73727473

HEADER_SIZE = 4
ENTRY_SIZE = 5
TRAILER_SIZE = 2


@dataclass(frozen=True)
class Header:
    """File header."""
    magic: int


@dataclass(frozen=True)
class Entry:
    """Descriptor preceding each string payload."""
    size: int
    offset: int
    bits_per_unit: int

    @property
    def payload_size(self) -> int:
        """Number of payload bytes following the descriptor."""
        return self.size - ENTRY_SIZE


@dataclass(frozen=True)
class Trailer:
    """File footer. ``index`` is read but carries no known meaning."""
    language: int
    index: int


def _reader_at(buffer, offset: int) -> BinaryReader:
    if isinstance(buffer, BinaryReader):
        buffer.seek(offset)
        return buffer
    return BinaryReader(buffer, offset)


def parse_header(buffer: BufferLike) -> Header:
    """
    Parse and validate the file header.

    :param buffer: Complete file data
    :raises HeaderTooShortError: If the buffer is shorter than a header
    :raises InvalidFileError: If the magic does not match
    """
    bfile = _reader_at(buffer, 0)
    bfile.require(HEADER_SIZE, "header")
    magic = bfile.read_u32()
    if magic != MAGIC:
        raise InvalidFileError(
            f"Invalid magic: expected 0x{MAGIC:08x}, got 0x{magic:08x}"
        )
    return Header(magic)


def parse_entry(buffer: BufferLike, offset: int) -> Entry:
    """
    Parse the string entry descriptor at offset.

    :param buffer: Complete file data
    :param offset: Position of the descriptor
    :raises UnexpectedError: If the entry declares zero bits per unit
    :raises InvalidFileError: If the entry is truncated or smaller than its descriptor
    """
    bfile = _reader_at(buffer, offset)
    try:
        bfile.require(ENTRY_SIZE, "entry")
    except HeaderTooShortError as exc:
        raise InvalidFileError(str(exc)) from exc
    size = bfile.read_u16()
    shift = bfile.read_u16()
    bits_per_unit = bfile.read_u8()
    if bits_per_unit == 0:
        raise UnexpectedError(f"Entry at 0x{offset:x} has zero bits per unit")
    if size < ENTRY_SIZE:
        raise InvalidFileError(
            f"Entry at 0x{offset:x} declares size {size}, "
            f"smaller than its {ENTRY_SIZE}-byte descriptor"
        )
    return Entry(size, shift, bits_per_unit)


def parse_trailer(buffer: BufferLike, offset: int) -> Trailer:
    """
    Parse the file trailer at offset.

    :param buffer: Complete file data
    :param offset: Position of the trailer
    :raises HeaderTooShortError: If fewer than two bytes remain
    """
    bfile = _reader_at(buffer, offset)
    bfile.require(TRAILER_SIZE, "trailer")
    language = bfile.read_u8()
    index = bfile.read_u8()
    return Trailer(language, index)
