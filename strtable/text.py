"""
Conversion of string payloads to text.
"""
import warnings
from typing import Optional

from .bits import BitReader
from .crypto import DEFAULT_DECRYPTOR, Decryptor
from .errors import NoEncryptionKeyProvidedError
from .table import FIRST_SHIFTED_CODE, lookup

REPLACEMENT_CHARACTER = "\ufffd"

# Widest unit that still fits the 32-bit codes of known files
MAX_USUAL_UNIT_WIDTH = 32

MAX_CODEPOINT = 0x10FFFF


class UnusualUnitWidthWarning(UserWarning):
    """Emitted for bit widths no known file uses."""
    pass


def _scalar(value: int) -> str:
    """Return chr(value) when value is a Unicode scalar, U+FFFD otherwise."""
    if value > MAX_CODEPOINT or 0xD800 <= value <= 0xDFFF:
        return REPLACEMENT_CHARACTER
    return chr(value)


def decode_utf16(data) -> str:
    """
    Decode little-endian UTF-16 code units.

    Unpaired surrogates become U+FFFD and a trailing odd byte is ignored.

    :param data: Raw payload
    :return: Decoded text
    """
    usable = len(data) - len(data) % 2
    return bytes(data[:usable]).decode("utf-16-le", errors="replace")


def decode_packed(data, bits_per_unit: int, offset: int) -> str:
    """
    Decode a bit-packed payload.

    Each unit is a bits_per_unit wide code read LSB-first from data:
    0 is NUL, 1 to 31 index the control table, larger codes are shifted
    codepoints ``code - 32 + offset``.

    :param data: Raw (plaintext) payload
    :param int bits_per_unit: Width of each code
    :param int offset: Codepoint shift base
    :return: Decoded text
    """
    if bits_per_unit > MAX_USUAL_UNIT_WIDTH:
        warnings.warn(
            f"Decoding {bits_per_unit}-bit units; codes wider than "
            f"{MAX_USUAL_UNIT_WIDTH} bits are not used by known files",
            UnusualUnitWidthWarning,
        )
    chars = []
    for code in BitReader(data).units(bits_per_unit):
        if code < FIRST_SHIFTED_CODE:
            chars.append(lookup(code))
        else:
            chars.append(_scalar(code - FIRST_SHIFTED_CODE + offset))
    return "".join(chars)


def decode(
    payload,
    bits_per_unit: int,
    offset: int,
    key: Optional[int] = None,
    decryptor: Decryptor = DEFAULT_DECRYPTOR,
) -> str:
    """
    Convert a string payload to text.

    Shifted records (offset != 0) are encrypted: they need a key and are
    always decoded as bit-packed codes after decryption. Unshifted records
    ignore the key; 16-bit unshifted records are plain UTF-16.

    :param payload: Raw payload bytes
    :param int bits_per_unit: Width of each packed unit
    :param int offset: Codepoint shift base
    :param key: Decryption key, required when offset is not 0
    :param decryptor: Keyed transform used for shifted records
    :return: Decoded text
    :raises NoEncryptionKeyProvidedError: If offset is not 0 and key is None
    """
    if offset != 0:
        if key is None:
            raise NoEncryptionKeyProvidedError(
                f"String is encrypted (offset 0x{offset:x}), a key is required"
            )
        plaintext = decryptor.decrypt(bytes(payload), key)
        return decode_packed(plaintext, bits_per_unit, offset)
    if bits_per_unit == 16:
        return decode_utf16(payload)
    return decode_packed(payload, bits_per_unit, offset)
