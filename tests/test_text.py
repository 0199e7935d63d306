"""Unit tests for the bit reader, the control table and string decoding."""

import unittest
import warnings

from strtable.bits import BitReader
from strtable.errors import NoEncryptionKeyProvidedError
from strtable.table import CHAR_TABLE, FIRST_SHIFTED_CODE, lookup
from strtable.text import (
    REPLACEMENT_CHARACTER,
    UnusualUnitWidthWarning,
    decode,
    decode_packed,
    decode_utf16,
)


def pack_codes(codes, bits_per_unit):
    """
    Pack codes LSB-first, bits_per_unit bits each.

    :param list[int] codes: Codes to pack
    :param int bits_per_unit: Width of each code
    :return bytes: Packed data, padded with zero bits to a whole byte
    """
    value = 0
    for i, code in enumerate(codes):
        value |= code << (i * bits_per_unit)
    num_bytes = (len(codes) * bits_per_unit + 7) // 8
    return value.to_bytes(num_bytes, "little")


def encode_codes(text, offset):
    """Map text to packed codes, preferring the control table."""
    codes = []
    for char in text:
        if char == "\x00":
            codes.append(0)
        elif char in CHAR_TABLE:
            codes.append(CHAR_TABLE.index(char) + 1)
        else:
            codes.append(ord(char) - offset + FIRST_SHIFTED_CODE)
    return codes


class RecordingDecryptor:
    """Decryptor returning a fixed plaintext and remembering its calls."""

    def __init__(self, plaintext):
        self.plaintext = plaintext
        self.calls = []

    def decrypt(self, payload, key):
        self.calls.append((bytes(payload), key))
        return self.plaintext


class TestBitReader(unittest.TestCase):
    """Test LSB-first bit extraction."""

    def test_lsb_first_within_byte(self):
        reader = BitReader(b"\xb4")  # 1011 0100
        self.assertEqual([reader.read(2) for _ in range(4)], [0b00, 0b01, 0b11, 0b10])

    def test_value_across_bytes(self):
        reader = BitReader(b"\xff\x01")
        self.assertEqual(reader.read(4), 0xF)
        self.assertEqual(reader.read(5), 0b11111)
        self.assertEqual(reader.remaining, 7)

    def test_units_drop_partial(self):
        self.assertEqual(list(BitReader(b"\xff\xff").units(7)), [0x7F, 0x7F])

    def test_units_empty(self):
        self.assertEqual(list(BitReader(b"").units(8)), [])

    def test_wide_units(self):
        data = (0x123456789A).to_bytes(5, "little")
        self.assertEqual(list(BitReader(data).units(40)), [0x123456789A])

    def test_read_past_end(self):
        with self.assertRaises(EOFError):
            BitReader(b"\x00").read(9)

    def test_invalid_width(self):
        with self.assertRaises(ValueError):
            BitReader(b"\x00").read(0)

    def test_matches_helper_packing(self):
        codes = [1, 300, 0, 511, 42]
        self.assertEqual(list(BitReader(pack_codes(codes, 9)).units(9)), codes)


class TestTable(unittest.TestCase):
    """Test the control code table."""

    def test_size(self):
        self.assertEqual(len(CHAR_TABLE), 31)
        self.assertEqual(FIRST_SHIFTED_CODE, 32)

    def test_lookup(self):
        self.assertEqual(lookup(0), "\x00")
        self.assertEqual(lookup(1), "0")
        self.assertEqual(lookup(7), "6")
        self.assertEqual(lookup(8), "s")
        self.assertEqual(lookup(16), "[")
        self.assertEqual(lookup(17), "]")
        self.assertEqual(lookup(27), " ")
        self.assertEqual(lookup(31), "\n")

    def test_lookup_out_of_table(self):
        with self.assertRaises(ValueError):
            lookup(32)


class TestDecodePacked(unittest.TestCase):
    """Test bit-packed decoding."""

    def test_control_codes(self):
        data = pack_codes(list(range(32)), 5)
        self.assertEqual(decode_packed(data, 5, 0), "\x00" + "".join(CHAR_TABLE))

    def test_control_codes_ignore_offset(self):
        data = pack_codes([8, 16, 17], 8)
        self.assertEqual(decode_packed(data, 8, 0x4E00), "s[]")

    def test_shifted_codes(self):
        data = pack_codes([32, 33, 32 + 0x41], 16)
        self.assertEqual(decode_packed(data, 16, 0x100), "ĀāŁ")

    def test_unshifted_codes(self):
        data = pack_codes(encode_codes("Skale Toxin", 0), 8)
        self.assertEqual(decode_packed(data, 8, 0), "Skale Toxin")

    def test_odd_width(self):
        text = "Cotton Shoe Upper[s]"
        data = pack_codes(encode_codes(text, 0), 9)
        self.assertEqual(decode_packed(data, 9, 0), text)

    def test_trailing_partial_unit(self):
        # 3 bytes of 7-bit units: 3 units, 3 bits left over
        data = pack_codes(encode_codes("abc", 0x40), 7)
        self.assertEqual(len(data), 3)
        self.assertEqual(decode_packed(data, 7, 0x40), "abc")

    def test_surrogate_replaced(self):
        data = pack_codes([0xD800 + 32], 24)
        self.assertEqual(decode_packed(data, 24, 0), REPLACEMENT_CHARACTER)

    def test_above_unicode_replaced(self):
        data = pack_codes([0x110000 + 32], 24)
        self.assertEqual(decode_packed(data, 24, 0), REPLACEMENT_CHARACTER)

    def test_empty(self):
        self.assertEqual(decode_packed(b"", 8, 0), "")

    def test_wide_units_warn(self):
        with self.assertWarns(UnusualUnitWidthWarning):
            result = decode_packed(b"\x00" * 5, 40, 0)
        self.assertEqual(result, "\x00")

    def test_usual_width_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            decode_packed(b"\x00" * 4, 32, 0)


class TestDecodeUtf16(unittest.TestCase):
    """Test UTF-16 decoding."""

    def test_chinese(self):
        text = "未鉴定的红色染料"
        self.assertEqual(decode_utf16(text.encode("utf-16-le")), text)

    def test_surrogate_pair(self):
        self.assertEqual(decode_utf16("\U0001F600".encode("utf-16-le")), "\U0001F600")

    def test_unpaired_surrogate(self):
        self.assertEqual(decode_utf16(b"\x00\xdcA\x00"), REPLACEMENT_CHARACTER + "A")

    def test_odd_byte_ignored(self):
        self.assertEqual(decode_utf16(b"A\x00B"), "A")

    def test_memoryview(self):
        self.assertEqual(decode_utf16(memoryview(b"h\x00i\x00")), "hi")


class TestDecode(unittest.TestCase):
    """Test the decode dispatch."""

    def test_utf16_when_unshifted_16_bits(self):
        data = "Stun".encode("utf-16-le")
        self.assertEqual(decode(data, 16, 0), "Stun")

    def test_packed_when_not_16_bits(self):
        data = pack_codes(encode_codes("Stun", 0), 8)
        self.assertEqual(decode(data, 8, 0), "Stun")

    def test_empty_payload(self):
        self.assertEqual(decode(b"", 16, 0), "")
        self.assertEqual(decode(b"", 8, 0), "")

    def test_shifted_needs_key(self):
        decryptor = RecordingDecryptor(b"")
        with self.assertRaises(NoEncryptionKeyProvidedError):
            decode(b"\x01\x02", 8, 0x20, decryptor=decryptor)
        self.assertEqual(decryptor.calls, [])

    def test_key_ignored_when_unshifted(self):
        decryptor = RecordingDecryptor(b"garbage")
        data = "Stun".encode("utf-16-le")
        self.assertEqual(decode(data, 16, 0, key=1234, decryptor=decryptor), "Stun")
        self.assertEqual(decryptor.calls, [])

    def test_whole_payload_decrypted(self):
        plaintext = pack_codes(encode_codes("Outlaw", 0x40), 7)
        decryptor = RecordingDecryptor(plaintext)
        payload = memoryview(b"\x10\x20\x30\x40\x50\x60")
        result = decode(payload, 7, 0x40, key=99, decryptor=decryptor)
        self.assertEqual(result, "Outlaw")
        self.assertEqual(decryptor.calls, [(b"\x10\x20\x30\x40\x50\x60", 99)])

    def test_decrypted_16_bits_is_packed(self):
        # Code 8 is "s" in the table, it would be "\x08" as UTF-16
        decryptor = RecordingDecryptor(pack_codes([8, 32 + 1], 16))
        self.assertEqual(decode(b"\x00" * 4, 16, 0x40, key=1, decryptor=decryptor), "sA")


if __name__ == "__main__":
    unittest.main()
