"""
Read a whole string table file and give access to its strings.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from . import text
from .binary_file import BinaryReader, BufferLike, load_file_data
from .crypto import DEFAULT_DECRYPTOR, Decryptor
from .errors import (
    LanguageNotSupportedError,
    NoEncryptionKeyProvidedError,
    StringIndexOutOfRangeError,
)
from .records import (
    ENTRY_SIZE,
    HEADER_SIZE,
    TRAILER_SIZE,
    Entry,
    parse_entry,
    parse_header,
    parse_trailer,
)

logger = logging.getLogger(__name__)


class Language(enum.IntEnum):
    """Language of a string table, as stored in the trailer."""
    ENGLISH = 0
    KOREAN = 1
    FRENCH = 2
    GERMAN = 3
    SPANISH = 4
    CHINESE = 5


@dataclass(frozen=True)
class StringRecord:
    """An entry and a read-only view of its payload inside the file buffer."""
    entry: Entry
    payload: memoryview

    def decode(
        self,
        key: Optional[int] = None,
        decryptor: Decryptor = DEFAULT_DECRYPTOR,
    ) -> str:
        """Decode the payload, decrypting it with key when the record is shifted."""
        return text.decode(
            self.payload,
            self.entry.bits_per_unit,
            self.entry.offset,
            key,
            decryptor,
        )

    @property
    def encrypted(self) -> bool:
        """True when decoding needs a key."""
        return self.entry.offset != 0


def _parse_language(code: int) -> Language:
    try:
        return Language(code)
    except ValueError as exc:
        raise LanguageNotSupportedError(f"Unknown language code {code}") from exc


class Reader:
    """
    Parsed string table.

    A reader is built in one go by from_bytes and never changes afterwards,
    so it can be queried from several threads as long as the buffer it was
    built from is not modified.
    """

    def __init__(
        self,
        records: Tuple[StringRecord, ...],
        language: Language,
        decryptor: Decryptor = DEFAULT_DECRYPTOR,
    ):
        self._records = records
        self._language = language
        self._decryptor = decryptor

    @classmethod
    def from_bytes(
        cls, buffer: BufferLike, decryptor: Decryptor = DEFAULT_DECRYPTOR
    ) -> "Reader":
        """
        Parse a complete string table.

        Payloads are not copied: every record keeps a view of buffer.

        :param buffer: Complete file data
        :param decryptor: Keyed transform used for encrypted strings
        :return: Reader over every string of the file
        :raises HeaderTooShortError: If a header or trailer does not fit
        :raises InvalidFileError: If the magic or an entry is invalid
        :raises UnexpectedError: If an entry has zero bits per unit
        :raises LanguageNotSupportedError: If the trailer language is unknown
        """
        bfile = BinaryReader(buffer)
        parse_header(bfile)

        records = []
        offset = HEADER_SIZE
        limit = bfile.size - TRAILER_SIZE
        while offset < limit:
            entry = parse_entry(bfile, offset)
            start = offset + ENTRY_SIZE
            offset += entry.size
            records.append(StringRecord(entry, bfile.view(start, offset)))

        # Entries are expected to end exactly on the trailer
        trailer = parse_trailer(bfile, offset)
        language = _parse_language(trailer.language)
        logger.debug(
            "Parsed %d strings, language %s, trailer index %d",
            len(records), language.name, trailer.index,
        )
        return cls(tuple(records), language, decryptor)

    # Alias
    from_buffer = from_bytes

    @classmethod
    def from_file(
        cls, file_path: str, decryptor: Decryptor = DEFAULT_DECRYPTOR
    ) -> "Reader":
        """
        Load and parse a string table file.

        :param file_path: Input file path
        :param decryptor: Keyed transform used for encrypted strings
        """
        return cls.from_bytes(load_file_data(file_path), decryptor)

    @property
    def language(self) -> Language:
        """Language of the strings."""
        return self._language

    @property
    def records(self) -> Tuple[StringRecord, ...]:
        """Every record, in file order."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def _record(self, index: int) -> StringRecord:
        if index < 0 or index >= len(self._records):
            raise StringIndexOutOfRangeError(
                f"String index {index} out of range (0 - {len(self._records) - 1})"
            )
        return self._records[index]

    def get_string(self, index: int) -> str:
        """
        Decode an unencrypted string.

        :param index: String index
        :raises StringIndexOutOfRangeError: If index is not a valid string index
        :raises NoEncryptionKeyProvidedError: If the string is encrypted
        """
        return self._record(index).decode(None, self._decryptor)

    def get_encrypted_string(self, index: int, key: int) -> str:
        """
        Decode a string with its decryption key.

        The key is ignored for strings that are not encrypted.

        :param index: String index
        :param key: Unsigned 64-bit decryption key
        :raises StringIndexOutOfRangeError: If index is not a valid string index
        """
        return self._record(index).decode(key, self._decryptor)

    def iter_strings(
        self, keys: Optional[Dict[int, int]] = None
    ) -> Iterator[Tuple[int, str]]:
        """
        Yield (index, text) for every string that can be decoded.

        Encrypted strings without a key in keys are skipped.

        :param keys: Decryption keys by string index
        """
        keys = keys or {}
        skipped = 0
        for index, record in enumerate(self._records):
            try:
                yield index, record.decode(keys.get(index), self._decryptor)
            except NoEncryptionKeyProvidedError:
                skipped += 1
        if skipped:
            logger.warning("Skipped %d encrypted strings without a key", skipped)
