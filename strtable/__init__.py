"""
Definition of the strtable module.
"""

from .crypto import CryptoError, Decryptor, Rc4Decryptor
from .errors import (
    HeaderTooShortError,
    InvalidFileError,
    LanguageNotSupportedError,
    NoEncryptionKeyProvidedError,
    StringIndexOutOfRangeError,
    StringTableError,
    UnexpectedError,
)
from .export import extract_from_file, read_keys_file
from .reader import Language, Reader, StringRecord
from .records import MAGIC, Entry, Header, Trailer
from .table import CHAR_TABLE
from .text import UnusualUnitWidthWarning, decode
