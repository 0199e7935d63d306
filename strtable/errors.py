"""
Exceptions raised while reading string table files.
"""


class StringTableError(ValueError):
    """Base class for every string table failure."""
    pass


class HeaderTooShortError(StringTableError):
    """Raised when the buffer is too small to hold a structural record."""
    pass


class InvalidFileError(StringTableError):
    """Raised when a structural field fails its validity check."""
    pass


class LanguageNotSupportedError(StringTableError):
    """Raised when the trailer language code is unknown."""
    pass


class StringIndexOutOfRangeError(StringTableError, IndexError):
    """Raised when a string index is beyond the parsed record count."""
    pass


class NoEncryptionKeyProvidedError(StringTableError):
    """Raised when a shifted (encrypted) record is queried without a key."""
    pass


class UnexpectedError(StringTableError):
    """Raised for an entry that is present but semantically invalid."""
    pass
