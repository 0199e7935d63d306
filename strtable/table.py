"""
Character table for the low control codes of bit-packed strings.

Code 0 is NUL and is not part of the table; codes 1 to 31 map to
CHAR_TABLE[code - 1].
"""

CHAR_TABLE = (
    "0", "1", "2", "3", "4", "5", "6",
    "s", "t", "r", "n", "u", "m",
    "(", ")", "[", "]", "<", ">",
    "%", "#", "/", ":", "-", "'", '"',
    " ", ",", ".", "!", "\n",
)

# Codes at or above this value are shifted codepoints
FIRST_SHIFTED_CODE = len(CHAR_TABLE) + 1


def lookup(code: int) -> str:
    """
    Map a control code (0-31) to its character.

    :param code: Control code
    :return: NUL for 0, the table character otherwise
    :raises ValueError: If code is not a control code
    """
    if code == 0:
        return "\x00"
    if 1 <= code < FIRST_SHIFTED_CODE:
        return CHAR_TABLE[code - 1]
    raise ValueError(f"{code} is not a control code")
