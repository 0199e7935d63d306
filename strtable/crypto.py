# -*- coding: utf-8 -*-
"""
Decryption of shifted string payloads.

Records whose codepoint offset is non-zero are stored encrypted. The string
decoder only depends on the Decryptor interface: any object with a
``decrypt(payload, key) -> bytes`` method that is a pure function of its
arguments can be used.

The default implementation is RC4, keyed with the first 16 bytes of the SHA-1
digest of the 64-bit key in little-endian order.
"""

import hashlib
from typing import Protocol

# RC4 key length taken from the digest
RC4_KEY_SIZE = 16

KEY_MAX = 0xFFFFFFFFFFFFFFFF


class CryptoError(ValueError):
    """Raised when decryption parameters are invalid."""
    pass


class Decryptor(Protocol):
    """Keyed transform applied to encrypted payloads."""

    def decrypt(self, payload: bytes, key: int) -> bytes:
        """Return the plaintext of payload under key."""
        ...


def derive_rc4_key(key: int) -> bytes:
    """
    Derive the RC4 key from a 64-bit string key.

    :param key: Unsigned 64-bit key
    :return: 16-byte RC4 key
    :raises CryptoError: If key does not fit in 64 bits
    """
    if key < 0 or key > KEY_MAX:
        raise CryptoError(f"Invalid key {key}: must be an unsigned 64-bit integer")
    digest = hashlib.sha1(key.to_bytes(8, "little")).digest()
    return digest[:RC4_KEY_SIZE]


def rc4(data: bytes, rc4_key: bytes) -> bytes:
    """
    Apply the RC4 keystream to data.

    RC4 is symmetric, the same call encrypts and decrypts.

    :param data: Input bytes
    :param rc4_key: Key bytes (1 to 256 bytes)
    :return: Transformed bytes
    """
    if not 1 <= len(rc4_key) <= 256:
        raise CryptoError(f"Invalid RC4 key length: {len(rc4_key)}")

    # Key scheduling
    state = list(range(256))
    j = 0
    for i in range(256):
        j = (j + state[i] + rc4_key[i % len(rc4_key)]) & 0xFF
        state[i], state[j] = state[j], state[i]

    # Keystream generation
    output = bytearray(len(data))
    i = j = 0
    for position, byte in enumerate(data):
        i = (i + 1) & 0xFF
        j = (j + state[i]) & 0xFF
        state[i], state[j] = state[j], state[i]
        output[position] = byte ^ state[(state[i] + state[j]) & 0xFF]
    return bytes(output)


class Rc4Decryptor:
    """Default decryptor. Holds no state between calls."""

    def decrypt(self, payload: bytes, key: int) -> bytes:
        """
        Decrypt a string payload.

        :param payload: Encrypted payload bytes
        :param key: Unsigned 64-bit string key
        :return: Plaintext bytes, same length as payload
        """
        return rc4(bytes(payload), derive_rc4_key(key))


def encrypt(payload: bytes, key: int) -> bytes:
    """Encrypt a payload with the default cipher."""
    return rc4(bytes(payload), derive_rc4_key(key))


DEFAULT_DECRYPTOR = Rc4Decryptor()
