"""Key preparation and the DES key schedule."""

import os
import typing

from . import tables
from .bits import get_bit, permuted, put_bit, round_to_bytes

BLOCK_BYTES = round_to_bytes(tables.BLOCK_BITS)
SUBKEY_BYTES = round_to_bytes(tables.SUBKEY_BITS)

Schedule = typing.Tuple[bytes, ...]


class KeyTooLongError(ValueError):
    """Raised when a text key does not fit in a single DES block."""


def _key_bytes(text_key: "typing.Union[str, bytes, bytearray]") -> bytes:
    if isinstance(text_key, str):
        return os.fsencode(text_key)
    return bytes(text_key)


def check_text_key(text_key: "typing.Union[str, bytes, bytearray]") -> bytes:
    raw = _key_bytes(text_key)
    if len(raw) > BLOCK_BYTES:
        raise KeyTooLongError(f"Key too long ({len(raw)} bytes, limit is {BLOCK_BYTES})")
    return raw


def prepare_key(text_key: "typing.Union[str, bytes, bytearray]") -> bytes:
    """
    Left-justify the text key into an 8-byte buffer, zero padded.

    Copying stops at the first NUL byte or after 8 bytes, whichever comes
    first; longer keys are truncated here, so callers that must reject them
    run ``check_text_key`` beforehand.
    """
    raw = _key_bytes(text_key)
    key = bytearray(BLOCK_BYTES)
    for idx, value in enumerate(raw[:BLOCK_BYTES]):
        if value == 0:
            break
        key[idx] = value
    return bytes(key)


def _rotate_half(half: bytearray, shift: int) -> bytearray:
    width = tables.SUBKEY_HALF_BITS
    rotated = bytearray(len(half))
    for idx in range(1, width + 1):
        put_bit(rotated, idx, get_bit(half, (idx - 1 + shift) % width + 1))
    return rotated


def generate_subkeys(key: "typing.Union[bytes, bytearray]") -> Schedule:
    """Return the 16 round subkeys for an 8-byte key, round 1 first."""
    if len(key) != BLOCK_BYTES:
        raise ValueError(f"DES key must be {BLOCK_BYTES} bytes, got {len(key)}")
    width = tables.SUBKEY_HALF_BITS
    left = permuted(key, tables.LEFT_SUBKEY_PERM)
    right = permuted(key, tables.RIGHT_SUBKEY_PERM)
    subkeys = []
    for shift in tables.SUBKEY_SHIFT_SCHEDULE:
        left = _rotate_half(left, shift)
        right = _rotate_half(right, shift)
        joined = bytearray(round_to_bytes(2 * width))
        for idx in range(1, width + 1):
            put_bit(joined, idx, get_bit(left, idx))
            put_bit(joined, idx + width, get_bit(right, idx))
        subkeys.append(bytes(permuted(joined, tables.SUBKEY_PERM)))
    return tuple(subkeys)


def schedule_for(text_key: "typing.Union[str, bytes, bytearray]") -> Schedule:
    check_text_key(text_key)
    return generate_subkeys(prepare_key(text_key))


__all__ = [
    "BLOCK_BYTES",
    "KeyTooLongError",
    "SUBKEY_BYTES",
    "Schedule",
    "check_text_key",
    "generate_subkeys",
    "prepare_key",
    "schedule_for",
]
