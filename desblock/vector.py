"""numpy engine that runs many DES blocks at once.

Blocks are unpacked into an ``(n, 64)`` bit matrix; every permutation is a
column gather and the S-boxes become a lookup into a 64-entry table per box.
Results are bit-identical to ``cipher.run_rounds``.
"""

import concurrent.futures
import typing

import numpy as np

from . import config, tables
from .keys import BLOCK_BYTES


def _index(table: "typing.Sequence[int]") -> np.ndarray:
    return np.asarray(table, dtype=np.intp) - 1


_IP = _index(tables.INITIAL_PERM)
_E = _index(tables.EXPANDED_R_PERM)
_P = _index(tables.F_FUNCTION_PERM)
_FP = _index(tables.FINAL_PERM)
_SBOX_WEIGHTS = np.array([32, 16, 8, 4, 2, 1], dtype=np.intp)
_SBOX_IDS = np.arange(tables.SBOX_COUNT, dtype=np.intp)


def _sbox_bits() -> np.ndarray:
    # lut[box, v] holds the 4 output bits for the 6-bit input v
    lut = np.zeros((tables.SBOX_COUNT, 64), dtype=np.uint8)
    for box in range(tables.SBOX_COUNT):
        for value in range(64):
            row = ((value >> 4) & 0b10) | (value & 1)
            col = (value >> 1) & 0xF
            lut[box, value] = tables.SBOX_TABLE[box][row][col]
    return np.unpackbits(lut[..., None], axis=-1)[..., 4:]


_SBOX_BITS = _sbox_bits()


def schedule_bits(subkeys: "typing.Sequence[bytes]") -> np.ndarray:
    raw = np.frombuffer(b"".join(bytes(k) for k in subkeys), dtype=np.uint8)
    return np.unpackbits(raw.reshape(len(subkeys), -1), axis=1)


def _crypt_array(blocks: np.ndarray, key_bits: np.ndarray) -> np.ndarray:
    bits = np.unpackbits(blocks, axis=1)[:, _IP]
    half = tables.BLOCK_HALF_BITS
    left = bits[:, :half]
    right = bits[:, half:]
    count = bits.shape[0]
    for key in key_bits:
        mixed = right[:, _E] ^ key
        groups = mixed.reshape(count, tables.SBOX_COUNT, tables.SBOX_INPUT_BITS).astype(np.intp)
        values = groups @ _SBOX_WEIGHTS
        substituted = _SBOX_BITS[_SBOX_IDS, values].reshape(count, half)
        left, right = right, left ^ substituted[:, _P]
    joined = np.concatenate([right, left], axis=1)[:, _FP]
    return np.packbits(joined, axis=1)


def crypt_blocks(data: "typing.Union[bytes, bytearray, memoryview]", subkeys: "typing.Sequence[bytes]") -> bytes:
    """Run every 8-byte block of ``data`` through the rounds with ``subkeys`` in order."""
    if len(data) % BLOCK_BYTES:
        raise ValueError(f"Input length {len(data)} is not a multiple of {BLOCK_BYTES}")
    if not data:
        return b""
    key_bits = schedule_bits(subkeys)
    blocks = np.frombuffer(memoryview(data), dtype=np.uint8).reshape(-1, BLOCK_BYTES)
    total = blocks.shape[0]
    per_worker = max(1, config.PARALLEL_CHUNK_SIZE // BLOCK_BYTES)
    workers = config.max_threads()
    if total <= per_worker or workers == 1:
        return _crypt_array(blocks, key_bits).tobytes()

    out = np.empty_like(blocks)
    ranges = [
        (start, min(start + per_worker, total))
        for start in range(0, total, per_worker)
    ]

    def _crypt_slice(bounds: "tuple[int, int]") -> None:
        start, end = bounds
        out[start:end] = _crypt_array(blocks[start:end], key_bits)

    with concurrent.futures.ThreadPoolExecutor(max_workers=min(len(ranges), workers)) as executor:
        list(executor.map(_crypt_slice, ranges))
    return out.tobytes()


def encrypt_blocks(data: "typing.Union[bytes, bytearray, memoryview]", subkeys: "typing.Sequence[bytes]") -> bytes:
    return crypt_blocks(data, subkeys)


def decrypt_blocks(data: "typing.Union[bytes, bytearray, memoryview]", subkeys: "typing.Sequence[bytes]") -> bytes:
    return crypt_blocks(data, tuple(reversed(subkeys)))


__all__ = ["crypt_blocks", "decrypt_blocks", "encrypt_blocks", "schedule_bits"]
