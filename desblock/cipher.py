"""DES Feistel round function and single-block encrypt/decrypt."""

import typing

from . import tables
from .bits import get_bit, permuted, round_to_bytes, xor_bytes
from .keys import BLOCK_BYTES, Schedule

BLOCK_HALF_BYTES = round_to_bytes(tables.BLOCK_HALF_BITS)


class DESBlock:
    """An 8-byte block buffer plus the number of meaningful bytes in it."""

    def __init__(self, data: "typing.Union[bytes, bytearray]" = b"", length: "typing.Optional[int]" = None) -> None:
        if len(data) > BLOCK_BYTES:
            raise ValueError(f"DES block holds at most {BLOCK_BYTES} bytes, got {len(data)}")
        self.data = bytearray(BLOCK_BYTES)
        self.data[:len(data)] = data
        self.length = len(data) if length is None else length
        if not 0 <= self.length <= BLOCK_BYTES:
            raise ValueError(f"Block length out of range: {self.length}")

    def payload(self) -> bytes:
        return bytes(self.data[:self.length])

    def pad(self) -> None:
        """Zero-fill past ``length`` and mark the block full."""
        for idx in range(self.length, BLOCK_BYTES):
            self.data[idx] = 0
        self.length = BLOCK_BYTES

    def __repr__(self) -> str:
        return f"DESBlock(data={bytes(self.data).hex()}, length={self.length})"


def s_box(data: "typing.Union[bytes, bytearray]", idx: int) -> int:
    """
    Run 6-bit group ``idx`` (0-7) of a 48-bit value through S-box ``idx``.

    Bits 1 and 6 of the group select the row, bits 2-5 the column. The 4-bit
    result is returned in the high-order nibble of a byte.
    """
    base = idx * tables.SBOX_INPUT_BITS
    bits = [get_bit(data, base + pos) for pos in range(1, tables.SBOX_INPUT_BITS + 1)]
    row = (bits[0] << 1) | bits[5]
    col = (bits[1] << 3) | (bits[2] << 2) | (bits[3] << 1) | bits[4]
    return tables.SBOX_TABLE[idx][row][col] << tables.SBOX_OUTPUT_BITS


def f_function(right: "typing.Union[bytes, bytearray]", subkey: "typing.Union[bytes, bytearray]") -> bytearray:
    expanded = permuted(right, tables.EXPANDED_R_PERM)
    mixed = xor_bytes(expanded, subkey)
    substituted = bytearray(BLOCK_HALF_BYTES)
    for idx in range(tables.SBOX_COUNT):
        value = s_box(mixed, idx)
        if idx % 2 == 0:
            substituted[idx // 2] |= value
        else:
            substituted[idx // 2] |= value >> tables.SBOX_OUTPUT_BITS
    return permuted(substituted, tables.F_FUNCTION_PERM)


def run_rounds(data: "typing.Union[bytes, bytearray]", subkeys: "typing.Sequence[bytes]") -> bytes:
    """
    Apply IP, one Feistel round per subkey in the order given, and FP.

    The halves are not swapped after the last round; FP is applied to
    R16 || L16. Passing the schedule reversed decrypts.
    """
    left = permuted(data, tables.LEFT_INITIAL_PERM)
    right = permuted(data, tables.RIGHT_INITIAL_PERM)
    for subkey in subkeys:
        left, right = right, xor_bytes(left, f_function(right, subkey))
    return bytes(permuted(right + left, tables.FINAL_PERM))


def _check_contract(block: DESBlock, subkeys: "typing.Sequence[bytes]") -> None:
    if len(block.data) != BLOCK_BYTES:
        raise ValueError(f"DES operates on {BLOCK_BYTES}-byte blocks")
    if len(subkeys) != tables.ROUND_COUNT:
        raise ValueError(f"Expected {tables.ROUND_COUNT} subkeys, got {len(subkeys)}")


def encrypt_block(block: DESBlock, subkeys: Schedule) -> None:
    _check_contract(block, subkeys)
    block.data[:] = run_rounds(block.data, subkeys)


def decrypt_block(block: DESBlock, subkeys: Schedule) -> None:
    _check_contract(block, subkeys)
    block.data[:] = run_rounds(block.data, tuple(reversed(subkeys)))


__all__ = ["DESBlock", "decrypt_block", "encrypt_block", "f_function", "run_rounds", "s_box"]
