"""Bit-plane helpers shared by every DES step.

Bit positions are 1-based, counted from the most significant bit of byte 0.
"""

import typing

BYTE_SIZE = 8


def round_to_bytes(bits: int) -> int:
    return (bits + BYTE_SIZE - 1) // BYTE_SIZE


def get_bit(data: "typing.Union[bytes, bytearray]", idx: int) -> int:
    pos = idx - 1
    return (data[pos // BYTE_SIZE] >> (BYTE_SIZE - 1 - pos % BYTE_SIZE)) & 1


def put_bit(data: bytearray, idx: int, val: int) -> None:
    pos = idx - 1
    mask = 1 << (BYTE_SIZE - 1 - pos % BYTE_SIZE)
    if val:
        data[pos // BYTE_SIZE] |= mask
    else:
        data[pos // BYTE_SIZE] &= ~mask & 0xFF


def permute(
    output: bytearray,
    data: "typing.Union[bytes, bytearray]",
    table: "typing.Sequence[int]",
    n: int
) -> None:
    """
    Copy ``n`` bits from ``data`` into ``output`` following ``table``.

    Output bit ``k + 1`` receives input bit ``table[k]``. Every byte touched in
    ``output`` is cleared first, so the unused low-order bits of the last byte
    end up 0 when ``n`` is not a multiple of 8.
    """
    nbytes = round_to_bytes(n)
    for i in range(nbytes):
        output[i] = 0
    for k in range(n):
        if get_bit(data, table[k]):
            put_bit(output, k + 1, 1)


def permuted(data: "typing.Union[bytes, bytearray]", table: "typing.Sequence[int]") -> bytearray:
    out = bytearray(round_to_bytes(len(table)))
    permute(out, data, table, len(table))
    return out


def xor_bytes(left: "typing.Union[bytes, bytearray]", right: "typing.Union[bytes, bytearray]") -> bytearray:
    return bytearray(a ^ b for a, b in zip(left, right, strict=True))


__all__ = ["BYTE_SIZE", "get_bit", "permute", "permuted", "put_bit", "round_to_bytes", "xor_bytes"]
