"""Block I/O and whole-stream/file DES drivers (ECB, block by block)."""

import io
import os
import typing
import warnings

from cryptography.hazmat.primitives.padding import PKCS7

from . import config, vector
from .bits import BYTE_SIZE
from .cipher import DESBlock, decrypt_block, encrypt_block
from .keys import BLOCK_BYTES, Schedule, schedule_for

KeyLike = typing.Union[str, bytes, bytearray]


class CiphertextLengthError(ValueError):
    """Raised when ciphertext is not made of whole 8-byte blocks."""


def _read_exact(handle, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        piece = handle.read(size - len(buf))
        if not piece:
            break
        buf += piece
    return bytes(buf)


def read_block(handle) -> DESBlock:
    """Read up to 8 bytes; ``length`` is 0 once the stream is exhausted."""
    return DESBlock(_read_exact(handle, BLOCK_BYTES))


def write_block(handle, block: DESBlock) -> None:
    handle.write(block.payload())


def iter_blocks(handle) -> "typing.Iterator[DESBlock]":
    while True:
        block = read_block(handle)
        if block.length == 0:
            return
        yield block


def strip_zero_padding(block: DESBlock) -> None:
    while block.length and block.data[block.length - 1] == 0:
        block.length -= 1


def _resolve_padding(padding: "str | None") -> str:
    mode = config.padding_mode() if padding is None else padding.strip().lower()
    if mode not in config.PADDING_MODES:
        raise ValueError(f"Unsupported padding '{padding}' (expected one of {', '.join(config.PADDING_MODES)})")
    return mode


def _resolve_engine(engine: "str | None") -> str:
    name = config.engine() if engine is None else engine.strip().lower()
    if name not in config.ENGINES:
        raise ValueError(f"Unsupported engine '{engine}' (expected one of {', '.join(config.ENGINES)})")
    return name


def _iter_source(source, engine: str, chunk_size: "int | None") -> "typing.Iterator[bytes]":
    if engine == config.ENGINE_BLOCK:
        for block in iter_blocks(source):
            yield block.payload()
        return
    size = config.stream_chunk_size() if chunk_size is None else max(BLOCK_BYTES, int(chunk_size) // BLOCK_BYTES * BLOCK_BYTES)
    while True:
        chunk = _read_exact(source, size)
        if not chunk:
            return
        yield chunk


def _crypt(data: bytes, subkeys: Schedule, engine: str, *, decrypt: bool) -> bytes:
    if engine == config.ENGINE_VECTOR:
        if decrypt:
            return vector.decrypt_blocks(data, subkeys)
        return vector.encrypt_blocks(data, subkeys)
    step = decrypt_block if decrypt else encrypt_block
    out = bytearray()
    for start in range(0, len(data), BLOCK_BYTES):
        block = DESBlock(data[start:start + BLOCK_BYTES])
        step(block, subkeys)
        out += block.data
    return bytes(out)


def _emit(dest, data: bytes) -> int:
    if data:
        dest.write(data)
    return len(data)


def encrypt_stream(
    source,
    dest,
    subkeys: Schedule,
    *,
    padding: "str | None" = None,
    engine: "str | None" = None,
    chunk_size: "int | None" = None
) -> int:
    """
    Encrypt ``source`` into ``dest`` one 8-byte block at a time.

    With zero padding the final short block is filled with 0x00 and the
    original length is not recorded, so the output is always whole blocks and
    empty input gives empty output. PKCS#7 padding always appends 1-8 bytes.
    Returns the number of ciphertext bytes written.
    """
    mode = _resolve_padding(padding)
    engine = _resolve_engine(engine)
    padder = PKCS7(BLOCK_BYTES * BYTE_SIZE).padder() if mode == config.PADDING_PKCS7 else None
    written = 0
    last_byte = None
    for chunk in _iter_source(source, engine, chunk_size):
        last_byte = chunk[-1]
        if padder is not None:
            chunk = padder.update(chunk)
        elif len(chunk) % BLOCK_BYTES:
            chunk += bytes(BLOCK_BYTES - len(chunk) % BLOCK_BYTES)
        if chunk:
            written += _emit(dest, _crypt(chunk, subkeys, engine, decrypt=False))
    if padder is not None:
        written += _emit(dest, _crypt(padder.finalize(), subkeys, engine, decrypt=False))
    elif last_byte == 0:
        warnings.warn(
            "Plaintext ends with 0x00 bytes; zero padding strips them on decrypt (use pkcs7 padding to keep them)",
            UserWarning,
            stacklevel=2
        )
    return written


def decrypt_stream(
    source,
    dest,
    subkeys: Schedule,
    *,
    padding: "str | None" = None,
    engine: "str | None" = None,
    chunk_size: "int | None" = None
) -> int:
    """
    Decrypt ``source`` into ``dest``; the inverse of ``encrypt_stream``.

    With zero padding, trailing 0x00 bytes of the last block are dropped.
    Returns the number of plaintext bytes written.
    """
    mode = _resolve_padding(padding)
    engine = _resolve_engine(engine)
    unpadder = PKCS7(BLOCK_BYTES * BYTE_SIZE).unpadder() if mode == config.PADDING_PKCS7 else None
    written = 0
    held = b""
    for chunk in _iter_source(source, engine, chunk_size):
        if len(chunk) % BLOCK_BYTES:
            raise CiphertextLengthError(
                f"Ciphertext is not a whole number of {BLOCK_BYTES}-byte blocks (trailing {len(chunk) % BLOCK_BYTES} bytes)"
            )
        plain = _crypt(chunk, subkeys, engine, decrypt=True)
        if unpadder is not None:
            written += _emit(dest, unpadder.update(plain))
        else:
            # hold back the newest block until we know whether it is the last one
            written += _emit(dest, held + plain[:-BLOCK_BYTES])
            held = plain[-BLOCK_BYTES:]
    if unpadder is not None:
        written += _emit(dest, unpadder.finalize())
    elif held:
        last = DESBlock(held)
        strip_zero_padding(last)
        write_block(dest, last)
        written += last.length
    return written


def encrypt_bytes(data: bytes, key: KeyLike, *, padding: "str | None" = None, engine: "str | None" = None) -> bytes:
    subkeys = schedule_for(key)
    out = io.BytesIO()
    encrypt_stream(io.BytesIO(data), out, subkeys, padding=padding, engine=engine)
    return out.getvalue()


def decrypt_bytes(data: bytes, key: KeyLike, *, padding: "str | None" = None, engine: "str | None" = None) -> bytes:
    subkeys = schedule_for(key)
    out = io.BytesIO()
    decrypt_stream(io.BytesIO(data), out, subkeys, padding=padding, engine=engine)
    return out.getvalue()


def encrypt_file(
    key: KeyLike,
    input_path: "str | os.PathLike[str]",
    output_path: "str | os.PathLike[str]",
    *,
    padding: "str | None" = None,
    engine: "str | None" = None
) -> int:
    # key problems surface before any file is opened
    subkeys = schedule_for(key)
    with open(input_path, "rb") as source:
        with open(output_path, "wb") as dest:
            return encrypt_stream(source, dest, subkeys, padding=padding, engine=engine)


def decrypt_file(
    key: KeyLike,
    input_path: "str | os.PathLike[str]",
    output_path: "str | os.PathLike[str]",
    *,
    padding: "str | None" = None,
    engine: "str | None" = None
) -> int:
    subkeys = schedule_for(key)
    with open(input_path, "rb") as source:
        size = os.fstat(source.fileno()).st_size
        if size % BLOCK_BYTES:
            raise CiphertextLengthError(
                f"{input_path}: size {size} is not a multiple of {BLOCK_BYTES}"
            )
        with open(output_path, "wb") as dest:
            return decrypt_stream(source, dest, subkeys, padding=padding, engine=engine)


__all__ = [
    "CiphertextLengthError",
    "decrypt_bytes",
    "decrypt_file",
    "decrypt_stream",
    "encrypt_bytes",
    "encrypt_file",
    "encrypt_stream",
    "iter_blocks",
    "read_block",
    "strip_zero_padding",
    "write_block",
]
