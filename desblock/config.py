"""Runtime knobs read from the environment."""

import os

from .keys import BLOCK_BYTES

PADDING_ZERO = "zero"
PADDING_PKCS7 = "pkcs7"
PADDING_MODES = (PADDING_ZERO, PADDING_PKCS7)
DEFAULT_PADDING = PADDING_ZERO
ENGINE_VECTOR = "vector"
ENGINE_BLOCK = "block"
ENGINES = (ENGINE_VECTOR, ENGINE_BLOCK)
DEFAULT_ENGINE = ENGINE_VECTOR
STREAM_CHUNK_SIZE = 1 << 20  # 1 MiB streaming reads
PARALLEL_CHUNK_SIZE = 1 << 18  # bytes per worker when fanning out blocks


def env_int(name: str) -> "int | None":
    value = os.getenv(name)
    if not value:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    if parsed <= 0:
        return None
    return parsed


def padding_mode() -> str:
    raw = (os.getenv("DESBLOCK_PADDING") or "").strip().lower()
    if raw in PADDING_MODES:
        return raw
    return DEFAULT_PADDING


def engine() -> str:
    raw = (os.getenv("DESBLOCK_ENGINE") or "").strip().lower()
    if raw in ENGINES:
        return raw
    return DEFAULT_ENGINE


def max_threads() -> int:
    override = env_int("DESBLOCK_MAX_THREADS")
    if override is not None:
        return override
    return max(1, os.cpu_count() or 1)


def stream_chunk_size() -> int:
    override = env_int("DESBLOCK_STREAM_CHUNK")
    if override is None:
        return STREAM_CHUNK_SIZE
    # whole blocks only
    return max(BLOCK_BYTES, override - override % BLOCK_BYTES)


def cli_plain_mode() -> bool:
    if os.getenv("DESBLOCK_CLI_PLAIN"):
        return True
    if os.getenv("NO_COLOR"):
        return True
    return False


__all__ = [
    "DEFAULT_ENGINE",
    "DEFAULT_PADDING",
    "ENGINES",
    "ENGINE_BLOCK",
    "ENGINE_VECTOR",
    "PADDING_MODES",
    "PADDING_PKCS7",
    "PADDING_ZERO",
    "PARALLEL_CHUNK_SIZE",
    "STREAM_CHUNK_SIZE",
    "cli_plain_mode",
    "engine",
    "env_int",
    "max_threads",
    "padding_mode",
    "stream_chunk_size",
]
