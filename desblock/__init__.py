"""
DESBLOCK - DES block cipher and ECB file codec

Single-block primitives live in ``desblock.cipher`` and ``desblock.keys``;
whole-stream and file helpers live in ``desblock.codec``.
"""

from .bits import get_bit, permute, put_bit
from .cipher import DESBlock, decrypt_block, encrypt_block, f_function, run_rounds, s_box
from .codec import (
    CiphertextLengthError,
    decrypt_bytes,
    decrypt_file,
    decrypt_stream,
    encrypt_bytes,
    encrypt_file,
    encrypt_stream,
    read_block,
    write_block,
)
from .keys import KeyTooLongError, check_text_key, generate_subkeys, prepare_key, schedule_for
from .version import __version__

__all__ = [
    "CiphertextLengthError",
    "DESBlock",
    "KeyTooLongError",
    "__version__",
    "check_text_key",
    "decrypt_block",
    "decrypt_bytes",
    "decrypt_file",
    "decrypt_stream",
    "encrypt_block",
    "encrypt_bytes",
    "encrypt_file",
    "encrypt_stream",
    "f_function",
    "generate_subkeys",
    "get_bit",
    "permute",
    "prepare_key",
    "put_bit",
    "read_block",
    "run_rounds",
    "s_box",
    "schedule_for",
    "write_block",
]
