import io
import os
import site
import subprocess
import sys
import unittest
import warnings
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from desblock.codec import (
    CiphertextLengthError,
    decrypt_bytes,
    decrypt_file,
    decrypt_stream,
    encrypt_bytes,
    encrypt_file,
    encrypt_stream,
    iter_blocks,
    read_block,
    strip_zero_padding,
    write_block,
)
from desblock.cipher import DESBlock
from desblock.keys import KeyTooLongError, schedule_for
from desblock.main import cli, decrypt_main, encrypt_main


class BlockCodecTests(unittest.TestCase):
    """Block I/O, padding behaviour and in-memory round trips."""

    def test_read_block_reports_length(self):
        handle = io.BytesIO(b"abcdefghij")
        first = read_block(handle)
        self.assertEqual((first.payload(), first.length), (b"abcdefgh", 8))
        second = read_block(handle)
        self.assertEqual((second.payload(), second.length), (b"ij", 2))
        self.assertEqual(read_block(handle).length, 0)

    def test_write_block_honours_length(self):
        out = io.BytesIO()
        block = DESBlock(b"abcdef\x00\x00")
        strip_zero_padding(block)
        write_block(out, block)
        self.assertEqual(out.getvalue(), b"abcdef")

    def test_iter_blocks(self):
        blocks = list(iter_blocks(io.BytesIO(b"x" * 17)))
        self.assertEqual([b.length for b in blocks], [8, 8, 1])

    def test_hello_world_scenario(self):
        ct = encrypt_bytes(b"hello world", "pass")
        self.assertEqual(len(ct), 16)
        self.assertEqual(decrypt_bytes(ct, "pass"), b"hello world")

    def test_roundtrip_all_key_lengths(self):
        keys = ["k", "ke", "key", "keys", "keyse", "keysec", "keysecr", "keysecre"]
        for key in keys:
            for size in (1, 7, 9, 15, 23, 61):
                plain = bytes((i % 250) + 1 for i in range(size))
                with self.subTest(key=key, size=size):
                    ct = encrypt_bytes(plain, key)
                    self.assertEqual(len(ct) % 8, 0)
                    self.assertEqual(len(ct), (size + 7) // 8 * 8)
                    self.assertEqual(decrypt_bytes(ct, key), plain)

    def test_empty_input(self):
        self.assertEqual(encrypt_bytes(b"", "pass"), b"")
        self.assertEqual(decrypt_bytes(b"", "pass"), b"")

    def test_engines_agree(self):
        plain = bytes(range(1, 200))
        vec = encrypt_bytes(plain, "engine", engine="vector")
        blk = encrypt_bytes(plain, "engine", engine="block")
        self.assertEqual(vec, blk)
        self.assertEqual(decrypt_bytes(vec, "engine", engine="block"), plain)

    def test_small_chunks_match_single_pass(self):
        subkeys = schedule_for("chunks")
        plain = b"The quick brown fox jumps over the lazy dog"
        whole = io.BytesIO()
        encrypt_stream(io.BytesIO(plain), whole, subkeys)
        chunked = io.BytesIO()
        encrypt_stream(io.BytesIO(plain), chunked, subkeys, chunk_size=16)
        self.assertEqual(chunked.getvalue(), whole.getvalue())
        restored = io.BytesIO()
        written = decrypt_stream(io.BytesIO(whole.getvalue()), restored, subkeys, chunk_size=8)
        self.assertEqual(restored.getvalue(), plain)
        self.assertEqual(written, len(plain))

    def test_zero_padding_strips_only_last_block(self):
        plain = b"\x00" * 8 + b"tail"
        self.assertEqual(decrypt_bytes(encrypt_bytes(plain, "pass"), "pass"), plain)

    def test_trailing_zero_warns_and_is_lost(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", UserWarning)
            ct = encrypt_bytes(b"abc\x00", "pass")
        self.assertTrue(any("0x00" in str(w.message) for w in caught))
        self.assertEqual(decrypt_bytes(ct, "pass"), b"abc")

    def test_pkcs7_keeps_trailing_zeros(self):
        plain = b"binary\x00\x00"
        ct = encrypt_bytes(plain, "pass", padding="pkcs7")
        self.assertEqual(len(ct), 16)
        self.assertEqual(decrypt_bytes(ct, "pass", padding="pkcs7"), plain)
        self.assertEqual(len(encrypt_bytes(b"", "pass", padding="pkcs7")), 8)

    def test_pkcs7_rejects_bad_padding(self):
        ct = encrypt_bytes(b"A" * 8, "pass", padding="zero")
        with self.assertRaises(ValueError):
            decrypt_bytes(ct, "pass", padding="pkcs7")

    def test_padding_from_environment(self):
        with patch.dict(os.environ, {"DESBLOCK_PADDING": "pkcs7"}):
            ct = encrypt_bytes(b"12345678", "pass")
        self.assertEqual(len(ct), 16)

    def test_unknown_padding(self):
        with self.assertRaises(ValueError):
            encrypt_bytes(b"abc", "pass", padding="iso")

    def test_partial_ciphertext_rejected(self):
        with self.assertRaises(CiphertextLengthError):
            decrypt_bytes(b"\x01" * 9, "pass")

    def test_long_key_rejected(self):
        with self.assertRaises(KeyTooLongError):
            encrypt_bytes(b"abc", "123456789")


class FileDriverTests(unittest.TestCase):
    """File-level helpers and the CLI programs."""

    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.tmp_path = Path(self.tmpdir.name)
        self.user_site = site.getusersitepackages()
        self.repo_root = REPO_ROOT
        self._env = patch.dict(os.environ, {"DESBLOCK_CLI_PLAIN": "1"})
        self._env.start()

    def tearDown(self) -> None:
        self._env.stop()
        self.tmpdir.cleanup()

    def _run_cli(self, *args: str) -> subprocess.CompletedProcess:
        env = os.environ.copy()
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(self.repo_root), self.user_site, env.get("PYTHONPATH")])
        )
        return subprocess.run(
            [sys.executable, "-m", "desblock", *args],
            cwd=self.repo_root,
            capture_output=True,
            text=True,
            env=env,
        )

    def _call(self, fn, argv) -> "tuple[int, str, str]":
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = fn(argv)
        return code, out.getvalue(), err.getvalue()

    def test_file_roundtrip(self):
        src = self.tmp_path / "plain.txt"
        enc = self.tmp_path / "plain.des"
        dec = self.tmp_path / "plain.out"
        src.write_bytes(b"hello world")
        self.assertEqual(encrypt_file("pass", src, enc), 16)
        self.assertEqual(enc.stat().st_size, 16)
        self.assertEqual(decrypt_file("pass", enc, dec), 11)
        self.assertEqual(dec.read_bytes(), b"hello world")

    def test_decrypt_file_checks_size_before_writing(self):
        src = self.tmp_path / "broken.des"
        dst = self.tmp_path / "broken.out"
        src.write_bytes(b"x" * 13)
        with self.assertRaises(CiphertextLengthError):
            decrypt_file("pass", src, dst)
        self.assertFalse(dst.exists())

    def test_encrypt_program_roundtrip(self):
        src = self.tmp_path / "in.bin"
        enc = self.tmp_path / "in.des"
        dec = self.tmp_path / "in.out"
        src.write_bytes(b"program data!")
        code, out, _ = self._call(encrypt_main, ["pass", str(src), str(enc)])
        self.assertEqual(code, 0)
        self.assertIn("Wrote 16 bytes", out)
        code, _, _ = self._call(decrypt_main, ["pass", str(enc), str(dec)])
        self.assertEqual(code, 0)
        self.assertEqual(dec.read_bytes(), b"program data!")

    def test_key_starting_with_dash(self):
        src = self.tmp_path / "dash.bin"
        enc = self.tmp_path / "dash.des"
        dec = self.tmp_path / "dash.out"
        src.write_bytes(b"dash keyed")
        code, _, err = self._call(encrypt_main, ["-secret", str(src), str(enc)])
        self.assertEqual(code, 0, msg=err)
        code, _, err = self._call(decrypt_main, ["-secret", str(enc), str(dec)])
        self.assertEqual(code, 0, msg=err)
        self.assertEqual(dec.read_bytes(), b"dash keyed")
        self.assertEqual(enc.read_bytes(), encrypt_bytes(b"dash keyed", "-secret"))

    def test_help_flag_is_a_key_for_single_programs(self):
        src = self.tmp_path / "h.bin"
        src.write_bytes(b"help")
        code, _, err = self._call(encrypt_main, ["-h", str(src), str(self.tmp_path / "h.des")])
        self.assertEqual(code, 0, msg=err)

    def test_cli_dash_key_after_double_dash(self):
        src = self.tmp_path / "dd.bin"
        enc = self.tmp_path / "dd.des"
        dec = self.tmp_path / "dd.out"
        src.write_bytes(b"double dash\x00")
        code, _, err = self._call(cli, ["encrypt", "--padding", "pkcs7", "--", "-secret", str(src), str(enc)])
        self.assertEqual(code, 0, msg=err)
        code, _, err = self._call(cli, ["decrypt", "--padding", "pkcs7", "--", "-secret", str(enc), str(dec)])
        self.assertEqual(code, 0, msg=err)
        self.assertEqual(dec.read_bytes(), b"double dash\x00")

    @unittest.skipIf(os.name == "nt", "argv bytes are only surrogate-escaped on POSIX")
    def test_undecodable_key_from_argv(self):
        src = self.tmp_path / "raw.bin"
        enc = self.tmp_path / "raw.des"
        dec = self.tmp_path / "raw.out"
        src.write_bytes(b"raw key bytes")
        key = os.fsdecode(b"k\xff")
        code, _, err = self._call(encrypt_main, [key, str(src), str(enc)])
        self.assertEqual(code, 0, msg=err)
        self.assertEqual(enc.read_bytes(), encrypt_bytes(b"raw key bytes", b"k\xff"))
        code, _, err = self._call(decrypt_main, [key, str(enc), str(dec)])
        self.assertEqual(code, 0, msg=err)
        self.assertEqual(dec.read_bytes(), b"raw key bytes")
        code, _, err = self._call(encrypt_main, [os.fsdecode(b"\xff" * 9), str(src), str(self.tmp_path / "never.des")])
        self.assertEqual(code, 1)
        self.assertIn("Key too long", err)
        self.assertFalse((self.tmp_path / "never.des").exists())

    def test_wrong_argument_count_exits_one(self):
        code, _, err = self._call(encrypt_main, ["pass", "only-input"])
        self.assertEqual(code, 1)
        self.assertIn("usage", err.lower())
        code, _, _ = self._call(decrypt_main, ["a", "b", "c", "d"])
        self.assertEqual(code, 1)

    def test_long_key_exits_before_io(self):
        src = self.tmp_path / "missing-input.bin"
        dst = self.tmp_path / "never.des"
        code, _, err = self._call(encrypt_main, ["123456789", str(src), str(dst)])
        self.assertEqual(code, 1)
        self.assertIn("Key too long", err)
        self.assertFalse(dst.exists())

    def test_missing_input_reports_filename(self):
        src = self.tmp_path / "nope.bin"
        dst = self.tmp_path / "out.des"
        code, _, err = self._call(decrypt_main, ["pass", str(src), str(dst)])
        self.assertEqual(code, 1)
        self.assertIn("nope.bin", err)
        self.assertFalse(dst.exists())

    def test_unwritable_output_exits_one(self):
        src = self.tmp_path / "in.bin"
        src.write_bytes(b"data")
        dst = self.tmp_path / "no-such-dir" / "out.des"
        code, _, err = self._call(encrypt_main, ["pass", str(src), str(dst)])
        self.assertEqual(code, 1)
        self.assertIn("out.des", err)

    def test_cli_warns_on_trailing_zero(self):
        src = self.tmp_path / "z.bin"
        src.write_bytes(b"zz\x00")
        code, _, err = self._call(cli, ["encrypt", "pass", str(src), str(self.tmp_path / "z.des")])
        self.assertEqual(code, 0)
        self.assertIn("0x00", err)

    def test_cli_pkcs7_module_entry(self):
        src = self.tmp_path / "cli.bin"
        enc = self.tmp_path / "cli.des"
        dec = self.tmp_path / "cli.out"
        src.write_bytes(b"ends in zero\x00")
        result = self._run_cli("encrypt", "pass", str(src), str(enc), "--padding", "pkcs7")
        self.assertEqual(result.returncode, 0, msg=result.stderr + result.stdout)
        result = self._run_cli("decrypt", "pass", str(enc), str(dec), "--padding", "pkcs7")
        self.assertEqual(result.returncode, 0, msg=result.stderr + result.stdout)
        self.assertEqual(dec.read_bytes(), b"ends in zero\x00")

    def test_cli_bad_subcommand_exits_one(self):
        result = self._run_cli("scramble", "pass", "a", "b")
        self.assertEqual(result.returncode, 1)


if __name__ == "__main__":
    unittest.main()
