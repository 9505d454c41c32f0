"""Command line front ends: ``encrypt``, ``decrypt`` and ``desblock``."""

import argparse
import sys
import warnings

from . import config
from .codec import decrypt_file, encrypt_file
from .keys import check_text_key
from .version import __version__


class _CliTheme:
    def __init__(self, plain: bool):
        self.plain = plain
        self.reset = "" if plain else "\033[0m"
        self.bold = "" if plain else "\033[1m"
        self.red = "" if plain else "\033[31m"
        self.green = "" if plain else "\033[32m"
        self.yellow = "" if plain else "\033[33m"

    def _wrap(self, msg: str, color: str, emoji: "str | None" = None) -> str:
        if self.plain:
            return msg
        prefix = f"{emoji} " if emoji else ""
        return f"{self.bold}{color}{prefix}{msg}{self.reset}"

    def ok(self, msg: str) -> str:
        return self._wrap(msg, self.green, "✅")

    def warn(self, msg: str) -> str:
        return self._wrap(msg, self.yellow, "⚠️")

    def err(self, msg: str) -> str:
        return self._wrap(msg, self.red, "❌")


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    # usage mistakes exit 1 like every other failure
    def error(self, message: str):
        self.print_usage(sys.stderr)
        raise _UsageError(message)


def _add_file_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("key", help="Text key, at most 8 bytes")
    parser.add_argument("input", help="Input file path")
    parser.add_argument("output", help="Output file path")


def _run(command: str, args: argparse.Namespace, theme: _CliTheme) -> int:
    try:
        check_text_key(args.key)
    except ValueError as exc:
        print(theme.err(str(exc)), file=sys.stderr)
        return 1
    action = encrypt_file if command == "encrypt" else decrypt_file
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", UserWarning)
            written = action(
                args.key,
                args.input,
                args.output,
                padding=getattr(args, "padding", None),
                engine=getattr(args, "engine", None)
            )
        for item in caught:
            msg = str(item.message).strip()
            if msg:
                print(theme.warn(msg), file=sys.stderr)
    except OSError as exc:
        name = exc.filename if exc.filename is not None else args.input
        print(theme.err(f"{name}: {exc.strerror or exc}"), file=sys.stderr)
        return 1
    except ValueError as exc:
        print(theme.err(f"{command} failed: {exc}"), file=sys.stderr)
        return 1
    print(theme.ok(f"Wrote {written} bytes to {args.output}"))
    return 0


def _single_program(command: str, argv) -> int:
    theme = _CliTheme(config.cli_plain_mode())
    parser = _ArgumentParser(prog=command, description=f"DES {command} a file block by block")
    _add_file_arguments(parser)
    try:
        # everything is positional, so keys such as "-secret" stay keys
        args = parser.parse_args(["--", *(sys.argv[1:] if argv is None else argv)])
    except _UsageError as exc:
        print(theme.err(str(exc)), file=sys.stderr)
        return 1
    return _run(command, args, theme)


def cli(argv=None) -> int:
    theme = _CliTheme(config.cli_plain_mode())
    parser = _ArgumentParser(
        prog="desblock",
        description="DES file encryption toolkit",
        epilog="Put options first and end them with -- when the key starts with a dash: desblock encrypt --padding pkcs7 -- -secret in out"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for command in ("encrypt", "decrypt"):
        sub = subparsers.add_parser(command, help=f"{command.capitalize()} a file with DES")
        _add_file_arguments(sub)
        sub.add_argument(
            "--padding",
            choices=config.PADDING_MODES,
            default=None,
            help="Final block padding (default: DESBLOCK_PADDING or zero)"
        )
        sub.add_argument(
            "--engine",
            choices=config.ENGINES,
            default=None,
            help="Block engine (default: DESBLOCK_ENGINE or vector)"
        )
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        print(theme.err(str(exc)), file=sys.stderr)
        return 1
    return _run(args.command, args, theme)


def _interruptible(fn, argv) -> int:
    try:
        return fn(argv)
    except KeyboardInterrupt:
        print("Exiting...", file=sys.stderr)
        return 130


def main(argv=None) -> int:
    return _interruptible(cli, argv)


def encrypt_main(argv=None) -> int:
    return _interruptible(lambda a: _single_program("encrypt", a), argv)


def decrypt_main(argv=None) -> int:
    return _interruptible(lambda a: _single_program("decrypt", a), argv)


if __name__ == "__main__":
    raise SystemExit(main())
