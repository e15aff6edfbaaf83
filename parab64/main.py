import argparse
import contextlib
import os
import sys

import colorama

from . import config
from .api import default_decoded_path
from .errors import Parab64Error, SinkUnavailable, SourceUnavailable
from .progress import ProgressReporter, human_readable_size
from .transcoder import transcode_file, transcode_stream
from .version import __version__


def _cli_plain_mode() -> bool:
    if os.getenv("PARAB64_CLI_PLAIN"):
        return True
    if os.getenv("NO_COLOR"):
        return True
    style = (os.getenv("PARAB64_CLI_STYLE") or "").strip().lower()
    return style in {"plain", "boring", "0", "false", "off"}


class _CliTheme:
    def __init__(self, plain: bool):
        self.plain = plain
        self.reset = "" if plain else colorama.Style.RESET_ALL
        self.bold = "" if plain else colorama.Style.BRIGHT
        self.red = "" if plain else colorama.Fore.RED
        self.green = "" if plain else colorama.Fore.GREEN
        self.cyan = "" if plain else colorama.Fore.CYAN

    def _wrap(self, msg: str, color: str, emoji: str | None = None) -> str:
        if self.plain:
            return msg
        prefix = f"{emoji} " if emoji else ""
        return f"{self.bold}{color}{prefix}{msg}{self.reset}"

    def ok(self, msg: str) -> str:
        return self._wrap(msg, self.green, "✅")

    def err(self, msg: str) -> str:
        return self._wrap(msg, self.red, "❌")

    def info(self, msg: str) -> str:
        return self._wrap(msg, self.cyan, "✨")


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {parsed}")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="parab64", description="Parallel chunked base64 transcoder")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for mode, help_text in (
        (config.ENCODE, "Encode a binary file to base64 text"),
        (config.DECODE, "Decode base64 text back to bytes"),
    ):
        sub = subparsers.add_parser(mode, help=help_text)
        sub.add_argument("source", help="Input path, or - for stdin")
        sub.add_argument(
            "-o", "--output",
            default=None,
            help="Output path, or - for stdout (default: derived from the input name)"
        )
        sub.add_argument(
            "-c", "--chunk-size",
            type=_positive_int,
            default=None,
            help="Bytes (encode) or characters (decode) per chunk; encode needs a multiple of 3"
        )
        sub.add_argument(
            "-t", "--threads",
            type=_positive_int,
            default=None,
            help="Worker threads (default: PARAB64_MAX_THREADS or CPU count)"
        )
        sub.add_argument(
            "--silent",
            action="store_true",
            help="Suppress progress and status output"
        )
    return parser


def _open_end(stack: contextlib.ExitStack, path: str, mode: str, error, std_stream):
    if path == "-":
        return std_stream.buffer
    try:
        return stack.enter_context(open(path, mode))
    except OSError as exc:
        raise error(f"Cannot open {path}: {exc}") from exc


def _default_output(mode: str, source: str) -> str:
    if source == "-":
        return "-"
    if mode == config.ENCODE:
        return f"{source}.b64"
    return default_decoded_path(source)


def cli(argv=None) -> int:
    colorama.just_fix_windows_console()
    theme = _CliTheme(_cli_plain_mode())
    args = _build_parser().parse_args(argv)
    mode = args.command
    output = args.output or _default_output(mode, args.source)
    silent = args.silent or config.silent_mode()

    reporter = None
    if not silent:
        reporter = ProgressReporter(mode, color=not theme.plain)

    try:
        if args.source == "-" or output == "-":
            with contextlib.ExitStack() as stack:
                source = _open_end(stack, args.source, "rb", SourceUnavailable, sys.stdin)
                sink = _open_end(stack, output, "wb", SinkUnavailable, sys.stdout)
                written = transcode_stream(
                    source,
                    sink,
                    mode,
                    chunk_size=args.chunk_size,
                    workers=args.threads,
                    progress_cb=reporter.update if reporter else None,
                )
                sink.flush()
        else:
            written = transcode_file(
                args.source,
                output,
                mode,
                chunk_size=args.chunk_size,
                workers=args.threads,
                progress_cb=reporter.update if reporter else None,
            )
    except (Parab64Error, ValueError, OSError) as exc:
        if reporter:
            reporter.finish()
        print(theme.err(f"{mode} failed: {exc}"), file=sys.stderr)
        return 1

    if reporter:
        reporter.finish()
        target = "stdout" if output == "-" else output
        print(theme.ok(f"{mode}d -> {target} ({human_readable_size(written)})"), file=sys.stderr)
    return 0


def main(argv=None) -> int:
    try:
        return cli(argv)
    except KeyboardInterrupt:
        print("Exiting...", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
