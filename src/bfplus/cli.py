from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import info
from .config import load_config
from .errors import BFPlusError, SourceUnavailable
from .interpreter import Interpreter


def init_logging(verbose: bool = False) -> None:
    """Send library log records to stderr; DEBUG under --verbose, WARNING otherwise."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)5s %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfplus",
        description="Brainfuck interpreter with extensions.",
        add_help=False,
    )
    parser.add_argument("-c", "--config", metavar="FILE", help="Read feature flags from FILE")
    parser.add_argument("-f", "--file", metavar="FILE", help="Program to run")
    parser.add_argument("-s", "--show-info", action="store_true", help="Print every option before running")
    parser.add_argument("-v", "--verbose", action="store_true", help="Trace every byte read to stderr")
    parser.add_argument("-q", "--quiet-exit", action="store_true", help="Do not print the farewell line")
    parser.add_argument("-p", "--print-preamble", action="store_true", help="Print the banner before running")
    parser.add_argument("-l", "--license", action="store_true", help="Print the license and exit")
    parser.add_argument("-h", "--help", action="store_true", help="Print this help and exit")
    parser.add_argument("-V", "--version", action="store_true", help="Print the version and exit")
    parser.add_argument("-a", "--authors", action="store_true", help="Print the authors and exit")
    return parser


def _run(args: argparse.Namespace) -> int:
    parser = build_parser()

    if args.license:
        sys.stdout.write(info.license_text())
        return 0
    if args.help:
        sys.stdout.write(info.preamble() + "\n" + parser.format_help())
        return 0
    if args.authors:
        sys.stdout.write(info.authors())
        return 0
    if args.version:
        sys.stdout.write(info.version())
        return 0

    if args.print_preamble:
        sys.stdout.write(info.preamble())

    options = load_config(args.config)

    if not args.file:
        print("Error: no program given (use -f FILE)", file=sys.stderr)
        return 1

    if args.show_info:
        sys.stdout.write(info.show_information(
            options,
            config_filename=args.config,
            source_filename=args.file,
            verbose=args.verbose,
        ))
    sys.stdout.flush()

    try:
        f = open(args.file, 'rb')
    except OSError as e:
        raise SourceUnavailable(message=f"SourceUnavailable: {args.file}: {e.strerror or e}", path=args.file) from e

    interpreter = Interpreter(
        options,
        stdin=sys.stdin.buffer,
        stdout=sys.stdout.buffer,
        verbose=args.verbose,
        trace_sink=sys.stderr,
    )
    with f:
        interpreter.run(f)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        sys.stdout.write(info.use_help())
        return 0

    args = build_parser().parse_args(argv)
    init_logging(args.verbose)

    try:
        return _run(args)
    except BFPlusError as e:
        sys.stdout.flush()
        print(e, file=sys.stderr)
        return 1
    finally:
        if not args.quiet_exit:
            sys.stdout.flush()
            print("Bye!")


if __name__ == "__main__":
    raise SystemExit(main())
