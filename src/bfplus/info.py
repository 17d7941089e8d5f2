"""Informational text: banner, license, version, authors and the option dump."""

from __future__ import annotations

from typing import List, Optional

from . import __version__
from .config import InterpreterOptions
from .loops import MAX_NESTED_LOOPS
from .tape import STATIC_CELL_COUNT

PROGRAM_NAME = "Brainfuck Interpreter Plus (bf+)"
PROGRAM_AUTHORS = "bf+ contributors"

LICENSE = """\
The MIT License (MIT)

Copyright (c) bf+ contributors

Permission is hereby granted, free of charge, to any person obtaining a copy \
of this software and associated documentation files (the "Software"), to \
deal in the Software without restriction, including without limitation the \
rights to use, copy, modify, merge, publish, distribute, sublicense, and/or \
sell copies of the Software, and to permit persons to whom the Software is \
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in \
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR \
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, \
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE \
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER \
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING \
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS \
IN THE SOFTWARE.
"""


def preamble() -> str:
    return (
        f"{PROGRAM_NAME} {__version__}\n"
        "Brainfuck interpreter with extensions\n"
        "This is free software; see the license agreement (MIT License)\n"
    )


def use_help() -> str:
    return preamble() + "\nFor help try -h or --help\n"


def license_text() -> str:
    return LICENSE


def authors() -> str:
    return preamble() + f"Authors: {PROGRAM_AUTHORS}\n"


def version() -> str:
    return preamble() + f"Version: {__version__}\n"


def show_information(options: InterpreterOptions, *, config_filename: Optional[str],
                     source_filename: Optional[str], verbose: bool) -> str:
    lines: List[str] = [
        "Show information:",
        f"\tconfig filename: {config_filename or ''}",
        f"\tsource filename: {source_filename or ''}",
        f"\tverbose mode: {int(verbose)}",
    ]
    for name, value in options.as_dict().items():
        lines.append(f"\t{name.replace('_', ' ')}: {int(value)}")
    lines.append(f"\tuse comment: 0x{options.comment_mask:04X}")
    lines.append(f"\tSTATIC CELL COUNT: {STATIC_CELL_COUNT}")
    lines.append(f"\tMAX NESTED LOOPS: {MAX_NESTED_LOOPS}")
    return preamble() + "\n".join(lines) + "\n"
