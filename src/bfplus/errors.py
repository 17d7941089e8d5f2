from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _locate(source: bytes, offset: int) -> Tuple[int, int]:
    """Return the 1-based (line, column) of a byte offset."""
    offset = max(0, min(offset, len(source)))
    line = source.count(b'\n', 0, offset) + 1
    column = offset - (source.rfind(b'\n', 0, offset) + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str) -> Optional[str]:
    msg = message.lower()
    if "unmatched '['" in msg:
        return 'Every "[" needs a closing "]". Check for a bracket swallowed by a comment delimiter.'
    if "unmatched ']'" in msg:
        return 'This "]" has no open loop. Remove it or add the missing "[" before it.'
    return None


@dataclass
class BFPlusError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SourceUnavailable(BFPlusError):
    path: str


@dataclass
class BFPlusSyntaxError(BFPlusError):
    offset: int
    line: int
    context: str


@dataclass
class UnmatchedBracketError(BFPlusSyntaxError):
    bracket: str


@dataclass
class ResourceExhausted(BFPlusError):
    limit: Optional[int]


@dataclass
class LoopNestingError(ResourceExhausted):
    pass


@dataclass
class TapeBoundsError(ResourceExhausted):
    cursor: int


def make_bracket_error(*, bracket: str, source: bytes, offset: int) -> UnmatchedBracketError:
    message = f"unmatched '{bracket}' at offset {offset}"
    line, column = _locate(source, offset)
    lines = source.decode('latin-1').split('\n')
    ctx = _build_context(lines, line, column)
    hint = _hint_for(message)
    hint_block = f"\nHint: {hint}" if hint else ""
    return UnmatchedBracketError(
        message=f"SyntaxError: {message} (line {line})\n{ctx}{hint_block}",
        offset=offset,
        line=line,
        context=ctx,
        bracket=bracket,
    )
