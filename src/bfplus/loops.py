from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from .errors import LoopNestingError, make_bracket_error

logger = logging.getLogger(__name__)

MAX_NESTED_LOOPS = 1024

OPEN = ord('[')
CLOSE = ord(']')


@dataclass
class Bookmark:
    identity: int
    begin: int
    end: Optional[int] = None


class LoopResolver:
    """
    Resolves ``[``/``]`` against the source stream itself.

    Instead of a jump table built up front, each loop that is entered gets a
    bookmark holding the stream offset just after its ``[``. Repeating the
    body seeks back to that ``[``; leaving it through ``]`` caches the offset
    past the ``]`` so a later skip of the same occurrence can seek straight
    there. Loops that are never entered are skipped by a forward scan.

    Both methods are called right after the bracket byte has been read, so
    ``stream.tell()`` is the offset following the bracket.
    """

    def __init__(self, stream: BinaryIO, *, max_depth: Optional[int] = MAX_NESTED_LOOPS):
        self.stream = stream
        self.max_depth = max_depth
        self.bookmarks: List[Bookmark] = []

    @property
    def depth(self) -> int:
        return len(self.bookmarks)

    def top(self) -> Optional[Bookmark]:
        return self.bookmarks[-1] if self.bookmarks else None

    def enter(self, cell_nonzero: bool) -> None:
        """Handle a ``[``."""
        offset = self.stream.tell()
        top = self.top()
        repeat = top is not None and top.identity == offset

        if cell_nonzero:
            if repeat:
                return
            if self.max_depth is not None and len(self.bookmarks) >= self.max_depth:
                raise LoopNestingError(
                    message=f"ResourceExhausted: more than {self.max_depth} nested loops (offset {offset - 1})",
                    limit=self.max_depth,
                )
            self.bookmarks.append(Bookmark(identity=offset, begin=offset))
            return

        if repeat:
            self.bookmarks.pop()
            if top.end is not None:
                self.stream.seek(top.end)
                return
        self._skip_body(offset)

    def leave(self, cell_nonzero: bool) -> None:
        """Handle a ``]``."""
        if not self.bookmarks:
            raise self._bracket_error(']', self.stream.tell() - 1)

        if cell_nonzero:
            top = self.bookmarks[-1]
            top.end = self.stream.tell()
            # Land on the '[' so it re-tests the cell as a repeat entry.
            self.stream.seek(top.begin - 1)
        else:
            self.bookmarks.pop()

    def finish(self) -> None:
        """Fail if a loop is still open once the stream is exhausted."""
        if self.bookmarks:
            raise self._bracket_error('[', self.bookmarks[-1].identity - 1)

    def _skip_body(self, offset: int) -> None:
        depth = 0
        read = self.stream.read
        while True:
            byte = read(1)
            if not byte:
                raise self._bracket_error('[', offset - 1)
            code = byte[0]
            if code == OPEN:
                depth += 1
            elif code == CLOSE:
                if not depth:
                    return
                depth -= 1

    def _bracket_error(self, bracket: str, offset: int):
        self.stream.seek(0)
        source = self.stream.read()
        logger.debug("unmatched %r at offset %d", bracket, offset)
        return make_bracket_error(bracket=bracket, source=source, offset=offset)
