from __future__ import annotations

from enum import Enum, auto
from typing import FrozenSet, Iterable


class Mode(Enum):
    UNKNOWN = auto()
    COMMAND = auto()
    COMMENT = auto()


class ModeMachine:
    """
    Command/comment lexical state.

    Any enabled delimiter opens a comment while in command mode, and any
    enabled delimiter closes it again, whichever class opened it.
    """

    def __init__(self, delimiters: Iterable[int] = ()):
        self.delimiters: FrozenSet[int] = frozenset(delimiters)
        self.mode = Mode.UNKNOWN

    def start(self) -> None:
        self.mode = Mode.COMMAND

    @property
    def in_command(self) -> bool:
        return self.mode is Mode.COMMAND

    def feed(self, code: int) -> bool:
        """Advance on one byte; return True if it should be dispatched."""
        if self.mode is Mode.UNKNOWN:
            self.start()

        if code in self.delimiters:
            self.mode = Mode.COMMENT if self.mode is Mode.COMMAND else Mode.COMMAND
            return False
        return self.mode is Mode.COMMAND
