from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from .loops import LoopResolver
from .modes import ModeMachine
from .tape import Tape


@dataclass
class RunState:
    tape: Tape
    modes: ModeMachine
    loops: LoopResolver
    steps: int = 0
    trace: List[str] = field(default_factory=list)
    is_tracing: bool = False
    # When set, trace lines are written here instead of kept in `trace`.
    trace_sink: Optional[TextIO] = None

    def add_trace(self, message: str) -> None:
        if not self.is_tracing:
            return
        if self.trace_sink is not None:
            self.trace_sink.write(message + "\n")
        else:
            self.trace.append(message)
