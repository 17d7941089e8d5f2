from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .config import InterpreterOptions
from .errors import SourceUnavailable
from .interpreter import Interpreter


@dataclass(frozen=True)
class RunResult:
    output: bytes
    cells: List[int]
    cursor: int
    steps: int
    trace: List[str]


def _run(stream, *, options: Optional[InterpreterOptions], input: bytes, verbose: bool) -> RunResult:
    stdout = io.BytesIO()
    interpreter = Interpreter(options, stdin=io.BytesIO(input), stdout=stdout, verbose=verbose)
    state = interpreter.run(stream)
    return RunResult(
        output=stdout.getvalue(),
        cells=state.tape.snapshot(),
        cursor=state.tape.cursor,
        steps=state.steps,
        trace=list(state.trace),
    )


def run_string(source: Union[str, bytes], *, options: Optional[InterpreterOptions] = None,
               input: bytes = b"", verbose: bool = False) -> RunResult:
    if isinstance(source, str):
        source = source.encode('utf-8')
    return _run(io.BytesIO(source), options=options, input=input, verbose=verbose)


def run_file(path: str | Path, *, options: Optional[InterpreterOptions] = None,
             input: bytes = b"", verbose: bool = False) -> RunResult:
    p = Path(path)
    try:
        f = p.open('rb')
    except OSError as e:
        raise SourceUnavailable(message=f"SourceUnavailable: {p}: {e.strerror or e}", path=str(p)) from e
    with f:
        return _run(f, options=options, input=input, verbose=verbose)
