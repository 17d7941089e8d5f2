from __future__ import annotations

import io
import logging
from typing import BinaryIO, Optional, TextIO

from .config import RESERVED_FLAGS, InterpreterOptions
from .hooks import make_hooks
from .loops import MAX_NESTED_LOOPS, LoopResolver
from .modes import Mode, ModeMachine
from .state import RunState
from .tape import STATIC_CELL_COUNT, Tape

logger = logging.getLogger(__name__)

OPCODES = frozenset(b'><+-.,[]')

VERBOSE_LEGEND = (
    "Verbose mode!",
    "* - command",
    "symbol - current readable symbol (HEX)",
    "ccn - current cell number",
    "ccv - current cell value (HEX/OCT/DEC)",
    "-" * 40,
)


class Interpreter:
    """
    Streaming bf+ interpreter.

    Source bytes are read one at a time from a seekable binary stream and
    executed as they arrive; loops are resolved by repositioning that same
    stream (see `LoopResolver`). One instance may run several programs, each
    `run` starts from a fresh tape.

    Policies:
    - ``,`` at end of input leaves the cell unchanged.
    - ``.`` writes the low 8 bits of the cell.
    - ``use_force_rn`` turns every LF written by ``.`` or the H/9 hooks into CR LF.
    - ``use_fast_input`` reads all remaining input on the first ``,``.
    """

    def __init__(self, options: Optional[InterpreterOptions] = None, *,
                 stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None,
                 verbose: bool = False, trace_sink: Optional[TextIO] = None,
                 tape_size: int = STATIC_CELL_COUNT):
        self.options = options if options is not None else InterpreterOptions()
        self.stdin = stdin if stdin is not None else io.BytesIO()
        self.stdout = stdout if stdout is not None else io.BytesIO()
        self.verbose = verbose
        self.trace_sink = trace_sink
        self.tape_size = tape_size
        self._input_buffer: Optional[bytes] = None
        self._input_pos = 0

        for name in RESERVED_FLAGS:
            if getattr(self.options, name):
                logger.info("%s is reserved and has no effect", name)

    # ===== Setup =====

    def new_state(self, stream: BinaryIO) -> RunState:
        opts = self.options
        tape = Tape(
            self.tape_size,
            large_cells=opts.use_large_cell_size,
            signed=opts.use_negative_value,
            mod256=opts.use_mod255,
            growable=opts.use_infinite_cells,
        )
        loops = LoopResolver(
            stream,
            max_depth=None if opts.use_infinite_nested_loops else MAX_NESTED_LOOPS,
        )
        return RunState(
            tape=tape,
            modes=ModeMachine(opts.comment_delimiters),
            loops=loops,
            is_tracing=self.verbose,
            trace_sink=self.trace_sink,
        )

    # ===== Main loop =====

    def run(self, stream: BinaryIO) -> RunState:
        """Execute the program in ``stream`` from its current position to the end."""
        state = self.new_state(stream)
        hooks = make_hooks(stream) if self.options.use_syntax_hq9plus else {}
        commands = OPCODES | frozenset(hooks)
        self._input_buffer = None
        self._input_pos = 0

        for line in VERBOSE_LEGEND:
            state.add_trace(line)

        state.modes.start()
        read = stream.read
        while True:
            byte = read(1)
            if not byte:
                break
            code = byte[0]

            if state.is_tracing:
                marked = state.modes.mode is not Mode.COMMENT and code in commands
                state.add_trace(self._describe(state.tape, code, marked))

            if not state.modes.feed(code):
                continue

            if code in hooks:
                self._hook(state, code, hooks[code]())
            else:
                self.dispatch(state, code)

        state.loops.finish()
        self.stdout.flush()
        logger.debug("run finished after %d commands, cursor at %d", state.steps, state.tape.cursor)
        return state

    def dispatch(self, state: RunState, code: int) -> None:
        """Execute one command-mode byte. Unknown bytes are ignored."""
        tape = state.tape

        if code == 0x3E:  # '>'
            tape.move_right()
        elif code == 0x3C:  # '<'
            tape.move_left()
        elif code == 0x2B:  # '+'
            tape.increment()
        elif code == 0x2D:  # '-'
            tape.decrement()
        elif code == 0x2E:  # '.'
            value = tape.current & 0xFF
            state.add_trace(f"O> 0x{value:02X}")
            self._write(bytes((value,)))
        elif code == 0x2C:  # ','
            value = self._read_input()
            state.add_trace("I> EOF" if value is None else f"I> 0x{value:02X}")
            if value is not None:
                tape.store(value)
        elif code == 0x5B:  # '['
            state.loops.enter(tape.current != 0)
        elif code == 0x5D:  # ']'
            state.loops.leave(tape.current != 0)
        else:
            return
        state.steps += 1

    # ===== I/O =====

    def _hook(self, state: RunState, code: int, data: bytes) -> None:
        state.steps += 1
        if code == ord('Q'):
            # Program text is copied verbatim.
            self.stdout.write(data)
        else:
            self._write(data)

    def _write(self, data: bytes) -> None:
        if self.options.use_force_rn:
            data = data.replace(b'\n', b'\r\n')
        self.stdout.write(data)

    def _read_input(self) -> Optional[int]:
        if self.options.use_fast_input:
            if self._input_buffer is None:
                self._input_buffer = self.stdin.read()
            if self._input_pos >= len(self._input_buffer):
                return None
            value = self._input_buffer[self._input_pos]
            self._input_pos += 1
            return value

        byte = self.stdin.read(1)
        return byte[0] if byte else None

    # ===== Diagnostics =====

    @staticmethod
    def _describe(tape: Tape, code: int, marked: bool) -> str:
        value = tape.current
        unsigned = value % (1 << (tape.cells.dtype.itemsize * 8))
        printable = chr(code) if 0x20 <= code < 0x7F else ' '
        return (
            f"{'*' if marked else ' '} '{printable}' symbol=0x{code:02X}; "
            f"ccn={tape.cursor}; ccv=0x{unsigned:04X}; ccv=0{unsigned:05o}; ccv={value};"
        )
