"""
Tree-walking Brainfuck interpreter used as an oracle in the tests.

It parses the whole program into nested nodes first, so it shares no loop
handling with the streaming interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

# ---------------- IR Nodes ----------------
@dataclass(frozen=True)
class Add:
    n: int  # net +/- on current cell

@dataclass(frozen=True)
class Move:
    n: int  # net >/<

@dataclass(frozen=True)
class Loop:
    body: List["Node"]

Node = Union[Add, Move, Loop]
BF_OPS = set("+-<>[]")

# ---------------- Parser: BF -> tree ----------------
def parse_bf(code: str) -> List[Node]:
    code = "".join(ch for ch in code if ch in BF_OPS)
    stack: List[List[Node]] = [[]]

    for ch in code:
        if ch == "[":
            body: List[Node] = []
            stack[-1].append(Loop(body))
            stack.append(body)
        elif ch == "]":
            if len(stack) == 1:
                raise ValueError("Unmatched ']'")
            stack.pop()
        elif ch in "+-":
            stack[-1].append(Add(1 if ch == "+" else -1))
        elif ch in "<>":
            stack[-1].append(Move(1 if ch == ">" else -1))

    if len(stack) != 1:
        raise ValueError("Unmatched '['")
    return stack[0]

# ---------------- Walker ----------------
def _walk(nodes: List[Node], tape: List[int], ptr: int) -> int:
    for n in nodes:
        if isinstance(n, Add):
            tape[ptr] = (tape[ptr] + n.n) % 256
        elif isinstance(n, Move):
            ptr += n.n
            if not 0 <= ptr < len(tape):
                raise IndexError(ptr)
        elif isinstance(n, Loop):
            while tape[ptr]:
                ptr = _walk(n.body, tape, ptr)
    return ptr


def run_reference(code: str, size: int = 2048):
    """Return (cells, cursor) after running an I/O-free program."""
    tape = [0] * size
    ptr = _walk(parse_bf(code), tape, 0)
    return tape, ptr
