from __future__ import annotations

from typing import List

import numpy as np

from .errors import TapeBoundsError

STATIC_CELL_COUNT = 2048


def cell_dtype(*, large: bool = False, signed: bool = False) -> np.dtype:
    if large:
        return np.dtype(np.int32 if signed else np.uint32)
    return np.dtype(np.int8 if signed else np.uint8)


class Tape:
    """
    Linear cell memory with a cursor.

    Cells live in a numpy array whose dtype gives the cell width and
    signedness. Arithmetic wraps at the native width, or at 256 when
    ``mod256`` is set. Moving left of cell 0 is an error; moving right past
    the end is an error unless the tape is ``growable``, in which case the
    capacity doubles.
    """

    def __init__(self, size: int = STATIC_CELL_COUNT, *, large_cells: bool = False,
                 signed: bool = False, mod256: bool = False, growable: bool = False):
        if size < 1:
            raise ValueError(f"Tape size must be >= 1: {size}")
        self.cells = np.zeros(size, dtype=cell_dtype(large=large_cells, signed=signed))
        self.cursor = 0
        self.signed = signed
        self.growable = growable
        self.modulus = 256 if mod256 else 1 << (self.cells.dtype.itemsize * 8)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def current(self) -> int:
        return int(self.cells[self.cursor])

    def wrap(self, value: int) -> int:
        value %= self.modulus
        if self.signed and value >= self.modulus // 2:
            value -= self.modulus
        return value

    def store(self, value: int) -> None:
        self.cells[self.cursor] = self.wrap(value)

    def increment(self) -> None:
        self.store(self.current + 1)

    def decrement(self) -> None:
        self.store(self.current - 1)

    def move_right(self) -> None:
        if self.cursor + 1 >= len(self.cells):
            if not self.growable:
                raise TapeBoundsError(
                    message=f"ResourceExhausted: cursor moved past the last cell ({len(self.cells) - 1})",
                    limit=len(self.cells),
                    cursor=self.cursor + 1,
                )
            self.cells = np.concatenate((self.cells, np.zeros(len(self.cells), dtype=self.cells.dtype)))
        self.cursor += 1

    def move_left(self) -> None:
        if self.cursor == 0:
            raise TapeBoundsError(
                message="ResourceExhausted: cursor moved left of cell 0",
                limit=len(self.cells),
                cursor=-1,
            )
        self.cursor -= 1

    def snapshot(self) -> List[int]:
        return [int(v) for v in self.cells]
