#!/usr/bin/env python3
"""
Tape arithmetic and bounds policy.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest

from bfplus.errors import ResourceExhausted, TapeBoundsError
from bfplus.tape import STATIC_CELL_COUNT, Tape, cell_dtype


def test_default_tape_is_byte_cells():
    tape = Tape()
    assert len(tape) == STATIC_CELL_COUNT
    assert tape.cells.dtype == np.uint8
    assert tape.cursor == 0
    assert tape.current == 0


def test_cell_dtype_selection():
    assert cell_dtype() == np.uint8
    assert cell_dtype(signed=True) == np.int8
    assert cell_dtype(large=True) == np.uint32
    assert cell_dtype(large=True, signed=True) == np.int32


def test_byte_cells_wrap_both_ways():
    tape = Tape()
    tape.decrement()
    assert tape.current == 255
    tape.increment()
    assert tape.current == 0


def test_256_increments_restore_value_under_mod256():
    for large in (False, True):
        tape = Tape(large_cells=large, mod256=True)
        tape.store(17)
        for _ in range(256):
            tape.increment()
        assert tape.current == 17


def test_large_cells_hold_values_past_255():
    tape = Tape(large_cells=True)
    for _ in range(300):
        tape.increment()
    assert tape.current == 300
    tape.store(0)
    tape.decrement()
    assert tape.current == 2 ** 32 - 1


def test_mod256_caps_large_cells():
    tape = Tape(large_cells=True, mod256=True)
    tape.store(255)
    tape.increment()
    assert tape.current == 0


def test_signed_cells_go_negative():
    tape = Tape(signed=True)
    tape.decrement()
    assert tape.current == -1
    tape.store(127)
    tape.increment()
    assert tape.current == -128


def test_signed_large_cells():
    tape = Tape(signed=True, large_cells=True)
    tape.decrement()
    assert tape.current == -1
    tape.store(2 ** 31 - 1)
    tape.increment()
    assert tape.current == -(2 ** 31)


def test_move_left_of_zero_fails():
    tape = Tape(8)
    with pytest.raises(TapeBoundsError) as exc:
        tape.move_left()
    assert isinstance(exc.value, ResourceExhausted)
    assert exc.value.cursor == -1


def test_move_past_end_fails_on_fixed_tape():
    tape = Tape(4)
    for _ in range(3):
        tape.move_right()
    assert tape.cursor == 3
    with pytest.raises(TapeBoundsError) as exc:
        tape.move_right()
    assert exc.value.limit == 4
    assert tape.cursor == 3


def test_growable_tape_extends_and_keeps_values():
    tape = Tape(2, growable=True)
    tape.store(9)
    for _ in range(5):
        tape.move_right()
    assert tape.cursor == 5
    assert len(tape) >= 6
    assert tape.current == 0
    assert tape.snapshot()[0] == 9


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        Tape(0)
