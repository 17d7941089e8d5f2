#!/usr/bin/env python3
"""
Loop resolver: bookmarks, jump-back, forward skip and error cases.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bfplus.errors import BFPlusSyntaxError, LoopNestingError, UnmatchedBracketError
from bfplus.loops import MAX_NESTED_LOOPS, Bookmark, LoopResolver


def stream_after(source: bytes, index: int) -> io.BytesIO:
    """Stream positioned just after the byte at ``index``."""
    stream = io.BytesIO(source)
    stream.seek(index + 1)
    return stream


def test_enter_pushes_bookmark():
    stream = stream_after(b"+[-]", 1)
    resolver = LoopResolver(stream)
    resolver.enter(True)
    assert resolver.bookmarks == [Bookmark(identity=2, begin=2, end=None)]


def test_repeat_entry_does_not_push():
    stream = stream_after(b"+[-]", 1)
    resolver = LoopResolver(stream)
    resolver.enter(True)
    stream.seek(2)
    resolver.enter(True)
    assert resolver.depth == 1


def test_leave_nonzero_caches_end_and_rewinds_to_bracket():
    stream = stream_after(b"+[-]+", 1)
    resolver = LoopResolver(stream)
    resolver.enter(True)
    stream.seek(4)
    resolver.leave(True)
    assert resolver.top().end == 4
    assert stream.tell() == 1
    assert stream.read(1) == b"["


def test_leave_zero_pops():
    stream = stream_after(b"+[-]", 1)
    resolver = LoopResolver(stream)
    resolver.enter(True)
    stream.seek(4)
    resolver.leave(False)
    assert resolver.depth == 0
    assert stream.tell() == 4


def test_skip_scans_past_nested_body():
    source = b"[[+]-[>]]."
    stream = stream_after(source, 0)
    resolver = LoopResolver(stream)
    resolver.enter(False)
    assert stream.read(1) == b"."
    assert resolver.depth == 0


def test_skip_does_not_populate_cache():
    stream = stream_after(b"[+].", 0)
    resolver = LoopResolver(stream)
    resolver.enter(False)
    assert resolver.bookmarks == []


def test_cached_skip_seeks_to_end():
    source = b"[+++++]."
    stream = io.BytesIO(source)
    resolver = LoopResolver(stream)
    resolver.bookmarks.append(Bookmark(identity=1, begin=1, end=7))
    stream.seek(1)
    resolver.enter(False)
    assert resolver.depth == 0
    assert stream.tell() == 7
    assert stream.read(1) == b"."


def test_unmatched_open_during_skip_is_syntax_error():
    stream = stream_after(b"+\n[[-]", 2)
    resolver = LoopResolver(stream)
    with pytest.raises(UnmatchedBracketError) as exc:
        resolver.enter(False)
    err = exc.value
    assert isinstance(err, BFPlusSyntaxError)
    assert err.bracket == '['
    assert err.offset == 2
    assert err.line == 2
    assert "unmatched '['" in str(err)
    assert "Hint:" in str(err)


def test_leading_close_is_syntax_error():
    stream = stream_after(b"]+", 0)
    resolver = LoopResolver(stream)
    with pytest.raises(UnmatchedBracketError) as exc:
        resolver.leave(False)
    assert exc.value.bracket == ']'
    assert exc.value.offset == 0


def test_finish_reports_open_loop():
    stream = stream_after(b"+[+", 1)
    resolver = LoopResolver(stream)
    resolver.enter(True)
    with pytest.raises(UnmatchedBracketError) as exc:
        resolver.finish()
    assert exc.value.offset == 1


def test_nesting_limit():
    source = b"[" * 4
    stream = io.BytesIO(source)
    resolver = LoopResolver(stream, max_depth=3)
    for i in range(3):
        stream.seek(i + 1)
        resolver.enter(True)
    stream.seek(4)
    with pytest.raises(LoopNestingError) as exc:
        resolver.enter(True)
    assert exc.value.limit == 3


def test_default_limit_and_unbounded():
    source = b"[" * (MAX_NESTED_LOOPS + 1)
    stream = io.BytesIO(source)
    resolver = LoopResolver(stream, max_depth=None)
    for i in range(len(source)):
        stream.seek(i + 1)
        resolver.enter(True)
    assert resolver.depth == MAX_NESTED_LOOPS + 1
