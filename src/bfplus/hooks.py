from __future__ import annotations

from typing import BinaryIO, Callable, Dict

GREETING = b"Hello world!\n"


def greeting() -> bytes:
    return GREETING


def source_echo(stream: BinaryIO) -> bytes:
    """Return the whole program text, leaving the stream where it was."""
    pos = stream.tell()
    stream.seek(0)
    try:
        return stream.read()
    finally:
        stream.seek(pos)


def _bottles(n: int) -> str:
    if n == 0:
        return "no more bottles"
    if n == 1:
        return "1 bottle"
    return f"{n} bottles"


def counting_song(start: int = 99) -> bytes:
    verses = []
    for n in range(start, 0, -1):
        verses.append(
            f"{_bottles(n)} of beer on the wall, {_bottles(n)} of beer.\n"
            f"Take one down and pass it around, {_bottles(n - 1)} of beer on the wall.\n\n"
        )
    verses.append(
        "No more bottles of beer on the wall, no more bottles of beer.\n"
        f"Go to the store and buy some more, {_bottles(start)} of beer on the wall.\n"
    )
    return "".join(verses).encode('ascii')


def make_hooks(stream: BinaryIO) -> Dict[int, Callable[[], bytes]]:
    """Opcode table for the HQ9+ effects bound to ``stream``."""
    return {
        ord('H'): greeting,
        ord('Q'): lambda: source_echo(stream),
        ord('9'): counting_song,
    }
