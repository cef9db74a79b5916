"""Relative and absolute positions in the queue."""

from enum import IntEnum


class Whence(IntEnum):
    """How a queue position number is interpreted."""

    ABSOLUTE = 0
    """An absolute position; 0 is the first song."""
    AFTER_CURRENT = 1
    """A position after the current song; 0 is right after it."""
    BEFORE_CURRENT = 2
    """A position before the current song; 0 is right before it."""


_CHARS = {
    Whence.AFTER_CURRENT: "+",
    Whence.BEFORE_CURRENT: "-",
}


def whence_char(whence) -> str:
    """Return the prefix for *whence*: "+", "-", or "" if absolute or invalid."""
    try:
        whence = Whence(whence)
    except ValueError:
        return ""
    return _CHARS.get(whence, "")