"""Decide whether an observed keystroke repeats the key that triggered a dispatch."""

from typing import Sequence

from doubletap.keys import CTRL_X_SUBMAPS, PREFIX_STROKES, CtrlX

__all__ = ["is_repeat", "repeat_suffix"]


def repeat_suffix(trigger: Sequence[str]):
    """
    Return the strokes a second press is expected to produce, or None when
    the trigger cannot be matched.

    A command bound inside a prefix table is reached after the host has
    already consumed the prefix, so only the trailing stroke is typed again.
    Only the prefixes listed in ``doubletap.keys`` are known; a three-stroke
    trigger under any other prefix has no expected repeat.
    """
    trigger = tuple(trigger)

    if len(trigger) == 2 and trigger[0] in PREFIX_STROKES:
        return trigger[1:]

    if len(trigger) == 3:
        if trigger[0] == CtrlX and trigger[1] in CTRL_X_SUBMAPS:
            return trigger[2:]
        return None

    return trigger


def is_repeat(trigger: Sequence[str], observed: Sequence[str]) -> bool:
    expected = repeat_suffix(trigger)
    if expected is None:
        return False
    return tuple(observed) == expected
