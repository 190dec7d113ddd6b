"""Key names, modifiers and well-known prefix strokes."""

# pylint: disable=invalid-name

from typing import Dict, FrozenSet, Tuple

__all__ = [
    "KEY_NAMES",
    "KEY_ALIASES",
    "MODIFIER_NAMES",
    "MODIFIER_ORDER",
    "CtrlX",
    "CtrlC",
    "CtrlH",
    "PREFIX_STROKES",
    "CTRL_X_SUBMAPS",
    "Backspace",
    "Delete",
    "Down",
    "End",
    "Enter",
    "Esc",
    "F1",
    "F2",
    "F3",
    "F4",
    "F5",
    "F6",
    "F7",
    "F8",
    "F9",
    "F10",
    "F11",
    "F12",
    "Home",
    "Left",
    "PageDown",
    "PageUp",
    "Right",
    "Space",
    "Tab",
    "Up",
]

# Non-character keys, named after pynput.keyboard.Key members.
KEY_NAMES: FrozenSet[str] = frozenset(
    [
        "backspace",
        "caps_lock",
        "delete",
        "down",
        "end",
        "enter",
        "esc",
        "home",
        "insert",
        "left",
        "media_next",
        "media_play_pause",
        "media_previous",
        "media_volume_down",
        "media_volume_mute",
        "media_volume_up",
        "menu",
        "num_lock",
        "page_down",
        "page_up",
        "pause",
        "print_screen",
        "right",
        "scroll_lock",
        "space",
        "tab",
        "up",
    ]
    + [f"f{n}" for n in range(1, 21)]
)

KEY_ALIASES: Dict[str, str] = {
    "RET": "enter",
    "return": "enter",
    "SPC": "space",
    "TAB": "tab",
    "ESC": "esc",
    "escape": "esc",
    "DEL": "backspace",
    "deletechar": "delete",
    "prior": "page_up",
    "next": "page_down",
    " ": "space",
    "\t": "tab",
    "\n": "enter",
    "\r": "enter",
    "\x1b": "esc",
}

# Modifier spellings (pynput names and common words) mapped to stroke prefixes.
MODIFIER_NAMES: Dict[str, str] = {
    "ctrl": "C",
    "ctrl_l": "C",
    "ctrl_r": "C",
    "control": "C",
    "alt": "M",
    "alt_l": "M",
    "alt_r": "M",
    "alt_gr": "M",
    "meta": "M",
    "shift": "S",
    "shift_l": "S",
    "shift_r": "S",
    "cmd": "s",
    "cmd_l": "s",
    "cmd_r": "s",
    "super": "s",
}

MODIFIER_ORDER: Tuple[str, ...] = ("C", "M", "S", "s")

CtrlX = "C-x"
CtrlC = "C-c"
CtrlH = "C-h"

# Prefixes whose second stroke is re-pressed on its own.
PREFIX_STROKES: FrozenSet[str] = frozenset([CtrlX, CtrlC, CtrlH])

# Second-level prefix tables reachable under C-x.
CTRL_X_SUBMAPS: Dict[str, str] = {
    "4": "buffer-window",
    "5": "frame",
    "6": "two-column",
    "v": "version-control",
    "enter": "multilingual",
}

Backspace = "backspace"
Delete = "delete"
Down = "down"
End = "end"
Enter = "enter"
Esc = "esc"
F1 = "f1"
F2 = "f2"
F3 = "f3"
F4 = "f4"
F5 = "f5"
F6 = "f6"
F7 = "f7"
F8 = "f8"
F9 = "f9"
F10 = "f10"
F11 = "f11"
F12 = "f12"
Home = "home"
Left = "left"
PageDown = "page_down"
PageUp = "page_up"
Right = "right"
Space = "space"
Tab = "tab"
Up = "up"
