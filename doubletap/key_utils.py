"""Conversions between key representations and canonical keys."""

import re
from enum import Enum
from typing import Any, FrozenSet, List, Tuple

from doubletap.errors import MalformedKeyError
from doubletap.events import KeyEvent
from doubletap.keys import KEY_ALIASES, KEY_NAMES, MODIFIER_NAMES, MODIFIER_ORDER

__all__ = [
    "CanonicalKey",
    "canonicalize",
    "parse_key_text",
    "describe_key",
    "make_stroke",
    "split_stroke",
    "stroke_from_key",
]

CanonicalKey = Tuple[str, ...]

_BRACKETED = re.compile(r"^<([a-z0-9_]+)>$")


def make_stroke(base: str, modifiers=()) -> str:
    """Build a stroke code from a base key and modifier prefixes."""
    mods = set(modifiers)
    if len(base) == 1:
        if base in KEY_ALIASES:
            base = KEY_ALIASES[base]
        elif "S" in mods:
            # Shifted characters arrive already shifted.
            mods.discard("S")
            base = base.upper() if base.isalpha() else base
    return "".join(f"{m}-" for m in MODIFIER_ORDER if m in mods) + base


def split_stroke(text: str) -> Tuple[FrozenSet[str], str]:
    """Split ``C-M-x`` into its modifier prefixes and the remaining key text."""
    mods = set()
    rest = text
    while len(rest) > 2 and rest[1] == "-" and rest[0] in MODIFIER_ORDER:
        mods.add(rest[0])
        rest = rest[2:]
    return frozenset(mods), rest


def _key_name(word: str):
    if word in KEY_ALIASES:
        return KEY_ALIASES[word]
    lowered = word.lower()
    if lowered in KEY_ALIASES:
        return KEY_ALIASES[lowered]
    if lowered in KEY_NAMES:
        return lowered
    return None


def _parse_token(token: str) -> List[str]:
    mods, rest = split_stroke(token)

    if len(rest) == 1:
        return [make_stroke(rest, mods)]

    bracketed = _BRACKETED.match(rest.lower())
    if bracketed:
        name = bracketed.group(1)
        return [make_stroke(_key_name(name) or name, mods)]

    name = _key_name(rest)
    if name is not None:
        return [make_stroke(name, mods)]

    if mods or rest.endswith("-") or "<" in rest:
        raise MalformedKeyError(f"Cannot parse key token {token!r}")

    return [make_stroke(char) for char in rest]


def parse_key_text(text: str) -> CanonicalKey:
    """Parse a textual mnemonic such as ``"C-x 4 ."`` or ``"<f2>"``."""
    if not isinstance(text, str):
        raise MalformedKeyError(f"Expected key text, got {type(text)}")

    strokes = []
    for token in text.split():
        strokes.extend(_parse_token(token))

    if not strokes:
        raise MalformedKeyError(f"Empty key text {text!r}")
    return tuple(strokes)


def describe_key(key: CanonicalKey) -> str:
    """Render a canonical key as text that parses back to the same key."""
    parts = []
    for code in key:
        mods, base = split_stroke(code)
        prefix = "".join(f"{m}-" for m in MODIFIER_ORDER if m in mods)
        parts.append(prefix + (f"<{base}>" if len(base) > 1 else base))
    return " ".join(parts)


def _is_key_code(obj: Any) -> bool:
    return hasattr(obj, "char") and hasattr(obj, "vk")


def _is_pynput_key(obj: Any) -> bool:
    # pynput.keyboard.Key is an Enum whose values are KeyCodes.
    if isinstance(obj, Enum):
        return _is_key_code(obj.value)
    return _is_key_code(obj)


def stroke_from_key(key: Any, modifiers=()) -> str:
    """Return the stroke code of a pynput ``Key``/``KeyCode`` with held modifiers."""
    if isinstance(key, Enum):
        return make_stroke(_key_name(key.name) or key.name, modifiers)

    char = getattr(key, "char", None)
    if char:
        return make_stroke(char, modifiers)

    vk = getattr(key, "vk", None)
    if vk is not None:
        return make_stroke(f"vk{vk}", modifiers)

    raise MalformedKeyError(f"Key {key!r} has neither a character nor a virtual key code")


def _modifier_of(element: Any):
    if isinstance(element, str):
        return MODIFIER_NAMES.get(element.lower()) if len(element) > 1 else None
    if isinstance(element, Enum) and _is_pynput_key(element):
        return MODIFIER_NAMES.get(element.name)
    return None


def _chord_stroke(chord) -> str:
    mods = set()
    keys = []
    for element in chord:
        modifier = _modifier_of(element)
        if modifier is not None:
            mods.add(modifier)
        else:
            keys.append(element)

    if len(keys) != 1:
        raise MalformedKeyError(f"A chord needs exactly one non-modifier key, got {chord!r}")

    key_mods, base = split_stroke(_element_stroke(keys[0]))
    return make_stroke(base, mods | key_mods)


def _element_stroke(element: Any) -> str:
    if isinstance(element, KeyEvent):
        return _element_stroke(element.code)

    if isinstance(element, str):
        if len(element) == 1:
            return make_stroke(element)
        strokes = parse_key_text(element)
        if len(strokes) != 1:
            raise MalformedKeyError(f"Vector element {element!r} is not a single stroke")
        return strokes[0]

    if isinstance(element, (tuple, list)):
        return _chord_stroke(element)

    if _is_pynput_key(element):
        return stroke_from_key(element)

    raise MalformedKeyError(f"Unsupported key element type {type(element)}")


def canonicalize(key: Any) -> CanonicalKey:
    """Normalize a textual mnemonic or structured event vector into a CanonicalKey."""
    if isinstance(key, str):
        return parse_key_text(key)

    if isinstance(key, (tuple, list)):
        if not key:
            raise MalformedKeyError("Empty key vector")
        return tuple(_element_stroke(element) for element in key)

    if isinstance(key, KeyEvent) or _is_pynput_key(key):
        return (_element_stroke(key),)

    raise MalformedKeyError(f"Unsupported key type {type(key)}")
