"""Keyboard event structures."""

# pylint: disable=missing-function-docstring

import time
import uuid
from enum import Enum


class KeyEventKind(Enum):
    """Kinds of key events we track."""

    PRESSED = "PRESSED"
    RELEASED = "RELEASED"


class KeyEvent:
    """A canonical stroke with its arrival time and a unique identifier."""

    def __init__(self, code: str, kind: KeyEventKind = KeyEventKind.PRESSED):
        self.id = uuid.uuid4()
        self.code = code
        self.pressed_at = time.time()
        self.kind = kind

    def __eq__(self, other: "KeyEvent"):
        if not isinstance(other, KeyEvent):
            return False

        return (
            self.code == other.code
            and self.kind == other.kind
        )

    @property
    def pressed(self) -> bool:
        return self.kind == KeyEventKind.PRESSED

    def __repr__(self):
        return f"KeyEvent({self.code} - {self.kind} - {self.pressed_at})"

    def __hash__(self):
        return hash((self.code, self.kind))

    def __str__(self):
        return self.code
