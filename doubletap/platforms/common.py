"""Shared pynput-backed host implementation."""

# pylint: disable=missing-function-docstring,import-error

import threading
from typing import Iterable, Optional, Set, Union

import pynput
import pynput.keyboard

from doubletap.events import KeyEvent, KeyEventKind
from doubletap.key_utils import stroke_from_key
from doubletap.keymap import Keymap
from doubletap.keys import MODIFIER_NAMES
from doubletap.platforms.base import QueueHost
from doubletap.util import debug

_PynputKey = Union[pynput.keyboard.Key, pynput.keyboard.KeyCode]


def _modifier(key: _PynputKey) -> Optional[str]:
    if isinstance(key, pynput.keyboard.Key):
        return MODIFIER_NAMES.get(key.name)
    return None


class PynputHost(QueueHost):
    """Host fed by a pynput keyboard listener; modifiers fold into strokes."""

    def __init__(self, keymaps: Optional[Iterable[Keymap]] = None, max_buffer_len: int = 100):
        super().__init__(keymaps, max_buffer_len)
        self._running = threading.Event()
        self._lock = threading.Lock()
        self._listener = None
        self._held: Set[str] = set()

    def start(self):
        self._running.set()
        self._listener = pynput.keyboard.Listener(
            on_press=self._on_press,
            on_release=self._on_release
        )
        self._listener.start()

    def stop(self):
        self._running.clear()
        if self._listener:
            self._listener.stop()

    def _on_press(self, key: _PynputKey):
        modifier = _modifier(key)
        with self._lock:
            if modifier is not None:
                self._held.add(modifier)
                return
            held = set(self._held)
        event = KeyEvent(stroke_from_key(key, held), kind=KeyEventKind.PRESSED)
        debug(f"Input: {event}")
        self.push(event)

    def _on_release(self, key: _PynputKey):
        modifier = _modifier(key)
        if modifier is None:
            return
        with self._lock:
            self._held.discard(modifier)
