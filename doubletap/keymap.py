"""Nestable binding tables."""

# pylint: disable=missing-function-docstring

import threading
from typing import Dict, Iterator, Optional, Tuple, Union

from doubletap.action import Action

__all__ = ["Keymap", "Binding"]

Binding = Union[Action, "Keymap", None]


class Keymap:
    """
    Association from single strokes to actions or nested prefix keymaps.

    Multi-stroke keys are stored by walking (and creating) prefix keymaps,
    so ``bind(("C-x", "4", "."), cmd)`` leaves ``cmd`` under the ``"."``
    entry of the keymap bound at ``C-x 4``.
    """

    def __init__(self, name: str = "keymap", is_global: bool = False):
        self.name = name
        self.is_global = is_global
        self._entries: Dict[str, Binding] = {}
        self._lock = threading.RLock()

    def __repr__(self):
        return f"Keymap({self.name})"

    def lookup(self, key: Tuple[str, ...]) -> Binding:
        """Return the binding at ``key``, a prefix keymap, or None."""
        with self._lock:
            table = self
            for n, stroke in enumerate(key):
                binding = table._entries.get(stroke)  # pylint: disable=protected-access
                if n == len(key) - 1:
                    return binding
                if not isinstance(binding, Keymap):
                    return None
                table = binding
            return None

    def bind(self, key: Tuple[str, ...], binding: Binding) -> None:
        """Bind ``key``; a None binding removes the entry."""
        if not key:
            raise ValueError("Cannot bind an empty key")
        with self._lock:
            table = self._prefix_table(key[:-1], create=binding is not None)
            if table is None:
                return
            if binding is None:
                table._entries.pop(key[-1], None)  # pylint: disable=protected-access
            else:
                table._entries[key[-1]] = binding  # pylint: disable=protected-access

    def check_bindable(self, key: Tuple[str, ...]) -> None:
        """Raise ValueError if ``bind(key, ...)`` would have to turn a command into a prefix."""
        if not key:
            raise ValueError("Cannot bind an empty key")
        with self._lock:
            table = self
            for stroke in key[:-1]:
                binding = table._entries.get(stroke)  # pylint: disable=protected-access
                if binding is None:
                    return
                if not isinstance(binding, Keymap):
                    raise ValueError(f"{stroke} is bound to {binding} and cannot become a prefix")
                table = binding

    def _prefix_table(self, prefix: Tuple[str, ...], create: bool) -> Optional["Keymap"]:
        table = self
        for stroke in prefix:
            binding = table._entries.get(stroke)  # pylint: disable=protected-access
            if not isinstance(binding, Keymap):
                if not create:
                    return None
                if binding is not None:
                    raise ValueError(f"{stroke} is bound to {binding} and cannot become a prefix")
                binding = Keymap(name=f"{table.name} {stroke}")
                table._entries[stroke] = binding  # pylint: disable=protected-access
            table = binding
        return table

    def __contains__(self, stroke: str) -> bool:
        with self._lock:
            return stroke in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def items(self) -> Iterator[Tuple[Tuple[str, ...], Binding]]:
        """Yield every non-prefix binding with its full key."""
        with self._lock:
            entries = list(self._entries.items())
        for stroke, binding in entries:
            if isinstance(binding, Keymap):
                for key, nested in binding.items():
                    yield (stroke,) + key, nested
            else:
                yield (stroke,), binding
