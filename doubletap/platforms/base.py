"""Host services consumed by the dispatcher."""

# pylint: disable=missing-function-docstring

import abc
from typing import Iterable, List, Optional, Union

from doubletap.action import Action, Context
from doubletap.data_structures import EventQueue
from doubletap.events import KeyEvent
from doubletap.key_utils import CanonicalKey, describe_key, make_stroke, parse_key_text
from doubletap.keymap import Binding, Keymap


class Host(abc.ABC):
    """
    Binding tables, action invocation and raw input for one input thread.

    ``keymaps`` are the active tables, highest priority first; the ambient
    binding context is searched in that order.
    """

    def __init__(self, keymaps: Optional[Iterable[Keymap]] = None):
        self.keymaps: List[Keymap] = list(keymaps or [])

    # Binding tables -----------------------------------------------------------
    def lookup(self, table: Keymap, key: CanonicalKey) -> Binding:
        return table.lookup(key)

    def bind(self, table: Keymap, key: CanonicalKey, binding: Binding) -> None:
        table.bind(key, binding)

    def lookup_ambient(self, key: CanonicalKey, exclude: Optional[Keymap] = None) -> Optional[Action]:
        """Return the first command bound to ``key`` in the active keymaps."""
        for table in self.keymaps:
            if table is exclude:
                continue
            binding = table.lookup(key)
            if isinstance(binding, Action):
                return binding
        return None

    def invoke(self, action: Action, context: Context):
        if not isinstance(action, Action):
            raise TypeError(f"{action!r} is not a dispatchable action")
        return action.execute(context)

    # Input --------------------------------------------------------------------
    @property
    def supports_timeout(self) -> bool:
        return True

    @abc.abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def read_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Block until an event arrives or ``timeout`` elapses (then return None)."""
        raise NotImplementedError

    @abc.abstractmethod
    def unread_event(self, event: KeyEvent) -> None:
        """Make ``event`` the next one returned by ``read_event``."""
        raise NotImplementedError

    @abc.abstractmethod
    def discard_pending_input(self) -> None:
        raise NotImplementedError

    # Key text -----------------------------------------------------------------
    def parse_key_text(self, text: str) -> CanonicalKey:
        return parse_key_text(text)

    def describe_key(self, key: CanonicalKey) -> str:
        return describe_key(key)


class QueueHost(Host):
    """Host whose input is an in-process event queue."""

    def __init__(self, keymaps: Optional[Iterable[Keymap]] = None, max_buffer_len: int = 100):
        super().__init__(keymaps)
        self._queue = EventQueue[KeyEvent](max_len=max_buffer_len)

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def push(self, *events: Union[KeyEvent, str]) -> None:
        """Feed events (or stroke codes) to the input queue."""
        for event in events:
            if isinstance(event, str):
                event = KeyEvent(make_stroke(event) if len(event) == 1 else event)
            self._queue.append(event)

    def pending(self) -> List[KeyEvent]:
        return self._queue.snapshot()

    def read_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        return self._queue.get(timeout=timeout)

    def unread_event(self, event: KeyEvent) -> None:
        self._queue.push_front(event)

    def discard_pending_input(self) -> None:
        self._queue.clear()
