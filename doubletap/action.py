"""Actions, single-press fallbacks and execution context."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import abc
import time
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple, Union

from doubletap.util import get_function_details

if TYPE_CHECKING:
    from doubletap.keymap import Keymap
    from doubletap.platforms.base import Host

__all__ = ["Action", "Command", "Context", "Fixed", "DeferredLookup", "SingleAction", "as_action"]


class Action(abc.ABC):
    @abc.abstractmethod
    def execute(self, context: "Context"):
        pass

    @property
    @abc.abstractmethod
    def id(self) -> str:
        pass

    def __eq__(self, other: "Action"):
        if not isinstance(other, Action):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __str__(self) -> str:
        return self.id

    @property
    @abc.abstractmethod
    def properties(self) -> Optional[Dict[str, Any]]:
        pass

    @property
    def name(self) -> str:
        return (self.properties or {}).get("name", self.id)


class Command(Action):
    """A named, directly dispatchable action wrapping a callable."""

    def __init__(self, func: Callable[..., Any], name: Optional[str] = None):
        self._id = str(uuid.uuid4())
        try:
            desc = get_function_details(func)
            self._props = {"file": desc.file, "name": name or desc.name, "line": desc.line}
        except (ValueError, TypeError, OSError):
            self._props = {"file": None, "name": name or repr(func), "line": None}
        self._func = func

    def execute(self, context: "Context"):
        return self._func(context)

    @property
    def id(self) -> str:
        return self._id

    @property
    def properties(self) -> Optional[Dict[str, Any]]:
        return self._props

    def __str__(self) -> str:
        name, file, line = self._props["name"], self._props["file"], self._props["line"]
        return f"Command(func={name}, defined_at={file}:{line})"


def as_action(value: Union[Action, Callable[..., Any], None]) -> Optional[Action]:
    """Wrap plain callables in a Command; actions and None pass through."""
    if value is None or isinstance(value, Action):
        return value
    if callable(value):
        return Command(value)
    raise ValueError(f"Expected an Action or a callable, got {type(value)}")


class Context:
    def __init__(self, host: "Host", keys: Tuple[str, ...]):
        self.__host = host
        self.__keys = tuple(keys)
        self.__started_at = time.time()
        self.__payload = {}

    @property
    def host(self) -> "Host":
        return self.__host

    @property
    def keys(self) -> Tuple[str, ...]:
        """The canonical key that activated this invocation."""
        return self.__keys

    @property
    def started_at(self):
        return self.__started_at

    @property
    def payload(self) -> Dict[str, Any]:
        return self.__payload


@dataclass(frozen=True)
class Fixed:
    """Single-press action captured when the trampoline was installed."""
    action: Action


@dataclass(frozen=True)
class DeferredLookup:
    """Single-press action resolved in the ambient bindings when it fires."""
    table: "Keymap"
    key: Tuple[str, ...]


SingleAction = Union[Fixed, DeferredLookup, None]
