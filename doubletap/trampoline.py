"""The dispatcher bound in place of a key's single-press action."""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from doubletap.action import Action, Context, DeferredLookup, Fixed
from doubletap.errors import StaleTrampolineInvocation
from doubletap.matchers import is_repeat
from doubletap.metadata import MetadataStore, TrampolineRecord
from doubletap.util import debug, error

if TYPE_CHECKING:
    from doubletap.platforms.base import Host

__all__ = ["Outcome", "Trampoline"]


class Outcome(Enum):
    """How an invocation was resolved."""

    SINGLE_TIMEOUT = "SINGLE_TIMEOUT"
    SINGLE_OTHER_KEY = "SINGLE_OTHER_KEY"
    DOUBLE = "DOUBLE"


class Trampoline(Action):
    """
    Waits up to the record's interval for a second press of the triggering key.

    A repeat fires the double action. A timeout drops any partially typed
    input and fires the single action. Any other key is put back on the
    input queue for the host's next read and the single action fires.
    """

    def __init__(self, trampoline_id: str, host: "Host", store: MetadataStore):
        self._id = trampoline_id
        self._host = host
        self._store = store
        self._live = True

    @property
    def id(self) -> str:
        return self._id

    @property
    def store(self) -> MetadataStore:
        return self._store

    @property
    def live(self) -> bool:
        return self._live and self._id in self._store

    @property
    def record(self) -> Optional[TrampolineRecord]:
        return self._store.find(self._id)

    @property
    def properties(self) -> Optional[Dict[str, Any]]:
        record = self.record
        if record is None:
            return {"name": f"trampoline-{self._id}", "trampoline": True}
        double = record.double_action.properties or {}
        return {
            "name": f"double-tap {double.get('name', record.double_action.id)}",
            "file": double.get("file"),
            "line": double.get("line"),
            "trampoline": True,
        }

    def invalidate(self) -> None:
        self._live = False

    def __repr__(self):
        return f"Trampoline({self._id})"

    def execute(self, context: Context) -> Outcome:
        record = self._store.find(self._id)
        if record is None or not self._live:
            error(f"Stale trampoline {self._id} invoked for {context.keys}; ignoring")
            raise StaleTrampolineInvocation(self._id)

        trigger = context.keys or record.key
        event = self._host.read_event(timeout=record.interval)

        if event is None:
            debug(f"{self._id}: no second press within {record.interval}s")
            self._host.discard_pending_input()
            self.fire_single(record, trigger)
            return Outcome.SINGLE_TIMEOUT

        if event.pressed and is_repeat(trigger, (event.code,)):
            debug(f"{self._id}: {event.code} repeats {trigger}, firing double action")
            self._host.invoke(record.double_action, Context(self._host, trigger))
            return Outcome.DOUBLE

        debug(f"{self._id}: {event.code} does not repeat {trigger}, requeueing")
        self._host.unread_event(event)
        self.fire_single(record, trigger)
        return Outcome.SINGLE_OTHER_KEY

    def fire_single(self, record: TrampolineRecord, trigger):
        single = record.single_action
        if isinstance(single, Fixed):
            action = single.action
        elif isinstance(single, DeferredLookup):
            action = self._host.lookup_ambient(single.key, exclude=single.table)
        else:
            action = None

        if action is None:
            debug(f"{self._id}: no single action for {trigger}")
            return None
        return self._host.invoke(action, Context(self._host, trigger))
