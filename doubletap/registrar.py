"""Install and remove double-tap trampolines in binding tables."""

# pylint: disable=too-many-arguments

import threading
import uuid
from typing import Any, Callable, Dict, List, Optional, Union

from doubletap.action import Action, DeferredLookup, Fixed, SingleAction, as_action
from doubletap.errors import TimeoutUnavailableError
from doubletap.key_utils import CanonicalKey, canonicalize, describe_key
from doubletap.keymap import Binding, Keymap
from doubletap.metadata import METADATA, MetadataStore, TrampolineRecord
from doubletap.time import Wait, get_default_interval, to_seconds
from doubletap.trampoline import Trampoline
from doubletap.util import debug

__all__ = ["Registrar"]

_Interval = Union[float, int, Wait, None]
_ActionLike = Union[Action, Callable[..., Any], None]


def _single_binding(value: Union[_ActionLike, Keymap]) -> Binding:
    if isinstance(value, Keymap):
        return value
    return as_action(value)


class Registrar:
    """
    The only entry point that creates or destroys trampolines.

    Every (table, key) pair holds at most one trampoline. Keys, intervals and
    the binding path are validated before anything is touched, so a rejected
    call leaves the table and the metadata store as they were.
    """

    def __init__(self, host, store: Optional[MetadataStore] = None, default_interval: _Interval = None):
        self._host = host
        self._store = store if store is not None else METADATA
        self._default_interval = None if default_interval is None else to_seconds(default_interval)
        self._lock = threading.RLock()

    @property
    def host(self):
        return self._host

    @property
    def store(self) -> MetadataStore:
        return self._store

    @property
    def default_interval(self) -> float:
        if self._default_interval is not None:
            return self._default_interval
        return get_default_interval()

    def _resolve_interval(self, interval: _Interval) -> float:
        if interval is None:
            return self.default_interval
        return to_seconds(interval)

    def trampoline_at(self, table: Keymap, key: CanonicalKey) -> Optional[Trampoline]:
        """Return the live trampoline this registrar installed at (table, key)."""
        binding = self._host.lookup(table, key)
        if isinstance(binding, Trampoline) and binding.store is self._store:
            return binding
        return None

    def install(
            self,
            table: Keymap,
            raw_key,
            double_action: _ActionLike,
            trampoline_id: Optional[str] = None,
            interval: _Interval = None,
            doc: Optional[str] = None,
            single_action: _ActionLike = None,
    ) -> Optional[str]:
        key = canonicalize(raw_key)
        if double_action is None:
            self.uninstall(table, key)
            return None

        double = as_action(double_action)
        seconds = self._resolve_interval(interval)
        explicit = as_action(single_action)
        if not self._host.supports_timeout:
            raise TimeoutUnavailableError(
                f"{type(self._host).__name__} cannot time out a read; double-tap needs one"
            )

        with self._lock:
            self._check_target(table, key)
            self._uninstall(table, key)
            if explicit is not None:
                single = Fixed(explicit)
            else:
                single = self._capture_single(table, key)
            return self._install(table, key, double, trampoline_id, seconds, doc, single)

    def _check_target(self, table: Keymap, key: CanonicalKey) -> None:
        table.check_bindable(key)
        if isinstance(self._host.lookup(table, key), Keymap):
            raise ValueError(f"{describe_key(key)} is a prefix key in {table} and cannot hold a double-tap")

    def _capture_single(self, table: Keymap, key: CanonicalKey) -> SingleAction:
        current = self._host.lookup(table, key)
        if current is not None:
            return Fixed(current)
        if not table.is_global:
            return DeferredLookup(table, key)
        return None

    def _install(self, table, key, double, trampoline_id, interval, doc, single) -> str:
        trampoline_id = trampoline_id or str(uuid.uuid4())

        # One record per identity: reusing an id moves the trampoline.
        previous = self._store.find(trampoline_id)
        if previous is not None and previous.table is not None:
            self._uninstall(previous.table, previous.key)

        record = TrampolineRecord(
            id=trampoline_id,
            single_action=single,
            double_action=double,
            interval=interval,
            doc=doc,
            table=table,
            key=key,
        )
        self._host.bind(table, key, Trampoline(trampoline_id, self._host, self._store))
        self._store.register(record)
        debug(f"Installed {trampoline_id} at {describe_key(key)} in {table} ({double})")
        return trampoline_id

    def uninstall(self, table: Keymap, raw_key) -> Optional[TrampolineRecord]:
        key = canonicalize(raw_key)
        with self._lock:
            return self._uninstall(table, key)

    def _uninstall(self, table: Keymap, key: CanonicalKey) -> Optional[TrampolineRecord]:
        trampoline = self.trampoline_at(table, key)
        if trampoline is None:
            return None

        record = self._store.remove(trampoline.id)
        trampoline.invalidate()

        restore = None
        if record is not None and isinstance(record.single_action, Fixed):
            restore = record.single_action.action
        self._host.bind(table, key, restore)
        debug(f"Uninstalled {trampoline.id} at {describe_key(key)} in {table}")
        return record

    def update_single_action(self, table: Keymap, raw_key, new_single_action) -> None:
        key = canonicalize(raw_key)
        new_single = _single_binding(new_single_action)

        with self._lock:
            trampoline = self.trampoline_at(table, key)
            record = trampoline.record if trampoline is not None else None
            if record is None:
                self._host.bind(table, key, new_single)
                return
            if isinstance(new_single, Keymap):
                raise ValueError(f"{describe_key(key)} holds a double-tap and cannot become a prefix key")

            self._uninstall(table, key)
            if new_single is not None:
                single = Fixed(new_single)
            elif not table.is_global:
                single = DeferredLookup(table, key)
            else:
                single = None
            self._install(table, key, record.double_action, record.id, record.interval, record.doc, single)

    def uninstall_all(self, prop: str, value: Any) -> List[TrampolineRecord]:
        """Uninstall every trampoline whose double action has ``properties[prop] == value``."""
        removed = []
        with self._lock:
            for record in self._store.find_by_prop(prop, value):
                if record.table is None:
                    continue
                if self._uninstall(record.table, record.key) is not None:
                    removed.append(record)
        return removed

    def on(self, table: Keymap, key, interval: _Interval = None, doc: Optional[str] = None) -> Callable:
        """Decorator installing the decorated function as the double action of ``key``."""

        def _decorator(func: Callable) -> Trampoline:
            if not callable(func):
                raise ValueError("on decorator must be used with a callable")
            canonical = canonicalize(key)
            self.install(table, canonical, func, interval=interval, doc=doc or func.__doc__)
            return self.trampoline_at(table, canonical)

        return _decorator

    def describe(self, trampoline_id: str) -> Dict[str, Any]:
        """Structured description of a trampoline for help and introspection."""
        record = self._store.get(trampoline_id)
        single = record.single_action
        single_name = None
        if isinstance(single, Fixed):
            single_name = getattr(single.action, "name", repr(single.action))
        return {
            "id": record.id,
            "key": describe_key(record.key) if record.key else None,
            "single": single_name,
            "single_deferred": isinstance(single, DeferredLookup),
            "double": record.double_action.name,
            "interval": record.interval,
            "doc": record.doc,
        }
