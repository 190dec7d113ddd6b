"""Registry of installed trampolines and what they dispatch to."""

# pylint: disable=missing-function-docstring

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from doubletap.action import Action, SingleAction

if TYPE_CHECKING:
    from doubletap.keymap import Keymap

__all__ = ["TrampolineRecord", "MetadataStore", "METADATA", "get_metadata"]


@dataclass(frozen=True)
class TrampolineRecord:
    id: str
    single_action: SingleAction
    double_action: Action
    interval: float
    doc: Optional[str] = None
    table: Optional["Keymap"] = None
    key: Tuple[str, ...] = ()


class MetadataStore:
    """Thread-safe mapping from trampoline identity to its record."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[str, TrampolineRecord] = {}

    def register(self, record: TrampolineRecord) -> None:
        if record.double_action is None:
            raise ValueError("A trampoline record needs a double action")
        with self._lock:
            self._records[record.id] = record

    def get(self, trampoline_id: str) -> TrampolineRecord:
        with self._lock:
            return self._records[trampoline_id]

    def find(self, trampoline_id: str) -> Optional[TrampolineRecord]:
        with self._lock:
            return self._records.get(trampoline_id)

    def remove(self, trampoline_id: str) -> Optional[TrampolineRecord]:
        with self._lock:
            return self._records.pop(trampoline_id, None)

    def find_by_prop(self, prop: str, value: Any) -> List[TrampolineRecord]:
        """Return records whose double action has ``properties[prop] == value``."""
        with self._lock:
            records = list(self._records.values())
        return [
            record for record in records
            if (record.double_action.properties or {}).get(prop) == value
        ]

    def records(self) -> List[TrampolineRecord]:
        with self._lock:
            return list(self._records.values())

    def __contains__(self, trampoline_id: str) -> bool:
        with self._lock:
            return trampoline_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


METADATA = MetadataStore()


def get_metadata(trampoline_id: str) -> TrampolineRecord:
    """Look up the record of an installed trampoline in the process-wide store."""
    return METADATA.get(trampoline_id)
