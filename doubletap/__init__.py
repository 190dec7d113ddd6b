"""Give a key a second action, fired when it is pressed twice in quick succession."""

from doubletap.action import Action, Command, Context, DeferredLookup, Fixed
from doubletap.errors import (
    DoubleTapError,
    InvalidIntervalError,
    MalformedKeyError,
    StaleTrampolineInvocation,
    TimeoutUnavailableError,
)
from doubletap.events import KeyEvent, KeyEventKind
from doubletap.key_utils import CanonicalKey, canonicalize, describe_key, parse_key_text
from doubletap.keymap import Keymap
from doubletap.matchers import is_repeat
from doubletap.metadata import METADATA, MetadataStore, TrampolineRecord, get_metadata
from doubletap.registrar import Registrar
from doubletap.time import Wait, get_default_interval, set_default_interval
from doubletap.trampoline import Outcome, Trampoline

__version__ = "0.1.0"

__all__ = [
    "Action",
    "CanonicalKey",
    "Command",
    "Context",
    "DeferredLookup",
    "DoubleTapError",
    "Fixed",
    "InvalidIntervalError",
    "KeyEvent",
    "KeyEventKind",
    "Keymap",
    "METADATA",
    "MalformedKeyError",
    "MetadataStore",
    "Outcome",
    "Registrar",
    "StaleTrampolineInvocation",
    "TimeoutUnavailableError",
    "Trampoline",
    "TrampolineRecord",
    "Wait",
    "canonicalize",
    "describe_key",
    "get_default_interval",
    "get_metadata",
    "is_repeat",
    "parse_key_text",
    "set_default_interval",
]
