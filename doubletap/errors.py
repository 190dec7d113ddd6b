"""Exceptions raised by doubletap."""

__all__ = [
    "DoubleTapError",
    "MalformedKeyError",
    "InvalidIntervalError",
    "StaleTrampolineInvocation",
    "TimeoutUnavailableError",
]


class DoubleTapError(Exception):
    """Base class for every doubletap error."""


class MalformedKeyError(DoubleTapError, ValueError):
    """The key is neither a textual mnemonic nor a structured event vector."""


class InvalidIntervalError(DoubleTapError, ValueError):
    """The double-press interval is not a positive duration."""


class StaleTrampolineInvocation(DoubleTapError, RuntimeError):
    """A trampoline fired after it was uninstalled."""

    def __init__(self, trampoline_id: str):
        super().__init__(f"Trampoline {trampoline_id} was invoked after being uninstalled")
        self.trampoline_id = trampoline_id


class TimeoutUnavailableError(DoubleTapError, RuntimeError):
    """The host cannot race input against a timeout."""
