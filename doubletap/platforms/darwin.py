"""macOS host: detects a listener that macOS will not feed any input."""

import os
import subprocess
import sys
from contextlib import suppress
from typing import Optional

from doubletap.platforms.common import PynputHost
from doubletap.util import debug, error

_SETTINGS_URL = "x-apple.systempreferences:com.apple.preference.security?Privacy_Keyboard"


def _running_interactively() -> bool:
    """Return True if stdout/stderr are attached to a TTY."""
    return sys.stdout.isatty() or sys.stderr.isatty()


class MacPynputHost(PynputHost):
    """
    macOS host that reports missing Input Monitoring permission.

    Without the permission the listener starts but never sees a key, so every
    double-tap would silently time out into its single action. The listener's
    trust flag is checked once it is running, and a failure to start at all is
    reported the same way.
    """

    _prompted = False

    def start(self):
        try:
            super().start()
        except Exception as exc:
            self._prompt_permissions(f"the keyboard listener failed to start ({exc})")
            raise
        if not self._listener_trusted():
            self._prompt_permissions("the keyboard listener is not trusted for input")

    def _listener_trusted(self) -> bool:
        listener = self._listener
        if listener is None:
            return False
        listener.wait()
        trusted = getattr(listener, "IS_TRUSTED", True)
        debug(f"Keyboard listener trusted: {trusted}")
        return bool(trusted)

    def _prompt_permissions(self, reason: Optional[str] = None):
        if MacPynputHost._prompted:
            return
        if os.environ.get("DOUBLETAP_SKIP_MAC_PROMPT"):
            return

        MacPynputHost._prompted = True
        message = (
            f"doubletap cannot see key presses: {reason or 'permission missing'}. "
            "Double-tap bindings will only ever fire their single action until this "
            "executable is granted access in System Settings > Privacy & Security > "
            "Input Monitoring."
        )
        if not _running_interactively():
            error(message)
            return

        error(f"{message} Opening Input Monitoring settings...")
        with suppress(OSError):
            subprocess.Popen(  # pylint: disable=consider-using-with
                ["open", _SETTINGS_URL],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
