"""Factory for platform-specific hosts."""

import sys
from typing import Iterable, Optional

from doubletap.platforms.base import Host, QueueHost


def create_host(keymaps: Optional[Iterable] = None, max_buffer_len: int = 100) -> Host:
    """Return a pynput-backed host suitable for the current platform."""
    # pylint: disable=import-outside-toplevel
    # pynput needs a display backend at import time; keep it out of the core imports.
    if sys.platform == "darwin":
        from doubletap.platforms.darwin import MacPynputHost
        return MacPynputHost(keymaps, max_buffer_len)

    from doubletap.platforms.common import PynputHost
    return PynputHost(keymaps, max_buffer_len)


__all__ = ["Host", "QueueHost", "create_host"]
