"""Process liveness checks used to reject stale endpoint descriptors."""

from __future__ import annotations

import psutil


def pid_exists(pid: int) -> bool:
    """Return whether *pid* appears to refer to a live process."""
    if pid <= 0:
        return False
    return psutil.pid_exists(pid)
