"""Starting a new terminal in the working directory of another process."""

from __future__ import annotations

import os
import subprocess
from typing import Optional


def cwd_of_pid(pid: int) -> Optional[str]:
    """Resolved working directory of process ``pid``, or None if unknown."""
    try:
        return os.path.realpath(f"/proc/{pid}/cwd", strict=True)
    except OSError:
        return None


def new_terminal(pid: int, program: str = "st") -> subprocess.Popen:
    """Start ``program`` detached, in the working directory of ``pid`` when known."""
    return subprocess.Popen(
        [program],
        cwd=cwd_of_pid(pid),
        start_new_session=True,
    )