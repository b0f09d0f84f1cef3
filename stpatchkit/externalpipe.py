"""Send the screen's text to an external command's standard input."""

from __future__ import annotations

import subprocess
from typing import Sequence

from stpatchkit.screen import Attr, Screen


def screen_text(screen: Screen) -> str:
    """Text of the visible lines, joining wrapped lines without a newline."""
    parts = []
    newline = False
    for line in screen.lines:
        lastpos = min(screen.line_len(line) + 1, screen.col) - 1
        if lastpos < 0:
            break
        parts.append("".join(g.u for g in line[:lastpos + 1]))
        newline = Attr.WRAP in line[lastpos].mode
        if newline:
            continue
        parts.append("\n")
    if newline:
        parts.append("\n")
    return "".join(parts)


def external_pipe(screen: Screen, argv: Sequence[str], stdout=None) -> subprocess.Popen:
    """Start ``argv`` and feed it the screen text; returns the running process."""
    proc = subprocess.Popen(list(argv), stdin=subprocess.PIPE, stdout=stdout)
    try:
        proc.stdin.write(screen_text(screen).encode("utf-8"))
    except BrokenPipeError:
        pass
    finally:
        try:
            proc.stdin.close()
        except BrokenPipeError:
            pass
    return proc