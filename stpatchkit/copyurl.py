"""Find, highlight and select the previous URL shown on a screen."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Optional, Sequence

from stpatchkit.screen import Screen, Selection

URLCHARS = frozenset(string.ascii_letters + string.digits + "-._~:/?#@!$&'*+,;=%")
URLSTRINGS = ("http://", "https://")


@dataclass(frozen=True)
class UrlMatch:
    """A URL found at ``row`` starting in column ``start``."""

    row: int
    start: int
    text: str

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def find_last_any(text: str, needles: Sequence[str]) -> Optional[int]:
    """Index of the last position where any needle starts, or None."""
    for pos in range(len(text) - 1, -1, -1):
        if any(text.startswith(needle, pos) for needle in needles):
            return pos
    return None


def trim_url(text: str) -> str:
    """Cut ``text`` at the first character that cannot belong to a URL."""
    for i, ch in enumerate(text):
        if ch not in URLCHARS:
            return text[:i]
    return text


def set_color(screen: Screen, row: int, start: int, end: int, fg: int, bg: int) -> None:
    """Set the colours of cells [start, end) in ``row``."""
    for glyph in screen.lines[row][start:end]:
        glyph.fg, glyph.bg = fg, bg
    screen.dirty[row] = True


def find_previous_url(screen: Screen, previous: Optional[UrlMatch] = None) -> Optional[UrlMatch]:
    """Find the URL before ``previous`` (or the last one), highlight and select it."""
    if previous is not None:
        set_color(screen, previous.row, previous.start, previous.end,
                  screen.defaultfg, screen.defaultbg)

    resume = previous is not None and previous.row > 0
    row = previous.row if resume else screen.bot
    row = max(screen.top, min(row, screen.bot))
    colend = previous.start if resume else screen.col
    colend = max(0, min(colend, screen.col))

    found = None
    for _ in range(screen.bot + 2):
        text = "".join(g.u for g in screen.lines[row][:colend])
        pos = find_last_any(text, URLSTRINGS)
        if pos is not None:
            found = UrlMatch(row, pos, trim_url(text[pos:]))
            break
        row -= 1
        if row < screen.top:
            row = screen.bot
        colend = screen.col

    if found is None:
        return None
    set_color(screen, found.row, found.start, found.end, screen.defaultbg, screen.defaultfg)
    sel = screen.sel
    sel.remove()
    sel.mode = Selection.Mode.READY
    sel.type = Selection.Type.REGULAR
    sel.alt = screen.altscreen
    sel.ob.x, sel.ob.y = found.start, found.row
    sel.oe.x, sel.oe.y = found.end - 1, found.row
    sel.normalize()
    return found