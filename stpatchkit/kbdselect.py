"""Keyboard-driven cursor movement, selection and search over a screen."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from stpatchkit.screen import Attr, Screen, Selection

NOTIFY_SAVE = -1
NOTIFY_RESTORE = -2

_SELECT = 1
_SEARCH = 2
_LABELS = (" MOVE ", " SEL  ")

_ALIASES = {
    "Page_Up": "Prior",
    "Page_Down": "Next",
    "KP_Divide": "slash",
    "KP_Multiply": "asterisk",
}

# 0 = left, 1 = up, 2 = right, 3 = down
_DIRECTIONS = {
    "h": 0, "Left": 0,
    "k": 1, "Up": 1,
    "l": 2, "Right": 2,
    "j": 3, "Down": 3,
}


def _digit(key: str) -> Optional[int]:
    if key.startswith("KP_"):
        key = key[3:]
    if len(key) == 1 and key.isdigit():
        return int(key)
    return None


def search(screen: Screen, target: Sequence[str], start: int, bound: int,
           step: int) -> Optional[int]:
    """Find ``target`` at linear cell positions start, start+step, ... before ``bound``.

    Positions count cells row by row.  Returns the first matching position or None.
    """
    col = screen.col
    total = col * screen.row
    chars = list(target)
    if step == 0:
        raise ValueError("step must not be zero")
    for pos in range(start, bound, step):
        if all(0 <= pos + k < total
               and screen.lines[(pos + k) // col][(pos + k) % col].u == ch
               for k, ch in enumerate(chars)):
            return pos
    return None


class KeyboardSelect:
    """State of the keyboard selection mode for one screen."""

    def __init__(self, screen: Screen):
        self.screen = screen
        self.active = False
        self.mode = 0
        self.type = Selection.Type.REGULAR
        self.target: list[str] = []
        self.direction = -1
        self.quant = 0
        self._saved_cursor = (screen.cursor.x, screen.cursor.y)
        self._saved_line: Optional[list] = None
        self._bot = screen.bot
        self._col = screen.col

    # selection helpers

    def _sel_start(self, x: int, y: int) -> None:
        sel = self.screen.sel
        sel.remove()
        sel.mode = Selection.Mode.EMPTY
        sel.type = Selection.Type.REGULAR
        sel.alt = self.screen.altscreen
        sel.ob.x, sel.ob.y = x, y
        sel.oe.x, sel.oe.y = x, y
        sel.normalize()

    def _sel_extend(self, x: int, y: int) -> None:
        sel = self.screen.sel
        if sel.mode == Selection.Mode.IDLE:
            return
        sel.oe.x, sel.oe.y = x, y
        sel.type = self.type
        sel.normalize()
        sel.mode = Selection.Mode.READY

    def _select_or_draw(self) -> None:
        c = self.screen.cursor
        if self.mode & _SELECT:
            self._sel_extend(c.x, c.y)
        self.screen.dirty[c.y] = True

    # notification line

    def set_notification(self, kind: int, key=None) -> None:
        """Show the mode label (kind 0/1), restore the bottom line (2..4) or a prompt (5+)."""
        s = self.screen
        if key == NOTIFY_SAVE:
            self._col, self._bot = s.col, s.bot
            self._saved_line = [replace(g) for g in s.lines[self._bot][:self._col]]
        elif key == NOTIFY_RESTORE:
            self._restore_line()
        line = s.lines[self._bot]
        col = self._col
        if kind < 2:
            for glyph, ch in zip(line[max(0, col - 6):col], _LABELS[kind]):
                self._mark(glyph, ch)
        elif kind < 5:
            self._restore_line()
        else:
            for glyph in line[:col]:
                self._mark(glyph, " ")
            line[0].u = str(key)
        s.dirty[self._bot] = True

    def _mark(self, glyph, ch: str) -> None:
        glyph.mode = Attr.REVERSE
        glyph.u = ch
        glyph.fg, glyph.bg = self.screen.defaultfg, self.screen.defaultbg

    def _restore_line(self) -> None:
        if self._saved_line is not None:
            self.screen.lines[self._bot][:self._col] = [replace(g) for g in self._saved_line]

    # key handling

    def start(self) -> bool:
        """Enter keyboard selection mode at the current cursor."""
        c = self.screen.cursor
        self.active = True
        self._saved_cursor = (c.x, c.y)
        self.set_notification(0, NOTIFY_SAVE)
        return True

    def _find(self, step: int) -> None:
        s = self.screen
        c = s.cursor
        sx, sy = self._saved_cursor
        here = s.col * c.y + c.x
        bound = (s.col * sy + sx) * (step > 0) + step
        pos = search(s, self.target, here + step, bound, step)
        if pos is not None:
            c.y, c.x = divmod(pos, s.col)
            self._select_or_draw()

    def _search_key(self, key: str, text: str) -> bool:
        s = self.screen
        if key == "Return":
            self.mode ^= _SEARCH
            self.set_notification(self.mode, NOTIFY_RESTORE)
            return False
        line = s.lines[s.bot]
        if key == "BackSpace":
            if not self.target:
                return False
            line[len(self.target)].u = " "
            self.target.pop()
        elif not text:
            return False
        elif len(self.target) >= s.col - 1 or key == "Escape":
            return False
        else:
            self.target.append(text[0])
            line[len(self.target)].u = text[0]
            self._find(self.direction)
        s.dirty[s.bot] = True
        return False

    def handle_key(self, key: str, text: str = "") -> bool:
        """Handle one key press; returns True when it ends keyboard selection mode."""
        key = _ALIASES.get(key, key)
        if self.mode & _SEARCH:
            return self._search_key(key, text)

        s = self.screen
        c = s.cursor
        if key == "s":
            if self.mode & _SELECT:
                s.sel.remove()
            else:
                self._sel_start(c.x, c.y)
            self.mode ^= _SELECT
            self.set_notification(self.mode, key)
        elif key == "t":
            self.type = Selection.Type(self.type ^ 3)
            self._sel_extend(c.x, c.y)
            self._sel_extend(c.x, c.y)
        elif key in ("slash", "question"):
            self.direction = -1 if key == "slash" else 1
            self.target = []
            self.set_notification(15, "/" if key == "slash" else "?")
            self.mode ^= _SEARCH
        elif key in ("Escape", "Return"):
            if key == "Escape":
                if not self.active:
                    self.quant = 0
                    return False
                s.sel.remove()
            self.set_notification(4, key)
            c.x, c.y = self._saved_cursor
            self.mode = 0
            self._select_or_draw()
            self.active = False
            self.quant = 0
            return True
        elif key in ("n", "N"):
            if self.target:
                self._find(-1 if key == "n" else 1)
        elif key == "BackSpace":
            c.x = 0
            self._select_or_draw()
        elif key == "dollar":
            c.x = s.col - 1
            self._select_or_draw()
        elif key == "Home":
            c.x, c.y = 0, 0
            self._select_or_draw()
        elif key == "End":
            c.x, c.y = self._saved_cursor
            self._select_or_draw()
        elif key in ("Prior", "Next"):
            c.y = 0 if key == "Prior" else self._saved_cursor[1]
            self._select_or_draw()
        elif key == "exclam":
            c.x = s.col >> 1
            self._select_or_draw()
        elif key in ("asterisk", "underscore"):
            if key == "asterisk":
                c.x = s.col >> 1
            c.y = self._saved_cursor[1] >> 1
            self._select_or_draw()
        else:
            digit = _digit(key)
            if digit is not None:
                self.quant = self.quant * 10 + digit
                return False
            direction = _DIRECTIONS.get(key)
            if direction is not None:
                self._move(direction)
        self.quant = 0
        return False

    def _move(self, direction: int) -> None:
        s = self.screen
        c = s.cursor
        vertical = direction & 1
        sens = 1 if direction & 2 else -1
        if direction < 2:
            bound = 0
        elif direction == 2:
            bound = s.col - 1
        else:
            bound = s.bot
        quant = self.quant or 1
        cur = c.y if vertical else c.x
        if cur == bound and ((sens < 0 and bound == 0) or (sens > 0 and bound > 0)):
            return
        cur += quant * sens
        if cur < 0 or (bound > 0 and cur > bound):
            cur = bound
        if vertical:
            c.y = cur
        else:
            c.x = cur
        self._select_or_draw()