"""A terminal screen model with scrollback history and column reflow on resize."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum, IntFlag


class Attr(IntFlag):
    """Glyph attribute bits."""

    NULL = 0
    BOLD = 1 << 0
    FAINT = 1 << 1
    ITALIC = 1 << 2
    UNDERLINE = 1 << 3
    BLINK = 1 << 4
    REVERSE = 1 << 5
    INVISIBLE = 1 << 6
    STRUCK = 1 << 7
    WRAP = 1 << 8
    WIDE = 1 << 9
    WDUMMY = 1 << 10


class GlyphState(IntEnum):
    """What occupies a cell."""

    EMPTY = 0
    SET = 1
    TAB = 2
    TDUMMY = 3


@dataclass
class Glyph:
    """One screen cell."""

    u: str = " "
    mode: Attr = Attr.NULL
    fg: int = 0
    bg: int = 0
    state: GlyphState = GlyphState.EMPTY

    def cleared(self, fg: int, bg: int) -> "Glyph":
        """Return an empty cell with the given colours."""
        return Glyph(" ", Attr.NULL, fg, bg, GlyphState.EMPTY)


@dataclass
class Cursor:
    """Cursor position, current attributes and pending wrap."""

    x: int = 0
    y: int = 0
    attr: Glyph = field(default_factory=Glyph)
    wrapnext: bool = False


@dataclass
class _Point:
    x: int = -1
    y: int = 0


@dataclass
class Selection:
    """Selection endpoints: original (ob, oe) and normalised (nb, ne)."""

    class Mode(IntEnum):
        IDLE = 0
        EMPTY = 1
        READY = 2

    class Type(IntEnum):
        REGULAR = 1
        RECTANGULAR = 2

    mode: "Selection.Mode" = Mode.IDLE
    type: "Selection.Type" = Type.REGULAR
    alt: bool = False
    ob: _Point = field(default_factory=_Point)
    oe: _Point = field(default_factory=_Point)
    nb: _Point = field(default_factory=_Point)
    ne: _Point = field(default_factory=_Point)

    @property
    def active(self) -> bool:
        return self.ob.x != -1

    def normalize(self) -> None:
        """Order the endpoints into nb (start) and ne (end)."""
        if self.type == Selection.Type.RECTANGULAR:
            self.nb = _Point(min(self.ob.x, self.oe.x), min(self.ob.y, self.oe.y))
            self.ne = _Point(max(self.ob.x, self.oe.x), max(self.ob.y, self.oe.y))
        elif (self.ob.y, self.ob.x) <= (self.oe.y, self.oe.x):
            self.nb, self.ne = replace(self.ob), replace(self.oe)
        else:
            self.nb, self.ne = replace(self.oe), replace(self.ob)

    def region_selected(self, x1: int, y1: int, x2: int, y2: int, altscreen: bool) -> bool:
        """Tell whether any part of the region overlaps the selection."""
        if (self.ob.x == -1 or self.mode == Selection.Mode.EMPTY
                or self.alt != altscreen or self.nb.y > y2 or self.ne.y < y1):
            return False
        if self.type == Selection.Type.RECTANGULAR:
            return self.nb.x <= x2 and self.ne.x >= x1
        return ((self.nb.y != y2 or self.nb.x <= x2)
                and (self.ne.y != y1 or self.ne.x >= x1))

    def remove(self) -> None:
        """Drop the selection."""
        self.mode = Selection.Mode.IDLE
        self.ob.x = -1

    def move(self, n: int) -> None:
        """Shift the selection down by ``n`` rows."""
        self.ob.y += n
        self.nb.y += n
        self.oe.y += n
        self.ne.y += n


_NONEMPTY = (GlyphState.SET, GlyphState.TAB, GlyphState.TDUMMY)


class Screen:
    """Visible lines plus a bounded scrollback history (oldest first)."""

    TABSPACES = 8

    def __init__(self, col, row, histsize=2000, defaultfg=7, defaultbg=0):
        if col <= 0 or row <= 0:
            raise ValueError("screen dimensions must be positive")
        if histsize < 0:
            raise ValueError("history size must not be negative")
        self.col = col
        self.row = row
        self.histsize = histsize
        self.defaultfg = defaultfg
        self.defaultbg = defaultbg
        self.cursor = Cursor()
        self.reset_cursor()
        self.lines = [self._blank_line(col) for _ in range(row)]
        self.history: list[list[Glyph]] = []
        self.scr = 0
        self.top = 0
        self.bot = row - 1
        self.altscreen = False
        self.sel = Selection()
        self.tabs = self._make_tabs(col)
        self.dirty = [True] * row

    @property
    def histf(self) -> int:
        return len(self.history)

    def _make_tabs(self, col):
        return [x > 0 and x % self.TABSPACES == 0 for x in range(col)]

    def _blank_line(self, col):
        return [Glyph(" ", Attr.NULL, self.defaultfg, self.defaultbg) for _ in range(col)]

    def _full_dirty(self):
        self.dirty = [True] * self.row

    def line_len(self, line) -> int:
        """Number of cells up to and including the last occupied one."""
        for i in range(len(line) - 1, -1, -1):
            if line[i].state in _NONEMPTY:
                return i + 1
        return 0

    def is_wrapped(self, line) -> bool:
        """Tell whether ``line`` continues on the next one."""
        n = self.line_len(line)
        return n > 0 and Attr.WRAP in line[n - 1].mode

    def line_text(self, line, gettab=False) -> str:
        """Text of the occupied part of ``line``; tabs collapse to '\\t' if asked."""
        parts = []
        in_tab = False
        for g in line[:self.line_len(line)]:
            if Attr.WDUMMY in g.mode:
                continue
            if in_tab and g.state == GlyphState.TDUMMY:
                continue
            in_tab = False
            if gettab and g.state == GlyphState.TAB:
                parts.append("\t")
                in_tab = True
            else:
                parts.append(g.u)
        return "".join(parts)

    def clear_glyph(self, glyph, usecurattr=False) -> None:
        """Empty ``glyph`` in place, with cursor or default colours."""
        if usecurattr:
            glyph.fg, glyph.bg = self.cursor.attr.fg, self.cursor.attr.bg
        else:
            glyph.fg, glyph.bg = self.defaultfg, self.defaultbg
        glyph.mode = Attr.NULL
        glyph.state = GlyphState.EMPTY
        glyph.u = " "

    def reset_cursor(self) -> None:
        """Home the cursor with default attributes."""
        self.cursor = Cursor(0, 0, Glyph(" ", Attr.NULL, self.defaultfg, self.defaultbg))

    def _scroll_up(self, n):
        for _ in range(n):
            line = self.lines.pop(0)
            if not self.altscreen and self.histsize:
                self.history.append(line)
                del self.history[:-self.histsize]
            self.lines.append(self._blank_line(self.col))
        self._full_dirty()

    def _newline(self):
        c = self.cursor
        c.wrapnext = False
        if c.y == self.bot:
            self._scroll_up(1)
        else:
            c.y += 1

    def _put(self, ch):
        c = self.cursor
        if c.wrapnext:
            self.lines[c.y][c.x].mode |= Attr.WRAP
            self._newline()
            c.x = 0
        g = self.lines[c.y][c.x]
        g.u, g.mode = ch, c.attr.mode
        g.fg, g.bg = c.attr.fg, c.attr.bg
        g.state = GlyphState.SET
        self.dirty[c.y] = True
        if c.x + 1 < self.col:
            c.x += 1
        else:
            c.wrapnext = True

    def write(self, text) -> None:
        """Write text at the cursor; handles '\\n', '\\r' and '\\t'."""
        for ch in text:
            if ch == "\n":
                self._newline()
                self.cursor.x = 0
            elif ch == "\r":
                self.cursor.x = 0
                self.cursor.wrapnext = False
            elif ch == "\t":
                self.write_tab()
            else:
                self._put(ch)

    def write_tab(self) -> None:
        """Fill cells up to the next tab stop with a tab and its dummies."""
        c = self.cursor
        x, y = c.x, c.y
        if self.sel.region_selected(x, y, x, y, self.altscreen):
            self.sel.remove()
        line = self.lines[y]
        line[x].u = " "
        line[x].state = GlyphState.TAB
        x += 1
        while x < self.col and not self.tabs[x]:
            line[x].u = " "
            line[x].state = GlyphState.TDUMMY
            x += 1
        c.x = min(x, self.col - 1)
        c.wrapnext = False
        self.dirty[y] = True

    def _split(self, cells, col):
        if not cells:
            return [self._blank_line(col)]
        chunks = [cells[i:i + col] for i in range(0, len(cells), col)]
        for chunk in chunks[:-1]:
            chunk[-1].state = GlyphState.SET
            chunk[-1].mode |= Attr.WRAP
        chunks[-1].extend(self._blank_line(col - len(chunks[-1])))
        return chunks

    def reflow(self, col, row) -> None:
        """Rewrap history and screen up to the cursor's line for a new size."""
        if col <= 0 or row <= 0:
            raise ValueError("screen dimensions must be positive")
        c = self.cursor
        oce = c.y
        while oce < self.row - 1 and self.is_wrapped(self.lines[oce]):
            oce += 1
        source = self.history + self.lines[:oce + 1]
        cur_src = len(self.history) + c.y
        out: list[list[Glyph]] = []
        logical: list[Glyph] = []
        cursor_base = cursor_off = 0
        for idx, line in enumerate(source):
            n = self.line_len(line)
            if idx == cur_src:
                n = max(n, c.x + 1)
                cursor_base, cursor_off = len(out), len(logical) + c.x
            cells = [replace(g) for g in line[:n]]
            wrapped = n > 0 and Attr.WRAP in cells[-1].mode
            logical.extend(cells)
            if wrapped and idx < len(source) - 1:
                logical[-1].mode &= ~Attr.WRAP
                continue
            out.extend(self._split(logical, col))
            logical = []

        cy = cursor_base + cursor_off // col
        c.x = cursor_off % col
        if c.wrapnext and c.x < col - 1:
            c.wrapnext = False
        drop = len(out) - (self.histsize + row)
        if drop > 0 and drop <= cy:
            del out[:drop]
            cy -= drop

        ny = len(out) - 1
        bot = min(ny, row - 1)
        nce = min(oce + max(row - self.row, 0), bot)
        c.y = nce - (ny - cy)
        if c.y < 0:
            grown = min(nce - c.y, bot)
            c.y += grown - nce
            nce = grown
            while c.y < 0:
                out.pop()
                c.y += 1
        ny = len(out) - 1
        start = ny - nce
        self.lines = out[start:] + [self._blank_line(col) for _ in range(row - nce - 1)]
        self.history = out[:start][-self.histsize:] if self.histsize else []
        self.scr = min(self.scr, self.histf)
        self._set_size(col, row)

    def _set_size(self, col, row):
        self.col, self.row = col, row
        self.top, self.bot = 0, row - 1
        self.tabs = self._make_tabs(col)
        self._full_dirty()

    def scroll_down_history(self, n) -> None:
        """Pull up to ``n`` history lines back onto the top of the screen."""
        n = min(n, self.histf)
        if n <= 0:
            return
        taken = self.history[-n:]
        del self.history[-n:]
        cy = self.cursor.y
        self.lines = taken + self.lines[:cy + 1] + self.lines[cy + 1 + n:]
        self.cursor.y += n
        shifted = self.scr - n
        if shifted >= 0:
            self.scr = shifted
        else:
            self.scr = 0
            if self.sel.active and not self.sel.alt:
                self.sel.move(-shifted)

    def resize(self, col, row) -> None:
        """Resize the main screen, reflowing text when the width changes."""
        if col <= 0 or row <= 0:
            raise ValueError("screen dimensions must be positive")
        if col == self.col and row == self.row:
            self._full_dirty()
            return
        if col != self.col:
            if not self.sel.alt:
                self.sel.remove()
            self.reflow(col, row)
        else:
            c = self.cursor
            if c.y >= row:
                self._scroll_up(c.y - row + 1)
                c.y = row - 1
            oldrow = self.row
            self.lines = self.lines[:row]
            self.lines.extend(self._blank_line(col) for _ in range(row - len(self.lines)))
            self.scroll_down_history(row - oldrow)
        self._set_size(col, row)

    def resize_alt(self, col, row) -> None:
        """Resize without reflow, cutting or padding lines."""
        if col <= 0 or row <= 0:
            raise ValueError("screen dimensions must be positive")
        if col == self.col and row == self.row:
            self._full_dirty()
            return
        if self.sel.alt:
            self.sel.remove()
        c = self.cursor
        drop = c.y - row + 1
        if drop > 0:
            self.lines = self.lines[drop:]
            c.y = row - 1
        self.lines = [line[:col] + self._blank_line(col - len(line[:col]))
                      for line in self.lines[:row]]
        self.lines.extend(self._blank_line(col) for _ in range(row - len(self.lines)))
        if c.x >= col:
            c.wrapnext = False
            c.x = col - 1
        elif c.wrapnext and c.x < col - 1:
            c.x += 1
            c.wrapnext = False
        self._set_size(col, row)