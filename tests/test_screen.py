import pytest

from stpatchkit.screen import Attr, Glyph, GlyphState, Screen, Selection


def texts(screen, lines):
    return [screen.line_text(line) for line in lines]


def test_write_and_line_text():
    s = Screen(10, 3)
    s.write("hello")
    assert s.line_text(s.lines[0]) == "hello"
    assert s.line_len(s.lines[0]) == 5
    assert (s.cursor.x, s.cursor.y) == (5, 0)


def test_wrap_sets_flag():
    s = Screen(3, 3)
    s.write("abcdef")
    assert s.is_wrapped(s.lines[0])
    assert not s.is_wrapped(s.lines[1])
    assert texts(s, s.lines[:2]) == ["abc", "def"]


def test_reflow_narrow_and_back_round_trip():
    s = Screen(10, 3, histsize=10)
    s.write("hello")
    s.resize(3, 3)
    joined = "".join(texts(s, s.history + s.lines))
    assert joined == "hello"
    assert s.is_wrapped((s.history + s.lines)[0])
    assert all(len(line) == 3 for line in s.lines)
    s.resize(10, 3)
    assert s.line_text(s.lines[0]) == "hello"
    assert s.histf == 0
    assert s.cursor.x == 5


def test_scroll_into_history_and_back():
    s = Screen(5, 2, histsize=5)
    s.write("a\nb\nc")
    assert texts(s, s.history) == ["a"]
    s.resize(5, 3)
    assert texts(s, s.lines) == ["a", "b", "c"]
    assert s.histf == 0
    assert s.cursor.y == 2


def test_scroll_down_history_limited_by_history():
    s = Screen(5, 2, histsize=5)
    s.write("a\nb\nc")
    s.lines.append(s._blank_line(5))
    s.scroll_down_history(10)
    assert s.histf == 0
    assert s.cursor.y == 2


def test_resize_alt_truncates_and_clamps_cursor():
    s = Screen(6, 4)
    s.write("abcdef\n\n\nx")
    s.resize_alt(3, 2)
    assert len(s.lines) == 2
    assert all(len(line) == 3 for line in s.lines)
    assert s.cursor.y == 1
    assert s.line_text(s.lines[1]) == "x"


def test_resize_same_size_noop():
    s = Screen(4, 2)
    s.write("ab")
    s.resize(4, 2)
    assert s.line_text(s.lines[0]) == "ab"


def test_bad_size_raises():
    with pytest.raises(ValueError):
        Screen(0, 3)
    s = Screen(3, 3)
    with pytest.raises(ValueError):
        s.resize(3, 0)


def test_write_tab():
    s = Screen(20, 2)
    s.write("a\tb")
    line = s.lines[0]
    assert line[1].state == GlyphState.TAB
    assert all(g.state == GlyphState.TDUMMY for g in line[2:8])
    assert line[8].u == "b"
    assert s.line_text(line, gettab=True) == "a\tb"


def test_clear_glyph_uses_cursor_attr():
    s = Screen(3, 1, defaultfg=7, defaultbg=0)
    s.cursor.attr.fg, s.cursor.attr.bg = 3, 4
    g = Glyph("x", Attr.BOLD, 1, 1, GlyphState.SET)
    s.clear_glyph(g, True)
    assert (g.u, g.mode, g.fg, g.bg, g.state) == (" ", Attr.NULL, 3, 4, GlyphState.EMPTY)
    s.clear_glyph(g, False)
    assert (g.fg, g.bg) == (7, 0)


def test_glyph_cleared():
    g = Glyph("x", Attr.BOLD, 1, 2, GlyphState.SET).cleared(5, 6)
    assert g == Glyph(" ", Attr.NULL, 5, 6, GlyphState.EMPTY)


def test_reset_cursor():
    s = Screen(5, 5)
    s.write("ab\nc")
    s.reset_cursor()
    assert (s.cursor.x, s.cursor.y, s.cursor.attr.fg) == (0, 0, s.defaultfg)


def _selection(x1, y1, x2, y2, kind=Selection.Type.REGULAR):
    sel = Selection()
    sel.mode = Selection.Mode.READY
    sel.type = kind
    sel.ob.x, sel.ob.y = x1, y1
    sel.oe.x, sel.oe.y = x2, y2
    sel.normalize()
    return sel


def test_region_selected_regular():
    sel = _selection(5, 1, 2, 3)
    assert sel.region_selected(0, 2, 9, 2, False)
    assert not sel.region_selected(0, 1, 4, 1, False)
    assert not sel.region_selected(3, 3, 9, 3, False)
    assert not sel.region_selected(0, 2, 9, 2, True)


def test_region_selected_rectangular():
    sel = _selection(2, 1, 5, 3, Selection.Type.RECTANGULAR)
    assert sel.region_selected(4, 2, 8, 2, False)
    assert not sel.region_selected(6, 2, 8, 2, False)


def test_selection_remove_and_move():
    sel = _selection(1, 1, 2, 2)
    sel.move(3)
    assert (sel.ob.y, sel.nb.y, sel.oe.y, sel.ne.y) == (4, 4, 5, 5)
    sel.remove()
    assert not sel.region_selected(0, 0, 100, 100, False)