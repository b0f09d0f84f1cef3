import pytest

from stpatchkit.kbdselect import KeyboardSelect, search
from stpatchkit.screen import Attr, Screen, Selection


def make_screen():
    screen = Screen(20, 4)
    screen.write("abc foo\nbar foo")
    return screen


def bottom_text(screen, start, end):
    return "".join(g.u for g in screen.lines[screen.bot][start:end])


def test_start_shows_move_label():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    assert ks.start() is True
    assert ks.active
    assert bottom_text(screen, screen.col - 6, screen.col) == " MOVE "
    assert Attr.REVERSE in screen.lines[screen.bot][screen.col - 1].mode


def test_select_toggle_shows_sel_label_and_selects():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    ks.start()
    x0 = screen.cursor.x
    ks.handle_key("h")
    ks.handle_key("s")
    assert bottom_text(screen, screen.col - 6, screen.col) == " SEL  "
    ks.handle_key("h")
    ks.handle_key("h")
    assert screen.sel.ob.x == x0 - 1
    assert screen.sel.oe.x == x0 - 3
    assert screen.sel.mode == Selection.Mode.READY


def test_t_toggles_rectangular():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    ks.start()
    ks.handle_key("s")
    ks.handle_key("t")
    assert screen.sel.type == Selection.Type.RECTANGULAR
    ks.handle_key("t")
    assert screen.sel.type == Selection.Type.REGULAR


def test_return_restores_cursor_and_line():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    saved = (screen.cursor.x, screen.cursor.y)
    ks.start()
    ks.handle_key("Home")
    assert (screen.cursor.x, screen.cursor.y) == (0, 0)
    assert ks.handle_key("Return") is True
    assert not ks.active
    assert (screen.cursor.x, screen.cursor.y) == saved
    assert screen.line_text(screen.lines[screen.bot]) == ""
    assert bottom_text(screen, screen.col - 6, screen.col) == " " * 6


def test_escape_clears_selection():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    ks.start()
    ks.handle_key("s")
    ks.handle_key("h")
    assert ks.handle_key("Escape") is True
    assert screen.sel.ob.x == -1


def test_escape_when_inactive_does_nothing():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    assert ks.handle_key("Escape") is False
    assert not ks.active


def test_up_stops_at_top():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    ks.start()
    y0 = screen.cursor.y
    ks.handle_key("k")
    assert screen.cursor.y == y0 - 1
    ks.handle_key("k")
    assert screen.cursor.y == 0
    ks.handle_key("j")
    ks.handle_key("5")
    ks.handle_key("Down")
    assert screen.cursor.y == screen.bot


def test_jump_keys():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    y0 = screen.cursor.y
    ks.start()
    ks.handle_key("dollar")
    assert screen.cursor.x == screen.col - 1
    ks.handle_key("BackSpace")
    assert screen.cursor.x == 0
    ks.handle_key("asterisk")
    assert screen.cursor.x == screen.col // 2
    assert screen.cursor.y == y0 // 2
    ks.handle_key("Page_Up")
    assert screen.cursor.y == 0
    ks.handle_key("Next")
    assert screen.cursor.y == y0


def test_incremental_search_backwards_and_next():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    ks.start()
    ks.handle_key("slash")
    assert screen.lines[screen.bot][0].u == "/"
    ks.handle_key("f", "f")
    assert screen.lines[screen.bot][1].u == "f"
    c = screen.cursor
    assert c.y == 1
    assert screen.lines[c.y][c.x].u == "f"
    ks.handle_key("Return")
    assert ks.mode == 0
    ks.handle_key("n")
    assert c.y == 0
    assert screen.lines[c.y][c.x].u == "f"


def test_search_backspace_removes_target():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    ks.start()
    ks.handle_key("slash")
    ks.handle_key("z", "z")
    ks.handle_key("q", "q")
    ks.handle_key("BackSpace")
    assert ks.target == ["z"]
    assert screen.lines[screen.bot][2].u == " "


def test_set_notification_prompt_fills_line():
    screen = make_screen()
    ks = KeyboardSelect(screen)
    ks.start()
    ks.set_notification(15, "?")
    line = screen.lines[screen.bot]
    assert line[0].u == "?"
    assert all(g.u == " " for g in line[1:])
    assert all(g.mode == Attr.REVERSE for g in line)


def test_search_function_finds_match():
    screen = make_screen()
    total = screen.col * screen.row
    pos = search(screen, "bar", total - 1, -1, -1)
    row, col = divmod(pos, screen.col)
    assert "".join(g.u for g in screen.lines[row][col:col + 3]) == "bar"
    forward = search(screen, "foo", 0, total, 1)
    row, col = divmod(forward, screen.col)
    assert row == 0
    assert "".join(g.u for g in screen.lines[row][col:col + 3]) == "foo"


def test_search_function_missing():
    screen = make_screen()
    assert search(screen, "zzz", screen.col * screen.row - 1, -1, -1) is None


def test_search_zero_step_rejected():
    screen = make_screen()
    with pytest.raises(ValueError):
        search(screen, "a", 0, 5, 0)