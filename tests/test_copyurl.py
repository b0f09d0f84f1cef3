from stpatchkit.copyurl import find_last_any, find_previous_url, set_color, trim_url
from stpatchkit.screen import Screen


def test_find_last_any():
    text = "http://a https://b"
    assert find_last_any(text, ("http://", "https://")) == text.index("https://")
    assert find_last_any("nothing", ("http://",)) is None


def test_trim_url():
    assert trim_url("http://example.com/x now") == "http://example.com/x"
    assert trim_url("https://example.com/(a)") == "https://example.com/"


def test_find_previous_url_cycles():
    s = Screen(40, 3)
    s.write("see http://example.com/a\nand https://example.com/b here")
    first = find_previous_url(s)
    assert first.text == "https://example.com/b"
    assert first.row == 1
    assert s.sel.ob.x == first.start
    assert s.sel.oe.x == first.end - 1
    assert s.lines[1][first.start].fg == s.defaultbg
    second = find_previous_url(s, first)
    assert second.text == "http://example.com/a"
    assert second.row == 0
    assert s.lines[1][first.start].fg == s.defaultfg


def test_two_urls_on_one_line():
    s = Screen(60, 2)
    s.write("http://example.com/1 http://example.com/2")
    last = find_previous_url(s)
    assert last.text.endswith("/2")
    s2 = Screen(60, 2)
    s2.write("\nhttp://example.com/1 http://example.com/2")
    m = find_previous_url(s2)
    earlier = find_previous_url(s2, m)
    assert earlier.text.endswith("/1")
    assert earlier.row == m.row


def test_no_url():
    s = Screen(10, 2)
    s.write("plain")
    assert find_previous_url(s) is None


def test_set_color():
    s = Screen(5, 1)
    set_color(s, 0, 1, 3, 9, 8)
    assert [(g.fg, g.bg) for g in s.lines[0]][1:3] == [(9, 8), (9, 8)]
    assert s.lines[0][0].fg == s.defaultfg