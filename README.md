# stpatchkit

Building blocks for a small terminal emulator. Each one can be used on its own from Python.
The package has no third-party dependencies.

## Modules

- `stpatchkit.boxdraw`: box-drawing, block, shade and braille characters, turned into
  geometry. `is_boxdraw(u, boxdraw, braille)` says whether a code point in U+2500–U+259F
  or U+2800–U+28FF is drawn by hand. `boxdraw_index(...)` gives its 16-bit shape value.
  `draw_box` and `draw_boxes` return lists of `Rect` (x, y, w, h, shade) that cover a cell.
  `shade_color(fg, bg, level)` blends two RGB colours in quarter steps.
- `stpatchkit.colors`: `Color`, an RGBA colour with 16-bit channels. `Color.inverted()` and
  `invert_color` flip the RGB channels and keep alpha. `clamp` and `change_alpha(alpha, delta)`
  step a window opacity and keep it within 0..1.
- `stpatchkit.screen`: `Screen`, with visible lines, a bounded scrollback history and tab
  stops, plus `Glyph`, `Attr`, `GlyphState`, `Cursor` and `Selection`.
  - `Screen.write` handles text, `\n`, `\r` and `\t`.
  - `Screen.resize` reflows wrapped text when the width changes and pulls history back
    when the height grows.
  - `Screen.resize_alt` cuts or pads lines without reflowing them.
  - `Selection.region_selected` tests whether a region overlaps the selection.
- `stpatchkit.copyurl`: `find_previous_url(screen, previous)` finds the last `http://` or
  `https://` URL on the screen, inverts its colours and selects it. It returns a `UrlMatch`.
  Passing the previous match steps further back. URLs that span lines are not joined.
- `stpatchkit.externalpipe`: `screen_text(screen)` renders the visible lines as text.
  Wrapped lines are joined without a newline. `external_pipe(screen, argv, stdout)` starts
  a command, writes that text to its standard input and returns the `subprocess.Popen`.
- `stpatchkit.kbdselect`: `KeyboardSelect` moves the cursor, selects and searches with
  keys named as X keysyms (`"h"`, `"j"`, `"s"`, `"slash"`, `"Return"`, ...). Digits work as
  repeat counts. It shows a mode label on the bottom line. `search(...)` scans cells for a
  string.
- `stpatchkit.farbfeld`: `parse_farbfeld` and `load_farbfeld` read farbfeld images into a
  `FarbfeldImage` and raise `FarbfeldError` on bad input. `FarbfeldImage.to_ximage_pixels()`
  packs the pixels as 32-bit ARGB.
- `stpatchkit.iso14755`: `parse_codepoint(text)` turns a hexadecimal code point into a
  character. `request_codepoint(command)` runs a prompt command (by default a `dmenu` call)
  through the shell and parses what it prints.
- `stpatchkit.newterm`: `cwd_of_pid(pid)` reads a process's working directory from
  `/proc`. `new_terminal(pid, program)` starts `program` (default `st`) detached, in that
  directory.

## Example

```python
from stpatchkit.screen import Screen
from stpatchkit.copyurl import find_previous_url

screen = Screen(40, 5, 100, 7, 0)
screen.write("see https://example.com/docs for more")
match = find_previous_url(screen, None)
print(match)  # UrlMatch(row=0, start=4, text='https://example.com/docs')
```

## What it does not do

This is a library, not a terminal.

- It opens no window and renders no fonts or glyphs. `boxdraw` only returns rectangles.
- It does not run a shell on a pseudo-terminal, and it parses no escape sequences.
- It installs no command.
- There is no clipboard integration. Selections stay in the `Screen`'s `Selection`.
- There is no module for build-time feature switches.

## Tests

```
pip install -e .[test]
pytest
```