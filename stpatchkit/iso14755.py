"""Entering a character by its hexadecimal code point, read from a prompt command."""

from __future__ import annotations

import subprocess
from typing import Optional

ISO14755CMD = 'dmenu -w "$WINDOWID" -p codepoint: </dev/null'

_LINE_MAX = 8
_ULONG_MAX = 2 ** 64 - 1
_HEXDIGITS = "0123456789abcdefABCDEF"
_SPACES = " \t\n\v\f\r"
_REPLACEMENT = "\ufffd"


def _to_char(value: int) -> str:
    value &= 0xFFFFFFFF
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        return _REPLACEMENT
    return chr(value)


def parse_codepoint(text: str) -> Optional[str]:
    """Return the character named by the hex code point on the first line of ``text``.

    Returns None when the input is rejected.  Out-of-range values give U+FFFD.
    """
    end = text.find("\n")
    line = text if end < 0 else text[:end + 1]
    line = line[:_LINE_MAX]
    if not line or line[0] == "-" or len(line) > 7:
        return None

    pos = 0
    while pos < len(line) and line[pos] in _SPACES:
        pos += 1
    negative = False
    if pos < len(line) and line[pos] in "+-":
        negative = line[pos] == "-"
        pos += 1
    if (line[pos:pos + 2] in ("0x", "0X") and pos + 2 < len(line)
            and line[pos + 2] in _HEXDIGITS):
        pos += 2
    digits_start = pos
    while pos < len(line) and line[pos] in _HEXDIGITS:
        pos += 1

    if pos == digits_start:
        value, rest = 0, line
    else:
        value, rest = int(line[digits_start:pos], 16), line[pos:]
        if negative:
            value = (-value) % (_ULONG_MAX + 1)
    if value == _ULONG_MAX:
        return None
    if rest and rest[0] != "\n":
        return None
    return _to_char(value)


def request_codepoint(command: str = ISO14755CMD) -> Optional[str]:
    """Run the prompt ``command`` through the shell and parse the code point it prints."""
    try:
        result = subprocess.run(command, shell=True, stdout=subprocess.PIPE, check=False)
    except OSError:
        return None
    return parse_codepoint(result.stdout.decode("utf-8", errors="replace"))