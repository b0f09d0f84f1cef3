"""Terminal emulator building blocks: box drawing, colours, a reflowing screen and helpers."""

__version__ = "0.8.5"

__all__ = [
    "boxdraw",
    "colors",
    "screen",
    "copyurl",
    "externalpipe",
    "kbdselect",
    "farbfeld",
    "iso14755",
    "newterm",
]