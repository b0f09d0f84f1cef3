"""Reading farbfeld images for use as a terminal background."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike
from typing import Union

MAGIC = b"farbfeld"
_HEADER = struct.Struct(">8sII")
_PIXEL = struct.Struct(">4H")


class FarbfeldError(ValueError):
    """Raised when a farbfeld image cannot be read."""


@dataclass(frozen=True)
class FarbfeldImage:
    """An image with 16-bit (red, green, blue, alpha) pixels in row order."""

    width: int
    height: int
    pixels: tuple[tuple[int, int, int, int], ...]

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise FarbfeldError("pixel count does not match the image size")

    def to_ximage_pixels(self) -> list[int]:
        """Pixels as 32-bit ARGB values built from each channel's high byte."""
        return [
            (a >> 8) << 24 | (r >> 8) << 16 | (g >> 8) << 8 | (b >> 8)
            for r, g, b, a in self.pixels
        ]


def parse_farbfeld(data: bytes) -> FarbfeldImage:
    """Decode a farbfeld image; trailing bytes are ignored."""
    if len(data) < _HEADER.size:
        raise FarbfeldError("unexpected end of file reading header")
    magic, width, height = _HEADER.unpack_from(data)
    if magic != MAGIC:
        raise FarbfeldError("invalid magic value")
    size = width * height * _PIXEL.size
    body = data[_HEADER.size:_HEADER.size + size]
    if len(body) < size:
        raise FarbfeldError("unexpected end of file reading data")
    return FarbfeldImage(width, height, tuple(_PIXEL.iter_unpack(body)))


def load_farbfeld(path: Union[str, PathLike]) -> FarbfeldImage:
    """Read and decode the farbfeld file at ``path``."""
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise FarbfeldError("could not load background image") from exc
    return parse_farbfeld(data)