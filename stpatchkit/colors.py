"""Colour helpers: window opacity adjustment and colour inversion."""

from __future__ import annotations

from dataclasses import dataclass

_MAX = 0xFFFF


def clamp(value: float, lower: float, upper: float) -> float:
    """Limit ``value`` to the range [lower, upper]."""
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def change_alpha(alpha: float, delta: float) -> float:
    """Return the opacity after stepping ``alpha`` by ``delta``, kept in [0, 1]."""
    if (alpha > 0 and delta < 0) or (alpha < 1 and delta > 0):
        alpha += delta
    return clamp(alpha, 0.0, 1.0)


@dataclass(frozen=True)
class Color:
    """A colour with 16-bit red, green, blue and alpha channels."""

    red: int
    green: int
    blue: int
    alpha: int = _MAX

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not 0 <= value <= _MAX:
                raise ValueError(f"{name} must be within 0..{_MAX}, got {value}")

    def inverted(self) -> "Color":
        """Return the colour with each RGB channel inverted; alpha is kept."""
        return Color(_MAX ^ self.red, _MAX ^ self.green, _MAX ^ self.blue, self.alpha)


def invert_color(color: Color) -> Color:
    """Return the inverse of ``color``."""
    return color.inverted()