"""Colour helpers. Colours are handled as RGB tuples and converted to BGR only when drawn."""

from itertools import cycle
from typing import Iterator, Tuple, Union

Color = Tuple[int, int, int]
ColorLike = Union[str, Tuple[int, int, int]]

PALETTE = (
    "255, 155, 50",
    "155, 255, 50",
    "50, 155, 255",
    "255, 50, 155",
    "155, 50, 255",
    "50, 255, 200",
)


def parse_color(value: ColorLike) -> Color:
    """
    Accepts an "r, g, b" string (the form colours are handed out per
    tracked point) or an RGB tuple and returns an RGB tuple of ints.
    """
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(",")]
    else:
        parts = list(value)

    if len(parts) != 3:
        raise ValueError(f"Expected three colour channels, got {value!r}")
    try:
        channels = tuple(int(float(p)) for p in parts)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid colour {value!r}") from e
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"Colour channels must be within 0-255, got {value!r}")
    return channels


def to_bgr(color: Color) -> Color:
    """OpenCV draws in BGR order."""
    r, g, b = color
    return (b, g, r)


def palette_cycle() -> Iterator[Color]:
    return cycle(parse_color(c) for c in PALETTE)
