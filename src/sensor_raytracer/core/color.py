"""8-bit RGB color values."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


def _to_channel(value: float) -> int:
    # Truncates like a float-to-u8 cast, after clamping to [0, 1]
    return int(min(max(value, 0.0), 1.0) * 255.0)


@dataclass(frozen=True)
class Color:
    """An RGB color with three 8-bit channels.

    Attributes:
        r: Red channel in [0, 255].
        g: Green channel in [0, 255].
        b: Blue channel in [0, 255].

    Raises:
        ValueError: If a channel is not an integer in [0, 255].
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Channel {name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range [0, 255]: {value}")

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b

    @classmethod
    def from_unit(cls, r: float, g: float, b: float) -> Color:
        """Convert unit-range float channels to 8-bit.

        Values are clamped to [0, 1], scaled by 255 and truncated.

        Example:
            >>> Color.from_unit(1.0, 0.5, 0.0)
            Color(r=255, g=127, b=0)
        """
        return cls(_to_channel(r), _to_channel(g), _to_channel(b))

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def as_unit(self) -> tuple[float, float, float]:
        """Return the channels scaled to [0, 1]."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)


BLACK = Color(0, 0, 0)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
MAGENTA = Color(255, 0, 255)
