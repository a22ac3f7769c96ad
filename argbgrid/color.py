"""
ARGB color value.

A `Color` is four 8-bit channels. In a pixel buffer the channels are stored
in memory order B, G, R, A, see `to_bgra` and `from_bgra`.
"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    a: int
    r: int
    g: int
    b: int
    is_empty: bool = False

    def __post_init__(self) -> None:
        for name in ("a", "r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"Channel {name} out of range: {value}")

    @classmethod
    def empty(cls) -> "Color":
        """The color returned for pixels of an uninitialized grid."""
        return cls(0, 0, 0, 0, is_empty=True)

    @classmethod
    def from_argb(cls, value: int) -> "Color":
        return cls(value >> 24 & 0xFF, value >> 16 & 0xFF, value >> 8 & 0xFF, value & 0xFF)

    @classmethod
    def from_bgra(cls, data: Sequence[int], offset: int = 0) -> "Color":
        return cls(data[offset + 3], data[offset + 2], data[offset + 1], data[offset])

    def to_argb(self) -> int:
        return (self.a << 24) | (self.r << 16) | (self.g << 8) | self.b

    def to_bgra(self) -> bytes:
        return bytes((self.b, self.g, self.r, self.a))

    def __repr__(self) -> str:
        if self.is_empty:
            return "Color.empty()"
        return f"Color(a={self.a}, r={self.r}, g={self.g}, b={self.b})"
