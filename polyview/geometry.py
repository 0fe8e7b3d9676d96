from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A sample in data space."""

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ScreenPoint:
    """A location in screen space: origin top-left, y grows downward."""

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ScreenRect:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, a: tuple[int, int], b: tuple[int, int]) -> "ScreenRect":
        ax, ay = int(a[0]), int(a[1])
        bx, by = int(b[0]), int(b[1])
        x0 = min(ax, bx)
        y0 = min(ay, by)
        return cls(x=x0, y=y0, width=max(ax, bx) - x0, height=max(ay, by) - y0)

    @property
    def has_area(self) -> bool:
        return self.width > 0 and self.height > 0

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class CanvasSize:
    width: int
    height: int

    @classmethod
    def coerce(cls, value: "CanvasSize | tuple[int, int]") -> "CanvasSize":
        if isinstance(value, CanvasSize):
            return value
        width, height = value
        return cls(width=int(width), height=int(height))

    @property
    def is_renderable(self) -> bool:
        return self.width > 0 and self.height > 0

    def full_rect(self) -> ScreenRect:
        return ScreenRect(x=0, y=0, width=self.width, height=self.height)
