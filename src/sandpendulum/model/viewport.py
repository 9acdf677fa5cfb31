"""
Viewport Mapping
================
Converts normalized trajectory coordinates to device pixels and back.

A surface's mapping is its centre pixel plus a radius equal to half of the
smaller client dimension, optionally shrunk by a margin factor (print and
export surfaces).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

from sandpendulum.model.trajectory import Point


@dataclass(frozen=True)
class ViewportMapping:
    center_x: int = 0
    center_y: int = 0
    radius: int = 0

    @classmethod
    def from_size(cls, width: int, height: int, margin: float | Fraction = 1) -> ViewportMapping:
        """
        Mapping for a surface of `width` x `height` device pixels. Pass the
        margin as a Fraction to keep the radius arithmetic exact.
        """
        radius = min(width // 2, height // 2)
        if margin != 1.0:
            radius = int(radius * margin)
        return cls(width // 2, height // 2, max(radius, 0))

    @property
    def is_degenerate(self) -> bool:
        """True for a zero-sized surface (e.g. a minimized window)."""
        return self.radius <= 0

    def to_pixel(self, x: float, y: float) -> tuple[int, int]:
        """Nearest device pixel; exact halves round up."""
        return (
            math.floor(x * self.radius + self.center_x + 0.5),
            math.floor(y * self.radius + self.center_y + 0.5),
        )

    def to_normalized(self, px: int, py: int) -> Point:
        if self.is_degenerate:
            raise ValueError("Cannot map a pixel on a zero-sized viewport.")
        return Point((px - self.center_x) / self.radius, (py - self.center_y) / self.radius)
