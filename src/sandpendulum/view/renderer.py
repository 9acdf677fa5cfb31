"""
Incremental Renderer
====================
Draws the trajectory one segment at a time.

Why is this file needed?
------------------------
Repainting 50 000 segments for every new point would be far too slow, so each
new point only paints the segment that ends at it. Every segment is drawn
twice:

1. A 1 px "shadow" stroke in the background (screen) or white (paper) colour,
   offset by one pixel perpendicular to the segment's main direction. The
   offset goes up/left when the end point lies on the positive side of the
   other axis, down/right otherwise.
2. A black stroke between the true endpoints, on top.

As thousands of near-identical ellipses are traced, the shadow strokes thin
out the older lines and the overlap builds up the nested-parallelogram
density pattern instead of a flat blob.

This module has no Qt dependency; it paints through the `Surface` protocol.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Protocol

from sandpendulum.config import BACKGROUND_RGB, PAPER_RGB, INK_RGB, POINTS_PER_TIMER
from sandpendulum.model.errors import IndexOutOfRange
from sandpendulum.model.trajectory import TrajectoryStore
from sandpendulum.model.viewport import ViewportMapping

RGB = tuple[int, int, int]


class Surface(Protocol):
    """Minimal drawing device used by the renderer."""

    def select_pen(self, color: RGB, width: int) -> None: ...

    def move_to(self, x: int, y: int) -> None: ...

    def line_to(self, x: int, y: int) -> None: ...

    def device_size(self) -> tuple[int, int]: ...


class InkMode(Enum):
    """Which colour the shadow stroke uses."""
    SCREEN = "screen"  # background colour, interactive canvas
    PAPER = "paper"  # white, print and export surfaces

    @property
    def shadow_color(self) -> RGB:
        return BACKGROUND_RGB if self is InkMode.SCREEN else PAPER_RGB


def paint_segment(
    surface: Surface,
    mapping: ViewportMapping,
    trajectory: TrajectoryStore,
    index: int,
    ink: InkMode = InkMode.SCREEN,
) -> None:
    """
    Paint the segment between points `index - 1` and `index`.

    Raises:
        IndexOutOfRange: If not 0 < index < len(trajectory).
    """
    if index <= 0:
        raise IndexOutOfRange(index, len(trajectory))
    x0, y0 = trajectory.at(index - 1)
    x1, y1 = trajectory.at(index)

    sx, sy = mapping.to_pixel(x0, y0)
    ex, ey = mapping.to_pixel(x1, y1)

    surface.select_pen(ink.shadow_color, 1)
    if abs(x1 - x0) > abs(y1 - y0):
        # roughly horizontal
        dy = -1 if y1 >= 0 else 1
        surface.move_to(sx, sy + dy)
        surface.line_to(ex, ey + dy)
    else:
        # roughly vertical
        dx = -1 if x1 >= 0 else 1
        surface.move_to(sx + dx, sy)
        surface.line_to(ex + dx, ey)

    surface.select_pen(INK_RGB, 1)
    surface.move_to(sx, sy)
    surface.line_to(ex, ey)


def paint_full_history(
    surface: Surface,
    mapping: ViewportMapping,
    trajectory: TrajectoryStore,
    ink: InkMode = InkMode.SCREEN,
    should_abort: Optional[Callable[[], bool]] = None,
    check_every: int = POINTS_PER_TIMER,
) -> int:
    """
    Paint every segment of the trajectory in order.

    `should_abort` is polled every `check_every` segments; when it returns
    True the repaint stops early. The length is re-read on every segment, so
    points appended while `should_abort` runs the event loop are painted too.
    Returns the number of segments painted.
    """
    painted = 0
    index = 1
    while index < len(trajectory):
        paint_segment(surface, mapping, trajectory, index, ink)
        painted += 1
        if should_abort is not None and index % check_every == 0 and should_abort():
            break
        index += 1
    return painted
