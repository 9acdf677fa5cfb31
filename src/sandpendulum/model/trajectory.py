"""
Trajectory Store
================
Bounded, append-only history of the pendulum positions.

Why is this file needed?
------------------------
1. Storage: the whole history must be kept so a resize or a print can repaint
   the complete pattern.
2. Invariants: index 0 is the seed, past points never change, and the store
   never grows beyond its capacity.

Classes:
    Point: Immutable normalized position.
    TrajectoryStore: Preallocated numpy-backed point history.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Iterator, TYPE_CHECKING

import numpy as np

from sandpendulum.config import MAX_POINTS
from sandpendulum.model.errors import CapacityExceeded, IndexOutOfRange

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class Point(NamedTuple):
    """A position relative to the viewport centre, in units of the viewport radius."""
    x: float
    y: float


class TrajectoryStore:
    """
    Fixed-capacity sequence of points.

    The coordinates live in a preallocated (capacity, 2) float64 array, so
    appending never reallocates and a full repaint can read contiguous memory.
    """

    def __init__(self, capacity: int = MAX_POINTS) -> None:
        if capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}.")
        self._capacity = capacity
        self._data: npt.NDArray[np.float64] = np.zeros((capacity, 2), dtype=np.float64)
        self._length = 0

    # --- PROPERTIES ---

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._length

    def length(self) -> int:
        return self._length

    def is_full(self) -> bool:
        return self._length >= self._capacity

    def is_empty(self) -> bool:
        return self._length == 0

    # --- MUTATION ---

    def reset(self, seed: Point) -> None:
        """Discard the history and start over from `seed` (index 0)."""
        self._length = 0
        self._data[0] = (float(seed[0]), float(seed[1]))
        self._length = 1
        logger.debug(f"Trajectory reset, seed = ({seed[0]:.4f}, {seed[1]:.4f})")

    def append(self, point: Point) -> int:
        """Append a point and return its index."""
        if self._length >= self._capacity:
            raise CapacityExceeded(self._capacity)
        index = self._length
        self._data[index] = (float(point[0]), float(point[1]))
        self._length += 1
        return index

    # --- ACCESS ---

    def at(self, index: int) -> Point:
        if index < 0 or index >= self._length:
            raise IndexOutOfRange(index, self._length)
        x, y = self._data[index]
        return Point(float(x), float(y))

    def __getitem__(self, index: int) -> Point:
        return self.at(index)

    def __iter__(self) -> Iterator[Point]:
        for i in range(self._length):
            yield self.at(i)

    def last(self) -> Point:
        return self.at(self._length - 1)

    def points(self) -> npt.NDArray[np.float64]:
        """Read-only view of the stored points, shape (length, 2)."""
        view = self._data[:self._length]
        view.flags.writeable = False
        return view

    def tail(self, count: int) -> npt.NDArray[np.float64]:
        """Read-only view of the last `count` points (fewer if the store is shorter)."""
        start = max(0, self._length - count)
        view = self._data[start:self._length]
        view.flags.writeable = False
        return view
