"""
Error Types
===========
Exceptions raised by the simulation core.

Programming errors (`IndexOutOfRange`, `EmptyTrajectoryError`) are meant to
fail fast. `CapacityExceeded` and `InvalidParameterInput` are expected
conditions that callers handle locally.
"""


class SandPendulumError(Exception):
    """Base class for all errors raised by the sandpendulum package."""


class CapacityExceeded(SandPendulumError):
    """The trajectory store is already at its maximum length."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Trajectory is full ({capacity} points).")
        self.capacity = capacity


class IndexOutOfRange(SandPendulumError, IndexError):
    """A trajectory index outside [0, length)."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} out of range for trajectory of length {length}.")
        self.index = index
        self.length = length


class EmptyTrajectoryError(SandPendulumError):
    """The integrator was called before the trajectory was seeded."""


class InvalidParameterInput(SandPendulumError, ValueError):
    """User-entered parameter text is unparsable or out of range."""

    def __init__(self, name: str, text: str, low: float, high: float) -> None:
        super().__init__(f"Invalid {name} '{text}': expected a number in [{low}, {high}].")
        self.name = name
        self.text = text


class ExportError(SandPendulumError):
    """A print or image export surface failed."""

    def __init__(self, code: int, description: str) -> None:
        super().__init__(f"Error {code}: {description}")
        self.code = code
        self.description = description
