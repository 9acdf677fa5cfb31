"""
Amplitude Analysis
==================
Offline helpers for inspecting a finished (or running) drawing.

Why is this file needed?
------------------------
1. Envelope: the peak of one axis per oscillation shows how fast the drag
   shrinks the pattern, and a constant envelope shows a drag-free run keeps
   its energy.
2. Quick look: `plot_trajectory` draws the trace and the X envelope with
   matplotlib, outside the Qt canvas.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np
import matplotlib.pyplot as plt

from sandpendulum.model.trajectory import TrajectoryStore

if TYPE_CHECKING:
    import numpy.typing as npt


def amplitude_envelope(
    values: npt.ArrayLike,
    period: float,
) -> npt.NDArray[np.float64]:
    """
    Peak absolute value of one axis in consecutive windows of one period.

    Args:
        values: Coordinates of one axis, in simulation ticks order.
        period: Window length in ticks (the axis period).

    Returns:
        One amplitude per complete window.
    """
    arr = np.abs(np.asarray(values, dtype=np.float64))
    window = int(round(period))
    if window < 1:
        raise ValueError(f"Period must be at least one tick, got {period}.")
    n_windows = arr.size // window
    if n_windows == 0:
        return np.empty(0, dtype=np.float64)
    return arr[:n_windows * window].reshape(n_windows, window).max(axis=1)


def plot_trajectory(trajectory: TrajectoryStore, period_x: Optional[float] = None) -> None:
    """
    Quick-look plot of the drawing, plus the X amplitude envelope when
    `period_x` is given.
    """
    pts = trajectory.points()

    plt.rcParams["figure.constrained_layout.use"] = True
    fig = plt.figure(figsize=(12 if period_x else 7, 6))

    ax = fig.add_subplot(1, 2 if period_x else 1, 1)
    # screen Y grows downwards
    ax.plot(pts[:, 0], -pts[:, 1], 'k', lw=0.3)
    ax.set_aspect("equal")
    ax.set_xlim(-1.05, 1.05)
    ax.set_ylim(-1.05, 1.05)
    ax.set_title(f"Trajectory ({len(trajectory)} points)")

    if period_x:
        env = amplitude_envelope(pts[:, 0], period_x)
        ax_env = fig.add_subplot(1, 2, 2)
        ax_env.plot(np.arange(env.size), env, 'r', lw=2)
        ax_env.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        ax_env.set_xlabel("Period")
        ax_env.set_ylabel("Max |x|")
        ax_env.set_title("X amplitude envelope")

    plt.show()
