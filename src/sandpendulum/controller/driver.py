"""
Simulation Driver (Pacing State Machine)
========================================
Advances the pendulum in bursts on a periodic timer.

Why is this file needed?
------------------------
1. Pacing: every timer tick advances `points_per_timer` points. Each point is
   integrated, appended and painted immediately (no full repaint).
2. Responsiveness: after every point the host event loop is pumped so clicks
   and resizes are not starved during a burst.
3. Backpressure: the event pump can deliver another tick while a burst is
   still running. That tick does not start an overlapping burst; it marks the
   driver late, and the running burst is followed by another one straight
   away (catch-up).

The driver only talks to its host through the `TickTimer` protocol and plain
callbacks, so it runs the same under Qt and in the tests.

Classes:
    TickTimer: Protocol of the periodic timer service.
    PendulumDriver: The state machine.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from sandpendulum.config import PROGRESS_EVERY
from sandpendulum.model import integrator
from sandpendulum.model.state import DriverPhase, SimulationState
from sandpendulum.model.trajectory import Point

logger = logging.getLogger(__name__)


class TickTimer(Protocol):
    def start(self, interval_ms: int) -> None: ...

    def stop(self) -> None: ...


class PendulumDriver:
    def __init__(
        self,
        state: SimulationState,
        timer: TickTimer,
        on_point: Callable[[int], None],
        pump_events: Optional[Callable[[], None]] = None,
        on_progress: Optional[Callable[[int], None]] = None,
        on_done: Optional[Callable[[], None]] = None,
    ) -> None:
        self.state = state
        self.timer = timer
        self.on_point = on_point
        self.pump_events = pump_events
        self.on_progress = on_progress
        self.on_done = on_done

        # Bumped by every reset so an interrupted burst notices it is stale
        self._generation = 0

    # --- PROPERTIES ---

    @property
    def phase(self) -> DriverPhase:
        return self.state.phase

    @property
    def interval_ms(self) -> int:
        return self.state.config.timer_interval_ms

    # --- HOST EVENTS ---

    def reset(self, seed: Point) -> None:
        """Start a new drawing from `seed` and (re)start the timer."""
        self._generation += 1
        self.state.trajectory.reset(seed)
        self.state.phase = DriverPhase.IDLE
        self.timer.start(self.interval_ms)
        logger.info(f"New drawing seeded at ({seed[0]:.4f}, {seed[1]:.4f})")

    def tick(self) -> None:
        """Timer callback."""
        phase = self.state.phase
        if phase in (DriverPhase.DONE, DriverPhase.DEAD):
            return
        if not self.state.is_active:
            return
        if self.state.is_busy:
            self.state.phase = DriverPhase.LATE_CATCHUP
            return
        self._run_bursts()

    def shutdown(self) -> None:
        """Teardown: abort any burst at the next point and stop ticking."""
        self.state.phase = DriverPhase.DEAD
        self.timer.stop()
        logger.debug("Driver stopped.")

    # --- INTERNALS ---

    def _run_bursts(self) -> None:
        generation = self._generation
        count = self.state.config.points_per_timer
        while True:
            self.state.phase = DriverPhase.RUNNING
            for _ in range(count):
                if not self._advance_one():
                    return
                if self.pump_events is not None:
                    self.pump_events()
                if self._generation != generation or self.state.phase is DriverPhase.DEAD:
                    # reset or teardown happened inside the event pump
                    return
            if self.state.phase is not DriverPhase.LATE_CATCHUP:
                self.state.phase = DriverPhase.IDLE
                return
            logger.debug("Tick arrived during burst, catching up.")

    def _advance_one(self) -> bool:
        """Advance a single point. Returns False when the drawing is complete."""
        trajectory = self.state.trajectory
        if trajectory.is_full():
            self._finish()
            return False

        index = integrator.advance(trajectory, self.state.parameters)
        self.on_point(index)

        length = index + 1
        if self.on_progress is not None and length % PROGRESS_EVERY == 0:
            self.on_progress(length)
        if trajectory.is_full():
            self._finish()
            return False
        return True

    def _finish(self) -> None:
        self.timer.stop()
        self.state.phase = DriverPhase.DONE
        logger.info(f"Drawing complete after {len(self.state.trajectory)} points.")
        if self.on_done is not None:
            self.on_done()
