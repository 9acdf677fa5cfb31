"""
Simulation State (Data Model)
=============================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the trajectory, the live parameters, both
   viewport mappings and the driver phase in one place.
2. Decoupling: Views read from this object; the driver and the GUI slots
   write to it. Nothing in the core reaches for module-level globals.

Classes:
    DriverPhase: The states of the pacing state machine.
    SimulationState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from sandpendulum.config import SimulationConfig
from sandpendulum.model.parameters import SimulationParameters
from sandpendulum.model.trajectory import TrajectoryStore
from sandpendulum.model.viewport import ViewportMapping


class DriverPhase(Enum):
    """
    IDLE -> RUNNING          timer fires
    RUNNING -> LATE_CATCHUP  timer fires again during the burst
    LATE_CATCHUP -> RUNNING  next burst starts immediately
    RUNNING -> DONE          capacity reached
    any -> DEAD              teardown
    """
    IDLE = "idle"
    RUNNING = "running"
    LATE_CATCHUP = "late"
    DONE = "done"
    DEAD = "dead"


@dataclass
class SimulationState:
    """
    Everything one canvas needs to simulate and draw.
    Pass this instance to the driver, the renderer and the views.
    """
    config: SimulationConfig = field(default_factory=SimulationConfig)
    parameters: Optional[SimulationParameters] = None
    trajectory: Optional[TrajectoryStore] = None

    screen_mapping: ViewportMapping = field(default_factory=ViewportMapping)
    print_mapping: ViewportMapping = field(default_factory=ViewportMapping)

    phase: DriverPhase = DriverPhase.IDLE

    def __post_init__(self) -> None:
        if self.parameters is None:
            self.parameters = SimulationParameters(period_x=self.config.period_x)
        if self.trajectory is None:
            self.trajectory = TrajectoryStore(self.config.max_points)

    @property
    def is_active(self) -> bool:
        """True once a seed point has been placed."""
        return not self.trajectory.is_empty()

    @property
    def is_busy(self) -> bool:
        return self.phase in (DriverPhase.RUNNING, DriverPhase.LATE_CATCHUP)
