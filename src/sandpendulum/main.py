"""
Application Initialization
==========================
This module parses the command line, builds the simulation state and the main
window, and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Turns command line options into a `SimulationConfig`.
2. Instantiates the Simulation State (model).
3. Instantiates the Main Window (view) and passes the state into it.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from sandpendulum import __version__
from sandpendulum.config import (
    APP_NAME, SimulationConfig, DEFAULT_PERIOD_X, MAX_POINTS, POINTS_PER_TIMER, POINTS_PER_SECOND
)
from sandpendulum.logging_config import setup_logging, logging_level
from sandpendulum.model.state import SimulationState
from sandpendulum.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sandpendulum", description="Sand pendulum pattern drawing toy")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-l', '--log-level', type=logging_level, default=logging.INFO,
                        help="set logging level (name or number)")
    parser.add_argument('--log-file', default=None,
                        help="also write the log to this file")
    parser.add_argument('--period-x', type=float, default=DEFAULT_PERIOD_X,
                        help="X axis period in simulation ticks (default: %(default)s)")
    parser.add_argument('--max-points', type=int, default=MAX_POINTS,
                        help="number of points before the drawing stops (default: %(default)s)")
    parser.add_argument('--points-per-timer', type=int, default=POINTS_PER_TIMER,
                        help="points advanced per timer tick (default: %(default)s)")
    parser.add_argument('--points-per-second', type=int, default=POINTS_PER_SECOND,
                        help="nominal drawing speed (default: %(default)s)")
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(
        period_x=args.period_x,
        max_points=args.max_points,
        points_per_timer=args.points_per_timer,
        points_per_second=args.points_per_second,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    # Qt consumes its own options from sys.argv; only ours are parsed here
    args, qt_args = parser.parse_known_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    # 2. Create the Qt Application
    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName(APP_NAME)

    # 3. Initialize the Data Model
    state = SimulationState(config=config)
    logger.info(
        f"Period X = {config.period_x}, capacity = {config.max_points}, "
        f"tick = {config.timer_interval_ms} ms x {config.points_per_timer} points"
    )

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(state)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
