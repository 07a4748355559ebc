"""Process entry point: simulate the configured request script once."""

from __future__ import annotations

import sys
from typing import Optional

from .codec import ResultDecoder
from .simulation import ScriptRunner, SimulationFault, create_logger
from .simulation.runner import EXIT_FAULT
from .utils import RunnerSettings, create_simulator_from_config, load_request_config


def main(settings: Optional[RunnerSettings] = None) -> int:
    """Wire settings, request config and simulator, then run once.

    Returns the exit status for the host process.
    """
    try:
        settings = settings or RunnerSettings()
        logger = create_logger(settings.log_level)
        logger.info("Loading request config from %s", settings.request_config_path)
        config = load_request_config(settings.request_config_path)
        simulator = create_simulator_from_config(settings)
    except Exception as exc:
        print(SimulationFault(exc).describe(), file=sys.stderr)
        return EXIT_FAULT

    runner = ScriptRunner(config=config, simulator=simulator, decoder=ResultDecoder())
    try:
        return runner.run_sync()
    finally:
        close = getattr(simulator, "close", None)
        if callable(close):
            close()


def run() -> None:
    sys.exit(main())
