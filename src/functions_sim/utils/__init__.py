"""Utility modules for the script simulation runner."""

from .config import RunnerSettings, create_simulator_from_config
from .request_config import load_request_config, request_config_from_mapping

__all__ = [
    "RunnerSettings",
    "create_simulator_from_config",
    "load_request_config",
    "request_config_from_mapping",
]
