"""Exports for the simulation subpackage."""

from .interfaces import (
    CodeLanguage,
    Decoder,
    Location,
    RequestConfig,
    ReturnType,
    SimulationOutcome,
    Simulator,
)
from .logging import create_logger
from .runner import ScriptRunner, SimulationFault, format_outcome
from .simulators import HttpSimulator, SimulatorError, ToolkitSimulator

__all__ = [
    "ScriptRunner",
    "SimulationFault",
    "format_outcome",
    "RequestConfig",
    "ReturnType",
    "Location",
    "CodeLanguage",
    "SimulationOutcome",
    "Simulator",
    "Decoder",
    "ToolkitSimulator",
    "HttpSimulator",
    "SimulatorError",
    "create_logger",
]
