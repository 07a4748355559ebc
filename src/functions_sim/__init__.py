"""Local simulation of Functions request scripts with decoded reporting."""

from .simulation.runner import ScriptRunner, format_outcome
from .simulation.interfaces import RequestConfig, ReturnType, SimulationOutcome

__all__ = ["ScriptRunner", "format_outcome", "RequestConfig", "ReturnType", "SimulationOutcome"]
