import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from functions_sim.simulation import RequestConfig, ReturnType, SimulationOutcome  # noqa: E402

SETTINGS_VARS = (
    "REQUEST_CONFIG",
    "SIMULATOR_BACKEND",
    "SIMULATOR_URL",
    "SIMULATOR_HTTP_TIMEOUT",
    "NODE_BINARY",
    "TOOLKIT_WORKDIR",
    "LOG_LEVEL",
)


class StubSimulator:
    """Returns a fixed outcome, or raises a fixed error."""

    def __init__(self, outcome=None, error=None):
        self.outcome = outcome
        self.error = error
        self.configs = []

    async def simulate(self, config):
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        return self.outcome


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every runner setting for the duration of a test."""
    for name in SETTINGS_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def uint_config():
    return RequestConfig(source="return Functions.encodeUint256(42);", expected_return_type=ReturnType.UINT256)


@pytest.fixture
def make_simulator():
    def _make(response=None, error_message=None, raises=None):
        outcome = SimulationOutcome(response_bytes=response, error_message=error_message)
        return StubSimulator(outcome=outcome, error=raises)

    return _make
