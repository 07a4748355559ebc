"""Lightweight runner smoke test avoiding Node and network dependencies.

Run with:
    PYTHONPATH=src python examples/smoke_test.py

It wires a stub simulator into the ScriptRunner to make sure loading,
simulating, decoding and reporting still run end-to-end after merges.
"""

from __future__ import annotations

from pathlib import Path

from functions_sim import ScriptRunner, SimulationOutcome
from functions_sim.codec import ResultDecoder
from functions_sim.simulation import RequestConfig
from functions_sim.utils import load_request_config


class FixedSimulator:
    """Answers every request with the same outcome."""

    def __init__(self, outcome: SimulationOutcome):
        self.outcome = outcome
        self.calls = 0

    async def simulate(self, config: RequestConfig) -> SimulationOutcome:
        self.calls += 1
        return self.outcome


def main() -> None:
    config = load_request_config(Path(__file__).parent / "request_config.yaml")
    simulator = FixedSimulator(
        SimulationOutcome(
            response_bytes="0x2a",
            captured_terminal_output="position qty: 4.2\n",
        )
    )
    runner = ScriptRunner(config=config, simulator=simulator, decoder=ResultDecoder())
    status = runner.run_sync()
    print(f"Ran {simulator.calls} simulation(s), exit status {status}")


if __name__ == "__main__":
    main()
