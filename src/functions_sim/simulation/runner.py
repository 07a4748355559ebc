"""Single-shot runner: simulate one request script and report the outcome."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO, Tuple, Union

from .interfaces import Decoder, RequestConfig, ReturnType, SimulationOutcome, Simulator
from .logging import PACKAGE_LOGGER, log_captured_output

EXIT_OK = 0
EXIT_FAULT = 1

RESPONSE_LABEL = "Response is : "
ERROR_LABEL = "Error: "

logger = logging.getLogger(f"{PACKAGE_LOGGER}.runner")


@dataclass(frozen=True)
class SimulationFault:
    """A run that did not complete: the simulator or the decoder raised."""

    error: BaseException

    def describe(self) -> str:
        message = str(self.error)
        name = type(self.error).__name__
        return f"{name}: {message}" if message else name


def format_outcome(
    outcome: SimulationOutcome,
    return_type: Union[ReturnType, str],
    decoder: Decoder,
) -> Tuple[str, str]:
    """Render an outcome as ``(stdout_text, stderr_text)``.

    The response and the error are checked independently, so an outcome that
    carries both produces both texts. Decoding errors propagate.
    """
    stdout_text = ""
    stderr_text = ""
    if outcome.has_response:
        decoded = decoder.decode(outcome.response_bytes, return_type)
        stdout_text = f"{RESPONSE_LABEL}\n      {decoded}\n\n"
    if outcome.has_error:
        stderr_text = f"{ERROR_LABEL}{outcome.error_message}\n"
    return stdout_text, stderr_text


class ScriptRunner:
    """Runs the simulator once for a fixed request config."""

    def __init__(
        self,
        *,
        config: RequestConfig,
        simulator: Simulator,
        decoder: Decoder,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._config = config
        self._simulator = simulator
        self._decoder = decoder
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    async def run(self) -> int:
        """Simulate, report, and return the process exit status."""

        result = await self._simulate()

        if isinstance(result, SimulationOutcome):
            try:
                self._report(result)
            except Exception as exc:
                result = SimulationFault(exc)

        if isinstance(result, SimulationFault):
            logger.debug("Simulation fault", exc_info=result.error)
            self.stderr.write(result.describe() + "\n")
            self.stderr.flush()
            return EXIT_FAULT

        return EXIT_OK

    def run_sync(self) -> int:
        return asyncio.run(self.run())

    async def _simulate(self) -> Union[SimulationOutcome, SimulationFault]:
        logger.info("Simulating script with %s", type(self._simulator).__name__)
        try:
            return await self._simulator.simulate(self._config)
        except Exception as exc:
            return SimulationFault(exc)

    def _report(self, outcome: SimulationOutcome) -> None:
        log_captured_output(logger, outcome.captured_terminal_output)

        stdout_text, stderr_text = format_outcome(
            outcome, self._config.expected_return_type, self._decoder
        )
        if stdout_text:
            self.stdout.write(stdout_text)
            self.stdout.flush()
        if stderr_text:
            self.stderr.write(stderr_text)
            self.stderr.flush()
