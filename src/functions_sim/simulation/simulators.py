from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

import requests

from .interfaces import RequestConfig, SimulationOutcome, Simulator
from .logging import PACKAGE_LOGGER

logger = logging.getLogger(f"{PACKAGE_LOGGER}.simulators")

# Reads one request config as JSON on stdin, writes one outcome as JSON on stdout.
TOOLKIT_BRIDGE_SCRIPT = """
const { simulateScript } = require("@chainlink/functions-toolkit");
let raw = "";
process.stdin.setEncoding("utf8");
process.stdin.on("data", (chunk) => { raw += chunk; });
process.stdin.on("end", async () => {
  const config = JSON.parse(raw);
  const { responseBytesHexstring, errorString, capturedTerminalOutput } =
    await simulateScript(config);
  process.stdout.write(JSON.stringify({
    responseBytesHexstring: responseBytesHexstring ?? null,
    errorString: errorString ?? null,
    capturedTerminalOutput: capturedTerminalOutput ?? null,
  }));
});
"""

STDERR_TAIL_CHARS = 2000


class SimulatorError(RuntimeError):
    """The simulator could not produce an outcome."""


def _parse_outcome(raw: str, *, origin: str) -> SimulationOutcome:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SimulatorError(f"{origin} returned invalid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise SimulatorError(f"{origin} returned {type(data).__name__}, expected a JSON object")
    return SimulationOutcome.from_payload(data)


class ToolkitSimulator(Simulator):
    """Runs ``simulateScript`` from the Functions toolkit in a Node subprocess."""

    def __init__(
        self,
        *,
        node_binary: str = "node",
        workdir: Optional[Path] = None,
        command: Optional[Sequence[str]] = None,
    ):
        # Node resolves the toolkit from workdir's node_modules.
        self._command = list(command) if command else [node_binary, "-e", TOOLKIT_BRIDGE_SCRIPT]
        self._workdir = workdir

    @property
    def command(self) -> Sequence[str]:
        return tuple(self._command)

    async def simulate(self, config: RequestConfig) -> SimulationOutcome:
        payload = json.dumps(config.to_payload()).encode("utf-8")
        logger.debug("Launching %s (cwd=%s)", self._command[0], self._workdir)

        process = await asyncio.create_subprocess_exec(
            *self._command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(self._workdir) if self._workdir else None,
        )
        stdout, stderr = await process.communicate(payload)

        if process.returncode != 0:
            tail = stderr.decode("utf-8", errors="replace").strip()[-STDERR_TAIL_CHARS:]
            raise SimulatorError(
                f"Toolkit bridge exited with status {process.returncode}"
                + (f": {tail}" if tail else "")
            )
        return _parse_outcome(stdout.decode("utf-8", errors="replace"), origin="Toolkit bridge")


class HttpSimulator(Simulator):
    """Posts the request config to a simulation service."""

    def __init__(self, *, base_url: str = "http://localhost:8787", timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/simulate"

    async def simulate(self, config: RequestConfig) -> SimulationOutcome:
        return await asyncio.to_thread(self._post, config)

    def close(self) -> None:
        self.session.close()

    def _post(self, config: RequestConfig) -> SimulationOutcome:
        logger.debug("POST %s", self.endpoint)
        response = self.session.post(
            self.endpoint,
            json=config.to_payload(),
            timeout=self.timeout,
        )

        if response.status_code != 200:
            raise SimulatorError(f"HTTP {response.status_code}: {response.text}")
        return _parse_outcome(response.text, origin=self.endpoint)
