"""Configuration management for the script simulation runner.

Reads configuration from config.env file or environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Literal

logger = logging.getLogger("functions_sim.config")


class RunnerSettings:
    """Configuration manager for runner settings."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to .env file (default: config.env in project root)
        """
        self._load_env(config_file)

    def _load_env(self, config_file: Optional[str]):
        """Load environment variables from file."""
        if config_file is None:
            # Look for config.env in project root
            project_root = Path(__file__).parent.parent.parent.parent
            config_file = project_root / "config.env"

        config_path = Path(config_file)
        if config_path.exists():
            with open(config_path) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#') and '=' in line:
                        key, value = line.split('=', 1)
                        key = key.strip()
                        value = value.strip()
                        # Don't override existing env vars
                        if key not in os.environ:
                            os.environ[key] = value

    @property
    def request_config_path(self) -> Path:
        """Get path of the request config file to simulate."""
        return Path(os.getenv("REQUEST_CONFIG", "request_config.yaml"))

    @property
    def simulator_backend(self) -> Literal["toolkit", "http"]:
        """Get simulator backend from config."""
        return os.getenv("SIMULATOR_BACKEND", "toolkit").strip().lower()

    @property
    def simulator_url(self) -> str:
        """Get base URL of the HTTP simulation service."""
        return os.getenv("SIMULATOR_URL", "http://localhost:8787")

    @property
    def simulator_http_timeout(self) -> float:
        """Get HTTP request timeout in seconds."""
        return float(os.getenv("SIMULATOR_HTTP_TIMEOUT", "60"))

    @property
    def node_binary(self) -> str:
        """Get Node.js executable used by the toolkit backend."""
        return os.getenv("NODE_BINARY", "node")

    @property
    def toolkit_workdir(self) -> Optional[Path]:
        """Get directory whose node_modules provides the toolkit."""
        value = os.getenv("TOOLKIT_WORKDIR", "").strip()
        return Path(value) if value else None

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return os.getenv("LOG_LEVEL", "WARNING").strip().upper()


def create_simulator_from_config(settings: Optional[RunnerSettings] = None):
    """
    Create a simulator based on configuration.

    Args:
        settings: Configuration object (default: loads from config.env)

    Returns:
        Simulator instance (toolkit subprocess or HTTP service)

    Example:
        >>> settings = RunnerSettings()
        >>> simulator = create_simulator_from_config(settings)
        >>> # Uses SIMULATOR_BACKEND from config.env
    """
    if settings is None:
        settings = RunnerSettings()

    if settings.simulator_backend == "toolkit":
        from ..simulation import ToolkitSimulator

        logger.info("Using toolkit simulator (node=%s)", settings.node_binary)
        return ToolkitSimulator(
            node_binary=settings.node_binary,
            workdir=settings.toolkit_workdir,
        )

    elif settings.simulator_backend == "http":
        from ..simulation import HttpSimulator

        logger.info("Using HTTP simulator (url=%s)", settings.simulator_url)
        return HttpSimulator(
            base_url=settings.simulator_url,
            timeout=settings.simulator_http_timeout,
        )

    else:
        raise ValueError(
            f"Unknown simulator backend: {settings.simulator_backend}. "
            f"Must be 'toolkit' or 'http'"
        )
