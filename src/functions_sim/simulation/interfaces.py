"""Data model and protocol definitions the runner depends on.

The simulator and decoder are external collaborators; concrete adapters live
in ``simulators.py`` and ``functions_sim.codec``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Mapping, Optional, Protocol, Union


class ReturnType(str, Enum):
    """Encodings a script response can be decoded with."""

    UINT256 = "uint256"
    INT256 = "int256"
    STRING = "string"
    BYTES = "bytes"

    @classmethod
    def parse(cls, tag: Union[str, "ReturnType"]) -> "ReturnType":
        if isinstance(tag, cls):
            return tag
        normalized = str(tag).strip().lower()
        normalized = _RETURN_TYPE_ALIASES.get(normalized, normalized)
        return cls(normalized)


_RETURN_TYPE_ALIASES = {"uint": "uint256", "int": "int256"}


class Location(IntEnum):
    INLINE = 0
    REMOTE = 1
    DON_HOSTED = 2


class CodeLanguage(IntEnum):
    JAVASCRIPT = 0


DecodedValue = Union[int, str]


@dataclass(frozen=True)
class RequestConfig:
    """Everything needed to simulate one request script.

    ``expected_return_type`` is kept as given (possibly a raw string) so that
    an unknown tag surfaces when the result is decoded, not when loading.
    """

    source: str
    expected_return_type: Union[ReturnType, str]
    args: List[str] = field(default_factory=list)
    bytes_args: List[str] = field(default_factory=list)
    secrets: Mapping[str, str] = field(default_factory=dict)
    code_location: Location = Location.INLINE
    secrets_location: Location = Location.DON_HOSTED
    code_language: CodeLanguage = CodeLanguage.JAVASCRIPT
    max_on_chain_response_bytes: int = 256
    max_execution_time_ms: int = 10_000
    max_memory_usage_mb: int = 128
    num_allowed_queries: int = 5
    max_query_duration_ms: int = 9_000
    max_query_url_length: int = 2_048
    max_query_request_bytes: int = 2_048
    max_query_response_bytes: int = 2_097_152

    def to_payload(self) -> Dict[str, object]:
        """Render the camelCase mapping accepted by ``simulateScript``."""
        return_type = self.expected_return_type
        if isinstance(return_type, ReturnType):
            return_type = return_type.value
        return {
            "source": self.source,
            "args": list(self.args),
            "bytesArgs": list(self.bytes_args),
            "secrets": dict(self.secrets),
            "expectedReturnType": return_type,
            "codeLocation": int(self.code_location),
            "secretsLocation": int(self.secrets_location),
            "codeLanguage": int(self.code_language),
            "maxOnChainResponseBytes": self.max_on_chain_response_bytes,
            "maxExecutionTimeMs": self.max_execution_time_ms,
            "maxMemoryUsageMb": self.max_memory_usage_mb,
            "numAllowedQueries": self.num_allowed_queries,
            "maxQueryDurationMs": self.max_query_duration_ms,
            "maxQueryUrlLength": self.max_query_url_length,
            "maxQueryRequestBytes": self.max_query_request_bytes,
            "maxQueryResponseBytes": self.max_query_response_bytes,
        }


@dataclass(frozen=True)
class SimulationOutcome:
    """What a simulator reports after running a script.

    Neither field excludes the other: a simulator may return both, or neither.
    """

    response_bytes: Optional[str] = None
    error_message: Optional[str] = None
    captured_terminal_output: Optional[str] = None

    @property
    def has_response(self) -> bool:
        return bool(self.response_bytes)

    @property
    def has_error(self) -> bool:
        return bool(self.error_message)

    @classmethod
    def from_payload(cls, data: Mapping[str, object]) -> "SimulationOutcome":
        """Build an outcome from the toolkit's wire field names."""
        def _optional_str(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            response_bytes=_optional_str("responseBytesHexstring"),
            error_message=_optional_str("errorString"),
            captured_terminal_output=_optional_str("capturedTerminalOutput"),
        )


class Simulator(Protocol):
    """Executes a request script locally and reports its outcome."""

    async def simulate(self, config: RequestConfig) -> SimulationOutcome:
        ...


class Decoder(Protocol):
    """Interprets a hex response according to a return type tag."""

    def decode(self, hex_string: str, return_type: Union[ReturnType, str]) -> DecodedValue:
        ...
