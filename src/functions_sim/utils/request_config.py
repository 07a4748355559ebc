"""Utilities for loading request configs from YAML/JSON files.

A request config describes the script to simulate: its source (inline or via
``sourcePath``), arguments, secrets and expected return type. Keys may be
written in camelCase, as the Functions toolkit spells them, or snake_case.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from ..simulation.interfaces import CodeLanguage, Location, RequestConfig, ReturnType

_INT_FIELDS = (
    "max_on_chain_response_bytes",
    "max_execution_time_ms",
    "max_memory_usage_mb",
    "num_allowed_queries",
    "max_query_duration_ms",
    "max_query_url_length",
    "max_query_request_bytes",
    "max_query_response_bytes",
)

_LOCATION_NAMES = {
    "inline": Location.INLINE,
    "remote": Location.REMOTE,
    "donhosted": Location.DON_HOSTED,
    "don_hosted": Location.DON_HOSTED,
}


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _location(value: Any) -> Location:
    if isinstance(value, str) and not value.isdigit():
        try:
            return _LOCATION_NAMES[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown location: {value}") from None
    return Location(int(value))


def _return_type(value: Any):
    # Unknown tags are kept verbatim and rejected by the decoder.
    try:
        return ReturnType.parse(value)
    except ValueError:
        return str(value)


def request_config_from_mapping(data: Mapping[str, Any], *, base_dir: Path | None = None) -> RequestConfig:
    entries: Dict[str, Any] = {_snake_case(str(k)): v for k, v in data.items()}

    source = entries.get("source")
    source_path = entries.get("source_path")
    if source is None and source_path is not None:
        path = Path(source_path)
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        source = path.read_text(encoding="utf-8")
    if source is None:
        raise ValueError("Request config needs 'source' or 'sourcePath'")

    if entries.get("expected_return_type") is None:
        raise ValueError("Request config needs 'expectedReturnType'")

    kwargs: Dict[str, Any] = {
        "source": str(source),
        "expected_return_type": _return_type(entries["expected_return_type"]),
        "args": [str(a) for a in entries.get("args") or []],
        "bytes_args": [str(a) for a in entries.get("bytes_args") or []],
        "secrets": {str(k): str(v) for k, v in (entries.get("secrets") or {}).items()},
    }
    if entries.get("code_location") is not None:
        kwargs["code_location"] = _location(entries["code_location"])
    if entries.get("secrets_location") is not None:
        kwargs["secrets_location"] = _location(entries["secrets_location"])
    if entries.get("code_language") is not None:
        kwargs["code_language"] = CodeLanguage(int(entries["code_language"]))
    for name in _INT_FIELDS:
        if entries.get(name) is not None:
            kwargs[name] = int(entries[name])

    return RequestConfig(**kwargs)


def load_request_config(path: str | Path) -> RequestConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Request config not found: {path}")

    if path.suffix.lower() in {".yaml", ".yml"}:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    else:
        with open(path, "r") as f:
            data = json.load(f)

    if not isinstance(data, Mapping):
        raise ValueError("Request config file must contain a mapping")
    return request_config_from_mapping(data, base_dir=path.parent)
