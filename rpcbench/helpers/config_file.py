"""JSON configuration file loader.

Example::

    {
      "keypair_path": ".private_key",
      "recipient": "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin",
      "amount_lamports": 1000,
      "num_transactions": 10,
      "rpc_nodes": [
        {"name": "helius", "http_url": "https://...", "ws_url": "wss://..."},
        {"http_url": "https://api.mainnet-beta.solana.com",
         "ws_url": "wss://api.mainnet-beta.solana.com"}
      ],
      "confirmation_timeout_seconds": 60,
      "failure_score": {"mode": "endpoint_count", "timed_out_penalty": 0}
    }

Relative ``keypair_path`` values resolve against the config file's directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from ..chain.keys import Keypair
from ..config.rpc import DEFAULT_COMMITMENT
from ..config.timeouts import CONFIRM_TIMEOUT_S
from ..errors import ConfigurationError
from ..state import Endpoint, BenchmarkConfig, FailureScorePolicy
from .validation import validate_config

_TIMEOUT_KEYS = ("confirmation_timeout_seconds", "transaction_timeout_seconds")


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ConfigurationError("missing_field", f"config is missing required field {key!r}")
    return data[key]


def _optional_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError("invalid_field", f"{key} must be true or false, got {value!r}")
    return value


def default_endpoint_name(http_url: str) -> str:
    """Name an endpoint after its HTTP host, port and path when the file gives no name.

    Credentials and the query string (where providers put API keys) are left out.
    """
    parsed = urlparse(http_url)
    if not parsed.hostname:
        return http_url
    try:
        port = parsed.port
    except ValueError:
        port = None
    host = f"{parsed.hostname}:{port}" if port else parsed.hostname
    return host + parsed.path.rstrip("/")


def _unique_name(base: str, taken: set[str]) -> str:
    if base not in taken:
        return base
    suffix = 2
    while f"{base}#{suffix}" in taken:
        suffix += 1
    return f"{base}#{suffix}"


def parse_endpoints(nodes: Any) -> tuple[Endpoint, ...]:
    """Parse ``rpc_nodes``; unnamed nodes get a default name unique within the file."""
    if not isinstance(nodes, list):
        raise ConfigurationError("invalid_field", "rpc_nodes must be a list")
    for position, node in enumerate(nodes):
        if not isinstance(node, dict):
            raise ConfigurationError("invalid_field", f"rpc_nodes[{position}] must be an object")

    # explicit names are reserved first; duplicates among them are left to validation
    taken = {str(node["name"]) for node in nodes if node.get("name")}
    endpoints: list[Endpoint] = []
    for position, node in enumerate(nodes):
        http_url = _require(node, "http_url")
        ws_url = _require(node, "ws_url")
        if not isinstance(http_url, str) or not isinstance(ws_url, str):
            raise ConfigurationError("invalid_field", f"rpc_nodes[{position}] URLs must be strings")
        name = node.get("name")
        if not name:
            name = _unique_name(default_endpoint_name(http_url), taken)
            taken.add(name)
        endpoints.append(Endpoint(name=str(name), http_url=http_url, ws_url=ws_url))
    return tuple(endpoints)


def parse_failure_policy(raw: Any) -> FailureScorePolicy:
    if raw is None:
        return FailureScorePolicy()
    if not isinstance(raw, dict):
        raise ConfigurationError("invalid_field", "failure_score must be an object")
    unknown = set(raw) - {"mode", "fixed_value", "timed_out_penalty"}
    if unknown:
        raise ConfigurationError("invalid_field", f"unknown failure_score keys: {', '.join(sorted(unknown))}")
    defaults = FailureScorePolicy()
    return FailureScorePolicy(
        mode=raw.get("mode", defaults.mode),
        fixed_value=raw.get("fixed_value", defaults.fixed_value),
        timed_out_penalty=raw.get("timed_out_penalty", defaults.timed_out_penalty),
    )


def _timeout(data: dict[str, Any]) -> float:
    for key in _TIMEOUT_KEYS:
        if key in data:
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError("invalid_timeout", f"{key} must be a number, got {value!r}")
            return float(value)
    return CONFIRM_TIMEOUT_S


def config_from_dict(data: Any, *, base_dir: Path | None = None) -> BenchmarkConfig:
    """Build and validate a BenchmarkConfig from parsed JSON."""
    if not isinstance(data, dict):
        raise ConfigurationError("invalid_config", "config root must be a JSON object")

    raw_keypair_path = _require(data, "keypair_path")
    if not isinstance(raw_keypair_path, str) or not raw_keypair_path:
        raise ConfigurationError("invalid_field", "keypair_path must be a non-empty string")
    keypair_path = Path(raw_keypair_path).expanduser()
    if base_dir is not None and not keypair_path.is_absolute():
        keypair_path = base_dir / keypair_path

    config = BenchmarkConfig(
        sender=Keypair.from_file(keypair_path),
        recipient=_require(data, "recipient"),
        amount=_require(data, "amount_lamports"),
        num_transactions=_require(data, "num_transactions"),
        endpoints=parse_endpoints(_require(data, "rpc_nodes")),
        reference_endpoint_index=data.get("reference_node_index", 0),
        confirmation_timeout_s=_timeout(data),
        failure_policy=parse_failure_policy(data.get("failure_score")),
        commitment=data.get("commitment", DEFAULT_COMMITMENT),
        pipeline_jobs=_optional_bool(data, "pipeline_jobs", True),
        vary_amount=_optional_bool(data, "vary_amount", True),
    )
    validate_config(config)
    return config


def load_config(path: str | Path) -> BenchmarkConfig:
    """Read a JSON config file.

    Raises:
        ConfigurationError: If the file is unreadable, not JSON, or any
            field is missing or invalid.
    """
    config_path = Path(path).expanduser()
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError("config_unreadable", f"cannot read config {config_path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError("invalid_config", f"config {config_path} is not valid JSON: {exc}") from exc
    return config_from_dict(data, base_dir=config_path.parent)


__all__ = [
    "config_from_dict",
    "default_endpoint_name",
    "load_config",
    "parse_endpoints",
    "parse_failure_policy",
]
