"""JSON-RPC 2.0 framing shared by the HTTP and WebSocket clients."""

from __future__ import annotations

import json
from typing import Any

from ..config.rpc import JSONRPC_VERSION


class JsonRpcError(Exception):
    """An ``error`` object returned by the node."""

    def __init__(self, code: int | None, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.code}: {self.message}"


def build_request(request_id: int, method: str, params: list[Any]) -> dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "method": method,
        "params": params,
    }


def unwrap_response(body: Any) -> Any:
    """Return ``result`` from a response body or raise JsonRpcError."""
    if not isinstance(body, dict):
        raise JsonRpcError(None, f"malformed JSON-RPC response: {body!r}")
    error = body.get("error")
    if error is not None:
        if isinstance(error, dict):
            raise JsonRpcError(error.get("code"), str(error.get("message") or "unknown error"))
        raise JsonRpcError(None, str(error))
    if "result" not in body:
        raise JsonRpcError(None, "JSON-RPC response has neither result nor error")
    return body["result"]


def render_error_value(err: Any) -> str | None:
    """Render a notification ``err`` field as text; None when empty."""
    if err is None or err == {} or err == "":
        return None
    if isinstance(err, str):
        return err
    return json.dumps(err, separators=(",", ":"), sort_keys=True)


__all__ = ["JsonRpcError", "build_request", "render_error_value", "unwrap_response"]
