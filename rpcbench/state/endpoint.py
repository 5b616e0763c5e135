"""Endpoint identity dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Endpoint:
    """One RPC node under test.

    Attributes:
        name: Display label, unique within a run.
        http_url: JSON-RPC submission address (http/https).
        ws_url: Push-notification address (ws/wss).
    """

    name: str
    http_url: str
    ws_url: str


__all__ = ["Endpoint"]
