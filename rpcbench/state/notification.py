"""Signature notification dataclass."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TerminalNotification:
    """The single notification a signature subscription delivers.

    Attributes:
        error: Transaction error rendered as text; None when it succeeded.
        slot: Slot reported in the notification context.
    """

    error: str | None = None
    slot: int | None = None


__all__ = ["TerminalNotification"]
