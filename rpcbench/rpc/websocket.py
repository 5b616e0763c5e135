"""WebSocket signature subscriptions.

Each subscription owns one connection:

1. connect to the endpoint's ws_url
2. send ``signatureSubscribe`` and wait for the acknowledgement carrying the
   subscription id
3. ``next_notification()`` reads frames until the matching
   ``signatureNotification`` arrives (the node drops the subscription after
   sending it)
4. ``unsubscribe()`` sends ``signatureUnsubscribe`` when no notification
   was received, then closes the connection

Opening a connection per (job, endpoint) keeps subscriptions independent:
a slow or dead socket only affects its own outcome.
"""

from __future__ import annotations

import json
import asyncio
import logging
import contextlib
import itertools
from typing import Any
from collections.abc import Callable

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .base import SignatureSubscriber, SubscriptionHandle
from .jsonrpc import JsonRpcError, build_request, unwrap_response, render_error_value
from ..state import Endpoint, TerminalNotification
from ..errors import SubscriptionError
from ..config.timeouts import SUBSCRIBE_ACK_TIMEOUT_S
from ..config.rpc import (
    WS_MAX_QUEUE,
    WS_CLOSE_TIMEOUT_S,
    METHOD_SIGNATURE_SUBSCRIBE,
    METHOD_SIGNATURE_UNSUBSCRIBE,
    METHOD_SIGNATURE_NOTIFICATION,
)

logger = logging.getLogger(__name__)

_CONNECT_ERRORS = (OSError, asyncio.TimeoutError, WebSocketException)


class WebSocketSubscription(SubscriptionHandle):
    """One open ``signatureSubscribe`` subscription on its own connection."""

    def __init__(self, ws, endpoint: Endpoint, signature: str, request_ids: itertools.count) -> None:
        self._ws = ws
        self._endpoint = endpoint
        self._signature = signature
        self._request_ids = request_ids
        self._subscription_id: int | None = None
        self._buffered: list[dict[str, Any]] = []
        self._notified = False
        self._closed = False

    @property
    def subscription_id(self) -> int | None:
        return self._subscription_id

    async def open(self, level: str, ack_timeout_s: float) -> None:
        """Send the subscribe request and wait for its acknowledgement."""
        request_id = next(self._request_ids)
        request = build_request(
            request_id,
            METHOD_SIGNATURE_SUBSCRIBE,
            [self._signature, {"commitment": level}],
        )
        try:
            await self._ws.send(json.dumps(request))
            await asyncio.wait_for(self._await_ack(request_id), timeout=ack_timeout_s)
        except asyncio.TimeoutError as exc:
            raise SubscriptionError(f"no acknowledgement within {ack_timeout_s:g}s") from exc
        except _CONNECT_ERRORS as exc:
            raise SubscriptionError(f"subscribe failed: {exc}") from exc
        logger.debug(
            "Subscribed to %s on %s (subscription %s)",
            self._signature,
            self._endpoint.name,
            self._subscription_id,
        )

    async def next_notification(self) -> TerminalNotification | None:
        while True:
            msg = self._buffered.pop(0) if self._buffered else await self._recv_message()
            if msg is None:
                return None
            notification = self._match_notification(msg)
            if notification is not None:
                self._notified = True
                return notification
            logger.debug("Ignoring frame on %s: %s", self._endpoint.name, msg)

    async def unsubscribe(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._subscription_id is not None and not self._notified:
                request = build_request(
                    next(self._request_ids),
                    METHOD_SIGNATURE_UNSUBSCRIBE,
                    [self._subscription_id],
                )
                with contextlib.suppress(*_CONNECT_ERRORS):
                    await self._ws.send(json.dumps(request))
        finally:
            with contextlib.suppress(*_CONNECT_ERRORS):
                await self._ws.close()

    async def _await_ack(self, request_id: int) -> None:
        while True:
            msg = await self._recv_message()
            if msg is None:
                raise SubscriptionError("connection closed before acknowledgement")
            if msg.get("id") == request_id:
                try:
                    result = unwrap_response(msg)
                except JsonRpcError as exc:
                    raise SubscriptionError(f"subscribe rejected: {exc}") from exc
                if not isinstance(result, int):
                    raise SubscriptionError(f"unexpected subscription id: {result!r}")
                self._subscription_id = result
                return
            if msg.get("method") == METHOD_SIGNATURE_NOTIFICATION:
                self._buffered.append(msg)

    def _match_notification(self, msg: dict[str, Any]) -> TerminalNotification | None:
        if msg.get("method") != METHOD_SIGNATURE_NOTIFICATION:
            return None
        params = msg.get("params") or {}
        if params.get("subscription") != self._subscription_id:
            return None
        result = params.get("result") or {}
        value = result.get("value") or {}
        context = result.get("context") or {}
        slot = context.get("slot")
        return TerminalNotification(
            error=render_error_value(value.get("err")),
            slot=slot if isinstance(slot, int) else None,
        )

    async def _recv_message(self) -> dict[str, Any] | None:
        """Return the next JSON object frame; None once the connection closes."""
        while True:
            try:
                raw = await self._ws.recv()
            except ConnectionClosed:
                return None
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8", errors="replace")
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Invalid JSON frame on %s: %r", self._endpoint.name, raw)
                continue
            if isinstance(msg, dict):
                return msg
            logger.warning("Unexpected frame on %s: %r", self._endpoint.name, raw)


class WebSocketSubscriber(SignatureSubscriber):
    """Default subscription collaborator backed by ``websockets``."""

    def __init__(
        self,
        *,
        ack_timeout_s: float = SUBSCRIBE_ACK_TIMEOUT_S,
        connect: Callable[..., Any] = websockets.connect,
    ) -> None:
        self._ack_timeout_s = ack_timeout_s
        self._connect = connect
        self._request_ids = itertools.count(1)

    async def subscribe(self, endpoint: Endpoint, signature: str, level: str) -> WebSocketSubscription:
        try:
            ws = await self._connect(
                endpoint.ws_url,
                max_queue=WS_MAX_QUEUE,
                close_timeout=WS_CLOSE_TIMEOUT_S,
            )
        except _CONNECT_ERRORS as exc:
            raise SubscriptionError(f"cannot connect to {endpoint.ws_url}: {exc}") from exc

        subscription = WebSocketSubscription(ws, endpoint, signature, self._request_ids)
        try:
            await subscription.open(level, self._ack_timeout_s)
        except BaseException:
            await subscription.unsubscribe()
            raise
        return subscription


__all__ = ["WebSocketSubscriber", "WebSocketSubscription"]
