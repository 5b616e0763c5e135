"""HTTP JSON-RPC transport for transaction submission and blockhash fetches.

Calls go through one ``requests.Session`` per endpoint (keep-alive, so every
endpoint is measured on a warm connection after its first job) and run on
the transport's own thread pool so concurrent submissions do not block the
event loop. The pool is sized from the endpoint count so that no
submission queues behind another after its send_start is stamped.
"""

from __future__ import annotations

import base64
import asyncio
import logging
import itertools
from typing import Any
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

import requests

from .base import RpcTransport
from .jsonrpc import JsonRpcError, build_request, unwrap_response
from ..state import Endpoint
from ..errors import SubmissionError, UnavailableError
from ..config.timeouts import SEND_TIMEOUT_S, FETCH_TIMEOUT_S
from ..config.rpc import (
    HTTP_MAX_WORKERS,
    HTTP_WORKERS_PER_ENDPOINT,
    SEND_MAX_RETRIES,
    SEND_SKIP_PREFLIGHT,
    BLOCKHASH_COMMITMENT,
    METHOD_SEND_TRANSACTION,
    METHOD_GET_LATEST_BLOCKHASH,
)

logger = logging.getLogger(__name__)


class HttpRpcTransport(RpcTransport):
    """Default RPC collaborator backed by ``requests``."""

    def __init__(
        self,
        *,
        send_timeout_s: float = SEND_TIMEOUT_S,
        fetch_timeout_s: float = FETCH_TIMEOUT_S,
        skip_preflight: bool = SEND_SKIP_PREFLIGHT,
        max_retries: int = SEND_MAX_RETRIES,
        blockhash_commitment: str = BLOCKHASH_COMMITMENT,
        max_workers: int = HTTP_MAX_WORKERS,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._send_timeout_s = send_timeout_s
        self._fetch_timeout_s = fetch_timeout_s
        self._skip_preflight = skip_preflight
        self._max_retries = max_retries
        self._blockhash_commitment = blockhash_commitment
        self._session_factory = session_factory
        self._sessions: dict[str, requests.Session] = {}
        self._ids = itertools.count(1)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="rpcbench-http")

    @classmethod
    def for_endpoints(cls, endpoints: Sequence[Endpoint], **kwargs: Any) -> HttpRpcTransport:
        """Build a transport whose pool never makes a submission wait for a thread.

        Each endpoint gets HTTP_WORKERS_PER_ENDPOINT threads (room for the
        submissions of overlapping pipelined jobs) plus one for the
        blockhash fetch of the next build.
        """
        max_workers = max(1, len(endpoints) * HTTP_WORKERS_PER_ENDPOINT + 1)
        return cls(max_workers=max_workers, **kwargs)

    async def submit(self, endpoint: Endpoint, payload: bytes) -> str:
        params = [
            base64.b64encode(payload).decode("ascii"),
            {
                "encoding": "base64",
                "skipPreflight": self._skip_preflight,
                "maxRetries": self._max_retries,
            },
        ]
        try:
            result = await self._call(endpoint, METHOD_SEND_TRANSACTION, params, self._send_timeout_s)
        except JsonRpcError as exc:
            raise SubmissionError(f"rejected: {exc}", code=exc.code) from exc
        except requests.Timeout as exc:
            raise SubmissionError(f"timeout after {self._send_timeout_s:g}s") from exc
        except (requests.RequestException, ValueError) as exc:
            raise SubmissionError(f"transport: {exc}") from exc
        if not isinstance(result, str):
            raise SubmissionError(f"unexpected sendTransaction result: {result!r}")
        return result

    async def fetch_block_reference(self, endpoint: Endpoint) -> str:
        params = [{"commitment": self._blockhash_commitment}]
        try:
            result = await self._call(endpoint, METHOD_GET_LATEST_BLOCKHASH, params, self._fetch_timeout_s)
        except (JsonRpcError, requests.RequestException, ValueError) as exc:
            raise UnavailableError(f"getLatestBlockhash failed on {endpoint.name}: {exc}") from exc
        try:
            return str(result["value"]["blockhash"])
        except (KeyError, TypeError) as exc:
            raise UnavailableError(f"malformed getLatestBlockhash result from {endpoint.name}: {result!r}") from exc

    def close(self) -> None:
        # called from the event loop; do not block on posts still in flight
        self._executor.shutdown(wait=False, cancel_futures=True)
        for session in self._sessions.values():
            session.close()
        self._sessions.clear()

    async def _call(self, endpoint: Endpoint, method: str, params: list[Any], timeout_s: float) -> Any:
        session = self._session(endpoint)
        body = build_request(next(self._ids), method, params)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self._post, session, endpoint.http_url, body, timeout_s)

    def _session(self, endpoint: Endpoint) -> requests.Session:
        session = self._sessions.get(endpoint.name)
        if session is None:
            session = self._session_factory()
            self._sessions[endpoint.name] = session
        return session

    @staticmethod
    def _post(session: requests.Session, url: str, body: dict[str, Any], timeout_s: float) -> Any:
        response = session.post(url, json=body, timeout=timeout_s)
        response.raise_for_status()
        return unwrap_response(response.json())


__all__ = ["HttpRpcTransport"]
