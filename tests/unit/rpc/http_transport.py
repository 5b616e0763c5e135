"""Unit tests for the HTTP JSON-RPC transport."""

from __future__ import annotations

import base64
import asyncio

import pytest
import requests

from rpcbench.rpc import HttpRpcTransport
from rpcbench.errors import SubmissionError, UnavailableError
from tests.helpers.fakes import make_endpoint


class _Response:
    def __init__(self, body, status: int = 200) -> None:
        self._body = body
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class _Session:
    def __init__(self, reply) -> None:
        self.reply = reply
        self.posts: list[tuple[str, dict, float]] = []
        self.closed = False

    def post(self, url: str, *, json: dict, timeout: float):
        self.posts.append((url, json, timeout))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply

    def close(self) -> None:
        self.closed = True


def _transport(reply) -> tuple[HttpRpcTransport, list[_Session]]:
    sessions: list[_Session] = []

    def _factory() -> _Session:
        session = _Session(reply)
        sessions.append(session)
        return session

    transport = HttpRpcTransport(send_timeout_s=3.0, fetch_timeout_s=4.0, session_factory=_factory)
    return transport, sessions


def test_submit_sends_base64_payload_without_preflight() -> None:
    transport, sessions = _transport(_Response({"jsonrpc": "2.0", "id": 1, "result": "sigABC"}))

    ack = asyncio.run(transport.submit(make_endpoint("a"), b"\x01\x02payload"))

    assert ack == "sigABC"
    url, body, timeout = sessions[0].posts[0]
    assert url == "http://a.test"
    assert timeout == 3.0
    assert body["method"] == "sendTransaction"
    assert base64.b64decode(body["params"][0]) == b"\x01\x02payload"
    assert body["params"][1] == {"encoding": "base64", "skipPreflight": True, "maxRetries": 0}


def test_rpc_error_becomes_submission_error_with_code() -> None:
    reply = _Response({"jsonrpc": "2.0", "id": 1, "error": {"code": -32002, "message": "Blockhash not found"}})
    transport, _ = _transport(reply)

    with pytest.raises(SubmissionError) as exc_info:
        asyncio.run(transport.submit(make_endpoint("a"), b"tx"))
    assert exc_info.value.code == -32002
    assert exc_info.value.reason == "rejected: -32002: Blockhash not found"


@pytest.mark.parametrize(
    ("reply", "prefix"),
    [
        (requests.Timeout("read timed out"), "timeout after 3s"),
        (requests.ConnectionError("refused"), "transport: "),
        (_Response({}, status=503), "transport: 503"),
        (_Response(ValueError("bad json")), "transport: bad json"),
    ],
)
def test_transport_failures_become_submission_errors(reply, prefix: str) -> None:
    transport, _ = _transport(reply)

    with pytest.raises(SubmissionError) as exc_info:
        asyncio.run(transport.submit(make_endpoint("a"), b"tx"))
    assert exc_info.value.reason.startswith(prefix)


def test_fetch_block_reference_reads_latest_blockhash() -> None:
    reply = _Response({"jsonrpc": "2.0", "id": 1, "result": {"context": {"slot": 9}, "value": {"blockhash": "HASH"}}})
    transport, sessions = _transport(reply)

    blockhash = asyncio.run(transport.fetch_block_reference(make_endpoint("ref")))

    assert blockhash == "HASH"
    _, body, timeout = sessions[0].posts[0]
    assert body["method"] == "getLatestBlockhash"
    assert body["params"] == [{"commitment": "finalized"}]
    assert timeout == 4.0


@pytest.mark.parametrize(
    "reply",
    [
        _Response({"jsonrpc": "2.0", "id": 1, "result": {"value": {}}}),
        _Response({"jsonrpc": "2.0", "id": 1, "error": {"code": -1, "message": "nope"}}),
        requests.ConnectionError("down"),
    ],
)
def test_fetch_failures_raise_unavailable(reply) -> None:
    transport, _ = _transport(reply)

    with pytest.raises(UnavailableError):
        asyncio.run(transport.fetch_block_reference(make_endpoint("ref")))


def test_one_session_per_endpoint_and_close() -> None:
    transport, sessions = _transport(_Response({"jsonrpc": "2.0", "id": 1, "result": "sig"}))

    async def _run() -> None:
        await transport.submit(make_endpoint("a"), b"tx")
        await transport.submit(make_endpoint("a"), b"tx")
        await transport.submit(make_endpoint("b"), b"tx")

    asyncio.run(_run())
    transport.close()

    assert len(sessions) == 2
    assert all(session.closed for session in sessions)
