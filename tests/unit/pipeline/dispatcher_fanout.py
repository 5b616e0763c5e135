"""Unit tests for concurrent submission fan-out."""

from __future__ import annotations

import time
import asyncio
import threading

from rpcbench.errors import SubmissionError
from rpcbench.pipeline import Dispatcher, TimingRecorder
from rpcbench.rpc import HttpRpcTransport
from rpcbench.state import OutcomeStatus
from tests.helpers.builders import signed_job
from tests.helpers.fakes import FakeTransport, make_endpoint


def _dispatcher(transport: FakeTransport, names: list[str]) -> tuple[Dispatcher, TimingRecorder]:
    recorder = TimingRecorder(names)
    dispatcher = Dispatcher(
        transport=transport,
        endpoints=[make_endpoint(name) for name in names],
        recorder=recorder,
        clock=time.perf_counter,
    )
    return dispatcher, recorder


def test_every_endpoint_receives_identical_payload() -> None:
    transport = FakeTransport()
    dispatcher, recorder = _dispatcher(transport, ["a", "b", "c"])
    job = signed_job(0, "sig-x")
    recorder.register_job(job)

    outcomes = asyncio.run(dispatcher.dispatch(job))

    assert sorted(name for name, _ in transport.submissions) == ["a", "b", "c"]
    assert {payload for _, payload in transport.submissions} == {job.payload}
    assert all(o.status is OutcomeStatus.SUBMITTED for o in outcomes.values())
    assert all(o.send_start <= o.send_ack for o in outcomes.values())


def test_submissions_run_concurrently() -> None:
    transport = FakeTransport(submit_delays={"a": 0.2, "b": 0.2, "c": 0.2})
    dispatcher, recorder = _dispatcher(transport, ["a", "b", "c"])
    job = signed_job(0)
    recorder.register_job(job)

    started = time.perf_counter()
    asyncio.run(dispatcher.dispatch(job))
    elapsed = time.perf_counter() - started

    assert elapsed < 0.5


def test_send_error_is_recorded_and_published() -> None:
    def _fail_b(endpoint, payload):
        return SubmissionError("rejected: -32002: blockhash not found") if endpoint.name == "b" else None

    transport = FakeTransport(fail_when=_fail_b)
    dispatcher, recorder = _dispatcher(transport, ["a", "b"])
    job = signed_job(0)
    recorder.register_job(job)

    outcomes = asyncio.run(dispatcher.dispatch(job))

    assert outcomes["a"].status is OutcomeStatus.SUBMITTED
    assert outcomes["b"].status is OutcomeStatus.SEND_ERROR
    assert outcomes["b"].reason == "rejected: -32002: blockhash not found"
    assert outcomes["b"].send_ack is not None
    assert not recorder.is_complete(job.signature)


def test_unexpected_transport_error_becomes_send_error() -> None:
    transport = FakeTransport(fail_when=lambda endpoint, payload: ConnectionResetError("reset by peer"))
    dispatcher, recorder = _dispatcher(transport, ["a"])
    job = signed_job(0)
    recorder.register_job(job)

    outcomes = asyncio.run(dispatcher.dispatch(job))

    assert outcomes["a"].status is OutcomeStatus.SEND_ERROR
    assert outcomes["a"].reason == "connection: reset by peer"
    assert recorder.is_complete(job.signature)


def test_each_endpoint_has_its_own_send_start() -> None:
    transport = FakeTransport(submit_delays={"slow": 0.05})
    dispatcher, recorder = _dispatcher(transport, ["fast", "slow"])
    job = signed_job(0)
    recorder.register_job(job)

    outcomes = asyncio.run(dispatcher.dispatch(job))

    assert outcomes["slow"].send_latency_s > outcomes["fast"].send_latency_s


class _BarrierSession:
    """Blocks every post until ``parties`` posts are in flight at once."""

    def __init__(self, barrier: threading.Barrier, signature: str) -> None:
        self._barrier = barrier
        self._signature = signature

    def post(self, url: str, *, json: dict, timeout: float):
        self._barrier.wait()
        return self

    def raise_for_status(self) -> None:
        return None

    def json(self):
        return {"jsonrpc": "2.0", "id": 1, "result": self._signature}

    def close(self) -> None:
        return None


def test_http_submissions_do_not_queue_behind_each_other() -> None:
    names = [f"node{i}" for i in range(40)]
    job = signed_job(0)
    barrier = threading.Barrier(len(names), timeout=5.0)
    endpoints = [make_endpoint(name) for name in names]
    transport = HttpRpcTransport.for_endpoints(
        endpoints,
        session_factory=lambda: _BarrierSession(barrier, job.signature),
    )
    recorder = TimingRecorder(names)
    recorder.register_job(job)
    dispatcher = Dispatcher(transport=transport, endpoints=endpoints, recorder=recorder, clock=time.perf_counter)

    try:
        outcomes = asyncio.run(dispatcher.dispatch(job))
    finally:
        transport.close()

    assert not barrier.broken
    assert all(o.status is OutcomeStatus.SUBMITTED for o in outcomes.values())
