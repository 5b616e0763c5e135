"""Unit tests for per-iteration transaction building."""

from __future__ import annotations

import asyncio

from rpcbench.chain import Keypair
from rpcbench.pipeline import TransactionFactory
from tests.helpers.fakes import FakeClock, FakeSigner, FakeTransport, make_endpoint, unavailable


def _factory(signer: FakeSigner, transport: FakeTransport, clock: FakeClock | None = None) -> TransactionFactory:
    return TransactionFactory(
        signer=signer,
        transport=transport,
        reference_endpoint=make_endpoint("ref"),
        sender=Keypair.generate(),
        recipient=Keypair.generate().pubkey,
        amount_for=lambda index: 1000 + index,
        clock=clock or FakeClock(),
    )


def test_build_fetches_fresh_reference_for_every_job() -> None:
    signer = FakeSigner()
    transport = FakeTransport()
    factory = _factory(signer, transport)

    async def _run():
        return [await factory.build(i) for i in range(3)]

    jobs = asyncio.run(_run())

    assert transport.fetches == ["ref", "ref", "ref"]
    assert [job.block_reference for job in jobs] == ["hash0", "hash1", "hash2"]
    assert [job.amount for job in jobs] == [1000, 1001, 1002]
    assert all(job.signed for job in jobs)
    assert jobs[1].signature == "sig-1001-hash1"
    assert jobs[1].payload == b"tx-1001-hash1"


def test_signing_error_produces_failed_job() -> None:
    factory = _factory(FakeSigner(fail_amounts={1000}), FakeTransport())

    job = asyncio.run(factory.build(0))

    assert not job.signed
    assert job.signature is None
    assert job.payload == b""
    assert "cannot sign amount 1000" in job.signing_error


def test_unavailable_reference_escalates_to_signing_failure() -> None:
    signer = FakeSigner()
    factory = _factory(signer, FakeTransport(fetch_error=unavailable("ref down")))

    job = asyncio.run(factory.build(4))

    assert job.sequence_index == 4
    assert job.signing_error == "no block reference: ref down"
    assert signer.calls == []


def test_unexpected_error_is_recorded_not_raised() -> None:
    class _Broken(FakeSigner):
        def sign_transfer(self, *args, **kwargs):
            raise KeyError("boom")

    job = asyncio.run(_factory(_Broken(), FakeTransport()).build(0))

    assert not job.signed
    assert job.signing_error.startswith("unknown: ")


def test_build_timestamps_come_from_clock() -> None:
    clock = FakeClock(start=10.0)

    class _SlowSigner(FakeSigner):
        def sign_transfer(self, *args, **kwargs):
            clock.advance(0.25)
            return super().sign_transfer(*args, **kwargs)

    job = asyncio.run(_factory(_SlowSigner(), FakeTransport(), clock).build(0))

    assert job.build_start == 10.0
    assert job.build_end == 10.25
    assert job.build_latency_s == 0.25
