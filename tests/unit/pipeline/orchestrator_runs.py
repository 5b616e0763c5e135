"""End-to-end runs of the pipeline against in-memory collaborators."""

from __future__ import annotations

import asyncio

import pytest

from rpcbench.chain import Keypair
from rpcbench.errors import SubmissionError, ConfigurationError
from rpcbench.pipeline import run_benchmark
from rpcbench.scoring import score
from rpcbench.state import OutcomeStatus, BenchmarkConfig
from tests.helpers.fakes import Behavior, FakeSigner, FakeSubscriber, FakeTransport, make_endpoint


def _config(names: list[str], n: int, **overrides) -> BenchmarkConfig:
    values = {
        "sender": Keypair.generate(),
        "recipient": Keypair.generate().pubkey,
        "amount": 1000,
        "num_transactions": n,
        "endpoints": tuple(make_endpoint(name) for name in names),
        "confirmation_timeout_s": 1.0,
    }
    values.update(overrides)
    return BenchmarkConfig(**values)


def _run(config, *, transport=None, subscriber=None, signer=None):
    return asyncio.run(
        run_benchmark(
            config,
            transport=transport or FakeTransport(),
            subscriber=subscriber or FakeSubscriber(),
            signer=signer or FakeSigner(),
        )
    )


def test_every_signed_job_has_one_outcome_per_endpoint() -> None:
    result = _run(_config(["a", "b", "c"], 4))

    assert [record.sequence_index for record in result.jobs] == [0, 1, 2, 3]
    assert result.endpoints == ["a", "b", "c"]
    for record in result.jobs:
        assert sorted(record.outcomes) == ["a", "b", "c"]
        assert all(o.status is OutcomeStatus.SUCCESS for o in record.outcomes.values())
        assert all(o.send_start <= o.send_ack <= o.confirm_at for o in record.outcomes.values())
    assert len({record.signature for record in result.jobs}) == 4


def test_send_error_pair_never_enters_confirmation_tracking() -> None:
    def _fail(endpoint, payload):
        if endpoint.name == "b" and payload == b"tx-1001-hash1":
            return SubmissionError("rejected: node is behind")
        return None

    subscriber = FakeSubscriber()
    result = _run(_config(["a", "b"], 2), transport=FakeTransport(fail_when=_fail), subscriber=subscriber)

    failed = result.jobs[1].outcomes["b"]
    assert failed.status is OutcomeStatus.SEND_ERROR
    assert failed.reason == "rejected: node is behind"
    assert ("b", result.jobs[1].signature, "finalized") not in subscriber.requests
    assert len(subscriber.requests) == 3

    report = score(result)
    assert report.job_scores[1].success_order == ("a",)
    assert report.job_scores[1].scores == {"a": 1, "b": 2}


def test_signing_failure_skips_job_and_run_continues() -> None:
    transport = FakeTransport()
    result = _run(_config(["a", "b"], 3), transport=transport, signer=FakeSigner(fail_amounts={1001}))

    assert [record.sequence_index for record in result.jobs] == [0, 1, 2]
    assert result.jobs[1].outcomes == {}
    assert "cannot sign" in result.jobs[1].job.signing_error
    assert [record.sequence_index for record in result.failed_jobs] == [1]
    assert all(len(record.outcomes) == 2 for record in result.signed_jobs)
    assert len(transport.submissions) == 4


def test_reused_blockhash_with_fixed_amount_is_recorded_as_failed() -> None:
    config = _config(["a"], 2, vary_amount=False)
    transport = FakeTransport(blockhashes=["same"])

    result = _run(config, transport=transport)

    assert result.jobs[0].job.signed
    assert not result.jobs[1].job.signed
    assert "duplicate signature" in result.jobs[1].job.signing_error
    assert len(transport.submissions) == 1


def test_varied_amounts_keep_signatures_unique_with_same_blockhash() -> None:
    result = _run(_config(["a"], 3), transport=FakeTransport(blockhashes=["same"]))

    assert [record.job.amount for record in result.jobs] == [1000, 1001, 1002]
    assert len({record.signature for record in result.jobs}) == 3


def test_result_keeps_sequence_order_when_jobs_finish_out_of_order() -> None:
    config = _config(["a"], 2)
    first = "sig-1000-hash0"
    subscriber = FakeSubscriber(per_signature={("a", first): Behavior(delay=0.2)}, default=Behavior(delay=0.0))

    result = _run(config, subscriber=subscriber)

    assert [record.signature for record in result.jobs] == [first, "sig-1001-hash1"]
    assert result.jobs[0].outcomes["a"].confirm_at > result.jobs[1].outcomes["a"].confirm_at


def test_sequential_mode_confirms_each_job_before_next_build() -> None:
    config = _config(["a"], 2, pipeline_jobs=False)
    first = "sig-1000-hash0"
    subscriber = FakeSubscriber(per_signature={("a", first): Behavior(delay=0.1)}, default=Behavior(delay=0.0))

    result = _run(config, subscriber=subscriber)

    assert result.jobs[0].outcomes["a"].confirm_at < result.jobs[1].job.build_start


def test_timeouts_are_reported_per_endpoint() -> None:
    subscriber = FakeSubscriber({"slow": Behavior(delay=None)})
    result = _run(_config(["fast", "slow"], 1, confirmation_timeout_s=0.05), subscriber=subscriber)

    outcomes = result.jobs[0].outcomes
    assert outcomes["fast"].status is OutcomeStatus.SUCCESS
    assert outcomes["slow"].status is OutcomeStatus.TIMED_OUT
    handles = {handle.endpoint_name: handle for handle in subscriber.handles}
    assert handles["slow"].unsubscribe_calls == 1


def test_block_reference_comes_from_configured_endpoint() -> None:
    transport = FakeTransport()
    _run(_config(["a", "b"], 2, reference_endpoint_index=1), transport=transport)

    assert transport.fetches == ["b", "b"]


def test_invalid_config_fails_before_any_network_call() -> None:
    transport = FakeTransport()

    with pytest.raises(ConfigurationError) as exc_info:
        _run(_config([], 1), transport=transport)
    assert exc_info.value.error_code == "no_endpoints"
    assert transport.fetches == []


def test_caller_supplied_transport_is_not_closed() -> None:
    transport = FakeTransport()
    _run(_config(["a"], 1), transport=transport)

    assert not transport.closed


def test_cancelled_run_unsubscribes_every_listener() -> None:
    subscriber = FakeSubscriber(default=Behavior(delay=None))
    config = _config(["a", "b"], 2, confirmation_timeout_s=30.0)

    async def _run() -> None:
        await asyncio.wait_for(
            run_benchmark(config, transport=FakeTransport(), subscriber=subscriber, signer=FakeSigner()),
            timeout=0.2,
        )

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(_run())

    assert len(subscriber.handles) == 4
    assert all(handle.unsubscribe_calls == 1 for handle in subscriber.handles)
