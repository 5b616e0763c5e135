"""Unit tests for benchmark configuration validation."""

from __future__ import annotations

import dataclasses

import pytest

from rpcbench.chain import Keypair
from rpcbench.errors import ConfigurationError
from rpcbench.helpers.validation import validate_config
from rpcbench.state import Endpoint, BenchmarkConfig, FailureScorePolicy
from tests.helpers.fakes import make_endpoint


@pytest.fixture
def config() -> BenchmarkConfig:
    return BenchmarkConfig(
        sender=Keypair.generate(),
        recipient=Keypair.generate().pubkey,
        amount=1000,
        num_transactions=3,
        endpoints=(make_endpoint("a"), make_endpoint("b")),
    )


def _code(config: BenchmarkConfig, **changes) -> str:
    with pytest.raises(ConfigurationError) as exc_info:
        validate_config(dataclasses.replace(config, **changes))
    return exc_info.value.error_code


def test_valid_config_passes(config: BenchmarkConfig) -> None:
    validate_config(config)


def test_defaults(config: BenchmarkConfig) -> None:
    assert config.commitment == "finalized"
    assert config.pipeline_jobs is True
    assert config.vary_amount is True
    assert config.reference_endpoint.name == "a"
    assert config.amount_for(2) == 1002
    assert dataclasses.replace(config, vary_amount=False).amount_for(2) == 1000


@pytest.mark.parametrize(
    ("changes", "code"),
    [
        ({"endpoints": ()}, "no_endpoints"),
        ({"endpoints": (make_endpoint("a"), make_endpoint("a"))}, "duplicate_endpoint"),
        ({"endpoints": (Endpoint("a", "ftp://a.test", "ws://a.test"),)}, "invalid_endpoint_url"),
        ({"endpoints": (Endpoint("a", "http://a.test", "http://a.test"),)}, "invalid_endpoint_url"),
        ({"endpoints": (Endpoint("", "http://a.test", "ws://a.test"),)}, "invalid_endpoint"),
        ({"amount": 0}, "invalid_amount"),
        ({"amount": -5}, "invalid_amount"),
        ({"amount": 1.5}, "invalid_amount"),
        ({"amount": True}, "invalid_amount"),
        ({"amount": 2**64 - 2}, "invalid_amount"),
        ({"num_transactions": 0}, "invalid_num_transactions"),
        ({"reference_endpoint_index": 2}, "invalid_reference_endpoint"),
        ({"reference_endpoint_index": -1}, "invalid_reference_endpoint"),
        ({"confirmation_timeout_s": 0}, "invalid_timeout"),
        ({"commitment": "recent"}, "invalid_commitment"),
        ({"failure_policy": FailureScorePolicy(mode="worst")}, "invalid_failure_policy"),
        ({"failure_policy": FailureScorePolicy(timed_out_penalty=-1)}, "invalid_failure_policy"),
        ({"recipient": "not-an-address"}, "invalid_address"),
        ({"sender": "not-a-keypair"}, "invalid_sender"),
    ],
)
def test_invalid_configs(config: BenchmarkConfig, changes: dict, code: str) -> None:
    assert _code(config, **changes) == code


def test_max_amount_allowed_without_variation(config: BenchmarkConfig) -> None:
    validate_config(dataclasses.replace(config, amount=2**64 - 1, vary_amount=False))
