"""Unit tests for Sentry initialization and rate-limited capture."""

from __future__ import annotations

import contextlib

import pytest
import sentry_sdk

from rpcbench.logging import log_context
from rpcbench.telemetry import sentry


class _Scope:
    def __init__(self) -> None:
        self.tags: dict[str, str] = {}
        self.extras: dict[str, object] = {}

    def set_tag(self, key: str, value: str) -> None:
        self.tags[key] = value

    def set_extra(self, key: str, value: object) -> None:
        self.extras[key] = value


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[tuple[BaseException, _Scope]]:
    events: list[tuple[BaseException, _Scope]] = []
    current: list[_Scope] = []

    @contextlib.contextmanager
    def _new_scope():
        scope = _Scope()
        current.append(scope)
        yield scope

    monkeypatch.setattr(sentry_sdk, "new_scope", _new_scope)
    monkeypatch.setattr(sentry_sdk, "capture_exception", lambda error: events.append((error, current[-1])))
    monkeypatch.setattr(sentry, "_initialized", True)
    monkeypatch.setattr(sentry, "_error_timestamps", {})
    return events


def test_capture_is_noop_when_not_initialized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sentry, "_initialized", False)

    assert sentry.capture_error(RuntimeError("boom")) is False


def test_init_without_dsn_stays_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sentry, "_initialized", False)
    monkeypatch.setattr(sentry, "SENTRY_DSN", "")

    assert sentry.init_sentry() is False


def test_capture_tags_job_and_endpoint(captured) -> None:
    with log_context(job_id="4", endpoint="quicknode"):
        assert sentry.capture_error(RuntimeError("boom"), extra={"signature": "sig4"}) is True

    error, scope = captured[0]
    assert str(error) == "boom"
    assert scope.tags == {"job_id": "4", "endpoint": "quicknode"}
    assert scope.extras == {"signature": "sig4"}


def test_capture_is_rate_limited_per_error_class(captured) -> None:
    assert sentry.capture_error(RuntimeError("first")) is True
    assert sentry.capture_error(RuntimeError("second")) is False
    assert sentry.capture_error(KeyError("other")) is True

    assert [str(error) for error, _ in captured] == ["first", "'other'"]
