"""Unit tests for the rpcbench and rpcbench-keygen entry points."""

from __future__ import annotations

import json
import asyncio

import pytest

import rpcbench.pipeline
from rpcbench.chain import Keypair
from rpcbench.scripts import bench, keygen
from rpcbench.state import OutcomeStatus
from tests.helpers.builders import job_record, run_result


def _config_file(tmp_path) -> str:
    keypair_path = tmp_path / ".private_key"
    keypair_path.write_text(Keypair.generate().to_json(), encoding="utf-8")
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "keypair_path": str(keypair_path),
                "recipient": Keypair.generate().pubkey,
                "amount_lamports": 1000,
                "num_transactions": 1,
                "rpc_nodes": [{"name": "a", "http_url": "http://a.test", "ws_url": "ws://a.test"}],
            }
        ),
        encoding="utf-8",
    )
    return str(path)


def test_keygen_writes_both_files(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    assert keygen.main(["--output-dir", str(tmp_path)]) == 0

    loaded = Keypair.from_file(tmp_path / ".private_key")
    assert (tmp_path / ".public_key").read_text() == loaded.pubkey
    assert loaded.pubkey in capsys.readouterr().out


def test_keygen_refuses_to_overwrite(tmp_path) -> None:
    keygen.write_keypair(tmp_path, Keypair.generate())

    assert keygen.main(["--output-dir", str(tmp_path)]) == 1
    assert keygen.main(["--output-dir", str(tmp_path), "--force"]) == 0


def test_bench_rejects_invalid_config(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{}")

    assert bench.main(["--config", str(path)]) == bench.EXIT_CONFIG_ERROR


def test_bench_prints_and_writes_reports(tmp_path, monkeypatch, capsys: pytest.CaptureFixture[str]) -> None:
    result = run_result(["a"], [job_record(0, {"a": (OutcomeStatus.SUCCESS, 1.0)})])

    async def _fake_run(config):
        assert config.endpoints[0].name == "a"
        return result

    monkeypatch.setattr(rpcbench.pipeline, "run_benchmark", _fake_run)
    out = tmp_path / "reports"

    code = bench.main(["--config", _config_file(tmp_path), "--output-dir", str(out), "--format", "json"])

    assert code == bench.EXIT_OK
    assert "## Endpoint Ranking" in capsys.readouterr().out
    assert json.loads((out / "report.json").read_text())["ranking"][0]["endpoint"] == "a"


def test_bench_run_timeout(tmp_path, monkeypatch) -> None:
    async def _hang(config):
        await asyncio.Event().wait()

    monkeypatch.setattr(rpcbench.pipeline, "run_benchmark", _hang)

    code = bench.main(["--config", _config_file(tmp_path), "--run-timeout", "0.05"])

    assert code == bench.EXIT_RUN_FAILED
