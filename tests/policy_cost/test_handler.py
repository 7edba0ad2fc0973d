# This test file validates the serverless handler and the CLI job entry points.
# It exists to confirm both return the aggregator's status code and body without reshaping them.
# The aggregator factory is replaced with one backed by a fake source so no network calls happen.

from __future__ import annotations

import json
import sys
from typing import Any

import pytest

from src.policy_cost import handler as handler_module
from src.policy_cost import policy_job
from src.policy_cost.aggregator import PolicyAggregator
from src.policy_cost.policy_config import load_policy_cost_config
from src.policy_cost.policy_source import PolicySourceClient, PolicySourceError


class _StaticSource:
    def __init__(self, document: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.document = document
        self.error = error

    def fetch_policy_document(self) -> dict[str, Any] | None:
        if self.error is not None:
            raise self.error
        return self.document


DOCUMENT = {
    "policy": {
        "workers": [{"name": "Ana", "age": 30, "childs": 0}],
        "has_dental_care": False,
        "company_percentage": 50,
    }
}


def _aggregator(source: _StaticSource) -> PolicyAggregator:
    return PolicyAggregator(source=source, config=load_policy_cost_config(load_env=False))


def test_policy_handler_returns_status_and_body(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(handler_module, "get_policy_aggregator", lambda: _aggregator(_StaticSource(DOCUMENT)))

    response = handler_module.policy({}, None)

    assert list(response) == ["statusCode", "body"]
    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["data"]["policy"]["workers"][0]["name"] == "Ana"
    assert body["data"]["policy"]["total"]["company"] == pytest.approx(0.1395)


def test_policy_handler_needs_no_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(handler_module, "get_policy_aggregator", lambda: _aggregator(_StaticSource(None)))

    response = handler_module.policy()

    assert response["statusCode"] == 503
    assert json.loads(response["body"]) == {"message": "Service Unavailable: Error al cargar los datos"}


def test_policy_handler_lets_source_faults_escape(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        handler_module,
        "get_policy_aggregator",
        lambda: _aggregator(_StaticSource(error=PolicySourceError("down"))),
    )

    with pytest.raises(PolicySourceError):
        handler_module.policy({}, None)


def test_build_policy_aggregator_uses_configured_source() -> None:
    config = load_policy_cost_config(load_env=False)

    aggregator = handler_module.build_policy_aggregator(config)

    assert isinstance(aggregator.source, PolicySourceClient)
    assert aggregator.source.url == config.source_url
    assert aggregator.source.timeout_seconds == config.source_timeout_seconds
    assert aggregator.config is config


def test_policy_job_prints_body_and_reports_status(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    seen: dict[str, Any] = {}

    def fake_build(config: Any) -> PolicyAggregator:
        seen["config"] = config
        return _aggregator(_StaticSource(DOCUMENT))

    monkeypatch.setattr(policy_job, "build_policy_aggregator", fake_build)
    monkeypatch.setattr(sys, "argv", ["policy_job", "--url", "http://localhost:9000/policy", "--timeout", "1.5"])

    exit_code = policy_job.main()

    assert exit_code == 0
    assert seen["config"].source_url == "http://localhost:9000/policy"
    assert seen["config"].source_timeout_seconds == 1.5
    assert json.loads(capsys.readouterr().out)["message"].startswith("Go Serverless")


def test_policy_job_exits_non_zero_when_source_is_empty(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(policy_job, "build_policy_aggregator", lambda config: _aggregator(_StaticSource(None)))
    monkeypatch.setattr(sys, "argv", ["policy_job"])

    assert policy_job.main() == 1
    assert "Error al cargar los datos" in capsys.readouterr().out


def test_policy_job_rejects_zero_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(policy_job, "build_policy_aggregator", lambda config: _aggregator(_StaticSource(DOCUMENT)))
    monkeypatch.setattr(sys, "argv", ["policy_job", "--timeout", "0"])

    with pytest.raises(SystemExit) as excinfo:
        policy_job.main()

    assert excinfo.value.code == 2
