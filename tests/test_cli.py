from __future__ import annotations

from typing import Any, Dict, List

import httpx
import pytest
import typer
from typer.testing import CliRunner

from cli.app import app
from cli.client import ApiClient
from cli.config import CLIConfig, load_config


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.payloads: List[Dict[str, Any]] = [
            {"last": 0.9, "last5": 1.5, "last15": 1.8},
            {"last": 1.0, "last5": 1.6, "last15": 1.9},
        ]
        self.calls = 0
        self.closed = False

    def get_load_average(self) -> Dict[str, Any]:
        payload = self.payloads[self.calls % len(self.payloads)]
        self.calls += 1
        return payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_show_renders_load_average(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["--base-url", "http://example.test/", "show"])

    assert result.exit_code == 0
    assert "Load Average" in result.stdout
    assert "last: 0.9" in result.stdout
    assert "last5: 1.5" in result.stdout
    assert "last15: 1.8" in result.stdout
    assert stub.config.base_url == "http://example.test"
    assert stub.closed is True


def test_watch_samples_repeatedly(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)
    sleeps: List[float] = []
    monkeypatch.setattr("cli.app.time.sleep", sleeps.append)

    result = runner.invoke(app, ["watch", "--interval", "0.5", "--count", "2"])

    assert result.exit_code == 0
    assert stub.calls == 2
    assert sleeps == [0.5]
    assert "last: 1.0" in result.stdout
    assert stub.closed is True


def test_serve_runs_uvicorn(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)
    calls: List[tuple] = []
    monkeypatch.setattr("cli.app.uvicorn.run", lambda target, **kwargs: calls.append((target, kwargs)))

    result = runner.invoke(app, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    assert calls == [("app.main:app", {"host": "127.0.0.1", "port": 9001})]


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://loadavg.internal:8080/")
    monkeypatch.setenv("CLI_HTTP_TIMEOUT", "nope")

    config = load_config()

    assert config == CLIConfig(base_url="http://loadavg.internal:8080", timeout=10.0)


def _client_with(handler) -> ApiClient:
    client = ApiClient(CLIConfig(base_url="http://testserver"))
    client._client = httpx.Client(
        base_url="http://testserver", transport=httpx.MockTransport(handler)
    )
    return client


def test_api_client_returns_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/loadavg"
        return httpx.Response(200, json={"last": 0.1, "last5": 0.2, "last15": 0.3})

    client = _client_with(handler)
    try:
        assert client.get_load_average() == {"last": 0.1, "last5": 0.2, "last15": 0.3}
    finally:
        client.close()


def test_api_client_exits_on_server_error(capsys) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "Load averages are unobtainable"})

    client = _client_with(handler)
    try:
        with pytest.raises(typer.Exit):
            client.get_load_average()
    finally:
        client.close()

    assert "Request failed with status 500: Load averages are unobtainable" in capsys.readouterr().err
