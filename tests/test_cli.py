"""Tests for the command-line entry point."""

import json

import pytest

from kumotracker.cli import main

ENV_KEYS = [
    "TICKER", "DATA_SOURCES", "POLYGON_API_KEY", "SMTP_USER", "SMTP_PASS",
    "RECIPIENT_EMAIL", "ALERT_HISTORY_PATH", "SNAPSHOT_PATH", "ALERT_RETENTION_DAYS",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    # setenv first so keys loaded from a .env file are removed on teardown
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_run_with_mock_source(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("DATA_SOURCES", "mock")
    output = tmp_path / "data.json"
    code = main([
        "--env-file", str(tmp_path / "missing.env"),
        "--ticker", "SPY",
        "--output", str(output),
        "--history", str(tmp_path / "alert-history.json"),
    ])
    assert code == 0
    assert json.loads(output.read_text())["ticker"] == "SPY"


def test_env_file_loaded(monkeypatch, tmp_path) -> None:
    output = tmp_path / "from-env.json"
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DATA_SOURCES=mock\n"
        f"SNAPSHOT_PATH={output}\n"
        f"ALERT_HISTORY_PATH={tmp_path / 'h.json'}\n"
    )
    assert main(["--env-file", str(env_file)]) == 0
    assert output.exists()


def test_source_error_exit_code(monkeypatch, tmp_path) -> None:
    # polygon without an API key fails before any fetch
    monkeypatch.setenv("DATA_SOURCES", "polygon")
    code = main([
        "--env-file", str(tmp_path / "missing.env"),
        "--output", str(tmp_path / "data.json"),
        "--history", str(tmp_path / "h.json"),
    ])
    assert code == 1
    assert not (tmp_path / "data.json").exists()


def test_bad_config_exit_code(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("DATA_SOURCES", "nope")
    assert main(["--env-file", str(tmp_path / "missing.env")]) == 1
