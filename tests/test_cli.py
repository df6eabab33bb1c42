"""Tests for the command line entry point."""

import pytest

from image_checker import cli


def test_flags_override_environment():
    config = cli.load_config(
        ["--ip", "0.0.0.0", "--port", "9090", "--crane-cmd", "/bin/crane", "--timeout", "5", "--no-api-docs"],
        environ={"FLASK_PORT": "7000", "CRANE_CMD": "env-crane"},
    )

    assert config.FLASK_HOST == "0.0.0.0"
    assert config.FLASK_PORT == 9090
    assert config.CRANE_CMD == "/bin/crane"
    assert config.CRANE_TIMEOUT == 5.0
    assert config.ENABLE_API_DOCS is False


def test_short_flags():
    config = cli.load_config(["-i", "::1", "-p", "8081", "-c", "crane2", "-l", "warning"], environ={})

    assert config.FLASK_HOST == "::1"
    assert config.FLASK_PORT == 8081
    assert config.CRANE_CMD == "crane2"
    assert config.LOG_LEVEL == "WARNING"


def test_environment_used_without_flags():
    config = cli.load_config([], environ={"CRANE_CMD": "env-crane", "ENABLE_API_DOCS": "0"})

    assert config.CRANE_CMD == "env-crane"
    assert config.FLASK_PORT == 8080
    assert config.ENABLE_API_DOCS is False


@pytest.mark.parametrize("argv", [["--port", "abc"], ["--ip", "not-an-ip"], ["--timeout", "0"]])
def test_invalid_flag_is_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.load_config(argv, environ={})

    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err


def test_invalid_environment_is_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.load_config([], environ={"FLASK_PORT": "nope"})

    assert excinfo.value.code == 2
    assert "Invalid port" in capsys.readouterr().err


def test_main_runs_app_with_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("CRANE_CMD=dotenv-crane\n")
    # Registered so that the value loaded from .env is removed afterwards
    monkeypatch.setenv("CRANE_CMD", "")
    monkeypatch.delenv("CRANE_CMD")
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    runs = []

    def fake_run(self, host=None, port=None, **options):
        runs.append((self, host, port, options))

    monkeypatch.setattr("flask.Flask.run", fake_run)

    cli.main(["--port", "9999"])

    ((app, host, port, options),) = runs
    assert host == "127.0.0.1"
    assert port == 9999
    assert options["threaded"] is True
    assert app.extensions["image_checker"].cmd == "dotenv-crane"
