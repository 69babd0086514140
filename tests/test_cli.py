"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path

from fsmkit import __version__
from fsmkit.cli import cli
from fsmkit.utils.result import ExitCode
from tests.conftest import parse_output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_run_feeds_events(runner, door_yaml: Path):
    result = runner.invoke(
        cli, ["--log-level", "error", "run", str(door_yaml), "open", "opened"]
    )

    assert result.exit_code == 0
    data = parse_output(result.output)
    assert data == {
        "status": "success",
        "initial": "closed",
        "states": ["closed", "opening", "open"],
        "final": "open",
    }


def test_run_without_events(runner, door_yaml: Path):
    result = runner.invoke(cli, ["--log-level", "error", "run", str(door_yaml)])

    assert result.exit_code == 0
    assert parse_output(result.output)["states"] == ["closed"]


def test_run_undefined_transition(runner, door_yaml: Path):
    result = runner.invoke(
        cli, ["--log-level", "error", "run", str(door_yaml), "open", "close"]
    )

    assert result.exit_code == ExitCode.UNDEFINED_TRANSITION
    data = parse_output(result.output)
    assert data["status"] == "error"
    assert data["event"] == "close"
    assert data["state"] == "opening"
    assert data["states"] == ["closed", "opening"]
    assert data["message"] == "Event close undefined for state opening"


def test_run_logs_transitions_at_debug(runner, door_yaml: Path):
    result = runner.invoke(
        cli, ["--log-level", "debug", "run", str(door_yaml), "open", "opened"]
    )

    assert result.exit_code == 0
    assert "door, open: closed -> opening" in result.output
    assert "door, opened: opening -> open" in result.output


def test_run_hides_transitions_at_info(runner, door_yaml: Path):
    result = runner.invoke(cli, ["run", str(door_yaml), "open"])

    assert result.exit_code == 0
    assert "closed -> opening" not in result.output


def test_unquoted_yaml_boolean_is_not_a_state(runner, tmp_path: Path):
    path = tmp_path / "lamp.yaml"
    path.write_text(
        "name: lamp\n"
        "initial: off\n"
        "log_prefix: ''\n"
        "logging: {level: debug, format: json}\n"
        "transitions:\n"
        "  - {event: toggle, origin: 'off', target: 'on'}\n"
    )

    result = runner.invoke(cli, ["--log-level", "error", "run", str(path), "toggle"])

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert parse_output(result.output)["field"] == "initial"


def test_definition_logging_enables_debug(runner, tmp_path: Path):
    path = tmp_path / "lamp.yaml"
    path.write_text(
        "name: lamp\n"
        "initial: dark\n"
        "log_prefix: ''\n"
        "logging: {level: debug, format: json}\n"
        "transitions:\n"
        "  - {event: toggle, origin: dark, target: lit}\n"
    )

    result = runner.invoke(cli, ["--log-level", "error", "run", str(path), "toggle"])

    assert result.exit_code == 0
    assert '"toggle: dark -> lit"' in result.output
    assert '"machine": "lamp"' in result.output


def test_run_missing_definition(runner, tmp_path: Path):
    result = runner.invoke(cli, ["run", str(tmp_path / "absent.yaml"), "open"])

    assert result.exit_code == ExitCode.CONFIG_ERROR
    data = parse_output(result.output)
    assert data["status"] == "error"
    assert data["field"] == "path"


def test_check_json(runner, door_yaml: Path):
    result = runner.invoke(cli, ["--log-level", "error", "check", str(door_yaml)])

    assert result.exit_code == 0
    assert parse_output(result.output) == {
        "status": "valid",
        "name": "door",
        "initial": "closed",
        "states": ["closed", "closing", "open", "opening"],
        "events": ["close", "closed", "open", "opened"],
        "transitions": 4,
    }


def test_check_table(runner, door_yaml: Path):
    result = runner.invoke(
        cli, ["--log-level", "error", "check", str(door_yaml), "--format", "table"]
    )

    assert result.exit_code == 0
    assert "Machine: door" in result.output
    assert "  open: closed -> opening" in result.output


def test_check_invalid_definition(runner, tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("initial: a\ntransitions:\n  - {event: go, origin: a}\n")

    result = runner.invoke(cli, ["check", str(path)])

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert parse_output(result.output)["field"] == "transitions[0].target"
