"""Shared fixtures."""

from __future__ import annotations

import json
import logging
from enum import Enum, auto
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner
from structlog.testing import LogCapture

from fsmkit.utils.logging import configure_logging, set_machine_context


class Door(Enum):
    CLOSED = auto()
    OPENING = auto()
    OPEN = auto()
    CLOSING = auto()


class DoorEvent(Enum):
    OPEN = auto()
    OPENED = auto()
    CLOSE = auto()
    CLOSED = auto()


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default logging after tests that reconfigure it."""
    yield
    configure_logging()
    set_machine_context("")


@pytest.fixture
def log_capture() -> LogCapture:
    return LogCapture()


@pytest.fixture
def trace_logger(log_capture):
    """A logger that records debug-level events into ``log_capture``."""
    return structlog.wrap_logger(
        None,
        processors=[log_capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    )


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def door_yaml(tmp_path: Path) -> Path:
    path = tmp_path / "door.yaml"
    path.write_text(
        "name: door\n"
        "initial: closed\n"
        "log_prefix: door\n"
        "transitions:\n"
        "  - {event: open, origin: closed, target: opening}\n"
        "  - {event: opened, origin: opening, target: open}\n"
        "  - {event: close, origin: open, target: closing}\n"
        "  - {event: closed, origin: closing, target: closed}\n"
    )
    return path


def parse_output(output: str) -> dict:
    """Extract the pretty-printed JSON document from CLI output.

    Log lines are single-line JSON and may precede the document.
    """
    return json.loads(output[output.index("{\n"):])
