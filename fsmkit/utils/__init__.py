"""Utility modules for fsmkit."""

from fsmkit.utils.actor import Actor, ActorStatus, InactiveActorError
from fsmkit.utils.logging import (
    configure_logging,
    get_logger,
    set_machine_context,
)
from fsmkit.utils.result import (
    ConfigError,
    Err,
    ExitCode,
    Ok,
    Result,
    ResultError,
    collect_results,
)

__all__ = [
    # Lifecycle
    "Actor",
    "ActorStatus",
    "InactiveActorError",
    # Logging
    "configure_logging",
    "get_logger",
    "set_machine_context",
    # Results
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ConfigError",
    "ExitCode",
    "collect_results",
]
