"""Machine definitions loaded from YAML.

A definition names the initial state, the transition logging prefix and
the transition table of a string-typed machine:

    name: door
    initial: closed
    log_prefix: door          # null disables transition logging
    logging:
      level: debug
      format: text
    transitions:
      - {event: open, origin: closed, target: opening}
      - {event: opened, origin: opening, target: open}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from fsmkit.machine import StateMachine, Transition
from fsmkit.utils.logging import LEVELS
from fsmkit.utils.result import ConfigError, Err, Ok, Result, collect_results

LOG_FORMATS = ("json", "text")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class MachineDefinition:
    """Declarative description of a ``StateMachine[str, str]``."""

    initial: str
    transitions: list[Transition[str, str]] = field(default_factory=list)
    log_prefix: Optional[str] = ""
    name: str = "machine"
    logging: Optional[LoggingConfig] = None

    @classmethod
    def from_yaml(cls, path: Path) -> Result["MachineDefinition", ConfigError]:
        """
        Load a definition from a YAML file.

        Args:
            path: Path to YAML definition file

        Returns:
            Result with loaded definition or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Definition file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read definition file: {e}",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> Result["MachineDefinition", ConfigError]:
        """
        Create a definition from a dictionary.

        Args:
            data: Parsed definition document

        Returns:
            Result with loaded definition or error
        """
        if not isinstance(data, dict):
            return Err(ConfigError(
                field="definition",
                message=f"Expected a mapping, got {type(data).__name__}",
            ))

        initial = data.get("initial")
        if not _is_name(initial):
            return Err(ConfigError(
                field="initial",
                message=f"Must be a non-empty string, got {initial!r}",
            ))

        log_prefix = data.get("log_prefix", "")
        if log_prefix is not None and not isinstance(log_prefix, str):
            return Err(ConfigError(
                field="log_prefix",
                message=f"Must be a string or null, got {log_prefix!r}",
            ))

        raw_transitions = data.get("transitions") or []
        if not isinstance(raw_transitions, list):
            return Err(ConfigError(
                field="transitions",
                message="Must be a list of {event, origin, target} mappings",
            ))

        parsed = collect_results([
            _parse_transition(index, item)
            for index, item in enumerate(raw_transitions)
        ])
        if parsed.is_err():
            return Err(parsed.unwrap_err()[0])

        name = data.get("name") or "machine"
        if not isinstance(name, str):
            return Err(ConfigError(
                field="name",
                message=f"Must be a string, got {name!r}",
            ))

        logging_config = None
        logging_data = data.get("logging")
        if logging_data is not None:
            if not isinstance(logging_data, dict):
                return Err(ConfigError(
                    field="logging",
                    message="Must be a mapping with 'level' and 'format'",
                ))
            logging_config = LoggingConfig(
                level=str(logging_data.get("level", "info")).lower(),
                format=str(logging_data.get("format", "json")).lower(),
            )

        return Ok(cls(
            initial=initial,
            transitions=parsed.unwrap(),
            log_prefix=log_prefix,
            name=name,
            logging=logging_config,
        ))

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate definition values.

        Repeated ``(origin, event)`` pairs are allowed; the last one wins
        when the machine is built.

        Returns:
            Result indicating success or validation error
        """
        if not _is_name(self.initial):
            return Err(ConfigError(
                field="initial",
                message=f"Must be a non-empty string, got {self.initial!r}",
            ))

        for index, transition in enumerate(self.transitions):
            for attr in ("event", "origin", "target"):
                value = getattr(transition, attr)
                if not _is_name(value):
                    return Err(ConfigError(
                        field=f"transitions[{index}].{attr}",
                        message=f"Must be a non-empty string, got {value!r}",
                    ))

        if self.logging is not None:
            if self.logging.level.lower() not in LEVELS:
                return Err(ConfigError(
                    field="logging.level",
                    message=f"Unknown level {self.logging.level!r}",
                ))
            if self.logging.format.lower() not in LOG_FORMATS:
                return Err(ConfigError(
                    field="logging.format",
                    message=f"Must be one of {', '.join(LOG_FORMATS)}, got {self.logging.format!r}",
                ))

        return Ok(None)

    def states(self) -> list[str]:
        """Get every state the definition mentions, sorted."""
        names = {self.initial}
        for transition in self.transitions:
            names.add(transition.origin)
            names.add(transition.target)
        return sorted(names)

    def events(self) -> list[str]:
        """Get every event the definition mentions, sorted."""
        return sorted({transition.event for transition in self.transitions})

    def build(self, logger: Any = None) -> StateMachine[str, str]:
        """
        Create a machine in the initial state with all transitions defined.

        Args:
            logger: Optional structlog logger for transition lines

        Returns:
            New StateMachine
        """
        machine: StateMachine[str, str] = StateMachine(
            self.initial,
            log_prefix=self.log_prefix,
            logger=logger,
        )
        for transition in self.transitions:
            machine.let(transition.event, transition.origin, transition.target)
        return machine


def load_definition(path: Path) -> Result[MachineDefinition, ConfigError]:
    """
    Load and validate a machine definition.

    Args:
        path: Path to YAML definition file

    Returns:
        Result with validated definition or error
    """
    result = MachineDefinition.from_yaml(path)
    if result.is_err():
        return result

    definition = result.unwrap()
    validation_result = definition.validate()
    if validation_result.is_err():
        return Err(validation_result.unwrap_err())

    return Ok(definition)


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _parse_transition(index: int, item: Any) -> Result[Transition[str, str], ConfigError]:
    if not isinstance(item, dict):
        return Err(ConfigError(
            field=f"transitions[{index}]",
            message="Must be a mapping with 'event', 'origin' and 'target'",
        ))

    values = {}
    for attr in ("event", "origin", "target"):
        value = item.get(attr)
        if not _is_name(value):
            return Err(ConfigError(
                field=f"transitions[{index}].{attr}",
                message=f"Must be a non-empty string, got {value!r}",
            ))
        values[attr] = value

    return Ok(Transition(**values))
