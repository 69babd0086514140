"""Configuration module for fsmkit."""

from fsmkit.config.settings import LoggingConfig, MachineDefinition, load_definition

__all__ = ["LoggingConfig", "MachineDefinition", "load_definition"]
