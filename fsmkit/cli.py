"""CLI entry point for fsmkit."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from fsmkit import __version__
from fsmkit.config import MachineDefinition, load_definition
from fsmkit.machine import UndefinedTransitionError
from fsmkit.utils.logging import configure_logging, get_logger, set_machine_context
from fsmkit.utils.result import ExitCode


class Context:
    """CLI context for sharing state between commands."""

    def __init__(self, log_level: str, log_format: str) -> None:
        self.log_level = log_level
        self.log_format = log_format
        self.logger = get_logger("cli")

    def apply_definition_logging(self, definition: MachineDefinition) -> None:
        """Reconfigure logging from a definition's own logging section."""
        if definition.logging is not None:
            configure_logging(
                level=definition.logging.level,
                format_type=definition.logging.format,
            )
            self.logger = get_logger("cli")
        set_machine_context(definition.name)


pass_context = click.make_pass_decorator(Context)


def output_json(data: dict) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def load_or_exit(path: Path) -> MachineDefinition:
    """Load a definition or print the error and exit."""
    result = load_definition(path)
    if result.is_err():
        error = result.unwrap_err()
        output_json({
            "status": "error",
            "field": error.field,
            "message": str(error),
        })
        sys.exit(ExitCode.CONFIG_ERROR)
    return result.unwrap()


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default="info",
    help="Logging level (transitions are logged at debug)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default="json",
    help="Log format",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """
    fsmkit - drive transition table state machines from YAML definitions.
    """
    configure_logging(level=log_level, format_type=log_format)
    ctx.obj = Context(log_level=log_level, log_format=log_format)


@cli.command()
@click.argument("definition", type=click.Path(exists=False, path_type=Path))
@click.argument("events", nargs=-1)
@pass_context
def run(ctx: Context, definition: Path, events: tuple[str, ...]) -> None:
    """Feed EVENTS, in order, to the machine described by DEFINITION."""
    machine_def = load_or_exit(definition)
    ctx.apply_definition_logging(machine_def)

    ctx.logger.info("run_started", definition=str(definition), events=len(events))

    visited: list[str] = []
    with machine_def.build() as machine:
        machine.listen(visited.append)
        try:
            for event in events:
                machine.feed(event)
        except UndefinedTransitionError as e:
            ctx.logger.error("undefined_transition", machine_event=e.event, state=e.state)
            output_json({
                "status": "error",
                "message": str(e),
                "event": e.event,
                "state": e.state,
                "states": visited,
            })
            sys.exit(ExitCode.UNDEFINED_TRANSITION)

        final = machine.state

    ctx.logger.info("run_completed", final=final, transitions=len(visited) - 1)
    output_json({
        "status": "success",
        "initial": machine_def.initial,
        "states": visited,
        "final": final,
    })


@cli.command()
@click.argument("definition", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="json",
    help="Output format",
)
@pass_context
def check(ctx: Context, definition: Path, output_format: str) -> None:
    """Validate DEFINITION and summarize its transition table."""
    machine_def = load_or_exit(definition)
    ctx.apply_definition_logging(machine_def)

    summary = {
        "status": "valid",
        "name": machine_def.name,
        "initial": machine_def.initial,
        "states": machine_def.states(),
        "events": machine_def.events(),
        "transitions": len(machine_def.transitions),
    }

    if output_format == "json":
        output_json(summary)
    else:
        click.echo(f"Machine: {machine_def.name}")
        click.echo("=" * 40)
        click.echo(f"Initial state: {machine_def.initial}")
        click.echo(f"States: {', '.join(summary['states'])}")
        click.echo(f"Events: {', '.join(summary['events'])}")
        click.echo(f"\nTransitions ({summary['transitions']}):")
        for transition in machine_def.transitions:
            click.echo(f"  {transition}")


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
