"""Command line interface for inspecting chains and running sessions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from waypoint.config import load_config
from waypoint.script import SessionReport, StepOutcome, load_script, run_script
from waypoint.states import ChainDefinitionError

app = typer.Typer(help="CLI for waypoint workflows")

chain_app = typer.Typer(help="Commands for inspecting state chains")
app.add_typer(chain_app, name="chain")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", help="Path to a waypoint YAML configuration file"
    ),
) -> None:
    """Waypoint CLI entry point."""
    try:
        settings = load_config(str(config) if config else None)
    except (ValidationError, yaml.YAMLError) as exc:
        typer.secho(f"Invalid configuration: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    logging.basicConfig(level=settings.log_level)
    ctx.obj = settings


@chain_app.command("list")
def chain_list(ctx: typer.Context) -> None:
    """List the names of all configured chains."""
    settings = ctx.obj
    for name in settings.chains:
        typer.echo(name)


@chain_app.command("show")
def chain_show(ctx: typer.Context, name: str) -> None:
    """
    Show the states of a chain in order.

    Example:
        waypoint chain show order
        # Output: New [initial] - Order is in NEW state.
        #         Processing - Order is PROCESSING.
        #         ...
    """
    settings = ctx.obj
    try:
        chain = settings.build_chain(name)
    except KeyError:
        typer.secho(f"Chain not found: {name}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except ChainDefinitionError as exc:
        typer.secho(f"Invalid chain {name}: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    for state in chain:
        markers = []
        if state.is_initial:
            markers.append("initial")
        if state.is_terminal:
            markers.append("terminal")
        line = state.label
        if markers:
            line += f" [{', '.join(markers)}]"
        if state.description:
            line += f" - {state.description}"
        typer.echo(line)


def _format_outcome(outcome: StepOutcome) -> str:
    if outcome.result is None:
        return f"{outcome.index}. set -> {outcome.payload}"
    result = outcome.result
    status = "ok" if result.ok else "failed"
    line = (
        f"{outcome.index}. {result.operation}: {status} "
        f"(state={result.state}, checkpoints={result.pending_checkpoints})"
    )
    if result.snapshot is not None:
        line += f" snapshot=#{result.snapshot.sequence_number}"
    if result.error is not None:
        line += f" [{result.error.code}] {result.error.message}"
    return line


@app.command("run")
def run(
    ctx: typer.Context,
    script_path: Path,
    strict: bool = typer.Option(
        False, help="Exit with code 2 when any step fails"
    ),
) -> None:
    """
    Run a session script against a fresh context.

    The script names a chain, an initial payload and a list of steps
    (advance, revert, checkpoint, undo, status or {set: {...}}).

    Example:
        waypoint run ./guides/order_session.yaml
        waypoint run ./guides/profile_undo.yaml --strict
    """
    settings = ctx.obj
    if not script_path.exists():
        typer.secho(f"Script not found: {script_path}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    try:
        script = load_script(script_path)
        report: SessionReport = run_script(script, settings)
    except (ValidationError, yaml.YAMLError) as exc:
        typer.secho(f"Invalid script {script_path}: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except KeyError as exc:
        typer.secho(str(exc.args[0]), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except ChainDefinitionError as exc:
        typer.secho(f"Invalid chain: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"Session {report.context_id} on chain {report.chain}")
    for outcome in report.outcomes:
        typer.echo(_format_outcome(outcome))
    typer.echo(f"Final state: {report.final_state} - {report.description}")
    typer.echo(f"Payload: {report.final_payload}")

    if strict and report.failures:
        raise typer.Exit(code=2)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
