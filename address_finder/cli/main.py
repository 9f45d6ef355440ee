"""
Command line interface for the address finder.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from address_finder.config import PositioningProviderName, Settings, load_settings
from address_finder.models import AcquiringCoordinates, Failed, ResolutionState, Resolved
from address_finder.services.clipboard import ClipboardUnavailable, CommandClipboard
from address_finder.services.logging import configure_logging, shutdown_logging
from address_finder.services.render import (
    clipboard_text,
    map_url,
    progress_line,
    render_state,
    state_payload,
)
from address_finder.workflow.orchestrator import LocationPipeline, build_pipeline
from address_finder.workflow.resolver import extract_address

app = typer.Typer(
    name="Address Finder",
    help="Locate this device and resolve its postal address with a grounded language model.",
)


def _configure_logging_for_run(settings: Settings, *, quiet: bool = False) -> None:
    configure_logging(
        log_to_file=settings.log_to_file,
        log_file=settings.resolved_log_file() if settings.log_to_file else None,
        log_to_console=settings.log_to_console and not quiet,
        verbose=settings.verbose,
    )


async def _run_cycle(pipeline: LocationPipeline, *, show_progress: bool) -> ResolutionState:
    def _on_state(state: ResolutionState) -> None:
        # Only announce progress once per cycle, when locating starts.
        if show_progress and isinstance(state, AcquiringCoordinates):
            typer.echo(progress_line(state))

    unsubscribe = pipeline.subscribe(_on_state)
    try:
        return await pipeline.start()
    finally:
        unsubscribe()
        await pipeline.aclose()


@app.command()
def locate(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=False,
        help="Optional YAML settings override.",
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        exists=True,
        dir_okay=False,
        help="Environment file with credentials and settings.",
    ),
    lat: Optional[float] = typer.Option(
        None,
        "--lat",
        help="Use this latitude instead of querying a positioning provider.",
    ),
    lng: Optional[float] = typer.Option(
        None,
        "--lng",
        help="Use this longitude instead of querying a positioning provider.",
    ),
    provider: Optional[PositioningProviderName] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Positioning provider to use.",
    ),
    copy: bool = typer.Option(False, "--copy", help="Copy the address to the clipboard."),
    open_map: bool = typer.Option(False, "--open-map", help="Open the position on a map."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Run one locate cycle and print the resolved address."""

    if (lat is None) != (lng is None):
        raise typer.BadParameter("Provide both --lat and --lng, or neither.")

    overrides: dict[str, object] = {}
    if provider is not None:
        overrides["positioning_provider"] = provider
    if lat is not None:
        overrides.update(
            positioning_provider=PositioningProviderName.STATIC,
            static_latitude=lat,
            static_longitude=lng,
        )
    settings = load_settings(config_path, overrides=overrides or None, env_file=env_file)
    _configure_logging_for_run(settings, quiet=as_json)

    try:
        try:
            pipeline = build_pipeline(settings)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
        state = asyncio.run(_run_cycle(pipeline, show_progress=not as_json))
    finally:
        shutdown_logging()

    if as_json:
        typer.echo(json.dumps(state_payload(state), ensure_ascii=False, indent=2))
    elif isinstance(state, Failed):
        typer.echo(render_state(state), err=True)
    else:
        typer.echo(render_state(state))

    if isinstance(state, Failed):
        raise typer.Exit(code=1)

    if isinstance(state, Resolved):
        if copy:
            try:
                CommandClipboard(settings.clipboard_command).copy(clipboard_text(state.address))
                typer.echo("Address copied to clipboard.")
            except ClipboardUnavailable as exc:
                typer.echo(f"Could not copy address: {exc}", err=True)
        if open_map:
            typer.launch(map_url(state.coordinates))


@app.command()
def parse(
    reply_path: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="File holding a raw model reply; stdin is read when omitted.",
    ),
) -> None:
    """Extract address fields from a saved model reply."""

    if reply_path is not None:
        try:
            text = reply_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise typer.BadParameter(f"The reply file is not valid UTF-8: {exc}") from exc
    else:
        text = typer.get_text_stream("stdin").read()
    if not text.strip():
        raise typer.BadParameter("The reply is empty.")
    address = extract_address(text)
    typer.echo(json.dumps(address.to_dict(), ensure_ascii=False, indent=2))


@app.command("settings")
def show_settings(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=False,
        help="Optional YAML settings override.",
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        exists=True,
        dir_okay=False,
        help="Environment file with credentials and settings.",
    ),
) -> None:
    """Print resolved settings for debugging."""
    settings = load_settings(config_path, env_file=env_file)
    for key, value in settings.masked_dump().items():
        typer.echo(f"{key}: {value}")


def main_cli() -> None:
    """Allow `python -m address_finder` execution."""
    app()


if __name__ == "__main__":
    main_cli()
