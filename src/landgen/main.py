"""CLI startup entrypoint for the land generator."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich import print

from landgen.cli import CliPlotHandler, parse_blob_int
from landgen.config import settings
from landgen.models import PlotStore
from landgen.telemetry import LoggingTelemetry, NullTelemetry, configure_logging

app = typer.Typer(help="Land plot generation and blueprint tooling")


def _build_handler() -> CliPlotHandler:
    telemetry = LoggingTelemetry() if settings.telemetry_enabled else NullTelemetry()
    return CliPlotHandler(
        telemetry,
        site_size=settings.site_size,
        min_plot_size=settings.min_plot_size,
        max_rerolls=settings.max_coord_rerolls,
    )


def _parse_int(text: str, name: str) -> int:
    try:
        return parse_blob_int(text)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=name) from exc


def _fail(exc: Exception) -> NoReturn:
    print({"error": f"{type(exc).__name__}: {exc}"})
    raise typer.Exit(code=1)


@app.callback()
def main() -> None:
    configure_logging(settings.log_level)


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(settings.model_dump())


@app.command()
def generate(
    seed: str = typer.Option(..., help="256-bit seed, decimal or 0x hex"),
    region_id: int = typer.Option(..., help="Region ID"),
    x: int = typer.Option(..., help="X coordinate within the region"),
    y: int = typer.Option(..., help="Y coordinate within the region"),
    tier_id: int = typer.Option(..., help="Tier ID, 0-5"),
    size: int = typer.Option(..., help="Plot size"),
    version: int = typer.Option(None, help="Generator version, defaults to the configured one"),
) -> None:
    """Derive a plot record from a seed and pack it."""
    handler = _build_handler()
    try:
        result = handler.generate(
            _parse_int(seed, "--seed"),
            region_id=region_id,
            x=x,
            y=y,
            tier_id=tier_id,
            size=size,
            version=settings.plot_version if version is None else version,
        )
    except ValueError as exc:
        _fail(exc)
    print(result)


@app.command()
def pack(
    region_id: int = typer.Option(..., help="Region ID"),
    x: int = typer.Option(..., help="X coordinate within the region"),
    y: int = typer.Option(..., help="Y coordinate within the region"),
    tier_id: int = typer.Option(..., help="Tier ID"),
    size: int = typer.Option(..., help="Plot size"),
    seed: str = typer.Option(..., help="160-bit seed, decimal or 0x hex"),
    landmark_type_id: int = typer.Option(0, help="Landmark type ID"),
    element_sites: int = typer.Option(0, help="Number of element sites"),
    fuel_sites: int = typer.Option(0, help="Number of fuel sites"),
    version: int = typer.Option(None, help="Generator version, defaults to the configured one"),
) -> None:
    """Pack plot fields into a 256-bit blueprint."""
    store = PlotStore(
        version=settings.plot_version if version is None else version,
        region_id=region_id,
        x=x,
        y=y,
        tier_id=tier_id,
        size=size,
        landmark_type_id=landmark_type_id,
        element_sites=element_sites,
        fuel_sites=fuel_sites,
        seed=_parse_int(seed, "--seed"),
    )
    try:
        result = _build_handler().pack(store)
    except ValueError as exc:
        _fail(exc)
    print(result)


@app.command()
def unpack(blob: str = typer.Argument(..., help="Packed plot, decimal or 0x hex")) -> None:
    """Unpack a 256-bit blueprint into plot fields."""
    try:
        store = _build_handler().unpack(_parse_int(blob, "BLOB"))
    except ValueError as exc:
        _fail(exc)
    print(store)


@app.command()
def view(
    blob: str = typer.Argument(..., help="Packed plot, decimal or 0x hex"),
    board: bool = typer.Option(True, help="Print the text board of the plot"),
) -> None:
    """Expand a packed plot and list its resource sites."""
    handler = _build_handler()
    try:
        plot, text = handler.view(_parse_int(blob, "BLOB"))
    except ValueError as exc:
        _fail(exc)
    print(handler.format_view(plot))
    if board:
        typer.echo(text)


@app.command("parse-blob")
def parse_blob(
    text: str = typer.Argument(..., help="Minting blob, e.g. 42:123456"),
    strict: bool = typer.Option(False, help="Reject malformed blobs instead of degrading"),
) -> None:
    """Parse a minting blob into a token ID and plot record."""
    try:
        result = _build_handler().parse_blob(text, strict=strict)
    except ValueError as exc:
        _fail(exc)
    print(result)


@app.command("mint-blob")
def mint_blob(
    token_id: int = typer.Option(..., help="Token ID"),
    blob: str = typer.Option(..., help="Packed plot, decimal or 0x hex"),
    braces: bool = typer.Option(False, help="Wrap numbers in curly braces"),
) -> None:
    """Format a minting blob for the L2 bridge."""
    try:
        text = _build_handler().mint_blob(token_id, _parse_int(blob, "--blob"), braces=braces)
    except ValueError as exc:
        _fail(exc)
    typer.echo(text)


if __name__ == "__main__":
    app()
