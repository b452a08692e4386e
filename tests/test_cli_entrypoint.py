from __future__ import annotations

import importlib
from dataclasses import replace

import pytest

from landgen.cli import CliPlotHandler, parse_blob_int
from landgen.land_lib import PlotTooSmallError, plot_view
from landgen.minting_blob import MalformedMintingBlobError
from landgen.models import PlotStore
from landgen.packing import pack

PLOT = PlotStore(
    version=1,
    region_id=7,
    x=100,
    y=200,
    tier_id=3,
    size=90,
    landmark_type_id=2,
    element_sites=9,
    fuel_sites=6,
    seed=12345,
)


class RecordingTelemetry:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def emit(self, event_name: str, payload: dict) -> None:
        self.events.append((event_name, payload))


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("landgen.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_parse_blob_int() -> None:
    assert parse_blob_int("255") == 255
    assert parse_blob_int(" 0xff ") == 255
    with pytest.raises(ValueError):
        parse_blob_int("-3")
    with pytest.raises(ValueError):
        parse_blob_int("abc")


def test_handler_view_emits_telemetry() -> None:
    telemetry = RecordingTelemetry()
    handler = CliPlotHandler(telemetry)

    view, board = handler.view(pack(PLOT))

    assert len(view.sites) == 15
    assert len(board.splitlines()) == 45
    assert telemetry.events == [("plot_expanded", {"sites": 15, "size": 90})]


def test_handler_parse_blob() -> None:
    handler = CliPlotHandler()

    result = handler.parse_blob(f"3:{pack(PLOT)}")

    assert result["token_id"] == 3
    assert result["well_formed"] is True
    assert result["plot"]["size"] == 90


def test_handler_defaults_match_library_defaults() -> None:
    handler = CliPlotHandler()

    view, _ = handler.view(pack(PLOT))

    assert view == plot_view(PLOT)
    handler.view(pack(replace(PLOT, size=32)))
    with pytest.raises(PlotTooSmallError):
        handler.view(pack(replace(PLOT, size=31)))


def test_handler_strict_parse_rejects_malformed_blob() -> None:
    telemetry = RecordingTelemetry()
    handler = CliPlotHandler(telemetry)

    with pytest.raises(MalformedMintingBlobError):
        handler.parse_blob("3", strict=True)
    assert telemetry.events == []

    result = handler.parse_blob("3")
    assert result["well_formed"] is False
    assert result["plot"]["size"] == 0
    assert telemetry.events == [("minting_blob_parsed", {"token_id": 3, "well_formed": False})]


def test_cli_commands() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from landgen.main import app

    runner = typer_testing.CliRunner()
    packed = pack(PLOT)

    result = runner.invoke(app, ["mint-blob", "--token-id", "3", "--blob", str(packed)])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"3:{packed}"

    result = runner.invoke(app, ["unpack", hex(packed)])
    assert result.exit_code == 0
    assert "tier_id=3" in result.stdout

    result = runner.invoke(app, ["view", str(packed), "--no-board"])
    assert result.exit_code == 0
    assert "'landmark_type_id': 2" in result.stdout

    result = runner.invoke(app, ["parse-blob", "3", "--strict"])
    assert result.exit_code == 1
    assert "MalformedMintingBlobError" in result.stdout


def test_cli_generate_rejects_small_plots() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from landgen.main import app

    result = typer_testing.CliRunner().invoke(
        app,
        ["generate", "--seed", "0x10", "--region-id", "1", "--x", "1", "--y", "1", "--tier-id", "2", "--size", "16"],
    )

    assert result.exit_code == 1
    assert "too small" in result.stdout
