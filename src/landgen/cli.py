"""CLI-side handler wrapping the land library for the command line."""

from __future__ import annotations

from dataclasses import asdict

from landgen.isomorphic_grid import DEFAULT_SITE_SIZE, render_sites
from landgen.land_lib import MIN_PLOT_SIZE, check_plot_size, generate_plot, plot_view
from landgen.minting_blob import MalformedMintingBlobError, format_minting_blob, parse_minting_blob
from landgen.models import PlotStore, PlotView
from landgen.packing import pack, unpack
from landgen.rng import DEFAULT_MAX_REROLLS
from landgen.telemetry import NullTelemetry, Telemetry


def parse_blob_int(text: str) -> int:
    """Read a packed plot given as decimal digits or ``0x``-prefixed hex."""
    text = text.strip()
    base = 16 if text.lower().startswith("0x") else 10
    value = int(text, base)
    if value < 0:
        raise ValueError(f"Packed plot must not be negative: {text}")
    return value


class CliPlotHandler:
    """Sync facade over plot generation, expansion and codecs, reporting to telemetry."""

    def __init__(
        self,
        telemetry: Telemetry | None = None,
        *,
        site_size: int = DEFAULT_SITE_SIZE,
        min_plot_size: int = MIN_PLOT_SIZE,
        max_rerolls: int | None = DEFAULT_MAX_REROLLS,
    ) -> None:
        self._telemetry = telemetry or NullTelemetry()
        self._site_size = site_size
        self._min_plot_size = min_plot_size
        self._max_rerolls = max_rerolls

    def generate(self, seed: int, *, region_id: int, x: int, y: int, tier_id: int, size: int, version: int) -> dict:
        store = generate_plot(seed, region_id=region_id, x=x, y=y, tier_id=tier_id, size=size, version=version)
        check_plot_size(store, self._min_plot_size)
        packed = pack(store)
        self._telemetry.emit("plot_generated", {"tier_id": tier_id, "size": size, "packed": hex(packed)})
        return {"plot": asdict(store), "packed": str(packed), "packed_hex": hex(packed)}

    def pack(self, store: PlotStore) -> dict:
        packed = pack(store)
        return {"packed": str(packed), "packed_hex": hex(packed)}

    def unpack(self, packed: int) -> PlotStore:
        return unpack(packed)

    def view(self, packed: int) -> tuple[PlotView, str]:
        store = check_plot_size(unpack(packed), self._min_plot_size)
        view = plot_view(store, site_size=self._site_size, max_rerolls=self._max_rerolls)
        self._telemetry.emit("plot_expanded", {"sites": len(view.sites), "size": view.size})
        return view, render_sites(view.sites, view.size, lambda v: v // self._site_size)

    def parse_blob(self, text: str, *, strict: bool = False) -> dict:
        blob = parse_minting_blob(text)
        if strict and not blob.well_formed:
            raise MalformedMintingBlobError(f"Malformed minting blob: {text!r}")
        store = unpack(blob.metadata)
        self._telemetry.emit("minting_blob_parsed", {"token_id": blob.token_id, "well_formed": blob.well_formed})
        return {"token_id": blob.token_id, "well_formed": blob.well_formed, "plot": asdict(store)}

    def mint_blob(self, token_id: int, packed: int, *, braces: bool = False) -> str:
        unpack(packed)
        return format_minting_blob(token_id, packed, braces=braces)

    @staticmethod
    def format_view(view: PlotView) -> dict:
        payload = asdict(view)
        payload["element_sites"] = view.element_sites
        payload["fuel_sites"] = view.fuel_sites
        return payload
