"""Land plot structure: landmark and tier rules, mint-time generation, expansion."""

from __future__ import annotations

from .isomorphic_grid import DEFAULT_SITE_SIZE, get_resource_sites
from .models import PlotStore, PlotView
from .rng import DEFAULT_MAX_REROLLS

MIN_PLOT_SIZE = 32
MAX_TIER_ID = 5
SEED_MASK = (1 << 160) - 1

NO_LANDMARK = 0
ARENA_LANDMARK = 7


class PlotTooSmallError(ValueError):
    """Raised when a plot is smaller than the registration minimum."""


def get_landmark(seed: int, tier_id: int) -> int:
    """Landmark type of a plot: element (1-3) for tier 3, fuel (4-6) for tier 4,
    arena (7) for tier 5, none (0) otherwise. Tier 5 and lower tiers do not
    depend on the seed.
    """
    if tier_id == 3:
        return 1 + seed % 3
    if tier_id == 4:
        return 4 + seed % 3
    if tier_id == 5:
        return ARENA_LANDMARK
    return NO_LANDMARK


def _check_tier(tier_id: int) -> None:
    if not 0 <= tier_id <= MAX_TIER_ID:
        raise ValueError(f"tier_id must be within [0, {MAX_TIER_ID}], got {tier_id}")


def element_sites_for_tier(tier_id: int) -> int:
    _check_tier(tier_id)
    return 3 * tier_id


def fuel_sites_for_tier(tier_id: int) -> int:
    _check_tier(tier_id)
    return tier_id if tier_id < 2 else 3 * (tier_id - 1)


def check_plot_size(store: PlotStore, min_size: int = MIN_PLOT_SIZE) -> PlotStore:
    if store.size < min_size:
        raise PlotTooSmallError(f"too small: plot size {store.size} is below {min_size}")
    return store


def generate_plot(
    seed: int,
    *,
    region_id: int,
    x: int,
    y: int,
    tier_id: int,
    size: int,
    version: int = 1,
) -> PlotStore:
    """Build the record minted for a plot from a fresh 256-bit seed.

    The landmark is resolved from the full seed; only its low 160 bits are stored.
    """
    return PlotStore(
        version=version,
        region_id=region_id,
        x=x,
        y=y,
        tier_id=tier_id,
        size=size,
        landmark_type_id=get_landmark(seed, tier_id),
        element_sites=element_sites_for_tier(tier_id),
        fuel_sites=fuel_sites_for_tier(tier_id),
        seed=seed & SEED_MASK,
    )


def plot_view(
    store: PlotStore,
    *,
    site_size: int = DEFAULT_SITE_SIZE,
    max_rerolls: int | None = DEFAULT_MAX_REROLLS,
) -> PlotView:
    """Expand a stored plot, deriving its resource sites from the stored seed.

    The landmark is carried over as resolved at mint time.
    """
    return PlotView(
        version=store.version,
        region_id=store.region_id,
        x=store.x,
        y=store.y,
        tier_id=store.tier_id,
        size=store.size,
        landmark_type_id=store.landmark_type_id,
        seed=store.seed,
        sites=get_resource_sites(
            store.seed,
            store.element_sites,
            store.fuel_sites,
            store.size,
            site_size,
            max_rerolls=max_rerolls,
        ),
    )
