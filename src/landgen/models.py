from __future__ import annotations

from dataclasses import dataclass, field

ELEMENT_TYPE_IDS = range(1, 4)
FUEL_TYPE_IDS = range(4, 7)


@dataclass(slots=True, frozen=True)
class Site:
    """Resource site placed on the plot grid; type 1-3 is element, 4-6 is fuel."""

    type_id: int
    x: int
    y: int

    @property
    def is_element(self) -> bool:
        return self.type_id in ELEMENT_TYPE_IDS

    @property
    def is_fuel(self) -> bool:
        return self.type_id in FUEL_TYPE_IDS


@dataclass(slots=True, frozen=True)
class PlotStore:
    """Compact plot record as persisted on-chain."""

    version: int
    region_id: int
    x: int
    y: int
    tier_id: int
    size: int
    landmark_type_id: int
    element_sites: int
    fuel_sites: int
    seed: int


@dataclass(slots=True, frozen=True)
class PlotView:
    """Expanded plot record with the resource sites enumerated."""

    version: int
    region_id: int
    x: int
    y: int
    tier_id: int
    size: int
    landmark_type_id: int
    seed: int
    sites: list[Site] = field(default_factory=list)

    @property
    def element_sites(self) -> int:
        return sum(1 for site in self.sites if site.is_element)

    @property
    def fuel_sites(self) -> int:
        return sum(1 for site in self.sites if site.is_fuel)


@dataclass(slots=True, frozen=True)
class MintingBlob:
    token_id: int
    metadata: int
    well_formed: bool = True
