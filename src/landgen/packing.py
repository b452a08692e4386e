"""Bit-exact packing of ``PlotStore`` records into a single 256-bit integer.

Fields are laid out from the most significant bit down, in ``PLOT_LAYOUT``
order. The layout is shared with the on-chain storage and the L2 minting
blueprint; changing it breaks both.
"""

from __future__ import annotations

from dataclasses import dataclass

from .land_lib import MIN_PLOT_SIZE, check_plot_size
from .models import PlotStore

BLOB_BITS = 256
BLUEPRINT_LENGTH = BLOB_BITS // 8


class PackOverflowError(ValueError):
    """Raised when a field value does not fit into its bit width."""


class InvalidBlueprintError(ValueError):
    """Raised when a binary blueprint is not exactly one 256-bit word."""


@dataclass(slots=True, frozen=True)
class BitField:
    name: str
    width: int
    offset: int = 0

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1


def _layout(*fields: tuple[str, int]) -> tuple[BitField, ...]:
    offset = BLOB_BITS
    out: list[BitField] = []
    for name, width in fields:
        offset -= width
        out.append(BitField(name=name, width=width, offset=offset))
    if offset != 0:
        raise AssertionError(f"Plot layout must fill {BLOB_BITS} bits, {offset} left over")
    return tuple(out)


PLOT_LAYOUT = _layout(
    ("version", 8),
    ("region_id", 8),
    ("x", 16),
    ("y", 16),
    ("tier_id", 8),
    ("size", 16),
    ("landmark_type_id", 8),
    ("element_sites", 8),
    ("fuel_sites", 8),
    ("seed", 160),
)


def pack(store: PlotStore) -> int:
    packed = 0
    for field in PLOT_LAYOUT:
        value = getattr(store, field.name)
        if not 0 <= value <= field.mask:
            raise PackOverflowError(
                f"{field.name}={value} does not fit into {field.width} bits"
            )
        packed |= value << field.offset
    return packed


def unpack(packed: int) -> PlotStore:
    if not 0 <= packed < 1 << BLOB_BITS:
        raise ValueError(f"Packed plot must be an unsigned {BLOB_BITS}-bit integer, got {packed}")
    return PlotStore(**{field.name: packed >> field.offset & field.mask for field in PLOT_LAYOUT})


def blueprint_to_bytes(store: PlotStore) -> bytes:
    return pack(store).to_bytes(BLUEPRINT_LENGTH, "big")


def plot_from_blueprint(data: bytes, *, min_size: int = MIN_PLOT_SIZE) -> PlotStore:
    """Decode a 32-byte big-endian blueprint and check the plot size minimum."""
    if len(data) != BLUEPRINT_LENGTH:
        raise InvalidBlueprintError(
            f"invalid length: blueprint must be {BLUEPRINT_LENGTH} bytes, got {len(data)}"
        )
    return check_plot_size(unpack(int.from_bytes(data, "big")), min_size)
