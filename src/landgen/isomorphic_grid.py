"""Resource site placement on an isomorphic (diamond-oriented) grid.

The plot is a square of size ``N``; the isomorphic grid is the diamond inscribed
in it. Sites are ``n x n`` boxes (``n`` is the site size) placed so that they
never collide, never touch the four "invalid" corners of the square, and never
take the four center cells reserved for a landmark.

Placement runs through four coordinate transforms:

1. normalization ``(x, y) -> (x / n, y / n)``, one cell per site box;
2. border cut, reducing the normalized size to an even number;
3. packing the diamond onto a rectangle ``[size, 1 + size / 2]``;
4. flattening the rectangle onto a one-dimensional segment ``y * size + x``.

Positions are drawn on the segment and every transform is then reversed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from .models import Site
from .rng import DEFAULT_MAX_REROLLS, get_coords, next_rnd_uint

DEFAULT_SITE_SIZE = 2
# cells reserved around the center for a landmark
LANDMARK_CELLS = 4

logger = logging.getLogger("landgen.isomorphic_grid")


class GridTooSmallError(ValueError):
    """Raised when the plot cannot hold the requested number of sites."""


@dataclass(slots=True, frozen=True)
class _GridFrame:
    normalized_size: int
    border: int
    offset: int
    # explicit free cells, drawn from instead of the folded diamond on tiny plots
    cells: tuple[tuple[int, int], ...] | None = None

    @property
    def segment_length(self) -> int:
        if self.cells is not None:
            return len(self.cells)
        return segment_length(self.normalized_size)

    def position(self, coord: int) -> tuple[int, int]:
        if self.cells is not None:
            return self.cells[coord]
        return _unpack_position(coord, self.normalized_size)


def segment_length(normalized_size: int) -> int:
    """Number of free positions on the flattened grid, landmark cells excluded."""
    return normalized_size * (1 + (normalized_size >> 1)) - LANDMARK_CELLS


def _compact_cells(grid_size: int, site_size: int, size: int, offset: int) -> tuple[tuple[int, int], ...]:
    """Cells of a borderless normalized grid whose whole box avoids the corners and the center."""
    half = size >> 1
    cells: list[tuple[int, int]] = []
    for y in range(size):
        for x in range(size):
            if half - 1 <= x <= half and half - 1 <= y <= half:
                continue
            x0 = x * site_size + offset
            y0 = y * site_size + offset
            if any(
                is_corner(x0 + dx, y0 + dy, grid_size)
                for dx in range(site_size)
                for dy in range(site_size)
            ):
                continue
            cells.append((x, y))
    return tuple(cells)


def _grid_frame(grid_size: int, site_size: int, total_sites: int) -> _GridFrame:
    normalized_size = grid_size // site_size

    # the cut drops one border cell on each side; if N is odd (or N/n is odd)
    # the cut off border coordinates are recovered by the offset
    cut_size = ((normalized_size - 2) >> 1) << 1
    frame = _GridFrame(
        normalized_size=cut_size,
        border=1,
        offset=normalized_size % 2 + grid_size % site_size,
    )
    if frame.segment_length >= total_sites:
        return frame

    # only a plot whose cut grid has no position at all falls back to listing
    # the valid cells of the uncut grid one by one
    if frame.segment_length <= 0:
        compact_size = (normalized_size >> 1) << 1
        offset = grid_size % site_size
        frame = _GridFrame(
            normalized_size=compact_size,
            border=0,
            offset=offset,
            cells=_compact_cells(grid_size, site_size, compact_size, offset),
        )
        if frame.segment_length >= total_sites:
            logger.debug(
                "compact_grid_frame",
                extra={"grid_size": grid_size, "site_size": site_size, "total_sites": total_sites},
            )
            return frame

    raise GridTooSmallError(
        f"Plot of size {grid_size} cannot hold {total_sites} sites of size {site_size}"
    )


def _unpack_position(coord: int, size: int) -> tuple[int, int]:
    # reverse transform (4): segment -> rectangle
    x = coord % size
    y = coord // size
    half = size >> 1

    # reverse transform (3): unpack the rectangle onto the square,
    # moving the "(0, 0) bottom-left" and "(size, 0) bottom-right" corners up
    if 2 * (1 + x + y) < size:
        x += half
        y += 1 + half
    elif 2 * x > size and 2 * x > 2 * y + size:
        x -= half
        y += 1 + half

    # move a site off the four center cells onto the free tail of the segment
    if half - 1 <= x <= half and half - 1 <= y <= half:
        x += (5 * size >> 1) - 2 * (x + y) - 4
        y = half

    return x, y


def get_resource_sites(
    seed: int,
    element_sites: int,
    fuel_sites: int,
    grid_size: int,
    site_size: int = DEFAULT_SITE_SIZE,
    *,
    max_rerolls: int | None = DEFAULT_MAX_REROLLS,
) -> list[Site]:
    """Derive the resource sites of a plot from its seed.

    Element sites come first, in the order drawn, then fuel sites. The i-th
    sorted coordinate is paired with the i-th type draw.
    """
    if site_size < 1:
        raise ValueError(f"site_size must be positive, got {site_size}")
    if element_sites < 0 or fuel_sites < 0:
        raise ValueError("site counts must not be negative")

    total_sites = element_sites + fuel_sites
    if total_sites == 0:
        return []

    frame = _grid_frame(grid_size, site_size, total_sites)
    seed, coords = get_coords(seed, total_sites, frame.segment_length, max_rerolls=max_rerolls)

    sites: list[Site] = []
    for i, coord in enumerate(coords):
        seed, type_id = next_rnd_uint(seed, 1 if i < element_sites else 4, 3)
        x, y = frame.position(coord)
        # reverse transforms (2) and (1): recover borders and scale by the site size
        sites.append(
            Site(
                type_id=type_id,
                x=(frame.border + x) * site_size + frame.offset,
                y=(frame.border + y) * site_size + frame.offset,
            )
        )

    return sites


def is_corner(x: int, y: int, size: int) -> bool:
    """Whether ``(x, y)`` lies outside the isomorphic grid of the given size."""
    return x + y < size / 2 or x + y > 3 * size / 2 or x - y > size / 2 or y - x > size / 2


def render_sites(
    sites: Sequence[Site],
    size: int,
    transform: Callable[[int], int] = lambda v: v,
) -> str:
    """Text board of the plot: site counts, ``.`` for free cells, blanks for corners.

    ``transform`` is applied to the size and to each site coordinate, e.g.
    ``lambda v: v // 2`` draws one character per site box.
    """
    side = transform(size)
    counts: dict[tuple[int, int], int] = {}
    for site in sites:
        key = (transform(site.x), transform(site.y))
        counts[key] = counts.get(key, 0) + 1

    rows: list[str] = []
    for y in range(side):
        row: list[str] = []
        for x in range(side):
            count = counts.get((x, y), 0)
            if count:
                digit = _base36(count)
                row.append("*" if len(digit) > 1 else digit)
            elif is_corner(x, y, side):
                row.append(" ")
            else:
                row.append(".")
        rows.append("".join(row))
    return "\n".join(rows) + "\n"


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    out = ""
    while True:
        value, rem = divmod(value, 36)
        out = digits[rem] + out
        if not value:
            return out
