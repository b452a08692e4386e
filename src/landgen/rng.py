"""Deterministic pseudo-random sequence derived from a seed by repeated Keccak-256 hashing.

The term "random" in this module means "pseudo-random": every function derives
the same output for the same input, and seeds are threaded explicitly through
arguments and return values.
"""

from __future__ import annotations

import logging

from Crypto.Hash import keccak

UINT256_LIMIT = 1 << 256
DEFAULT_MAX_REROLLS = 10_000

logger = logging.getLogger("landgen.rng")


class CoordinateRerollLimitError(RuntimeError):
    """Raised when duplicate coordinates keep reappearing past the re-roll cap."""


def keccak_uint(value: int) -> int:
    """Keccak-256 of ``value`` encoded as a 32-byte big-endian word, as an integer."""
    if not 0 <= value < UINT256_LIMIT:
        raise ValueError(f"Seed must be an unsigned 256-bit integer, got {value}")

    digest = keccak.new(digest_bits=256, data=value.to_bytes(32, "big")).digest()
    return int.from_bytes(digest, "big")


def next_rnd_uint(seed: int, offset: int, options: int) -> tuple[int, int]:
    """Return ``(next_seed, value)`` with ``value`` in ``[offset, offset + options)``.

    The input seed is treated as already used, so it is hashed before a value is
    derived; the returned seed is the one the value came from.
    """
    if options <= 0:
        raise ValueError(f"options must be positive, got {options}")

    seed = keccak_uint(seed)
    return seed, offset + seed % options


def find_dup(values: list[int]) -> int:
    """Index of the first element not strictly below its successor, or -1.

    Assumes ``values`` is sorted ascending.
    """
    for i in range(1, len(values)):
        if values[i - 1] >= values[i]:
            return i - 1
    return -1


def get_coords(
    seed: int,
    length: int,
    size: int,
    *,
    max_rerolls: int | None = DEFAULT_MAX_REROLLS,
) -> tuple[int, list[int]]:
    """Derive ``length`` distinct sorted integers in ``[0, size)``.

    Each value is a two-dimensional point flattened onto a segment. Duplicates
    are redrawn one at a time until none remain.
    """
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    if length > size:
        raise ValueError(f"Cannot draw {length} distinct values from [0, {size})")

    coords: list[int] = []
    for _ in range(length):
        seed, value = next_rnd_uint(seed, 0, size)
        coords.append(value)
    coords.sort()

    rerolls = 0
    i = find_dup(coords)
    while i >= 0:
        if max_rerolls is not None and rerolls >= max_rerolls:
            raise CoordinateRerollLimitError(
                f"Duplicates remain after {rerolls} re-rolls (length={length}, size={size})"
            )
        seed, coords[i] = next_rnd_uint(seed, 0, size)
        coords.sort()
        rerolls += 1
        logger.debug("coords_rerolled", extra={"index": i, "rerolls": rerolls, "size": size})
        i = find_dup(coords)

    return seed, coords
