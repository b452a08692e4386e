from __future__ import annotations

import pytest

from landgen import rng
from landgen.rng import CoordinateRerollLimitError, find_dup, get_coords, keccak_uint, next_rnd_uint

KECCAK_0 = 0x290DECD9548B62A8D60345A988386FC84BA6BC95484008F6362F93160EF3E563
KECCAK_1 = 0xB10E2D527612073B26EECDFD717E6A320CF44B4AFAC2B0732D9FCBE2B7FA0CF6


def test_keccak_of_uint256_words() -> None:
    assert keccak_uint(0) == KECCAK_0
    assert keccak_uint(1) == KECCAK_1


def test_keccak_rejects_values_outside_uint256() -> None:
    with pytest.raises(ValueError):
        keccak_uint(-1)
    with pytest.raises(ValueError):
        keccak_uint(1 << 256)


def test_next_rnd_uint_pinned_vectors() -> None:
    assert next_rnd_uint(0, 0, 3) == (KECCAK_0, 0)
    assert next_rnd_uint(0, 1, 3) == (KECCAK_0, 1)
    assert next_rnd_uint(0, 0, 16) == (KECCAK_0, 3)
    assert next_rnd_uint(1, 10, 2) == (KECCAK_1, 10)


def test_next_rnd_uint_hashes_before_every_draw() -> None:
    seed, _ = next_rnd_uint(0, 0, 100)
    next_seed, value = next_rnd_uint(seed, 0, 100)

    assert next_seed == keccak_uint(KECCAK_0)
    assert value == next_seed % 100
    assert next_rnd_uint(seed, 0, 100) == (next_seed, value)


def test_next_rnd_uint_rejects_empty_range() -> None:
    with pytest.raises(ValueError):
        next_rnd_uint(0, 0, 0)


def test_find_dup() -> None:
    assert find_dup([]) == -1
    assert find_dup([1, 2, 3]) == -1
    assert find_dup([1, 2, 2, 3, 3]) == 1
    assert find_dup([4, 4]) == 0


def test_get_coords_distinct_sorted_and_in_range() -> None:
    for seed in range(20):
        next_seed, coords = get_coords(seed, 27, 500)

        assert len(coords) == 27
        assert coords == sorted(coords)
        assert len(set(coords)) == 27
        assert all(0 <= c < 500 for c in coords)
        assert next_seed != seed


def test_get_coords_pinned_vector() -> None:
    assert get_coords(12345, 15, 1_000) == (
        0x98F6E3B89E0AAAC9175ADB10F09C357232AB6D1FDBFE4A88A0E28FA4DF623AD6,
        [31, 91, 104, 134, 167, 461, 477, 496, 513, 566, 609, 632, 734, 818, 999],
    )


def test_get_coords_resolves_duplicates_in_a_crowded_range() -> None:
    _, coords = get_coords(7, 8, 8)

    assert coords == list(range(8))


def test_get_coords_zero_length_keeps_seed() -> None:
    assert get_coords(99, 0, 10) == (99, [])


def test_get_coords_rejects_impossible_requests() -> None:
    with pytest.raises(ValueError):
        get_coords(0, 5, 4)


def test_get_coords_reroll_cap(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(rng, "next_rnd_uint", lambda seed, offset, options: (seed, offset))

    with pytest.raises(CoordinateRerollLimitError):
        get_coords(0, 2, 10, max_rerolls=5)
