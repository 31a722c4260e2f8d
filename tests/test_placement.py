"""Tests for seeded fleet placement."""

import pytest

from seabattle.errors import InvalidPlacement, PlacementError
from seabattle.field import FLEET
from seabattle.placement import field_from_rows, random_field


def test_same_seed_same_field() -> None:
    assert random_field(42).rows() == random_field(42).rows()


def test_different_seeds_differ() -> None:
    assert random_field(1).rows() != random_field(2).rows()


@pytest.mark.parametrize("seed", range(10))
def test_random_field_holds_the_whole_fleet(seed: int) -> None:
    field = random_field(seed)
    assert sorted(len(ship) for ship in field.ships) == sorted(FLEET)
    assert field.remaining == sum(FLEET)


def test_impossible_fleet_raises() -> None:
    with pytest.raises(PlacementError):
        random_field(0, fleet=(10,))


def test_field_from_rows_accepts_rendered_lines() -> None:
    field = random_field(3)
    copy = field_from_rows([field.line(row) for row in range(len(field.grid))])
    assert copy.rows() == field.rows()


def test_field_from_rows_rejects_unknown_characters() -> None:
    with pytest.raises(InvalidPlacement):
        field_from_rows(["?........"] + ["........."] * 8)
