from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidPlacement, PlacementError
from .field import FIELD_SIZE, FLEET, Cell, Grid, OwnField, empty_grid, in_range, neighbours

MAX_ATTEMPTS = 100


def ship_cells(col: int, row: int, size: int, horizontal: bool) -> List[Tuple[int, int]]:
    return [(col + i, row) if horizontal else (col, row + i) for i in range(size)]


def can_place(grid: Grid, cells: Sequence[Tuple[int, int]]) -> bool:
    for c, r in cells:
        if not in_range(c, r) or grid[r][c] is not Cell.EMPTY:
            return False
        for nc, nr in neighbours(c, r, diagonal=True):
            if grid[nr][nc] is not Cell.EMPTY:
                return False
    return True


def _try_place(rng: random.Random, fleet: Sequence[int]) -> Optional[Grid]:
    grid = empty_grid()
    for size in fleet:
        candidates = []
        for horizontal in (True, False):
            for row in range(FIELD_SIZE):
                for col in range(FIELD_SIZE):
                    cells = ship_cells(col, row, size, horizontal)
                    if can_place(grid, cells):
                        candidates.append(cells)
        if not candidates:
            return None
        for c, r in rng.choice(candidates):
            grid[r][c] = Cell.SHIP
    return grid


def random_field(seed: int, fleet: Sequence[int] = FLEET) -> OwnField:
    """Place ``fleet`` at random; the same seed always yields the same field."""
    rng = random.Random(seed)
    for _ in range(MAX_ATTEMPTS):
        grid = _try_place(rng, fleet)
        if grid is not None:
            return OwnField(grid)
    raise PlacementError(f"could not place fleet {tuple(fleet)} after {MAX_ATTEMPTS} attempts")


def field_from_rows(rows: Sequence[str]) -> OwnField:
    """Build a field from text rows, ``O`` or ``X`` for ships and ``.`` for water.

    Spaces inside a row are ignored, so the output of ``Field.line`` can be
    pasted back in.
    """
    grid: Grid = []
    for text in rows:
        line: List[Cell] = []
        for ch in text.replace(" ", ""):
            if ch in "OoXx":
                line.append(Cell.SHIP)
            elif ch == ".":
                line.append(Cell.EMPTY)
            else:
                raise InvalidPlacement(f"unexpected character {ch!r} in field row {text!r}")
        grid.append(line)
    return OwnField(grid)
