from __future__ import annotations

import logging
from enum import Enum, IntEnum
from typing import Dict, Iterator, List, NamedTuple, Sequence, Tuple

from .errors import InvalidPlacement, OutOfRange, ProtocolViolation

logger = logging.getLogger(__name__)

FIELD_SIZE = 9
COORDS = [chr(ord('A') + i) for i in range(FIELD_SIZE)]
FLEET: Tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)


class Cell(Enum):
    EMPTY = 0
    SHIP = 1
    SHOT_EMPTY = 2
    SHOT_SHIP = 3
    KILLED = 4


class ShotResult(IntEnum):
    MISS = 0
    HIT = 1
    KILL = 2


class Move(NamedTuple):
    col: int
    row: int


GLYPHS: Dict[Cell, str] = {
    Cell.EMPTY: ".",
    Cell.SHIP: "O",
    Cell.SHOT_EMPTY: "*",
    Cell.SHOT_SHIP: "x",
    Cell.KILLED: "#",
}

SHOT_CELLS = (Cell.SHOT_EMPTY, Cell.SHOT_SHIP, Cell.KILLED)

Grid = List[List[Cell]]


def in_range(col: int, row: int) -> bool:
    return 0 <= col < FIELD_SIZE and 0 <= row < FIELD_SIZE


def empty_grid() -> Grid:
    return [[Cell.EMPTY for _ in range(FIELD_SIZE)] for _ in range(FIELD_SIZE)]


def neighbours(col: int, row: int, diagonal: bool = False) -> Iterator[Tuple[int, int]]:
    for dc in (-1, 0, 1):
        for dr in (-1, 0, 1):
            if dc == dr == 0:
                continue
            if not diagonal and dc != 0 and dr != 0:
                continue
            c, r = col + dc, row + dr
            if in_range(c, r):
                yield c, r


class Field:
    """Read and render capability shared by both boards.

    The grid is indexed ``grid[row][col]``; every public method takes
    ``(col, row)`` in the same order as a :class:`Move`.
    """

    def __init__(self, grid: Grid, remaining: int) -> None:
        self.grid = grid
        self._remaining = remaining

    def _check(self, col: int, row: int) -> None:
        if not in_range(col, row):
            raise OutOfRange(col, row)

    def get(self, col: int, row: int) -> Cell:
        self._check(col, row)
        return self.grid[row][col]

    @property
    def remaining(self) -> int:
        """Ship cells not yet hit."""
        return self._remaining

    def is_loser(self) -> bool:
        return self._remaining == 0

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self.grid)

    def line(self, row: int, reveal: bool = True) -> str:
        cells = []
        for cell in self.grid[row]:
            if cell is Cell.SHIP and not reveal:
                cell = Cell.EMPTY
            cells.append(GLYPHS[cell])
        return " ".join(cells)

    @staticmethod
    def header_line() -> str:
        return " ".join(COORDS)


class OwnField(Field):
    """The local player's fleet; the only board that can be shot at."""

    def __init__(self, grid: Sequence[Sequence[Cell]]) -> None:
        if len(grid) != FIELD_SIZE or any(len(row) != FIELD_SIZE for row in grid):
            raise InvalidPlacement(f"field must be {FIELD_SIZE}x{FIELD_SIZE}")
        cells = [list(row) for row in grid]
        for row in cells:
            for cell in row:
                if cell not in (Cell.EMPTY, Cell.SHIP):
                    raise InvalidPlacement(f"unexpected {cell.name} cell in a fresh field")
        ship_count = sum(row.count(Cell.SHIP) for row in cells)
        super().__init__(cells, ship_count)

        self._ship_of: Dict[Tuple[int, int], int] = {}
        self.ships: List[List[Tuple[int, int]]] = []
        self._afloat: List[int] = []
        self._group_ships()

    def _group_ships(self) -> None:
        for row in range(FIELD_SIZE):
            for col in range(FIELD_SIZE):
                if self.grid[row][col] is Cell.SHIP and (col, row) not in self._ship_of:
                    self._add_ship(col, row)

    def _add_ship(self, col: int, row: int) -> None:
        index = len(self.ships)
        cells: List[Tuple[int, int]] = []
        stack = [(col, row)]
        self._ship_of[(col, row)] = index
        while stack:
            c, r = stack.pop()
            cells.append((c, r))
            for nc, nr in neighbours(c, r):
                if self.grid[nr][nc] is Cell.SHIP and (nc, nr) not in self._ship_of:
                    self._ship_of[(nc, nr)] = index
                    stack.append((nc, nr))

        if len({c for c, _ in cells}) > 1 and len({r for _, r in cells}) > 1:
            raise InvalidPlacement(f"ship at {COORDS[col]}{row + 1} is not a straight line")
        for c, r in cells:
            for nc, nr in neighbours(c, r, diagonal=True):
                if self.grid[nr][nc] is Cell.SHIP and self._ship_of.get((nc, nr)) != index:
                    raise InvalidPlacement(f"ships touch at {COORDS[nc]}{nr + 1}")

        cells.sort(key=lambda cell: (cell[1], cell[0]))
        self.ships.append(cells)
        self._afloat.append(len(cells))

    def shoot(self, col: int, row: int) -> ShotResult:
        self._check(col, row)
        cell = self.grid[row][col]
        if cell in SHOT_CELLS:
            logger.warning("repeated shot at %s%d, counting it as a miss", COORDS[col], row + 1)
            return ShotResult.MISS
        if cell is Cell.EMPTY:
            self.grid[row][col] = Cell.SHOT_EMPTY
            return ShotResult.MISS

        index = self._ship_of[(col, row)]
        self._afloat[index] -= 1
        self._remaining -= 1
        if self._afloat[index] == 0:
            for c, r in self.ships[index]:
                self.grid[r][c] = Cell.KILLED
            return ShotResult.KILL
        self.grid[row][col] = Cell.SHOT_SHIP
        return ShotResult.HIT


class OpponentField(Field):
    """What the local player knows about the opponent's fleet.

    Only remote result declarations change it; ``Cell.EMPTY`` here means
    "not known yet".
    """

    def __init__(self, fleet: Sequence[int] = FLEET) -> None:
        super().__init__(empty_grid(), sum(fleet))

    def is_known(self, col: int, row: int) -> bool:
        return self.get(col, row) is not Cell.EMPTY

    def _mark(self, col: int, row: int, cell: Cell) -> None:
        if self.is_known(col, row):
            raise ProtocolViolation(
                f"{COORDS[col]}{row + 1} is already known as {self.grid[row][col].name}"
            )
        self.grid[row][col] = cell

    def mark_miss(self, col: int, row: int) -> None:
        self._mark(col, row, Cell.SHOT_EMPTY)

    def mark_hit(self, col: int, row: int) -> None:
        self._mark(col, row, Cell.SHOT_SHIP)
        self._remaining -= 1

    def mark_kill(self, col: int, row: int) -> None:
        self._mark(col, row, Cell.KILLED)
        self._remaining -= 1

        ship = [(col, row)]
        stack = [(col, row)]
        while stack:
            c, r = stack.pop()
            for nc, nr in neighbours(c, r):
                if self.grid[nr][nc] is Cell.SHOT_SHIP:
                    self.grid[nr][nc] = Cell.KILLED
                    ship.append((nc, nr))
                    stack.append((nc, nr))

        # ships never touch, so the ring around a sunk ship is water
        for c, r in ship:
            for nc, nr in neighbours(c, r, diagonal=True):
                if self.grid[nr][nc] is Cell.EMPTY:
                    self.grid[nr][nc] = Cell.SHOT_EMPTY
