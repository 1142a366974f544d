"""Ship domain model for the sea battle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


@dataclass(frozen=True)
class Coordinate:
    """Immutable board coordinate."""

    row: int
    col: int

    def neighbours(self) -> tuple[Coordinate, ...]:
        """Return the four orthogonal neighbours (up, down, left, right)."""
        return (
            Coordinate(self.row - 1, self.col),
            Coordinate(self.row + 1, self.col),
            Coordinate(self.row, self.col - 1),
            Coordinate(self.row, self.col + 1),
        )

    def surrounding(self) -> tuple[Coordinate, ...]:
        """Return the 8-neighbourhood, excluding the coordinate itself."""
        return tuple(
            Coordinate(self.row + delta_row, self.col + delta_col)
            for delta_row in (-1, 0, 1)
            for delta_col in (-1, 0, 1)
            if delta_row or delta_col
        )


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def step(self, start: Coordinate, offset: int) -> Coordinate:
        """Return the cell `offset` steps away from `start` along this orientation."""
        if self is Orientation.HORIZONTAL:
            return Coordinate(start.row, start.col + offset)
        return Coordinate(start.row + offset, start.col)


@dataclass
class Ship:
    """A named ship of fixed size; unplaced until the board assigns its cells."""

    name: str
    size: int
    hits: set[Coordinate] = field(init=False, default_factory=set)
    _coordinates: tuple[Coordinate, ...] = field(init=False, default=(), repr=False)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Ship size must be positive, got {self.size}.")

    @property
    def placed(self) -> bool:
        return bool(self._coordinates)

    def coordinates(self) -> list[Coordinate]:
        """Return the ordered list of coordinates occupied by this ship."""
        return list(self._coordinates)

    def occupies(self, coord: Coordinate) -> bool:
        return coord in self._coordinates

    def assign(self, coords: Iterable[Coordinate]) -> None:
        """Fix the ship's cells. Only the placement validator calls this."""
        cells = tuple(coords)
        if self._coordinates:
            raise RuntimeError(f"Ship {self.name!r} has already been placed.")
        if len(cells) != self.size:
            raise ValueError(f"Ship {self.name!r} needs {self.size} cells, got {len(cells)}.")
        self._coordinates = cells

    def register_hit(self, coord: Coordinate) -> bool:
        """Record a hit if the coordinate belongs to this ship."""
        if not self.occupies(coord) or coord in self.hits:
            return False
        self.hits.add(coord)
        return True

    def is_sunk(self) -> bool:
        """Determine whether every coordinate belonging to the ship has been hit."""
        return len(self.hits) == self.size

    def unplaced_copy(self) -> Ship:
        """Return a fresh, unplaced ship with the same name and size."""
        return Ship(self.name, self.size)


FleetSpec = tuple[tuple[str, int], ...]

SMALL_FLEET: FleetSpec = (
    ("Battleship", 4),
    ("Cruiser", 3),
    ("Destroyer", 2),
    ("Submarine", 1),
)

STANDARD_FLEET: FleetSpec = (
    ("Battleship", 4),
    ("Cruiser", 3),
    ("Cruiser 2", 3),
    ("Destroyer", 2),
    ("Destroyer 2", 2),
    ("Submarine", 1),
    ("Submarine 2", 1),
)

LARGE_FLEET: FleetSpec = (
    ("Battleship", 5),
    ("Cruiser", 4),
    ("Cruiser 2", 3),
    ("Destroyer", 2),
    ("Destroyer 2", 2),
    ("Submarine", 1),
    ("Submarine 2", 1),
    ("Submarine 3", 1),
)


def fleet_for_size(board_size: int) -> list[Ship]:
    """Return fresh unplaced ships making up the standard fleet for a board size."""
    if board_size <= 8:
        spec = SMALL_FLEET
    elif board_size <= 10:
        spec = STANDARD_FLEET
    else:
        spec = LARGE_FLEET
    return [Ship(name, size) for name, size in spec]
