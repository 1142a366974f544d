"""Single-player board: the grid of cell states and the fleet placed on it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator

from .ship import Coordinate, Orientation, Ship

if TYPE_CHECKING:
    from .shots import ShotOutcome

logger = logging.getLogger(__name__)


class CellState(Enum):
    """State of a single grid cell."""

    EMPTY = "empty"
    OCCUPIED = "occupied"
    HIT = "hit"
    MISS = "miss"

    @property
    def resolved(self) -> bool:
        """True once a shot has landed on the cell."""
        return self in (CellState.HIT, CellState.MISS)


@dataclass
class Board:
    """A rows x cols grid owned by one combatant, plus its fleet registry."""

    rows: int = 10
    cols: int = 10
    owner: str = "unknown"
    ships: list[Ship] = field(default_factory=list)
    grid: list[list[CellState]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}.")
        self.grid = self._empty_grid()

    def in_bounds(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= coord.row < self.rows and 0 <= coord.col < self.cols

    def cell_at(self, coord: Coordinate) -> CellState:
        """Return the state of a cell; the coordinate must be in bounds."""
        if not self.in_bounds(coord):
            raise ValueError(f"Coordinate ({coord.row}, {coord.col}) is outside the board.")
        return self.grid[coord.row][coord.col]

    def is_resolved(self, coord: Coordinate) -> bool:
        return self.cell_at(coord).resolved

    def ship_at(self, coord: Coordinate) -> Ship | None:
        """Return the ship covering a coordinate, if any."""
        for ship in self.ships:
            if ship.occupies(coord):
                return ship
        return None

    def all_sunk(self) -> bool:
        """Check whether every registered ship has been sunk.

        An empty registry is vacuously sunk, so only ask once the fleet is placed.
        """
        return all(ship.is_sunk() for ship in self.ships)

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate every coordinate in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield Coordinate(row, col)

    def clear(self) -> None:
        """Remove every ship and reset all cells to empty."""
        self.grid = self._empty_grid()
        self.ships.clear()
        logger.debug("board_cleared", extra={"owner": self.owner})

    def view(self) -> BoardView:
        """Return the read-only projection shown to the opponent."""
        return BoardView(self)

    def can_place(self, start: Coordinate, orientation: Orientation, size: int) -> bool:
        from .placement import can_place

        return can_place(self, start, orientation, size)

    def place_ship(self, ship: Ship, start: Coordinate, orientation: Orientation) -> bool:
        from .placement import place_ship

        return place_ship(self, ship, start, orientation)

    def receive_shot(self, coord: Coordinate) -> ShotOutcome:
        from .shots import receive_shot

        return receive_shot(self, coord)

    def _empty_grid(self) -> list[list[CellState]]:
        return [[CellState.EMPTY for _ in range(self.cols)] for _ in range(self.rows)]


class BoardView:
    """Opponent-facing view of a board; unshot ships read as empty water."""

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def rows(self) -> int:
        return self._board.rows

    @property
    def cols(self) -> int:
        return self._board.cols

    @property
    def owner(self) -> str:
        return self._board.owner

    def in_bounds(self, coord: Coordinate) -> bool:
        return self._board.in_bounds(coord)

    def cell_at(self, coord: Coordinate) -> CellState:
        state = self._board.cell_at(coord)
        return state if state.resolved else CellState.EMPTY

    def is_resolved(self, coord: Coordinate) -> bool:
        return self._board.is_resolved(coord)

    def sunk_ships(self) -> list[str]:
        """Names of the opponent ships already sunk; public knowledge once announced."""
        return [ship.name for ship in self._board.ships if ship.is_sunk()]

    def coordinates(self) -> Iterator[Coordinate]:
        return self._board.coordinates()
