"""Placement validation and fleet layout for a single board."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Sequence

from seabattle.telemetry import get_meter, get_tracer

from .board import Board, CellState
from .ship import Coordinate, Orientation, Ship

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.placement")
meter = get_meter("seabattle.engine.placement")

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

FLEET_RESET_COUNTER = meter.create_counter(
    "seabattle_engine_fleet_resets",
    unit="1",
    description="Board resets during random fleet placement",
)


@dataclass(frozen=True)
class PlacementLimits:
    """Retry ceilings for random fleet placement."""

    attempts_per_ship: int = 1000
    max_resets: int = 100

    def __post_init__(self) -> None:
        if self.attempts_per_ship < 1 or self.max_resets < 1:
            raise ValueError("Placement limits must be at least 1.")


def ship_cells(start: Coordinate, orientation: Orientation, size: int) -> list[Coordinate]:
    """Return the ordered cells a ship of `size` would cover from `start`."""
    return [orientation.step(start, offset) for offset in range(size)]


def can_place(board: Board, start: Coordinate, orientation: Orientation, size: int) -> bool:
    """Determine whether a ship fits without leaving the board or touching another ship."""
    for cell in ship_cells(start, orientation, size):
        if not board.in_bounds(cell):
            return False
        if board.cell_at(cell) is not CellState.EMPTY:
            return False
        for neighbour in cell.surrounding():
            if board.in_bounds(neighbour) and board.cell_at(neighbour) is CellState.OCCUPIED:
                return False
    return True


def place_ship(board: Board, ship: Ship, start: Coordinate, orientation: Orientation) -> bool:
    """Validate then commit a ship; a rejected placement changes nothing."""
    with tracer.start_as_current_span("placement.place_ship") as span:
        span.set_attribute("ship.name", ship.name)
        span.set_attribute("ship.size", ship.size)
        span.set_attribute("ship.start.row", start.row)
        span.set_attribute("ship.start.col", start.col)
        span.set_attribute("board.owner", board.owner)
        details = {
            "owner": board.owner,
            "ship": ship.name,
            "orientation": orientation.name,
            "row": start.row,
            "col": start.col,
        }
        if ship.placed or not can_place(board, start, orientation, ship.size):
            PLACEMENT_COUNTER.add(1, attributes={"result": "failed", "owner": board.owner})
            logger.warning(
                "ship_placement_failed", extra={**details, "already_placed": ship.placed}
            )
            span.set_attribute("placement.accepted", False)
            return False

        cells = ship_cells(start, orientation, ship.size)
        for cell in cells:
            board.grid[cell.row][cell.col] = CellState.OCCUPIED
        ship.assign(cells)
        board.ships.append(ship)
        PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": board.owner})
        logger.info("ship_placed", extra=details)
        span.set_attribute("placement.accepted", True)
        return True


def place_fleet_randomly(
    board: Board,
    fleet: Sequence[Ship],
    rng: random.Random,
    limits: PlacementLimits | None = None,
) -> bool:
    """Randomly place fresh copies of `fleet` on a cleared board.

    When one ship cannot be placed within ``limits.attempts_per_ship`` tries,
    the board is cleared and the whole fleet starts over. After
    ``limits.max_resets`` restarts the board is left empty and False is
    returned.
    """
    limits = limits or PlacementLimits()
    orientations = list(Orientation)
    with tracer.start_as_current_span("placement.random_fleet") as span:
        span.set_attribute("board.owner", board.owner)
        span.set_attribute("fleet.size", len(fleet))
        for round_number in range(limits.max_resets + 1):
            board.clear()
            if _place_round(board, fleet, rng, orientations, limits.attempts_per_ship):
                span.set_attribute("fleet.resets", round_number)
                logger.info(
                    "fleet_placed",
                    extra={"owner": board.owner, "ships": len(fleet), "resets": round_number},
                )
                return True
            if round_number < limits.max_resets:
                FLEET_RESET_COUNTER.add(1, attributes={"owner": board.owner})
                logger.debug(
                    "fleet_placement_reset", extra={"owner": board.owner, "round": round_number}
                )

        board.clear()
        span.set_attribute("fleet.resets", limits.max_resets)
        logger.warning(
            "fleet_placement_exhausted",
            extra={
                "owner": board.owner,
                "attempts_per_ship": limits.attempts_per_ship,
                "max_resets": limits.max_resets,
            },
        )
        return False


def _place_round(
    board: Board,
    fleet: Sequence[Ship],
    rng: random.Random,
    orientations: list[Orientation],
    attempts_per_ship: int,
) -> bool:
    for template in fleet:
        for attempt in range(1, attempts_per_ship + 1):
            orientation = rng.choice(orientations)
            start = Coordinate(rng.randrange(board.rows), rng.randrange(board.cols))
            if not can_place(board, start, orientation, template.size):
                continue
            place_ship(board, template.unplaced_copy(), start, orientation)
            logger.debug(
                "random_ship_placed",
                extra={"ship": template.name, "attempts": attempt, "owner": board.owner},
            )
            break
        else:
            return False
    return True
