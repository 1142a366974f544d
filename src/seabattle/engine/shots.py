"""Shot resolution against a board."""

from __future__ import annotations

import logging
from enum import Enum

from seabattle.telemetry import get_meter, get_tracer

from .board import Board, CellState
from .ship import Coordinate

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.shots")
meter = get_meter("seabattle.engine.shots")

SHOT_COUNTER = meter.create_counter(
    "seabattle_engine_shots",
    unit="1",
    description="Shots received by a board, by outcome",
)


class ShotOutcome(Enum):
    """Result of firing at a coordinate."""

    OUT_OF_BOUNDS = "out_of_bounds"
    ALREADY_RESOLVED = "already_resolved"
    HIT = "hit"
    MISS = "miss"

    @property
    def accepted(self) -> bool:
        """True when the shot changed the board and the turn is spent."""
        return self in (ShotOutcome.HIT, ShotOutcome.MISS)


def receive_shot(board: Board, coord: Coordinate) -> ShotOutcome:
    """Register a shot at `board` and return its outcome.

    Rejected shots (off the board or at a resolved cell) leave the board untouched.
    """
    with tracer.start_as_current_span("shots.receive_shot") as span:
        span.set_attribute("shot.row", coord.row)
        span.set_attribute("shot.col", coord.col)
        span.set_attribute("board.owner", board.owner)
        outcome = _resolve(board, coord)
        span.set_attribute("shot.outcome", outcome.value)
        SHOT_COUNTER.add(1, attributes={"outcome": outcome.value, "owner": board.owner})
        return outcome


def _resolve(board: Board, coord: Coordinate) -> ShotOutcome:
    details = {"row": coord.row, "col": coord.col, "owner": board.owner}
    if not board.in_bounds(coord):
        logger.warning("shot_out_of_bounds", extra=details)
        return ShotOutcome.OUT_OF_BOUNDS

    state = board.cell_at(coord)
    if state.resolved:
        logger.warning("shot_duplicate", extra=details)
        return ShotOutcome.ALREADY_RESOLVED

    if state is CellState.OCCUPIED:
        board.grid[coord.row][coord.col] = CellState.HIT
        ship = board.ship_at(coord)
        if ship is None:
            logger.error("shot_hit_unregistered_cell", extra=details)
            raise RuntimeError(
                f"Occupied cell ({coord.row}, {coord.col}) has no registered ship."
            )
        ship.register_hit(coord)
        logger.info(
            "shot_hit", extra={**details, "ship": ship.name, "sunk": ship.is_sunk()}
        )
        return ShotOutcome.HIT

    board.grid[coord.row][coord.col] = CellState.MISS
    logger.info("shot_miss", extra=details)
    return ShotOutcome.MISS
