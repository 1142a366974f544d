"""Search/hunt targeting for the automated opponent."""

from __future__ import annotations

import logging
import random
from collections import deque
from enum import Enum

from seabattle.engine.board import BoardView
from seabattle.engine.ship import Coordinate
from seabattle.engine.shots import ShotOutcome
from seabattle.telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.ai.targeting")


class TargetingMode(Enum):
    SEARCH = "search"
    HUNT = "hunt"


class TargetingAI:
    """Picks shots at random until something is hit, then probes around the hits.

    Only the opponent's public view is consulted, so unshot ships stay hidden.
    The hunt queue is not purged when a ship sinks; entries that have since
    been resolved are dropped when they reach the front.
    """

    def __init__(self, rows: int, cols: int, rng: random.Random | None = None) -> None:
        self.rows = rows
        self.cols = cols
        self._rng = rng or random.Random()
        self._pool: list[Coordinate] = [
            Coordinate(row, col) for row in range(rows) for col in range(cols)
        ]
        self._queue: deque[Coordinate] = deque()

    @property
    def mode(self) -> TargetingMode:
        return TargetingMode.HUNT if self._queue else TargetingMode.SEARCH

    @property
    def hunt_queue(self) -> tuple[Coordinate, ...]:
        return tuple(self._queue)

    @property
    def remaining(self) -> int:
        """Number of coordinates never chosen yet."""
        return len(self._pool)

    def choose_shot(self, view: BoardView) -> Coordinate | None:
        """Return the next coordinate to fire at, or None when nothing is left."""
        with tracer.start_as_current_span("targeting.choose_shot") as span:
            span.set_attribute("targeting.mode", self.mode.value)
            span.set_attribute("targeting.queue", len(self._queue))
            choice = self._from_queue(view)
            if choice is None:
                choice = self._from_pool(view)
            if choice is None:
                logger.info("targeting_exhausted", extra={"opponent": view.owner})
                return None
            span.set_attribute("shot.row", choice.row)
            span.set_attribute("shot.col", choice.col)
            return choice

    def record_result(self, coord: Coordinate, outcome: ShotOutcome, view: BoardView) -> None:
        """Feed back a resolved shot; hits queue their unresolved orthogonal neighbours."""
        if outcome is not ShotOutcome.HIT:
            return
        queued = []
        for neighbour in coord.neighbours():
            if not view.in_bounds(neighbour) or view.is_resolved(neighbour):
                continue
            if neighbour in self._queue:
                continue
            self._queue.append(neighbour)
            queued.append(neighbour)
        logger.debug(
            "targeting_hunt_queued",
            extra={
                "row": coord.row,
                "col": coord.col,
                "queued": len(queued),
                "queue_length": len(self._queue),
            },
        )

    def _from_queue(self, view: BoardView) -> Coordinate | None:
        while self._queue:
            candidate = self._queue.popleft()
            if view.is_resolved(candidate):
                logger.debug(
                    "targeting_stale_entry", extra={"row": candidate.row, "col": candidate.col}
                )
                continue
            if candidate in self._pool:
                self._pool.remove(candidate)
            return candidate
        return None

    def _from_pool(self, view: BoardView) -> Coordinate | None:
        while self._pool:
            index = self._rng.randrange(len(self._pool))
            # Pool order carries no meaning, so swap-remove.
            self._pool[index], self._pool[-1] = self._pool[-1], self._pool[index]
            candidate = self._pool.pop()
            if view.in_bounds(candidate) and not view.is_resolved(candidate):
                return candidate
        return None
