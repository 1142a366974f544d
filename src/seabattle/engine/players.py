"""Combatants: interactive and automated move selection behind one contract."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import Callable, Sequence

from seabattle.ai.targeting import TargetingAI

from .board import Board, BoardView
from .placement import PlacementLimits, place_fleet_randomly
from .ship import Coordinate, Orientation, Ship
from .shots import ShotOutcome

logger = logging.getLogger(__name__)

ShotSource = Callable[[BoardView], "Coordinate | None"]
PlacementSource = Callable[[Board, Ship], "tuple[Coordinate, Orientation] | None"]


class Combatant(ABC):
    """One side of a match. Owns its board for the whole game."""

    def __init__(self, name: str, board: Board) -> None:
        self.name = name
        self.board = board

    @abstractmethod
    def place_fleet(self, fleet: Sequence[Ship]) -> bool:
        """Place fresh copies of `fleet` on the own board; False if not completed."""

    @abstractmethod
    def choose_shot(self, opponent: BoardView) -> Coordinate | None:
        """Return the coordinate to fire at, or None to withdraw."""

    def observe_result(self, coord: Coordinate, outcome: ShotOutcome, opponent: BoardView) -> None:
        """Called after one of this combatant's shots has been resolved."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class InteractiveCombatant(Combatant):
    """Delegates every decision to callables provided by the input layer."""

    def __init__(
        self,
        name: str,
        board: Board,
        shot_source: ShotSource,
        placement_source: PlacementSource,
    ) -> None:
        super().__init__(name, board)
        self._shot_source = shot_source
        self._placement_source = placement_source

    def place_fleet(self, fleet: Sequence[Ship]) -> bool:
        self.board.clear()
        for template in fleet:
            ship = template.unplaced_copy()
            while True:
                answer = self._placement_source(self.board, ship)
                if answer is None:
                    logger.info("placement_withdrawn", extra={"combatant": self.name})
                    return False
                start, orientation = answer
                if self.board.place_ship(ship, start, orientation):
                    break
        return True

    def choose_shot(self, opponent: BoardView) -> Coordinate | None:
        return self._shot_source(opponent)


class AutomatedCombatant(Combatant):
    """Random fleet layout plus search/hunt targeting."""

    def __init__(
        self,
        name: str,
        board: Board,
        rng: random.Random | None = None,
        limits: PlacementLimits | None = None,
    ) -> None:
        super().__init__(name, board)
        self._rng = rng or random.Random()
        self._limits = limits or PlacementLimits()
        self.targeting: TargetingAI | None = None

    def place_fleet(self, fleet: Sequence[Ship]) -> bool:
        return place_fleet_randomly(self.board, fleet, self._rng, self._limits)

    def choose_shot(self, opponent: BoardView) -> Coordinate | None:
        if self.targeting is None:
            self.targeting = TargetingAI(opponent.rows, opponent.cols, rng=self._rng)
        return self.targeting.choose_shot(opponent)

    def observe_result(self, coord: Coordinate, outcome: ShotOutcome, opponent: BoardView) -> None:
        if self.targeting is not None:
            self.targeting.record_result(coord, outcome, opponent)
