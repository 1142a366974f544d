"""Two-combatant match controller."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from seabattle.telemetry import get_meter, get_tracer, record_metric

from .players import Combatant
from .ship import Coordinate, Ship
from .shots import ShotOutcome

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.game")
meter = get_meter("seabattle.engine.game")

TURN_COUNTER = meter.create_counter(
    "seabattle_engine_turns",
    unit="1",
    description="Turns played in a Match, by outcome",
)


class GamePhase(Enum):
    """High-level lifecycle of a match."""

    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass(frozen=True)
class TurnResult:
    """What happened during a single call to `Match.play_turn`."""

    shooter: Combatant
    coord: Coordinate | None
    outcome: ShotOutcome | None
    sunk: Ship | None = None
    withdrawn: bool = False
    winner: Combatant | None = None

    @property
    def finished(self) -> bool:
        return self.withdrawn or self.winner is not None


class Match:
    """Alternates turns between two combatants until a fleet sinks or someone withdraws."""

    def __init__(self, first: Combatant, second: Combatant) -> None:
        if first.board is second.board:
            raise ValueError("Each combatant needs a board of its own.")
        self.combatants: tuple[Combatant, Combatant] = (first, second)
        self.phase: GamePhase = GamePhase.SETUP
        self.current: Combatant = first
        self.winner: Combatant | None = None
        self.turns = 0

    @property
    def opponent(self) -> Combatant:
        first, second = self.combatants
        return second if self.current is first else first

    def setup(self, fleet: Sequence[Ship]) -> bool:
        """Have both combatants place the fleet; the match starts only if both succeed."""
        with tracer.start_as_current_span("game.setup") as span:
            for combatant in self.combatants:
                if not combatant.place_fleet(fleet):
                    self.phase = GamePhase.FINISHED
                    span.set_attribute("game.setup_failed_by", combatant.name)
                    record_metric("seabattle_matches_total", 1, {"result": "setup_failed"})
                    logger.warning("game_setup_failed", extra={"combatant": combatant.name})
                    return False
            self.phase = GamePhase.IN_PROGRESS
            self.current = self.combatants[0]
            self.winner = None
            self.turns = 0
            logger.info(
                "game_setup_complete",
                extra={"ships": len(fleet), "current_player": self.current.name},
            )
            return True

    def play_turn(self) -> TurnResult:
        """Let the current combatant fire once.

        Rejected shots keep the turn with the same combatant; a hit does not
        grant an extra shot.
        """
        if self.phase is not GamePhase.IN_PROGRESS:
            logger.error("turn_rejected_game_not_in_progress", extra={"phase": self.phase.value})
            raise RuntimeError("Game is not in progress.")

        shooter, target = self.current, self.opponent
        view = target.board.view()
        with tracer.start_as_current_span("game.play_turn") as span:
            span.set_attribute("player", shooter.name)
            coord = shooter.choose_shot(view)
            if coord is None:
                return self._finish_by_withdrawal(shooter, target)

            span.set_attribute("row", coord.row)
            span.set_attribute("col", coord.col)
            outcome = target.board.receive_shot(coord)
            span.set_attribute("shot.outcome", outcome.value)
            TURN_COUNTER.add(1, attributes={"outcome": outcome.value, "player": shooter.name})
            if not outcome.accepted:
                return TurnResult(shooter=shooter, coord=coord, outcome=outcome)

            self.turns += 1
            shooter.observe_result(coord, outcome, view)
            sunk = None
            if outcome is ShotOutcome.HIT:
                ship = target.board.ship_at(coord)
                if ship is not None and ship.is_sunk():
                    sunk = ship
                    logger.info(
                        "ship_sunk", extra={"ship": ship.name, "owner": target.board.owner}
                    )

            if sunk is not None and target.board.all_sunk():
                self.winner = shooter
                self.phase = GamePhase.FINISHED
                span.set_attribute("game.winner", shooter.name)
                record_metric("seabattle_matches_total", 1, {"result": "fleet_sunk"})
                logger.info("game_finished", extra={"winner": shooter.name, "turns": self.turns})
            else:
                self.current = target
            return TurnResult(
                shooter=shooter, coord=coord, outcome=outcome, sunk=sunk, winner=self.winner
            )

    def play(self, on_turn: Callable[[TurnResult], None] | None = None) -> Combatant | None:
        """Play turns until the match finishes and return the winner."""
        while self.phase is GamePhase.IN_PROGRESS:
            result = self.play_turn()
            if on_turn is not None:
                on_turn(result)
        return self.winner

    def _finish_by_withdrawal(self, shooter: Combatant, target: Combatant) -> TurnResult:
        self.winner = target
        self.phase = GamePhase.FINISHED
        record_metric("seabattle_matches_total", 1, {"result": "withdrawn"})
        logger.info("game_withdrawn", extra={"player": shooter.name, "winner": target.name})
        return TurnResult(
            shooter=shooter, coord=None, outcome=None, withdrawn=True, winner=target
        )
