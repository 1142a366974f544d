"""High-level match tests."""

import random

import pytest

from seabattle.engine.board import Board
from seabattle.engine.game import GamePhase, Match
from seabattle.engine.players import AutomatedCombatant, InteractiveCombatant
from seabattle.engine.ship import Coordinate, Orientation, Ship, fleet_for_size
from seabattle.engine.shots import ShotOutcome


def _scripted(name: str, shots, layout):
    """Interactive combatant driven by pre-recorded answers."""
    shot_iter = iter(shots)
    layout_iter = iter(layout)
    return InteractiveCombatant(
        name,
        Board(6, 6, owner=name),
        shot_source=lambda view: next(shot_iter, None),
        placement_source=lambda board, ship: next(layout_iter, None),
    )


def test_bot_match_runs_to_completion() -> None:
    first = AutomatedCombatant("red", Board(10, 10, owner="red"), rng=random.Random(1))
    second = AutomatedCombatant("blue", Board(10, 10, owner="blue"), rng=random.Random(2))
    match = Match(first, second)
    assert match.setup(fleet_for_size(10))

    results = []
    winner = match.play(on_turn=results.append)

    assert match.phase is GamePhase.FINISHED
    assert winner in (first, second)
    loser = second if winner is first else first
    assert loser.board.all_sunk()
    assert not winner.board.all_sunk()
    assert results[-1].winner is winner
    assert all(result.outcome in (ShotOutcome.HIT, ShotOutcome.MISS) for result in results)


def test_turns_alternate_and_rejected_shots_keep_the_turn() -> None:
    layout = [(Coordinate(0, 0), Orientation.HORIZONTAL)]
    first = _scripted("alice", [Coordinate(9, 9), Coordinate(5, 5), Coordinate(5, 5)], layout)
    second = _scripted("bob", [Coordinate(4, 4)], layout)
    match = Match(first, second)
    assert match.setup([Ship("Submarine", 1)])

    rejected = match.play_turn()
    assert rejected.outcome is ShotOutcome.OUT_OF_BOUNDS
    assert match.current is first

    miss = match.play_turn()
    assert miss.outcome is ShotOutcome.MISS
    assert match.current is second

    match.play_turn()
    assert match.current is first

    repeat = match.play_turn()
    assert repeat.outcome is ShotOutcome.ALREADY_RESOLVED
    assert match.current is first
    assert match.turns == 2


def test_sinking_last_ship_wins() -> None:
    layout = [(Coordinate(2, 2), Orientation.VERTICAL)]
    first = _scripted("alice", [Coordinate(2, 2), Coordinate(3, 2)], layout)
    second = _scripted("bob", [Coordinate(0, 0)], layout)
    match = Match(first, second)
    assert match.setup([Ship("Destroyer", 2)])

    hit = match.play_turn()
    assert hit.outcome is ShotOutcome.HIT
    assert hit.sunk is None
    assert match.current is second, "A hit does not grant an extra shot"
    match.play_turn()

    final = match.play_turn()
    assert final.sunk is not None and final.sunk.name == "Destroyer"
    assert final.winner is first
    assert match.phase is GamePhase.FINISHED
    with pytest.raises(RuntimeError):
        match.play_turn()


def test_withdrawal_hands_victory_to_opponent() -> None:
    layout = [(Coordinate(0, 0), Orientation.HORIZONTAL)]
    first = _scripted("alice", [], layout)
    second = _scripted("bob", [], layout)
    match = Match(first, second)
    assert match.setup([Ship("Submarine", 1)])

    result = match.play_turn()
    assert result.withdrawn
    assert result.finished
    assert result.winner is second
    assert match.winner is second
    assert match.phase is GamePhase.FINISHED


def test_setup_failure_finishes_without_winner() -> None:
    first = _scripted("alice", [], [])
    second = _scripted("bob", [], [(Coordinate(0, 0), Orientation.HORIZONTAL)])
    match = Match(first, second)
    assert not match.setup([Ship("Submarine", 1)])
    assert match.phase is GamePhase.FINISHED
    assert match.winner is None


def test_play_turn_requires_setup() -> None:
    first = _scripted("alice", [], [])
    second = _scripted("bob", [], [])
    with pytest.raises(RuntimeError):
        Match(first, second).play_turn()


def test_combatants_need_separate_boards() -> None:
    board = Board(6, 6)
    first = AutomatedCombatant("a", board)
    second = AutomatedCombatant("b", board)
    with pytest.raises(ValueError):
        Match(first, second)
