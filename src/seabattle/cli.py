"""Console front-end: hot-seat play or a match against the automated opponent."""

from __future__ import annotations

import argparse
import random
from typing import Callable, Sequence

from seabattle.config import BOARD_SIZES, GameSettings
from seabattle.engine.board import Board, BoardView, CellState
from seabattle.engine.game import GamePhase, Match, TurnResult
from seabattle.engine.players import (
    AutomatedCombatant,
    Combatant,
    InteractiveCombatant,
    PlacementSource,
)
from seabattle.engine.ship import Coordinate, Orientation, Ship, fleet_for_size
from seabattle.engine.shots import ShotOutcome
from seabattle.telemetry import configure_console_logging, init_telemetry

SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.OCCUPIED: "S",
    CellState.HIT: "X",
    CellState.MISS: "o",
}

CLEAR_SCREEN = "\x1b[2J\x1b[0;0H"

Prompt = Callable[[str], str]


def parse_coordinate(text: str) -> Coordinate:
    """Parse ``"row,col"`` into a coordinate; bounds are the board's business."""
    parts = text.strip().split(",")
    if len(parts) != 2:
        raise ValueError("Use the format row,col (for example 0,3).")
    try:
        row, col = (int(part) for part in parts)
    except ValueError as exc:
        raise ValueError("Row and column must be whole numbers.") from exc
    return Coordinate(row, col)


def parse_placement(text: str) -> tuple[Coordinate, Orientation]:
    """Parse ``"row,col H"`` or ``"row,col V"``."""
    parts = text.split()
    if len(parts) != 2:
        raise ValueError("Enter a start cell and an orientation, e.g. 0,3 H.")
    start = parse_coordinate(parts[0])
    orientation = parts[1].upper()
    if orientation.startswith("H"):
        return start, Orientation.HORIZONTAL
    if orientation.startswith("V"):
        return start, Orientation.VERTICAL
    raise ValueError("Orientation must be H or V.")


def format_board(board: Board | BoardView) -> str:
    """Render a board; pass a `BoardView` to hide the opponent's ships."""
    header = "   " + " ".join(f"{col:>2}" for col in range(board.cols))
    rows = [header]
    for row in range(board.rows):
        symbols = [
            f"{SYMBOLS[board.cell_at(Coordinate(row, col))]:>2}" for col in range(board.cols)
        ]
        rows.append(f"{row:>2} " + " ".join(symbols))
    return "\n".join(rows)


def describe_turn(result: TurnResult) -> str:
    if result.withdrawn or result.coord is None:
        return f"{result.shooter.name} withdrew."
    label = f"{result.coord.row},{result.coord.col}"
    if result.outcome is ShotOutcome.OUT_OF_BOUNDS:
        return f"{label} is off the board. Try again."
    if result.outcome is ShotOutcome.ALREADY_RESOLVED:
        return f"{label} has already been fired at. Choose another cell."
    if result.sunk is not None:
        return f"{result.shooter.name} fired at {label}: hit! {result.sunk.name} sunk!"
    outcome = "hit!" if result.outcome is ShotOutcome.HIT else "miss."
    return f"{result.shooter.name} fired at {label}: {outcome}"


def clear_console() -> None:
    print(CLEAR_SCREEN, end="")


def format_enemy_waters(view: BoardView) -> str:
    """Render the opponent view followed by the ships already sunk there."""
    rendered = format_board(view)
    sunk = view.sunk_ships()
    if sunk:
        rendered += "\nSunk: " + ", ".join(sunk)
    return rendered


def hand_over(name: str, prompt: Prompt = input) -> None:
    """Wait for `name` to take the keyboard, then wipe the previous player's screen."""
    prompt(f"Pass the keyboard to {name} and press Enter...")
    clear_console()


def handed_over(name: str, source: PlacementSource, prompt: Prompt = input) -> PlacementSource:
    """Wrap a placement source so the screen is handed to `name` before the first ship."""
    handed = False

    def ask(board: Board, ship: Ship) -> tuple[Coordinate, Orientation] | None:
        nonlocal handed
        if not handed:
            hand_over(name, prompt)
            handed = True
        return source(board, ship)

    return ask


def prompt_placement(name: str, prompt: Prompt = input):
    """Build a placement source that asks `name` for each ship's position."""

    def ask(board: Board, ship: Ship) -> tuple[Coordinate, Orientation] | None:
        while True:
            print(f"\n{name}, your board:")
            print(format_board(board))
            raw = prompt(
                f"Place {ship.name} (length {ship.size}) as row,col H|V, or 'q' to quit: "
            ).strip()
            if raw.lower() == "q":
                return None
            try:
                start, orientation = parse_placement(raw)
            except ValueError as exc:
                print(f"Invalid input: {exc}")
                continue
            if board.can_place(start, orientation, ship.size):
                return start, orientation
            print("That ship cannot go there (off the board, overlapping or touching). Try again.")

    return ask


def prompt_shot(name: str, prompt: Prompt = input):
    """Build a shot source that asks `name` for a target cell."""

    def ask(view: BoardView) -> Coordinate | None:
        while True:
            raw = prompt(f"{name}, enter target row,col or 'q' to quit: ").strip()
            if raw.lower() == "q":
                return None
            try:
                coord = parse_coordinate(raw)
            except ValueError as exc:
                print(f"Invalid input: {exc}")
                continue
            if not view.in_bounds(coord):
                print("That cell is off the board.")
                continue
            if view.is_resolved(coord):
                print("That cell has already been targeted. Choose another.")
                continue
            return coord

    return ask


def _prompt_name(label: str, prompt: Prompt) -> str:
    name = prompt(f"{label} name: ").strip()
    return name or label


def build_combatants(
    mode: str, settings: GameSettings, prompt: Prompt = input
) -> tuple[Combatant, Combatant]:
    size = settings.board_size
    hot_seat = mode == "pvp"
    first_name = _prompt_name("Player 1", prompt)
    first_placement = prompt_placement(first_name, prompt)
    first = InteractiveCombatant(
        first_name,
        Board(size, size, owner=first_name),
        shot_source=prompt_shot(first_name, prompt),
        placement_source=(
            handed_over(first_name, first_placement, prompt) if hot_seat else first_placement
        ),
    )
    if mode == "bot":
        second: Combatant = AutomatedCombatant(
            "Bot",
            Board(size, size, owner="Bot"),
            rng=random.Random(settings.seed),
            limits=settings.placement_limits(),
        )
    else:
        second_name = _prompt_name("Player 2", prompt)
        second = InteractiveCombatant(
            second_name,
            Board(size, size, owner=second_name),
            shot_source=prompt_shot(second_name, prompt),
            placement_source=handed_over(
                second_name, prompt_placement(second_name, prompt), prompt
            ),
        )
    return first, second


def play_game(mode: str, settings: GameSettings, prompt: Prompt = input) -> Combatant | None:
    print("=== Sea Battle ===\n")
    first, second = build_combatants(mode, settings, prompt)
    match = Match(first, second)
    hot_seat = mode == "pvp"

    if not match.setup(fleet_for_size(settings.board_size)):
        print("The fleets could not be placed. Game over.")
        return None

    while match.phase is GamePhase.IN_PROGRESS:
        shooter, target = match.current, match.opponent
        if isinstance(shooter, InteractiveCombatant):
            if hot_seat:
                hand_over(shooter.name, prompt)
            print(f"\n{shooter.name}'s board:")
            print(format_board(shooter.board))
            print("\nEnemy waters:")
            print(format_enemy_waters(target.board.view()))
        print(describe_turn(match.play_turn()))

    if match.winner is not None:
        print(f"\n{match.winner.name} wins!")
    return match.winner


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Play Sea Battle in the console.")
    parser.add_argument(
        "--mode", choices=("pvp", "bot"), default="bot", help="Opponent: another human or the bot."
    )
    parser.add_argument("--size", type=int, choices=BOARD_SIZES, default=None, help="Board size.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    args = parser.parse_args(argv)

    configure_console_logging()
    init_telemetry()
    settings = GameSettings.from_env(board_size=args.size, seed=args.seed)
    play_game(args.mode, settings)
    print("Thanks for playing!")


if __name__ == "__main__":
    main()
