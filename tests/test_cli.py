"""Console front-end helpers."""

import pytest

from seabattle import cli
from seabattle.config import GameSettings
from seabattle.engine.board import Board
from seabattle.engine.game import TurnResult
from seabattle.engine.players import InteractiveCombatant
from seabattle.engine.ship import Coordinate, Orientation, Ship
from seabattle.engine.shots import ShotOutcome


def test_parse_coordinate() -> None:
    assert cli.parse_coordinate(" 3,7 ") == Coordinate(3, 7)
    assert cli.parse_coordinate("-1,0") == Coordinate(-1, 0)


@pytest.mark.parametrize("text", ["", "3", "a,b", "1,2,3"])
def test_parse_coordinate_rejects_malformed_input(text: str) -> None:
    with pytest.raises(ValueError):
        cli.parse_coordinate(text)


def test_parse_placement() -> None:
    assert cli.parse_placement("0,3 h") == (Coordinate(0, 3), Orientation.HORIZONTAL)
    assert cli.parse_placement("2,2 Vertical") == (Coordinate(2, 2), Orientation.VERTICAL)
    with pytest.raises(ValueError):
        cli.parse_placement("2,2 X")
    with pytest.raises(ValueError):
        cli.parse_placement("2,2")


def test_format_board_hides_ships_in_view() -> None:
    board = Board(3, 3)
    board.place_ship(Ship("Destroyer", 2), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.receive_shot(Coordinate(0, 0))
    board.receive_shot(Coordinate(2, 2))

    own = cli.format_board(board).splitlines()
    assert own[0] == "    0  1  2"
    assert own[1] == " 0  X  S  ."
    assert own[3] == " 2  .  .  o"

    hidden = cli.format_board(board.view()).splitlines()
    assert hidden[1] == " 0  X  .  ."


def test_prompt_shot_loops_until_valid(capsys: pytest.CaptureFixture[str]) -> None:
    board = Board(4, 4)
    board.receive_shot(Coordinate(1, 1))
    answers = iter(["nonsense", "9,9", "1,1", "2,3"])
    ask = cli.prompt_shot("alice", prompt=lambda _: next(answers))
    assert ask(board.view()) == Coordinate(2, 3)
    output = capsys.readouterr().out
    assert "Invalid input" in output
    assert "off the board" in output
    assert "already been targeted" in output


def test_prompt_shot_quit() -> None:
    ask = cli.prompt_shot("alice", prompt=lambda _: "Q")
    assert ask(Board(4, 4).view()) is None


def test_prompt_placement_rejects_touching_ship() -> None:
    board = Board(6, 6)
    board.place_ship(Ship("Submarine", 1), Coordinate(0, 0), Orientation.HORIZONTAL)
    answers = iter(["1,1 H", "3,3 V"])
    ask = cli.prompt_placement("alice", prompt=lambda _: next(answers))
    assert ask(board, Ship("Destroyer", 2)) == (Coordinate(3, 3), Orientation.VERTICAL)


def test_describe_turn_messages() -> None:
    shooter = InteractiveCombatant(
        "alice", Board(4, 4), shot_source=lambda v: None, placement_source=lambda b, s: None
    )
    sunk = Ship("Cruiser", 3)
    assert "withdrew" in cli.describe_turn(
        TurnResult(shooter=shooter, coord=None, outcome=None, withdrawn=True)
    )
    assert "miss" in cli.describe_turn(
        TurnResult(shooter=shooter, coord=Coordinate(1, 2), outcome=ShotOutcome.MISS)
    )
    assert "Cruiser sunk" in cli.describe_turn(
        TurnResult(shooter=shooter, coord=Coordinate(1, 2), outcome=ShotOutcome.HIT, sunk=sunk)
    )
    assert "already" in cli.describe_turn(
        TurnResult(shooter=shooter, coord=Coordinate(1, 2), outcome=ShotOutcome.ALREADY_RESOLVED)
    )


def test_play_game_against_bot_until_withdrawal(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    answers = iter(["alice", "0,0 H", "q"])
    settings = GameSettings(board_size=8, seed=3)
    fleet = [Ship("Submarine", 1)]

    monkeypatch.setattr(cli, "fleet_for_size", lambda size: fleet)
    winner = cli.play_game("bot", settings, prompt=lambda _: next(answers))

    assert winner is not None and winner.name == "Bot"
    assert "alice withdrew." in capsys.readouterr().out


def test_describe_turn_without_coordinate_reads_as_withdrawal() -> None:
    shooter = InteractiveCombatant(
        "alice", Board(4, 4), shot_source=lambda v: None, placement_source=lambda b, s: None
    )
    result = TurnResult(shooter=shooter, coord=None, outcome=None)
    assert cli.describe_turn(result) == "alice withdrew."


def test_format_enemy_waters_lists_sunk_ships() -> None:
    board = Board(4, 4)
    board.place_ship(Ship("Submarine", 1), Coordinate(0, 0), Orientation.HORIZONTAL)
    board.place_ship(Ship("Destroyer", 2), Coordinate(2, 0), Orientation.HORIZONTAL)
    assert "Sunk" not in cli.format_enemy_waters(board.view())

    board.receive_shot(Coordinate(0, 0))
    rendered = cli.format_enemy_waters(board.view()).splitlines()
    assert rendered[-1] == "Sunk: Submarine"
    assert rendered[1] == " 0  X  .  .  ."


def test_pvp_clears_screen_before_second_player_places(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    answers = iter(["alice", "bob", "", "0,0 H", "", "0,0 H", "", "q"])
    seen: list[tuple[str, str]] = []

    def prompt(text: str) -> str:
        seen.append((text, capsys.readouterr().out))
        return next(answers)

    monkeypatch.setattr(cli, "fleet_for_size", lambda size: [Ship("Submarine", 1)])
    winner = cli.play_game("pvp", GameSettings(board_size=8), prompt=prompt)

    assert winner is not None and winner.name == "bob"
    texts = [text for text, _ in seen]
    alice_places = texts.index("Place Submarine (length 1) as row,col H|V, or 'q' to quit: ")
    bob_places = texts.index(
        "Place Submarine (length 1) as row,col H|V, or 'q' to quit: ", alice_places + 1
    )
    assert texts[bob_places - 1] == "Pass the keyboard to bob and press Enter..."
    between = "".join(output for _, output in seen[alice_places + 1 : bob_places + 1])
    assert cli.CLEAR_SCREEN in between
    bob_screen = seen[bob_places][1]
    assert bob_screen.index(cli.CLEAR_SCREEN) < bob_screen.index("bob, your board:")
