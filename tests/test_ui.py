"""Tests for terminal and window presenters."""

import io

from seabattle.agent import Outcome
from seabattle.field import FIELD_SIZE, Cell, Move, OpponentField, ShotResult
from seabattle.gui import GuiPlayer
from seabattle.placement import field_from_rows
from seabattle.ui import TerminalPlayer, draw_pair


def make_field():
    return field_from_rows(["OO......."] + ["........."] * 8)


def test_draw_pair_layout() -> None:
    own = make_field()
    model = OpponentField()
    model.mark_miss(8, 8)

    lines = draw_pair(own, model).splitlines()

    assert len(lines) == FIELD_SIZE + 2
    assert lines[0] == lines[-1]
    assert "A B C D E F G H I" in lines[0]
    assert lines[1].startswith("  1 O O . .")
    assert lines[FIELD_SIZE].endswith(". *")
    assert len({len(line) for line in lines}) == 1


def test_terminal_player_reads_lines_until_eof() -> None:
    player = TerminalPlayer(stdin=io.StringIO(" b2 \n\n"), stdout=io.StringIO())
    assert player.read_move() == "b2"
    assert player.read_move() == ""
    assert player.read_move() is None


def test_terminal_player_messages() -> None:
    out = io.StringIO()
    player = TerminalPlayer(stdin=io.StringIO(), stdout=out)
    assert player.color is False

    player.wrong_input("Z9")
    player.shot_result(Move(0, 0), ShotResult.HIT)
    player.incoming_shot(Move(2, 6), ShotResult.MISS)
    player.game_over(Outcome.LOSE)

    assert out.getvalue().splitlines() == [
        "Wrong input, try again",
        "Hit!",
        "Shoot to C7: Miss!",
        "Game over! You lose.",
    ]


def test_gui_player_bridges_moves_and_snapshots() -> None:
    player = GuiPlayer()
    player.submit(Move(1, 1))
    player.submit(None)
    assert player.read_move() == "B2"
    assert player.read_move() is None

    own = make_field()
    player.show_fields(own, OpponentField())
    own.shoot(0, 0)
    kind, own_rows, opponent_rows = player.events.get_nowait()
    assert kind == "fields"
    assert own_rows[0][0] is Cell.SHIP
    assert opponent_rows[0][0] is Cell.EMPTY
