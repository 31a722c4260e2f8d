from __future__ import annotations

import os
import sys
from typing import List, Optional, TextIO

from .agent import Outcome, Presenter
from .field import FIELD_SIZE, Field, Move, OpponentField, OwnField, ShotResult
from .protocol import format_move

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"

GLYPH_COLORS = {
    ".": DIM,
    "O": BLUE,
    "*": YELLOW,
    "x": RED,
    "#": RED + BOLD,
}

LEFT_PAD = "  "
DELIMITER = "    "

RESULT_TEXT = {
    ShotResult.MISS: "Miss!",
    ShotResult.HIT: "Hit!",
    ShotResult.KILL: "Kill!",
}


def clear_screen(out: TextIO = sys.stdout) -> None:
    if os.name == "nt":
        os.system("cls")
    else:
        out.write("\033[2J\033[H")
        out.flush()


def colorize(line: str) -> str:
    return " ".join(GLYPH_COLORS[ch] + ch + RESET for ch in line.split(" "))


def field_lines(field: Field, reveal: bool, color: bool = False) -> List[str]:
    lines = []
    for row in range(FIELD_SIZE):
        text = field.line(row, reveal=reveal)
        lines.append(f"{row + 1} " + (colorize(text) if color else text))
    return lines


def draw_pair(own: OwnField, opponent: OpponentField, color: bool = False) -> str:
    """Both boards side by side, own fleet on the left."""
    header = "  " + Field.header_line()
    left = field_lines(own, reveal=True, color=color)
    right = field_lines(opponent, reveal=False, color=color)
    lines = [LEFT_PAD + header + DELIMITER + header]
    for mine, theirs in zip(left, right):
        lines.append(LEFT_PAD + mine + DELIMITER + theirs)
    lines.append(LEFT_PAD + header + DELIMITER + header)
    return "\n".join(lines)


class TerminalPlayer(Presenter):
    """Reads moves from a text stream and prints the game to another."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        color: Optional[bool] = None,
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        if color is None:
            color = self.stdout.isatty() and "NO_COLOR" not in os.environ
        self.color = color

    def _bold(self, text: str) -> str:
        return BOLD + text + RESET if self.color else text

    def announce(self, text: str) -> None:
        self.stdout.write(self._bold(text) + "\n")
        self.stdout.flush()

    def read_move(self) -> Optional[str]:
        raw = self.stdin.readline()
        if not raw:
            return None
        return raw.strip()

    def show_fields(self, own: OwnField, opponent: OpponentField) -> None:
        self.stdout.write(draw_pair(own, opponent, color=self.color) + "\n")

    def your_turn(self) -> None:
        self.stdout.write(self._bold("Your turn:") + " ")
        self.stdout.flush()

    def waiting(self) -> None:
        self.announce("Waiting for turn...")

    def wrong_input(self, text: str) -> None:
        self.announce("Wrong input, try again")

    def shot_result(self, move: Move, result: ShotResult) -> None:
        self.announce(RESULT_TEXT[result])

    def incoming_shot(self, move: Move, result: ShotResult) -> None:
        self.announce(f"Shoot to {format_move(move)}: {RESULT_TEXT[result]}")

    def game_over(self, outcome: Outcome) -> None:
        if outcome is Outcome.LOSE:
            text = (RED if self.color else "") + "Game over! You lose."
        else:
            text = (GREEN if self.color else "") + "Game over! You win!"
        self.announce(text)
