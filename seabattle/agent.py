from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from .errors import GameAborted
from .field import Move, OpponentField, OwnField, ShotResult
from .net import Transport
from .protocol import (
    MOVE_SIZE,
    RESULT_SIZE,
    decode_move,
    decode_result,
    encode_move,
    encode_result,
    format_move,
    parse_move,
)

logger = logging.getLogger(__name__)

# Returns the raw text the player typed, or None when they walked away.
MoveSource = Callable[[], Optional[str]]


class TurnState(Enum):
    LOCAL_TURN = "local"
    REMOTE_TURN = "remote"
    GAME_OVER = "over"


class Outcome(Enum):
    WIN = "win"
    LOSE = "lose"


class Presenter:
    """Receives game events for display. Every hook is optional."""

    def show_fields(self, own: OwnField, opponent: OpponentField) -> None:
        pass

    def your_turn(self) -> None:
        pass

    def waiting(self) -> None:
        pass

    def wrong_input(self, text: str) -> None:
        pass

    def shot_result(self, move: Move, result: ShotResult) -> None:
        pass

    def incoming_shot(self, move: Move, result: ShotResult) -> None:
        pass

    def game_over(self, outcome: Outcome) -> None:
        pass


class SeabattleAgent:
    """Plays one session over an already connected transport.

    The side holding the initiative fires until it misses; a miss hands the
    initiative to the other side. Malformed local input is re-prompted
    without touching the network, while anything malformed from the peer
    ends the session with an exception.
    """

    def __init__(
        self,
        field: OwnField,
        opponent_field: Optional[OpponentField] = None,
        presenter: Optional[Presenter] = None,
    ) -> None:
        self.my_field = field
        self.other_field = opponent_field if opponent_field is not None else OpponentField()
        self.presenter = presenter if presenter is not None else Presenter()
        self.initiative = False
        self.state = TurnState.REMOTE_TURN

    def is_game_ended(self) -> bool:
        return self.my_field.is_loser() or self.other_field.is_loser()

    def _update_state(self) -> None:
        if self.is_game_ended():
            self.state = TurnState.GAME_OVER
        elif self.initiative:
            self.state = TurnState.LOCAL_TURN
        else:
            self.state = TurnState.REMOTE_TURN

    def start_game(self, transport: Transport, my_initiative: bool, read_move: MoveSource) -> Outcome:
        self.initiative = my_initiative
        self._update_state()
        logger.info("game started, %s moves first", "we" if my_initiative else "peer")

        while self.state is not TurnState.GAME_OVER:
            self.presenter.show_fields(self.my_field, self.other_field)
            if self.state is TurnState.LOCAL_TURN:
                self._local_turn(transport, read_move)
            else:
                self._remote_turn(transport)
            self._update_state()

        outcome = Outcome.LOSE if self.my_field.is_loser() else Outcome.WIN
        logger.info("game over: %s", outcome.value)
        self.presenter.show_fields(self.my_field, self.other_field)
        self.presenter.game_over(outcome)
        return outcome

    def _local_turn(self, transport: Transport, read_move: MoveSource) -> None:
        self.presenter.your_turn()
        text = read_move()
        if text is None:
            raise GameAborted("local player left the game")

        move = parse_move(text)
        if move is None or self.other_field.is_known(move.col, move.row):
            logger.debug("rejected local input %r", text)
            self.presenter.wrong_input(text)
            return

        transport.send_exact(encode_move(move))
        result = decode_result(transport.recv_exact(RESULT_SIZE))
        logger.debug("shot %s -> %s", format_move(move), result.name)

        if result is ShotResult.MISS:
            self.other_field.mark_miss(move.col, move.row)
            self.initiative = False
        elif result is ShotResult.HIT:
            self.other_field.mark_hit(move.col, move.row)
        else:
            self.other_field.mark_kill(move.col, move.row)
        self.presenter.shot_result(move, result)

    def _remote_turn(self, transport: Transport) -> None:
        self.presenter.waiting()
        move = decode_move(transport.recv_exact(MOVE_SIZE))
        result = self.my_field.shoot(move.col, move.row)
        logger.debug("peer shot %s -> %s", format_move(move), result.name)
        self.presenter.incoming_shot(move, result)

        transport.send_exact(encode_result(result))
        if result is ShotResult.MISS:
            self.initiative = True
