from __future__ import annotations


class SeabattleError(Exception):
    """Base class for every error raised by the game."""


class OutOfRange(SeabattleError, ValueError):
    def __init__(self, col: int, row: int) -> None:
        super().__init__(f"cell ({col}, {row}) is outside the field")
        self.col = col
        self.row = row


class InvalidPlacement(SeabattleError, ValueError):
    pass


class PlacementError(InvalidPlacement):
    pass


class ProtocolViolation(SeabattleError):
    """The peer sent something the protocol does not allow."""


class InvalidMove(ProtocolViolation):
    pass


class InvalidResult(ProtocolViolation):
    pass


class TransportError(SeabattleError, ConnectionError):
    pass


class GameAborted(SeabattleError):
    """The local player left before the game was decided."""


class ConfigError(SeabattleError, ValueError):
    pass
