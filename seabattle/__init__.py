"""Two-player sea battle over a direct TCP connection."""

from .agent import Outcome, SeabattleAgent
from .field import FIELD_SIZE, Cell, Move, OpponentField, OwnField, ShotResult

__version__ = "0.1.0"

__all__ = [
    "FIELD_SIZE",
    "Cell",
    "Move",
    "OpponentField",
    "Outcome",
    "OwnField",
    "SeabattleAgent",
    "ShotResult",
]
