from __future__ import annotations

# Wire format, both directions, no framing and no handshake:
# - move:   2 ASCII bytes, column letter A..I then row digit 1..9, e.g. b"C7"
# - result: 1 byte, 0 = miss, 1 = hit, 2 = kill
# The side that receives a move always answers with exactly one result.

from typing import Optional

from .errors import InvalidMove, InvalidResult
from .field import FIELD_SIZE, Move, ShotResult

MOVE_SIZE = 2
RESULT_SIZE = 1


def _to_move(col: int, row: int) -> Optional[Move]:
    if 0 <= col < FIELD_SIZE and 0 <= row < FIELD_SIZE:
        return Move(col, row)
    return None


def parse_move(text: str) -> Optional[Move]:
    """Parse a move typed by the local player, ``None`` if malformed."""
    t = text.strip().upper()
    if len(t) != MOVE_SIZE:
        return None
    return _to_move(ord(t[0]) - ord('A'), ord(t[1]) - ord('1'))


def format_move(move: Move) -> str:
    return chr(ord('A') + move.col) + chr(ord('1') + move.row)


def encode_move(move: Move) -> bytes:
    if _to_move(move.col, move.row) is None:
        raise InvalidMove(f"move {tuple(move)} is outside the field")
    return format_move(move).encode("ascii")


def decode_move(data: bytes) -> Move:
    if len(data) != MOVE_SIZE:
        raise InvalidMove(f"move must be {MOVE_SIZE} bytes, got {len(data)}")
    move = _to_move(data[0] - ord('A'), data[1] - ord('1'))
    if move is None:
        raise InvalidMove(f"invalid move received: {data!r}")
    return move


def encode_result(result: ShotResult) -> bytes:
    return bytes((int(result),))


def decode_result(data: bytes) -> ShotResult:
    if len(data) != RESULT_SIZE:
        raise InvalidResult(f"result must be {RESULT_SIZE} byte, got {len(data)}")
    # bytes are unsigned, so 0x80..0xff can never alias a valid result
    value = data[0]
    if value not in (ShotResult.MISS, ShotResult.HIT, ShotResult.KILL):
        raise InvalidResult(f"invalid shot result received: {value}")
    return ShotResult(value)
