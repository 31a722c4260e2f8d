"""Tests for move/result wire encoding and local move parsing."""

import pytest

from seabattle.errors import InvalidMove, InvalidResult
from seabattle.field import FIELD_SIZE, Move, ShotResult
from seabattle.protocol import (
    decode_move,
    decode_result,
    encode_move,
    encode_result,
    format_move,
    parse_move,
)


def test_encode_move_is_letter_then_digit() -> None:
    assert encode_move(Move(0, 0)) == b"A1"
    assert encode_move(Move(8, 8)) == b"I9"
    assert encode_move(Move(2, 6)) == b"C7"


def test_every_cell_survives_the_wire() -> None:
    for col in range(FIELD_SIZE):
        for row in range(FIELD_SIZE):
            assert decode_move(encode_move(Move(col, row))) == (col, row)


@pytest.mark.parametrize("data", [b"J1", b"Z9", b"A0", b"@5", b"a1", b"1A", b"A", b"A10", b"\xff\xff"])
def test_decode_move_rejects_bytes_outside_field(data: bytes) -> None:
    with pytest.raises(InvalidMove):
        decode_move(data)


def test_encode_move_rejects_out_of_range() -> None:
    with pytest.raises(InvalidMove):
        encode_move(Move(FIELD_SIZE, 0))


def test_parse_move_accepts_lowercase_and_whitespace() -> None:
    assert parse_move(" b2\n") == Move(1, 1)
    assert parse_move("I9") == Move(8, 8)


@pytest.mark.parametrize("text", ["", "Z9", "A0", "J1", "A10", "11", "AA", "A-"])
def test_parse_move_returns_none_for_malformed_input(text: str) -> None:
    assert parse_move(text) is None


def test_format_move() -> None:
    assert format_move(Move(3, 4)) == "D5"


def test_result_bytes() -> None:
    assert encode_result(ShotResult.MISS) == b"\x00"
    assert encode_result(ShotResult.HIT) == b"\x01"
    assert encode_result(ShotResult.KILL) == b"\x02"
    assert decode_result(b"\x02") is ShotResult.KILL


@pytest.mark.parametrize("data", [b"\x03", b"\x05", b"\x80", b"\xff", b"", b"\x00\x00"])
def test_decode_result_rejects_invalid_bytes(data: bytes) -> None:
    with pytest.raises(InvalidResult):
        decode_result(data)
