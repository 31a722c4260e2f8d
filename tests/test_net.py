"""Tests for the socket transport, including a full game over a socket pair."""

import socket
import threading

import pytest

from seabattle.agent import Outcome, SeabattleAgent
from seabattle.errors import TransportError
from seabattle.field import OpponentField
from seabattle.net import SocketTransport
from seabattle.placement import field_from_rows

EMPTY_ROW = "........."


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    yield SocketTransport(left), SocketTransport(right)
    left.close()
    right.close()


def test_exact_bytes_cross_the_connection(pair) -> None:
    left, right = pair
    left.send_exact(b"C")
    left.send_exact(b"7")
    assert right.recv_exact(2) == b"C7"


def test_closed_peer_is_a_transport_error(pair) -> None:
    left, right = pair
    left.send_exact(b"A")
    left.close()
    with pytest.raises(TransportError):
        right.recv_exact(2)


def test_send_after_close_is_a_transport_error(pair) -> None:
    left, _right = pair
    left.close()
    with pytest.raises(TransportError):
        left.send_exact(b"A1")


def test_full_game_between_two_agents(pair) -> None:
    host_side, client_side = pair
    host_field = field_from_rows(["O........"] + [EMPTY_ROW] * 8)
    client_field = field_from_rows([EMPTY_ROW] * 8 + ["........O"])
    outcomes = {}

    def host() -> None:
        host_moves = iter(["A1"])
        agent = SeabattleAgent(host_field)
        outcomes["host"] = agent.start_game(host_side, False, lambda: next(host_moves, None))

    thread = threading.Thread(target=host)
    thread.start()
    moves = iter(["B2", "A1"])
    client = SeabattleAgent(client_field, OpponentField(fleet=(1,)))
    outcomes["client"] = client.start_game(client_side, True, lambda: next(moves, None))
    thread.join(timeout=5)

    assert outcomes == {"host": Outcome.LOSE, "client": Outcome.WIN}
    assert host_field.is_loser()
