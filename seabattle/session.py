from __future__ import annotations

from typing import Callable, Optional

from .agent import MoveSource, Outcome, Presenter, SeabattleAgent
from .field import OwnField
from .net import SocketTransport, accept_one, listen, open_client

Notify = Callable[[str], None]


def run_host(
    field: OwnField,
    bind: str,
    port: int,
    read_move: MoveSource,
    presenter: Optional[Presenter] = None,
    notify: Notify = print,
) -> Outcome:
    """Accept one peer and play; the host waits for the first shot."""
    agent = SeabattleAgent(field, presenter=presenter)
    srv = listen(bind, port)
    try:
        notify(f"Waiting for connection on port {srv.getsockname()[1]}...")
        conn, addr = accept_one(srv)
        notify(f"Player connected from {addr[0]}")
        with SocketTransport(conn) as transport:
            return agent.start_game(transport, False, read_move)
    finally:
        srv.close()


def run_client(
    field: OwnField,
    host: str,
    port: int,
    read_move: MoveSource,
    presenter: Optional[Presenter] = None,
    notify: Notify = print,
) -> Outcome:
    """Connect to a waiting host and fire first."""
    agent = SeabattleAgent(field, presenter=presenter)
    notify(f"Connecting to {host}:{port} ...")
    sock = open_client(host, port)
    with SocketTransport(sock) as transport:
        return agent.start_game(transport, True, read_move)
