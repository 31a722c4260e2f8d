from __future__ import annotations

import logging
import socket
from typing import Protocol, Tuple

from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Reliable ordered byte stream, exact sizes or failure."""

    def send_exact(self, data: bytes) -> None: ...

    def recv_exact(self, size: int) -> bytes: ...


class SocketTransport:
    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock

    def send_exact(self, data: bytes) -> None:
        try:
            self.sock.sendall(data)
        except OSError as exc:
            raise TransportError(f"failed to send {len(data)} bytes: {exc}") from exc

    def recv_exact(self, size: int) -> bytes:
        chunks = []
        remaining = size
        while remaining > 0:
            try:
                chunk = self.sock.recv(remaining)
            except OSError as exc:
                raise TransportError(f"failed to receive {size} bytes: {exc}") from exc
            if not chunk:
                raise TransportError("connection closed by peer")
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def close(self) -> None:
        try:
            self.sock.close()
        except OSError:
            logger.debug("error while closing socket", exc_info=True)

    def __enter__(self) -> "SocketTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def listen(bind: str, port: int) -> socket.socket:
    """Bound listening socket; ``port`` 0 picks a free one."""
    family = socket.AF_INET6 if ":" in bind else socket.AF_INET
    srv = socket.socket(family, socket.SOCK_STREAM)
    try:
        srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        srv.bind((bind, port))
        srv.listen(1)
    except OSError as exc:
        srv.close()
        raise TransportError(f"can't listen on {bind}:{port}: {exc}") from exc
    return srv


def accept_one(srv: socket.socket) -> Tuple[socket.socket, Tuple[str, int]]:
    try:
        conn, addr = srv.accept()
    except OSError as exc:
        raise TransportError(f"can't accept connection: {exc}") from exc
    logger.info("accepted connection from %s:%d", addr[0], addr[1])
    return conn, addr


def open_client(host: str, port: int) -> socket.socket:
    try:
        # resolves the address family, so IPv6 literals work too
        sock = socket.create_connection((host, port))
    except OSError as exc:
        raise TransportError(f"can't connect to {host}:{port}: {exc}") from exc
    logger.info("connected to %s:%d", host, port)
    return sock
