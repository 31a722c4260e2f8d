from __future__ import annotations

import ipaddress
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

DEFAULT_PORT = 5000
DEFAULT_BIND = "0.0.0.0"
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level_name(default: str = DEFAULT_LOG_LEVEL) -> str:
    """Log level from ``SEABATTLE_LOG_LEVEL``, then ``LOG_LEVEL``."""
    value = os.getenv("SEABATTLE_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def _looks_like_ip(address: str) -> bool:
    return all(ch.isdigit() or ch == "." for ch in address) or ":" in address


@dataclass(frozen=True)
class GameConfig:
    mode: str
    seed: int
    port: int = DEFAULT_PORT
    bind: str = DEFAULT_BIND
    address: Optional[str] = None
    gui: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    def validate(self) -> "GameConfig":
        if self.mode not in ("host", "join"):
            raise ConfigError(f"unknown mode {self.mode!r}")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port must be in 1..65535, got {self.port}")
        if self.mode == "join":
            if not self.address:
                raise ConfigError("join mode needs an address")
            if _looks_like_ip(self.address):
                try:
                    ipaddress.ip_address(self.address)
                except ValueError as exc:
                    raise ConfigError(f"wrong IP format: {self.address}") from exc
        return self
