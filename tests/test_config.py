"""Tests for configuration, logging setup and the command line."""

import json
import logging

import pytest

from seabattle import cli
from seabattle.config import GameConfig, resolve_log_level_name
from seabattle.errors import ConfigError, TransportError
from seabattle.log import JsonFormatter, configure_logging


@pytest.mark.parametrize(
    "config",
    [
        GameConfig(mode="host", seed=1, port=0),
        GameConfig(mode="host", seed=1, port=70000),
        GameConfig(mode="join", seed=1, address=""),
        GameConfig(mode="join", seed=1, address="999.1.1.1"),
        GameConfig(mode="join", seed=1, address="::zz"),
        GameConfig(mode="watch", seed=1),
    ],
)
def test_invalid_config(config: GameConfig) -> None:
    with pytest.raises(ConfigError):
        config.validate()


def test_hostnames_are_left_to_the_resolver() -> None:
    config = GameConfig(mode="join", seed=1, address="localhost")
    assert config.validate() is config


def test_log_level_from_env(monkeypatch) -> None:
    monkeypatch.delenv("SEABATTLE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    assert resolve_log_level_name() == "WARNING"
    monkeypatch.setenv("LOG_LEVEL", "info")
    assert resolve_log_level_name() == "INFO"
    monkeypatch.setenv("SEABATTLE_LOG_LEVEL", " debug ")
    assert resolve_log_level_name() == "DEBUG"


def test_json_formatter_keeps_extra_fields() -> None:
    record = logging.LogRecord("seabattle.agent", logging.INFO, __file__, 1, "shot %s", ("A1",), None)
    record.result = "HIT"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "shot A1"
    assert payload["level"] == "INFO"
    assert payload["fields"] == {"result": "HIT"}


def test_configure_logging_writes_json_file(tmp_path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    path = tmp_path / "logs" / "game.jsonl"
    try:
        configure_logging("WARNING", str(path))
        logging.getLogger("seabattle.test").debug("quiet on console")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)

    line = path.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["msg"] == "quiet on console"


def test_cli_builds_validated_config() -> None:
    args = cli.build_parser().parse_args(["--seed", "7", "join", "--address", "127.0.0.1", "--port", "6000"])
    config = cli.config_from_args(args)
    assert (config.mode, config.seed, config.address, config.port) == ("join", 7, "127.0.0.1", 6000)
    assert config.gui is False


def test_cli_picks_a_seed_when_missing() -> None:
    args = cli.build_parser().parse_args(["host"])
    assert isinstance(cli.config_from_args(args).seed, int)


def test_cli_rejects_bad_port_before_playing(monkeypatch) -> None:
    monkeypatch.setattr(cli, "play", lambda config: pytest.fail("must not play"))
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["host", "--port", "0"])
    assert exc_info.value.code == 2


def test_cli_reports_fatal_session_errors(monkeypatch, capsys) -> None:
    def fail(config):
        raise TransportError("connection closed by peer")

    monkeypatch.setattr(cli, "configure_logging", lambda *a, **kw: None)
    monkeypatch.setattr(cli, "play", fail)
    assert cli.main(["--seed", "1", "host"]) == 1
    assert "connection closed by peer" in capsys.readouterr().err
