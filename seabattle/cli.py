import argparse
import logging
import random
import sys
from typing import List, Optional

from .agent import MoveSource, Outcome, Presenter
from .config import DEFAULT_BIND, DEFAULT_PORT, GameConfig, resolve_log_level_name
from .errors import ConfigError, GameAborted, SeabattleError
from .field import OwnField
from .log import configure_logging
from .placement import random_field
from .session import Notify, run_client, run_host
from .ui import TerminalPlayer, clear_screen

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sea battle - 1v1 over a direct TCP connection")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random fleet placement")
    parser.add_argument("--gui", action="store_true", help="Play in a pygame window instead of the terminal")
    parser.add_argument("--log-level", type=str, default=None, help="Log level (default: $SEABATTLE_LOG_LEVEL or WARNING)")
    parser.add_argument("--log-file", type=str, default=None, help="Also write JSON logs to this file")
    subparsers = parser.add_subparsers(dest="mode", required=True)

    host_p = subparsers.add_parser("host", help="Wait for a player; they fire first")
    host_p.add_argument("--bind", type=str, default=DEFAULT_BIND, help="Bind address")
    host_p.add_argument("--port", type=int, default=DEFAULT_PORT, help="TCP port to listen on")

    join_p = subparsers.add_parser("join", help="Join a waiting host and fire first")
    join_p.add_argument("--address", type=str, required=True, help="Host IP or address")
    join_p.add_argument("--port", type=int, default=DEFAULT_PORT, help="TCP port to connect")
    return parser


def config_from_args(args: argparse.Namespace) -> GameConfig:
    seed = args.seed if args.seed is not None else random.SystemRandom().randrange(2 ** 31)
    return GameConfig(
        mode=args.mode,
        seed=seed,
        port=args.port,
        bind=getattr(args, "bind", DEFAULT_BIND),
        address=getattr(args, "address", None),
        gui=args.gui,
        log_level=args.log_level or resolve_log_level_name(),
        log_file=args.log_file,
    ).validate()


def connect_and_play(
    config: GameConfig,
    field: OwnField,
    read_move: MoveSource,
    presenter: Presenter,
    notify: Notify,
) -> Outcome:
    if config.mode == "host":
        return run_host(field, config.bind, config.port, read_move, presenter, notify)
    return run_client(field, config.address or "", config.port, read_move, presenter, notify)


def play(config: GameConfig) -> Outcome:
    field = random_field(config.seed)
    logger.info("fleet placed with seed %d", config.seed)

    if config.gui:
        # pygame greets on import; only pay for it in window mode
        from .gui import run_gui

        return run_gui(lambda read_move, presenter, notify: connect_and_play(config, field, read_move, presenter, notify))

    player = TerminalPlayer()
    clear_screen()
    return connect_and_play(config, field, player.read_move, player, print)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except ConfigError as exc:
        parser.error(str(exc))

    configure_logging(config.log_level, config.log_file)
    try:
        play(config)
    except KeyboardInterrupt:
        return 130
    except GameAborted:
        print("You left the game.")
        return 0
    except (SeabattleError, OSError) as exc:
        logger.debug("session failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
