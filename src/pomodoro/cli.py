"""Command line interface for the Pomodoro timer."""
from __future__ import annotations

import argparse
import logging
import sys
from importlib import metadata
from typing import Iterable, Optional

from . import __version__, scheduler

EXIT_OK = 0
EXIT_INVALID_ARGS = 2
EXIT_INTERRUPTED = 130

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return metadata.version("pomodoro-cli")
    except metadata.PackageNotFoundError:
        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pomodoro", description="Tiny Pomodoro CLI")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug details to stderr")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    run = commands.add_parser("run", help="run a Pomodoro cycle", description="Run a Pomodoro cycle.")
    run.add_argument("-f", "--focus", type=int, default=scheduler.DEFAULTS["focus_minutes"], help="minutes per focus session (default: %(default)s)")
    run.add_argument("-b", "--break-min", type=int, default=scheduler.DEFAULTS["break_minutes"], help="minutes per short break (default: %(default)s)")
    run.add_argument("-c", "--cycles", type=int, default=scheduler.DEFAULTS["cycles"], help="number of focus sessions to run (default: %(default)s)")
    run.add_argument("-l", "--long-break", type=int, default=scheduler.DEFAULTS["long_break_minutes"], help="minutes per long break (default: %(default)s)")
    run.add_argument("-e", "--long-break-every", type=int, default=scheduler.DEFAULTS["long_break_every"], help="take a long break after every N focus sessions (default: %(default)s)")
    run.add_argument("--fast", action="store_true", help="treat one real second as one Pomodoro minute (handy for demos)")
    run.add_argument("--dry-run", action="store_true", help="show the schedule without running timers")
    return parser


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    return build_parser().parse_args(list(argv))


def config_from_args(args: argparse.Namespace) -> scheduler.SessionConfig:
    return scheduler.SessionConfig(
        focus_minutes=args.focus,
        break_minutes=args.break_min,
        cycles=args.cycles,
        long_break_minutes=args.long_break,
        long_break_every=args.long_break_every,
        seconds_per_minute=1 if args.fast else 60,
    )


def _run(args: argparse.Namespace) -> int:
    config = config_from_args(args)
    try:
        plan = scheduler.build_plan(config)
    except scheduler.ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_ARGS

    if args.dry_run:
        print(config.summary())
        print("Planned intervals:")
        for line in scheduler.describe_plan(plan):
            print(line)
        return EXIT_OK

    try:
        scheduler.run_session(config)
    except KeyboardInterrupt:
        logger.debug("run interrupted by user")
        print("\nSession interrupted. See you next time!")
        return EXIT_INTERRUPTED
    return EXIT_OK


COMMANDS = {
    "run": _run,
}


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    return COMMANDS[args.command](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
