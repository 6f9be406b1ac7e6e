"""Command line interface: list, stop and inspect configured tasks."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from typing import List, Optional

import psutil
import yaml
from pygments import highlight
from pygments.formatters import Terminal256Formatter, TerminalFormatter
from pygments.lexers import get_lexer_by_name

from gokazi.loader import DEFAULT_SOURCES, ConfigError, load_config
from gokazi.log import new_logger
from gokazi.manager import Gokazi, GokaziError

VERSION = "latest"


def _write(text: str, language: str, formatter) -> None:
    out = sys.stdout
    if out.isatty():
        out.write(highlight(text, get_lexer_by_name(language), formatter))
    else:
        out.write(text if text.endswith("\n") else text + "\n")
    out.flush()


def _sources(args: argparse.Namespace) -> List[str]:
    if not args.config:
        return list(DEFAULT_SOURCES)
    return [part for value in args.config for part in value.split(",") if part]


def _manager(args: argparse.Namespace, logger: logging.Logger) -> Gokazi:
    cfg = load_config(_sources(args), sys.stdin, logger)
    gk = Gokazi(logger)
    for task_id, task in cfg.tasks.items():
        gk.add(task_id, task)
    return gk


def _run_config(args: argparse.Namespace, logger: logging.Logger) -> None:
    cfg = load_config(_sources(args), sys.stdin, logger)
    data = cfg.to_dict()
    data["tasks"] = dict(sorted(data["tasks"].items()))
    text = yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
    _write(text, "yaml", Terminal256Formatter(style="monokai"))


def _run_list(args: argparse.Namespace, logger: logging.Logger) -> None:
    tasks = _manager(args, logger).list()
    data = {task_id: status.to_dict() for task_id, status in sorted(tasks.items())}
    _write(json.dumps(data, indent=2), "json", TerminalFormatter())


def _run_stop(args: argparse.Namespace, logger: logging.Logger) -> None:
    _manager(args, logger).stop(args.id)


def _run_version(args: argparse.Namespace, logger: logging.Logger) -> None:
    out = sys.stdout
    out.write(f"{VERSION}\n")
    out.flush()


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser with all subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--debug", action="store_true", default=argparse.SUPPRESS, help="enable debug logs"
    )

    with_config = argparse.ArgumentParser(add_help=False)
    with_config.add_argument(
        "-c",
        "--config",
        action="append",
        default=None,
        help="config files (default is gokazi.yaml)",
    )

    parser = argparse.ArgumentParser(prog="gokazi", description="CLI process manager")
    parser.add_argument("--debug", action="store_true", default=False, help="enable debug logs")
    commands = parser.add_subparsers(dest="command", metavar="command")

    listing = commands.add_parser("list", parents=[common, with_config], help="List tasks")
    listing.set_defaults(handler=_run_list)

    stop = commands.add_parser("stop", parents=[common, with_config], help="Stop task by id")
    stop.add_argument("id", help="task id")
    stop.set_defaults(handler=_run_stop)

    config = commands.add_parser("config", parents=[common, with_config], help="Print config")
    config.set_defaults(handler=_run_config)

    version = commands.add_parser("version", parents=[common], help="Print version")
    version.set_defaults(handler=_run_version)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = new_logger(debug=args.debug)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.handler(args, logger)
    except (ConfigError, GokaziError, OSError, psutil.Error) as exc:
        logger.error("Ups, something went wrong")
        logger.error(str(exc))
        return 1
    except Exception as exc:  # noqa: BLE001 - report anything unexpected before exiting
        logger.error("It's time to panic")
        logger.error(repr(exc))
        logger.error(traceback.format_exc())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())