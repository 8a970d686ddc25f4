"""Command-line entry point -- query the console once and print the result.

Settings come from an optional TOML config file; command-line options
override it.  The rendered Reading always goes to stdout, logging to
stderr and optionally a log file.

Exit status: 0 on success, 1 if no valid frame was obtained, 2 on a
configuration error.
"""

import argparse
import logging
import os
import sys

from vploop import __version__
from vploop.client import run_client
from vploop.config import (
    DEFAULTS,
    FORMAT_CHOICES,
    UNIT_CHOICES,
    WIND_CHOICES,
    check_config,
    load_config,
    max_attempts,
)
from vploop.connection import Connection
from vploop.paths import resolve_config, resolve_log
from vploop.reading import WindSource
from vploop.render import render

log = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vploop",
        description="Read current conditions from a Vantage Pro console",
    )
    parser.add_argument("config", nargs="?", help="path to TOML config file")
    parser.add_argument("--host", help="console host name or address")
    parser.add_argument("--port", type=int, help="console TCP port")
    parser.add_argument("--retries", type=int, help="retries after the first attempt")
    parser.add_argument("--wait-ms", type=int, help="settle time per window (ms)")
    parser.add_argument("--units", choices=UNIT_CHOICES, help="unit system")
    parser.add_argument("--metric", action="store_true", help="shorthand for --units metric")
    parser.add_argument("--wind", choices=WIND_CHOICES, help="wind speed source")
    parser.add_argument("--format", choices=FORMAT_CHOICES, help="output format")
    parser.add_argument("--log", help="log file name or path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def merge_args(cfg: dict, args: argparse.Namespace) -> dict:
    """Return *cfg* with any options given on the command line applied."""
    merged = dict(cfg)
    for key in ("host", "port", "retries", "wait_ms", "units", "wind", "format", "log"):
        value = getattr(args, key)
        if value is not None:
            merged[key] = value
    if args.metric:
        merged["units"] = "metric"
    return merged


def _setup_logging(verbose: bool, log_path: str | None) -> None:
    """Configure root logging on stderr, plus *log_path* if given."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(format=_LOG_FORMAT, level=level)
    if log_path:
        os.makedirs(os.path.dirname(log_path), exist_ok=True)
        handler = logging.FileHandler(log_path)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point -- parse args, load config, run the client."""
    args = build_parser().parse_args(argv)

    config_path = None
    try:
        if args.config:
            config_path = resolve_config(args.config)
            cfg = load_config(config_path)
        else:
            cfg = dict(DEFAULTS)
        cfg = merge_args(cfg, args)
        check_config(cfg)
    except (FileNotFoundError, ValueError) as exc:
        print("vploop: %s" % exc, file=sys.stderr)
        return 2

    log_path = resolve_log(config_path, cfg["log"]) if cfg["log"] else None
    try:
        _setup_logging(args.verbose, log_path)
    except OSError as exc:
        print("vploop: cannot open log %s: %s" % (log_path, exc), file=sys.stderr)
        return 2

    log.debug(
        "querying %s:%d command=%r wait_ms=%d attempts=%d",
        cfg["host"], cfg["port"], cfg["command"], cfg["wait_ms"],
        max_attempts(cfg),
    )
    connection = Connection(cfg["host"], cfg["port"], cfg["command"], cfg["wait_ms"])
    reading = run_client(
        connection,
        max_attempts=max_attempts(cfg),
        metric=cfg["units"] == "metric",
        wind_source=WindSource[cfg["wind"].upper()],
        pressure_digits=cfg["pressure_digits"],
        wind_digits=cfg["wind_digits"],
    )

    print(render(reading, cfg["format"]))
    return 0 if reading.success else 1


if __name__ == "__main__":
    sys.exit(main())
