"""Command line entry point.

``oblecnik`` prints the clothing recommendation for the configured location,
``oblecnik set <lat> <lon> [alt]`` stores the location and ``oblecnik show``
prints what is stored.  Anything else prints the usage.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console

from .config import default_config_path, load_config, parse_config, read_document, save_config
from .exceptions import ConfigError, OblecnikError
from .providers import PROVIDER_KINDS, get_provider
from .report import print_report
from .services.recommendation import RecommendationService


logger = logging.getLogger(__name__)

COMMANDS = ("set", "show", "help", "get")
VERBOSE_FLAGS = ("-v", "--verbose")
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oblecnik",
        description="Oblecnik picks clothes for tomorrow's weather at your location.",
        epilog="Run without a command to get today's or tomorrow's recommendation.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    subparsers = parser.add_subparsers(dest="command", metavar="command")

    set_parser = subparsers.add_parser("set", help="Store the location")
    set_parser.add_argument("latitude", help="Latitude in decimal degrees")
    set_parser.add_argument("longitude", help="Longitude in decimal degrees")
    set_parser.add_argument("altitude", nargs="?", help="Altitude in metres (optional)")
    set_parser.add_argument("--provider", choices=PROVIDER_KINDS, help="Forecast provider")
    set_parser.add_argument("--api-key", dest="api_key", help="API key for providers that need one")
    set_parser.add_argument("--force", action="store_true", help="Replace a configuration file that cannot be read")

    subparsers.add_parser("show", help="Print the stored configuration")
    subparsers.add_parser("help", help="Print this help")
    subparsers.add_parser("get", help="Print this help")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run_recommendation(console: Console, config_path: Optional[Path] = None) -> None:
    config = load_config(config_path)
    provider = get_provider(config)
    recommendation = RecommendationService(provider).recommend(config)
    print_report(recommendation, console)


def set_location(args: argparse.Namespace, console: Console, config_path: Optional[Path] = None) -> None:
    path = config_path or default_config_path()
    replaced = False
    try:
        stored: Dict[str, Any] = read_document(path)
    except ConfigError as exc:
        if not args.force:
            raise ConfigError(f"{exc}; fix the file or run `oblecnik set ... --force` to replace it") from exc
        logger.warning("Replacing unreadable configuration: %s", exc)
        stored = {}
        replaced = True

    values: Dict[str, Any] = {
        "latitude": _number(args.latitude, "latitude", float),
        "longitude": _number(args.longitude, "longitude", float),
        "altitude": _number(args.altitude, "altitude", int) if args.altitude is not None else None,
        "provider": args.provider or stored.get("provider"),
        "api_key": args.api_key or stored.get("api_key"),
    }
    if "timeout" in stored:
        values["timeout"] = stored["timeout"]

    config = parse_config(values, source="location")
    saved = save_config(config, path)
    altitude = f", altitude {config.altitude} m" if config.altitude is not None else ""
    console.print(f"Saved {config.latitude}, {config.longitude}{altitude} ({config.provider}) to {saved}")
    if replaced:
        console.print("The previous file could not be read and was replaced.")


def show_config(console: Console, config_path: Optional[Path] = None) -> None:
    path = config_path or default_config_path()
    config = load_config(path)
    console.print(f"Config file: {path}")
    console.print(f"Latitude:    {config.latitude}")
    console.print(f"Longitude:   {config.longitude}")
    console.print(f"Altitude:    {config.altitude if config.altitude is not None else 'not set'}")
    console.print(f"Provider:    {config.provider}")
    if config.api_key:
        console.print(f"API key:     {_mask(config.api_key)}")
    console.print(f"Timeout:     {config.timeout:g} s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    arguments: List[str] = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    console = Console(highlight=False, markup=False, soft_wrap=True)

    command = next((arg for arg in arguments if arg not in VERBOSE_FLAGS), None)
    if command is not None and command not in COMMANDS:
        parser.print_help()
        return 0

    args = parser.parse_args(arguments)
    configure_logging(args.verbose)

    try:
        if args.command is None:
            run_recommendation(console)
        elif args.command == "set":
            set_location(args, console)
        elif args.command == "show":
            show_config(console)
        else:
            parser.print_help()
    except OblecnikError as exc:
        logger.debug("Aborting", exc_info=exc)
        Console(stderr=True, highlight=False, markup=False, soft_wrap=True).print(f"{exc.category}: {exc}", style="bold red")
        return exc.exit_code
    return 0


def _number(raw: str, name: str, kind: type) -> Any:
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a {'whole ' if kind is int else ''}number, got {raw!r}") from exc


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "****"
    return f"{'*' * (len(secret) - 4)}{secret[-4:]}"


__all__ = ["build_parser", "main", "run_recommendation", "set_location", "show_config"]
