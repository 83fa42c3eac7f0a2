"""Forage configuration CLI.

Usage:
    forageconfig config read [--dir DIR] [--filter jdbc] [--strategy forage]
    forageconfig config write --input '{"forage.jdbc.url": "..."}' [--dir DIR]
    echo '{...}' | forageconfig config write
    forageconfig config write --delete --name myPG

Every command prints a JSON document on stdout and exits 0 on success,
1 when it reports an error.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .catalog import load_catalog
from .exceptions import ForageConfigError
from .tooling.reader import ConfigReader
from .tooling.results import ErrorResult, FileStrategy
from .tooling.writer import ConfigWriter

logger = logging.getLogger(__name__)


def _emit(result) -> int:
    print(json.dumps(result.to_json_dict(), indent=2))
    return 0 if getattr(result, "success", True) else 1


def _error(message: str) -> int:
    return _emit(ErrorResult(error=message))


def _directory(args: argparse.Namespace) -> Path:
    return Path(args.dir) if args.dir else Path.cwd()


def _read_input(args: argparse.Namespace) -> Optional[str]:
    if args.input and args.input.strip():
        return args.input
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def parse_json_input(text: str) -> dict[str, str]:
    """Parse a flat JSON object into string values, keeping key order."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("JSON input must be an object of key/value pairs")
    result: dict[str, str] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (dict, list)):
            raise ValueError(f"Value of '{key}' must be a string, got {type(value).__name__}")
        result[key] = str(value)
    return result


def cmd_read(args: argparse.Namespace) -> int:
    """Describe the beans configured in a directory."""
    try:
        reader = ConfigReader(
            load_catalog(args.catalog),
            _directory(args),
            FileStrategy.parse(args.strategy),
            args.filter,
        )
        return _emit(reader.read())
    except (ForageConfigError, OSError, ValueError) as e:
        logger.debug("read failed", exc_info=True)
        return _error(f"Error reading configuration: {e}")


def cmd_write(args: argparse.Namespace) -> int:
    """Write (or with --delete, remove) configuration in a directory."""
    try:
        writer = ConfigWriter(
            load_catalog(args.catalog),
            _directory(args),
            FileStrategy.parse(args.strategy),
        )
        if not writer.directory.exists():
            writer.directory.mkdir(parents=True)

        if args.delete:
            return _emit(writer.delete(args.name))

        text = _read_input(args)
        if text is None or not text.strip():
            return _error("No JSON input provided. Use --input or pipe JSON to stdin.")
        return _emit(writer.write(parse_json_input(text)))
    except (ForageConfigError, OSError, ValueError) as e:
        logger.debug("write failed", exc_info=True)
        return _error(f"Error processing configuration: {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forageconfig",
        description="Read and write Forage integration configuration",
    )
    parser.add_argument("--log-level", type=str, default="warning",
                        choices=["debug", "info", "warning", "error"])
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    config_parser = subparsers.add_parser("config", help="Manage configuration files")
    config_commands = config_parser.add_subparsers(dest="config_command")

    # config read
    read_parser = config_commands.add_parser(
        "read", help="List beans that the configuration would create"
    )
    read_parser.add_argument("--dir", "-d", type=str, default=None,
                             help="Directory to scan (default: current directory)")
    read_parser.add_argument("--filter", "-f", type=str, default=None,
                             help="Only show beans of this factory type (e.g. jdbc, jms, agent)")
    read_parser.add_argument("--strategy", "-s", type=str, default="application",
                             help="'application' reads application.properties, "
                                  "'forage' reads forage-*.properties")
    read_parser.add_argument("--catalog", type=str, default=None,
                             help="Alternative catalog YAML file")

    # config write
    write_parser = config_commands.add_parser(
        "write", help="Write configuration from JSON input to properties files"
    )
    write_parser.add_argument("--input", "-i", type=str, default=None,
                              help="JSON object of configuration values (default: stdin)")
    write_parser.add_argument("--dir", "-d", type=str, default=None,
                              help="Directory to write to (default: current directory)")
    write_parser.add_argument("--delete", action="store_true",
                              help="Delete the configuration of an instance")
    write_parser.add_argument("--name", "-n", type=str, default=None,
                              help="Instance name to delete (with --delete)")
    write_parser.add_argument("--strategy", "-s", type=str, default="application",
                              help="'application' writes application.properties, "
                                   "'forage' writes forage-*.properties")
    write_parser.add_argument("--catalog", type=str, default=None,
                              help="Alternative catalog YAML file")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "config" and args.config_command == "read":
        sys.exit(cmd_read(args))
    elif args.command == "config" and args.config_command == "write":
        sys.exit(cmd_write(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
