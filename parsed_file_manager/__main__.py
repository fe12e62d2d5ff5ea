"""CLI entry point for Parsed File Manager.

Usage:
    python -m parsed_file_manager [-v] [--target PATH] [--log-file PATH] [--log-json] list [--json]
    python -m parsed_file_manager [--target PATH] ensure NAME --ip IP [--alias ALIAS ...] [--comment TEXT]
    python -m parsed_file_manager [--target PATH] remove NAME

Commands:
    list      Show host entries in the target
    ensure    Create or update a host entry
    remove    Remove a host entry
"""

import argparse
import json
import logging
import sys

from parsed_file_manager import ParsedFileEngine, EngineConfig, ResourceSpec, __version__
from parsed_file_manager.errors import ParsedFileError
from parsed_file_manager.parsing import HostsParser, HOSTS_SCHEMA
from parsed_file_manager.records import ABSENT, clean
from parsed_file_manager.utils.logging import configure_root_logger

logger = logging.getLogger("parsed_file_manager.cli")


def build_config(args: argparse.Namespace) -> EngineConfig:
    """Engine configuration from the global CLI options."""
    return EngineConfig(
        default_target=args.target,
        bucket_dir=args.bucket,
        log_file=args.log_file,
    )


def setup_logging(config: EngineConfig, verbose: bool = False, json_output: bool = False) -> None:
    """Configure logging for CLI output."""
    level = logging.DEBUG if verbose else logging.WARNING
    configure_root_logger(level=level, json_output=json_output, log_file=config.log_file)


def build_engine(config: EngineConfig) -> ParsedFileEngine:
    """Create the engine for the selected hosts file."""
    return ParsedFileEngine(config, HostsParser(), HOSTS_SCHEMA)


def _printable(value):
    if value is ABSENT:
        return None
    if hasattr(value, "value"):
        return value.value
    return value


def cmd_list(args: argparse.Namespace, config: EngineConfig) -> int:
    """Handle the 'list' command - show host entries.

    Args:
        args: Parsed CLI arguments
        config: Engine configuration built from the global options

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    engine = build_engine(config)
    handles = engine.instances()

    if args.json:
        entries = [
            {key: _printable(value) for key, value in clean(handle.record).items()}
            for handle in handles
        ]
        print(json.dumps(entries, indent=2))
        return 0

    if not handles:
        print(f"No host entries in {engine.default_target}")
        return 0

    for handle in handles:
        aliases = handle.get("host_aliases")
        aliases = " ".join(aliases) if aliases and aliases is not ABSENT else ""
        print(f"{handle.get('ip'):<16} {handle.name:<30} {aliases}")
    return 0


def cmd_ensure(args: argparse.Namespace, config: EngineConfig) -> int:
    """Handle the 'ensure' command - create or update a host entry.

    Args:
        args: Parsed CLI arguments
        config: Engine configuration built from the global options

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    engine = build_engine(config)

    desired = {"ensure": "present", "ip": args.ip, "host_aliases": args.alias or []}
    if args.comment is not None:
        desired["comment"] = args.comment
    spec = ResourceSpec(args.name, desired)

    handle = engine.prefetch([spec])[args.name]

    if not handle.exists():
        handle.create()
        print(f"Created {args.name} ({args.ip})")
    else:
        changed = []
        for prop in ("ip", "host_aliases", "comment"):
            should = spec.declared_value(prop)
            if should is None:
                continue
            if handle.get(prop) != should:
                handle.set(prop, should)
                changed.append(prop)
        if not changed:
            print(f"{args.name} is already up to date")
            return 0
        print(f"Updated {args.name}: {', '.join(changed)}")

    handle.flush()
    return 0


def cmd_remove(args: argparse.Namespace, config: EngineConfig) -> int:
    """Handle the 'remove' command - remove a host entry.

    Args:
        args: Parsed CLI arguments
        config: Engine configuration built from the global options

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    engine = build_engine(config)
    spec = ResourceSpec(args.name, {"ensure": "absent"})
    handle = engine.prefetch([spec])[args.name]

    if not handle.exists():
        print(f"{args.name} is not present")
        return 0

    handle.destroy()
    handle.flush()
    print(f"Removed {args.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="parsed_file_manager",
        description="Parsed File Manager - manage host entries in hosts files",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--target", default="/etc/hosts",
        help="Hosts file to manage (default: /etc/hosts)"
    )
    parser.add_argument("--bucket", help="Backup bucket directory (default: next to target)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--log-json", action="store_true", help="Write logs as JSON lines")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list command
    list_parser = subparsers.add_parser("list", help="Show host entries")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # ensure command
    ensure_parser = subparsers.add_parser("ensure", help="Create or update a host entry")
    ensure_parser.add_argument("name", help="Canonical host name")
    ensure_parser.add_argument("--ip", required=True, help="Address of the host")
    ensure_parser.add_argument(
        "--alias", action="append",
        help="Alias for the host (repeatable)"
    )
    ensure_parser.add_argument("--comment", help="Trailing comment for the entry")

    # remove command
    remove_parser = subparsers.add_parser("remove", help="Remove a host entry")
    remove_parser.add_argument("name", help="Canonical host name")

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    config = build_config(args)
    setup_logging(config, verbose=args.verbose, json_output=args.log_json)

    commands = {
        "list": cmd_list,
        "ensure": cmd_ensure,
        "remove": cmd_remove,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args, config)
    except ParsedFileError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
