#!/usr/bin/env python3
"""
CF Records Manager - Command Line Interface

Main entry point for the CF Records Manager CLI.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from .. import __git_commit__, __version__
from ..core.config import DEFAULT_CONFIG_FILE, Config, generate_config, resolve_config
from ..core.dns_manager import DNSManager
from ..core.exceptions import CFRecordsError, RestrictedSubdomainViolation, ValidationError
from ..utils.prompt import fixed_answer
from ..utils.tips import gen_tip

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cf-records",
        description="CF Records Manager - Declarative DNS record management for Cloudflare",
    )
    parser.add_argument(
        "--config",
        "-c",
        help=f"Configuration file path (default: CONFIG_FILE or {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="list all records from remote/local")
    list_parser.add_argument(
        "--local", "-l", action="store_true", help="list records from the local records file"
    )
    list_parser.add_argument("--type", "-t", help="comma separated record types, e.g. A,CNAME")
    list_parser.add_argument("--file", "-f", help="records file")
    list_parser.add_argument("--domain", help="root domain name")

    fmt_parser = subparsers.add_parser("fmt", help="format the records file")
    fmt_parser.add_argument(
        "--check", "-c", action="store_true", help="check the records file for errors"
    )
    fmt_parser.add_argument("--file", "-f", help="records file")
    fmt_parser.add_argument("--restricted", "-r", help="restricted subdomains file")
    fmt_parser.add_argument("--domain", help="root domain name")
    fmt_parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="remove restricted subdomains without asking",
    )

    sync_parser = subparsers.add_parser("sync", help="sync with remote DNS")
    sync_parser.add_argument("--dry-run", action="store_true", help="dry run the sync")
    sync_parser.add_argument(
        "--proxied", "-p", action="store_true", help="set all records proxied"
    )
    sync_parser.add_argument("--file", "-f", help="records file")
    sync_parser.add_argument("--restricted", "-r", help="restricted subdomains file")
    sync_parser.add_argument("--domain", help="root domain name")
    sync_parser.add_argument(
        "--output-file",
        "-o",
        help="File to save dry run output (only used with --dry-run)",
    )

    export_parser = subparsers.add_parser("export", help="export DNS records to file")
    export_parser.add_argument("--file", "-f", help="export file")
    export_parser.add_argument("--domain", help="root domain name")

    subparsers.add_parser("version", help="print version")

    config_parser = subparsers.add_parser("config", help="manage the config file")
    config_parser.add_argument(
        "--gen", action="store_true", help="generate a config file and a sample records file"
    )
    config_parser.add_argument(
        "--output", help=f"where to write the config file (default: {DEFAULT_CONFIG_FILE})"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.command is None:
        console.print(f"tip: {gen_tip()}")
        sys.exit(0)

    if args.command == "version":
        console.print(version_string())
        sys.exit(0)

    if getattr(args, "output_file", None) and not args.dry_run:
        console.print("[red]ERROR - --output-file can only be used with --dry-run[/red]")
        sys.exit(1)

    manager = None
    try:
        if args.command == "config":
            config_logger(Config(), args.verbose)
            if not args.gen:
                console.print("[red]ERROR - nothing to do, use `cf-records config --gen`[/red]")
                sys.exit(1)
            config = generate_config(args.output or DEFAULT_CONFIG_FILE)
            console.print(f"[green]Config file generated, records file: {config.record_file}[/green]")
            sys.exit(0)

        config = resolve_config(args.config, overrides_from_args(args))
        config_logger(config, args.verbose)

        confirm = fixed_answer(True) if getattr(args, "yes", False) else None
        manager = DNSManager(config, console=console, confirm=confirm)
        run_command(manager, args)

    except CFRecordsError as e:
        if args.command == "fmt" and (args.check or isinstance(e, ValidationError)):
            report_validation_failure(console, e)
        else:
            report_error(console, e, args.verbose)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if args.verbose:
            console.print_exception()
        sys.exit(1)
    finally:
        if manager is not None:
            manager.close()

    sys.exit(0)


def run_command(manager: DNSManager, args: argparse.Namespace):
    """Dispatch a parsed subcommand to the DNS manager."""
    if args.command == "list":
        record_types = parse_types(args.type)
        if args.local:
            manager.list_local(record_types)
        else:
            manager.list_remote(record_types)

    elif args.command == "fmt":
        if args.check:
            manager.check_records()
        else:
            manager.format_records()

    elif args.command == "sync":
        manager.console.print("[bold]sync started...[/bold]")
        manager.sync(
            dry_run=args.dry_run,
            force_proxied=args.proxied,
            output_file=args.output_file,
        )
        manager.console.print("[bold green]sync completed[/bold green]")

    elif args.command == "export":
        manager.export(args.file)


def overrides_from_args(args: argparse.Namespace) -> Dict:
    """Config values given on the command line."""
    overrides = {"domain": getattr(args, "domain", None)}
    # export --file names the output, not the records file
    if args.command != "export":
        overrides["record_file"] = getattr(args, "file", None)
    overrides["restricted_file"] = getattr(args, "restricted", None)
    return overrides


def parse_types(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma separated list of record types."""
    if not value:
        return None
    return [t.strip().upper() for t in value.split(",") if t.strip()]


def version_string() -> str:
    """Version line with the short git commit when known."""
    short_commit = __git_commit__[:7] if len(__git_commit__) >= 7 else ""
    return f"Version: {__version__} {short_commit}".rstrip()


def report_error(console: Console, error: CFRecordsError, verbose: bool = False):
    logger.error(str(error))
    console.print(f"[red]ERROR - {escape(str(error))}[/red]")
    if verbose:
        console.print_exception()


def report_validation_failure(console: Console, error: CFRecordsError):
    """Print a fmt --check style failure report."""
    logger.error(str(error))
    if not isinstance(error, ValidationError):
        console.print(f"[red]ERROR - {escape(str(error))}[/red]")
    if isinstance(error, RestrictedSubdomainViolation):
        console.print("[red]ERROR - Restricted subdomains found, please check the records[/red]")
        for record in error.records:
            console.print(f"[red]ERROR - {escape(str(record))}[/red]")
    console.print(f"FAIL\t{escape(str(error))}")
    console.print("TEST\tfailed")
    console.print("run `cf-records fmt` to fix the errors")


def config_logger(config: Config, verbose: bool = False):
    """Configure logging."""
    logging_config = config.logging or {}
    log_level = "DEBUG" if verbose else logging_config.get("level", "WARNING")
    handlers = [logging.StreamHandler(sys.stdout)]

    log_file = logging_config.get("file")
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=handlers)


if __name__ == "__main__":
    main()
