"""
grafana-tfgen command line entry point.

Usage:
    grafana-tfgen <command> [args]
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from grafana_tfgen import __version__
from grafana_tfgen.cli.generate import handle_generate_command, register_generate_parser
from grafana_tfgen.cli.resources import (
    handle_list_resources_command,
    register_list_resources_parser,
)
from grafana_tfgen.config.settings import get_settings
from grafana_tfgen.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grafana-tfgen",
        description="Generate Terraform configuration from existing Grafana resources",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        help="Log level (default: GRAFANA_TFGEN_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="json",
        help="Log line format (default: json)",
    )
    subparsers = parser.add_subparsers(dest="command")

    register_generate_parser(subparsers)
    register_list_resources_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        args.log_level or get_settings().log_level,
        json_logs=args.log_format == "json",
    )

    if args.command == "generate":
        sys.exit(handle_generate_command(args))

    if args.command == "list-resources":
        sys.exit(handle_list_resources_command(args))

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    main()
