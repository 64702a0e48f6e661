"""
CLI command listing the resource types generation supports.

Commands:
    grafana-tfgen list-resources
    grafana-tfgen list-resources --include-resources 'grafana_*.*' --format json
"""

from __future__ import annotations

import argparse
from typing import Optional

from grafana_tfgen.catalog import default_cloud_catalog, default_grafana_catalog
from grafana_tfgen.cli.ux import console, error, print_table
from grafana_tfgen.generate.errors import MalformedPatternError
from grafana_tfgen.generate.filters import filter_resources


def list_resources_command(
    include_resources: Optional[list[str]] = None,
    output_format: str = "table",
) -> int:
    """List supported resource types, optionally narrowed by include patterns."""
    catalogs = [default_cloud_catalog(), default_grafana_catalog()]
    try:
        selected = [filter_resources(catalog, include_resources or []) for catalog in catalogs]
    except MalformedPatternError as e:
        error(str(e))
        return 2

    descriptors = sorted((d for catalog in selected for d in catalog), key=lambda d: d.name)

    if output_format == "json":
        console.print_json(
            data=[
                {
                    "name": d.name,
                    "category": d.category,
                    "listable": d.has_lister,
                    "description": d.description,
                }
                for d in descriptors
            ]
        )
        return 0

    rows = [
        [d.name, d.category, "yes" if d.has_lister else "no", d.description or ""]
        for d in descriptors
    ]
    print_table("Supported resources", ["Resource type", "Category", "Listable", "Notes"], rows)
    return 0


def register_list_resources_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register list-resources subcommand parser."""
    parser = subparsers.add_parser("list-resources", help="List supported resource types")
    parser.add_argument(
        "--include-resources",
        action="append",
        metavar="TYPE.NAME",
        help="Only list resource types matching this glob (repeatable)",
    )
    parser.add_argument(
        "--format",
        "-f",
        dest="output_format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )


def handle_list_resources_command(args: argparse.Namespace) -> int:
    """Handle list-resources command from CLI args."""
    return list_resources_command(
        include_resources=getattr(args, "include_resources", None),
        output_format=getattr(args, "output_format", "table"),
    )
