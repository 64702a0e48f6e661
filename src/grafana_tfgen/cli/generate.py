"""
CLI command for Terraform generation.

Commands:
    grafana-tfgen generate --output-dir out --grafana-url URL --grafana-auth TOKEN
    grafana-tfgen generate --output-dir out --cloud-access-policy-token TOKEN --cloud-org ORG \\
        --stack-token mystack=glsa_...
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Any, Optional

from grafana_tfgen.cli.ux import console, error, header, print_table, spinner, success, warning
from grafana_tfgen.config.loader import build_generate_config
from grafana_tfgen.config.models import OutputFormat
from grafana_tfgen.generate.errors import ConfigurationError, ExternalToolError, GenerateError
from grafana_tfgen.generate.generator import Generator
from grafana_tfgen.generate.models import GenerationSummary


def _parse_stack_tokens(values: list[str] | None) -> dict[str, str]:
    tokens: dict[str, str] = {}
    for value in values or []:
        slug, sep, token = value.partition("=")
        if not sep or not slug or not token:
            raise ConfigurationError(f"stack token {value!r} is not in the format <stack-slug>=<token>")
        tokens[slug] = token
    return tokens


def generate_command(
    output_dir: Optional[str] = None,
    *,
    config_file: Optional[str] = None,
    clobber: bool = False,
    output_format: Optional[str] = None,
    include_resources: Optional[list[str]] = None,
    grafana_url: Optional[str] = None,
    grafana_auth: Optional[str] = None,
    cloud_access_policy_token: Optional[str] = None,
    cloud_org: Optional[str] = None,
    cloud_api_url: Optional[str] = None,
    stack_tokens: Optional[list[str]] = None,
    stacks: Optional[list[str]] = None,
    provider_version: Optional[str] = None,
    terraform_binary: Optional[str] = None,
    generator_options: Optional[dict[str, Any]] = None,
) -> int:
    """
    Generate Terraform import blocks and resources from live Grafana resources.

    Exit codes:
        0 - Generation finished
        1 - Generation failed
        2 - Invalid configuration

    Args:
        output_dir: Directory the Terraform files are written to
        config_file: Optional YAML configuration file
        clobber: Delete the output directory first if it exists
        output_format: hcl, json or crossplane
        include_resources: ``<type>.<name>`` glob patterns to restrict generation
        stack_tokens: ``<slug>=<token>`` credentials for Grafana Cloud stacks
        generator_options: Extra keyword arguments for Generator (catalogs, runner)

    Returns:
        Exit code (0, 1, or 2)
    """
    try:
        config = build_generate_config(
            {
                "output_dir": output_dir,
                "clobber": clobber,
                "output_format": output_format,
                "include_resources": include_resources,
                "grafana_url": grafana_url,
                "grafana_auth": grafana_auth,
                "cloud_access_policy_token": cloud_access_policy_token,
                "cloud_org": cloud_org,
                "cloud_api_url": cloud_api_url,
                "stack_tokens": _parse_stack_tokens(stack_tokens),
                "stacks": stacks,
                "provider_version": provider_version,
                "terraform_binary": terraform_binary,
            },
            config_file=config_file,
        )
    except ConfigurationError as e:
        error(f"Invalid configuration: {e}")
        return 2

    header(f"Generating Terraform configuration in {config.output_dir}")

    generator = Generator(config, **(generator_options or {}))
    try:
        with spinner("Discovering resources..."):
            summary = asyncio.run(generator.run())
    except ExternalToolError as e:
        error(f"Terraform failed: {' '.join(e.command)} (exit status {e.returncode})")
        output = "\n".join(part for part in (e.stdout.strip(), e.stderr.strip()) if part)
        if output:
            console.print(output, markup=False, highlight=False)
        return 1
    except GenerateError as e:
        error(str(e))
        return 1

    _print_summary(summary)
    if config.output_format == OutputFormat.JSON:
        success(f"Converted output to Terraform JSON in {summary.output_dir}")
    return 0


def _print_summary(summary: GenerationSummary) -> None:
    rows = []
    for generation_pass in summary.passes:
        for resource_type, count in sorted(generation_pass.resource_types.items()):
            rows.append([generation_pass.label or "grafana", resource_type, str(count)])
    if rows:
        print_table("Imported resources", ["Environment", "Resource type", "Count"], rows, numeric=["Count"])
    else:
        warning("No resources matched; nothing to import")

    success(f"Generated {summary.total_imports} import blocks in {summary.output_dir}")
    for path in summary.files:
        console.print(f"  [muted]{path.name}[/muted]")


def register_generate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register generate subcommand parser."""
    parser = subparsers.add_parser(
        "generate",
        help="Generate Terraform configuration from existing Grafana resources",
    )
    parser.add_argument("--output-dir", "-o", help="Directory to write the Terraform files to")
    parser.add_argument("--config", dest="config_file", help="YAML configuration file")
    parser.add_argument(
        "--clobber",
        action="store_true",
        help="Delete the output directory first if it already exists",
    )
    parser.add_argument(
        "--output-format",
        "-f",
        choices=[fmt.value for fmt in OutputFormat],
        default=None,
        help="Output format (default: hcl)",
    )
    parser.add_argument(
        "--include-resources",
        action="append",
        metavar="TYPE.NAME",
        help=(
            "Only generate resources matching this glob, e.g. 'grafana_folder.*' (repeatable). "
            "Names are matched after sanitizing: non [a-zA-Z0-9_-] characters become '_' "
            "and names starting with a digit get a leading '_', so org 1 folders match 'grafana_folder._1_*'"
        ),
    )
    parser.add_argument("--grafana-url", help="Grafana URL (or set GRAFANA_TFGEN_GRAFANA_URL)")
    parser.add_argument(
        "--grafana-auth",
        help="Grafana service account token or user:password (or set GRAFANA_TFGEN_GRAFANA_AUTH)",
    )
    parser.add_argument(
        "--cloud-access-policy-token",
        help="Grafana Cloud access policy token (or set GRAFANA_TFGEN_CLOUD_ACCESS_POLICY_TOKEN)",
    )
    parser.add_argument("--cloud-org", help="Grafana Cloud organization slug")
    parser.add_argument("--cloud-api-url", help="Grafana Cloud API URL")
    parser.add_argument(
        "--stack-token",
        dest="stack_tokens",
        action="append",
        metavar="SLUG=TOKEN",
        help="Service account token for a Grafana Cloud stack (repeatable)",
    )
    parser.add_argument(
        "--stack",
        dest="stacks",
        action="append",
        metavar="SLUG",
        help="Only generate for this Grafana Cloud stack (repeatable)",
    )
    parser.add_argument("--provider-version", help="Grafana Terraform provider version to pin")
    parser.add_argument("--terraform-binary", help="Path to the terraform executable")


def handle_generate_command(args: argparse.Namespace) -> int:
    """Handle generate command from CLI args."""
    return generate_command(
        output_dir=getattr(args, "output_dir", None),
        config_file=getattr(args, "config_file", None),
        clobber=getattr(args, "clobber", False),
        output_format=getattr(args, "output_format", None),
        include_resources=getattr(args, "include_resources", None),
        grafana_url=getattr(args, "grafana_url", None),
        grafana_auth=getattr(args, "grafana_auth", None),
        cloud_access_policy_token=getattr(args, "cloud_access_policy_token", None),
        cloud_org=getattr(args, "cloud_org", None),
        cloud_api_url=getattr(args, "cloud_api_url", None),
        stack_tokens=getattr(args, "stack_tokens", None),
        stacks=getattr(args, "stacks", None),
        provider_version=getattr(args, "provider_version", None),
        terraform_binary=getattr(args, "terraform_binary", None),
    )
