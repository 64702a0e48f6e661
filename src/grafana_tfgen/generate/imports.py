"""
Import block synthesis.

Turns enumerated identifiers into ``import`` directives: the Terraform
address is built from a sanitized (and possibly alias-prefixed) name, while
the imported ``id`` stays the identifier exactly as the API returned it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

import structlog

from grafana_tfgen.generate.enumerate import raise_for_failures
from grafana_tfgen.generate.filters import matches_any_pattern
from grafana_tfgen.generate.models import EnumerationResult, ImportDirective

logger = structlog.get_logger()

# Alias of the Grafana Cloud organization pass. Its resources keep their names unprefixed.
DEFAULT_ENVIRONMENT_ALIAS = "cloud"

_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def sanitize_identifier(identifier: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with ``_``."""
    return _DISALLOWED_CHARS.sub("_", identifier)


def local_name_for(identifier: str, provider_alias: str | None = None) -> str:
    name = sanitize_identifier(identifier)
    if provider_alias and provider_alias != DEFAULT_ENVIRONMENT_ALIAS:
        name = f"{provider_alias.replace('-', '_')}_{name}"
    # Terraform names must not start with a digit.
    if name[:1].isdigit():
        name = f"_{name}"
    return name


def synthesize(
    results: Iterable[EnumerationResult],
    patterns: Sequence[str] = (),
    provider_alias: str | None = None,
) -> list[ImportDirective]:
    """Build import directives for every identifier that passes the include patterns."""
    directives: list[ImportDirective] = []
    for result in raise_for_failures(results):
        kept = 0
        for identifier in result.identifiers:
            local_name = local_name_for(identifier, provider_alias)
            if not matches_any_pattern(result.name, local_name, patterns):
                continue
            directives.append(
                ImportDirective(
                    resource_type=result.name,
                    local_name=local_name,
                    remote_id=identifier,
                    provider_alias=provider_alias or None,
                )
            )
            kept += 1
        if kept != len(result.identifiers):
            logger.debug(
                "identifiers_filtered",
                resource_type=result.name,
                kept=kept,
                dropped=len(result.identifiers) - kept,
            )
    return directives


def render_imports(directives: Iterable[ImportDirective]) -> str:
    """Render directives as the contents of an imports file."""
    blocks = [directive.to_hcl() for directive in directives]
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"
