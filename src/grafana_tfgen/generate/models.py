from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from grafana_tfgen.catalog.models import ResourceDescriptor


@dataclass
class EnumerationResult:
    """Outcome of listing one resource type during a pass."""

    descriptor: ResourceDescriptor
    identifiers: list[str] = field(default_factory=list)
    error: BaseException | None = None
    skipped: bool = False

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ImportDirective:
    """A Terraform ``import`` block binding an address to an existing object."""

    resource_type: str
    local_name: str
    remote_id: str
    provider_alias: str | None = None

    @property
    def address(self) -> str:
        return f"{self.resource_type}.{self.local_name}"

    def to_hcl(self) -> str:
        lines = [
            "import {",
            f"  to = {self.address}",
            f"  id = {hcl_string(self.remote_id)}",
        ]
        if self.provider_alias:
            lines.append(f"  provider = grafana.{self.provider_alias}")
        lines.append("}")
        return _align_attributes(lines)


@dataclass
class PassSummary:
    """What one enumerate/synthesize/materialize pass produced."""

    label: str
    imports: int = 0
    resource_types: dict[str, int] = field(default_factory=dict)
    imports_file: Path | None = None
    resources_file: Path | None = None


@dataclass
class GenerationSummary:
    output_dir: Path
    passes: list[PassSummary] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)

    @property
    def total_imports(self) -> int:
        return sum(p.imports for p in self.passes)


def hcl_string(value: str) -> str:
    """Quote a value as an HCL string literal."""
    quoted = json.dumps(value, ensure_ascii=False)
    # Template sequences must not be interpreted by Terraform.
    return quoted.replace("${", "$${").replace("%{", "%%{")


def _align_attributes(lines: list[str]) -> str:
    """Align ``=`` signs of consecutive attribute lines the way ``terraform fmt`` does."""
    width = max((len(line.split(" = ", 1)[0]) for line in lines if " = " in line), default=0)
    aligned = []
    for line in lines:
        if " = " in line:
            key, value = line.split(" = ", 1)
            line = f"{key.ljust(width)} = {value}"
        aligned.append(line)
    return "\n".join(aligned)
