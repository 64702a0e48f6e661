from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from grafana_tfgen.generate.hcl import sort_resources_file
from grafana_tfgen.generate.imports import render_imports
from grafana_tfgen.generate.models import ImportDirective
from grafana_tfgen.generate.terraform import TerraformRunner

logger = structlog.get_logger()

IMPORTS_FILE = "imports.tf"
RESOURCES_FILE = "resources.tf"


def generated_filename(label: str, suffix: str) -> str:
    """Prefix ``suffix`` with the environment label, if there is one."""
    if not label:
        return suffix
    return f"{label}-{suffix}"


def materialize(
    directives: Sequence[ImportDirective],
    output_dir: Path,
    label: str,
    terraform: TerraformRunner,
) -> tuple[Path, Path | None]:
    """Write import blocks, let Terraform generate the resources and sort them.

    Returns the imports file and the resources file; the latter is ``None``
    when Terraform had nothing to generate.
    """
    imports_path = output_dir / generated_filename(label, IMPORTS_FILE)
    resources_name = generated_filename(label, RESOURCES_FILE)
    resources_path = output_dir / resources_name

    imports_path.write_text(render_imports(directives), encoding="utf-8")
    logger.info("imports_written", path=str(imports_path), count=len(directives))

    terraform.generate_config(output_dir, resources_name)

    if not resources_path.exists():
        logger.warning("no_resources_generated", path=str(resources_path))
        return imports_path, None

    sort_resources_file(resources_path)
    logger.info("resources_sorted", path=str(resources_path))
    return imports_path, resources_path
