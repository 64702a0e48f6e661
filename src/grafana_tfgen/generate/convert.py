"""
Conversion of the generated tree to Terraform JSON syntax.

python-hcl2 returns every block as a list entry keyed by its labels; this
module folds those entries into the nested objects Terraform expects in
``.tf.json`` files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import hcl2
import structlog

from grafana_tfgen.generate.errors import HCLParseError

logger = structlog.get_logger()

# Number of labels of each labeled top-level block type.
LABELED_BLOCKS = {
    "resource": 2,
    "data": 2,
    "provider": 1,
    "module": 1,
    "variable": 1,
    "output": 1,
}

# Meta-arguments whose value is a bare reference rather than an expression.
REFERENCE_ARGUMENTS = ("to", "provider")


def _strip_interpolation(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return value[2:-1]
    return value


def _with_references(body: dict[str, Any]) -> dict[str, Any]:
    return {
        key: _strip_interpolation(value) if key in REFERENCE_ARGUMENTS else value
        for key, value in body.items()
    }


def to_terraform_json(parsed: dict[str, list[Any]]) -> dict[str, Any]:
    """Fold python-hcl2 output into Terraform JSON configuration syntax."""
    document: dict[str, Any] = {}
    for block_type, entries in parsed.items():
        labels = LABELED_BLOCKS.get(block_type)
        if labels is None:
            document[block_type] = [_with_references(entry) for entry in entries]
            continue

        folded = document.setdefault(block_type, {})
        for entry in entries:
            for first, inner in entry.items():
                if labels == 1:
                    folded.setdefault(first, []).append(_with_references(inner))
                    continue
                for second, body in inner.items():
                    folded.setdefault(first, {})[second] = _with_references(body)
    return document


def convert_file(path: Path) -> Path:
    """Convert one ``.tf`` file into a sibling ``.tf.json`` file and remove the original."""
    try:
        with path.open(encoding="utf-8") as f:
            parsed = hcl2.load(f)
    except Exception as exc:
        raise HCLParseError(path, str(exc)) from exc

    target = path.with_name(path.name + ".json")
    target.write_text(json.dumps(to_terraform_json(parsed), indent=2) + "\n", encoding="utf-8")
    path.unlink()
    return target


def convert_to_tf_json(output_dir: Path) -> list[Path]:
    """Convert every ``.tf`` file of the output directory to Terraform JSON."""
    converted = []
    for path in sorted(output_dir.glob("*.tf")):
        converted.append(convert_file(path))
        logger.info("converted_to_json", path=str(path))
    return converted
