"""
Top-level HCL block handling for generated configuration files.

Terraform does not order ``-generate-config-out`` output stably, so the file
is split back into its top-level blocks and re-emitted in a canonical order.
Block bodies are kept verbatim; the scanner only needs to know where each
block ends, so it tracks braces while skipping strings (including template
interpolations), heredocs and comments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from grafana_tfgen.generate.errors import HCLParseError
from grafana_tfgen.generate.models import hcl_string

_HEREDOC = re.compile(r"<<(-?)([A-Za-z_][A-Za-z0-9_-]*)[ \t]*\r?\n")
_BLOCK_HEADER = re.compile(r'\s*([A-Za-z_][A-Za-z0-9_-]*)((?:\s+(?:"(?:[^"\\]|\\.)*"|[A-Za-z_][A-Za-z0-9_-]*))*)\s*\{')
_LABEL = re.compile(r'"((?:[^"\\]|\\.)*)"|([A-Za-z_][A-Za-z0-9_-]*)')


class _ScanError(ValueError):
    pass


@dataclass(frozen=True)
class Block:
    """A top-level block with the comment lines directly above it."""

    type: str
    labels: tuple[str, ...]
    text: str
    comments: str = ""

    @property
    def sort_key(self) -> tuple[str, tuple[str, ...], str]:
        # The full text makes the order total for same-named blocks.
        return (self.type, self.labels, self.text)

    def render(self) -> str:
        return f"{self.comments}{self.text}"


@dataclass(frozen=True)
class ParsedFile:
    header: str
    blocks: tuple[Block, ...]
    trailer: str = ""


def _line_end(src: str, pos: int) -> int:
    end = src.find("\n", pos)
    return len(src) if end < 0 else end


def _skip_heredoc(src: str, match: re.Match[str]) -> int:
    marker = match.group(2)
    pos = match.end()
    while pos < len(src):
        end = _line_end(src, pos)
        if src[pos:end].strip() == marker:
            return end
        pos = end + 1
    raise _ScanError(f"unterminated heredoc {marker}")


def _skip_string(src: str, pos: int) -> int:
    """Return the position just past the string whose opening quote precedes ``pos``."""
    n = len(src)
    while pos < n:
        ch = src[pos]
        if ch == "\\":
            pos += 2
        elif ch == '"':
            return pos + 1
        elif src.startswith("$${", pos) or src.startswith("%%{", pos):
            pos += 3
        elif src.startswith("${", pos) or src.startswith("%{", pos):
            pos = _skip_balanced(src, pos + 2, depth=1)
        elif ch == "\n":
            raise _ScanError("newline in string literal")
        else:
            pos += 1
    raise _ScanError("unterminated string literal")


def _skip_balanced(src: str, pos: int, depth: int = 0) -> int:
    """Scan forward until braces balance back to zero; return the position after the closing brace."""
    n = len(src)
    while pos < n:
        ch = src[pos]
        if ch == '"':
            pos = _skip_string(src, pos + 1)
            continue
        if ch == "#" or src.startswith("//", pos):
            pos = _line_end(src, pos)
            continue
        if src.startswith("/*", pos):
            end = src.find("*/", pos + 2)
            if end < 0:
                raise _ScanError("unterminated block comment")
            pos = end + 2
            continue
        if src.startswith("<<", pos):
            heredoc = _HEREDOC.match(src, pos)
            if heredoc:
                pos = _skip_heredoc(src, heredoc)
                continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                raise _ScanError("unbalanced closing brace")
            if depth == 0:
                return pos + 1
        pos += 1
    raise _ScanError("unexpected end of file inside a block")


def _parse_header(text: str) -> tuple[str, tuple[str, ...]]:
    match = _BLOCK_HEADER.match(text)
    if not match:
        raise _ScanError(f"expected a block, found {text.splitlines()[0]!r}")
    labels = tuple(
        quoted if quoted is not None else bare
        for quoted, bare in _LABEL.findall(match.group(2))
    )
    return match.group(1), labels


def parse_blocks(src: str) -> ParsedFile:
    """Split configuration source into its top-level blocks."""
    header: list[str] = []
    pending: list[str] = []
    blocks: list[Block] = []
    pos = 0
    n = len(src)
    while pos < n:
        end = _line_end(src, pos)
        line = src[pos:end]
        stripped = line.strip()
        if not stripped:
            if pending and not blocks:
                header.extend(pending)
                pending = []
            pos = end + 1
            continue
        if stripped.startswith(("#", "//")):
            pending.append(line.rstrip() + "\n")
            pos = end + 1
            continue

        block_end = _skip_balanced(src, pos)
        rest = src[block_end:_line_end(src, block_end)]
        if rest.strip():
            raise _ScanError(f"unexpected content after block: {rest.strip()!r}")
        text = src[pos:block_end].strip()
        block_type, labels = _parse_header(text)
        blocks.append(Block(block_type, labels, text, "".join(pending)))
        pending = []
        pos = _line_end(src, block_end) + 1

    return ParsedFile("".join(header), tuple(blocks), "".join(pending))


def render_file(parsed: ParsedFile) -> str:
    parts: list[str] = []
    if parsed.header:
        parts.append(parsed.header.rstrip("\n") + "\n")
    parts.extend(block.render() + "\n" for block in parsed.blocks)
    if parsed.trailer:
        parts.append(parsed.trailer.rstrip("\n") + "\n")
    return "\n".join(parts)


def sort_source(src: str) -> str:
    """Return ``src`` with its top-level blocks in canonical order."""
    parsed = parse_blocks(src)
    ordered = ParsedFile(
        parsed.header,
        tuple(sorted(parsed.blocks, key=lambda block: block.sort_key)),
        parsed.trailer,
    )
    return render_file(ordered)


def sort_resources_file(path: Path) -> None:
    """Rewrite a generated file with its blocks sorted by type, then labels."""
    src = path.read_text(encoding="utf-8")
    try:
        sorted_src = sort_source(src)
    except _ScanError as exc:
        raise HCLParseError(path, str(exc)) from exc
    path.write_text(sorted_src, encoding="utf-8")


def required_providers_block(version: str) -> str:
    """Render the ``terraform`` block pinning the Grafana provider."""
    return "\n".join(
        [
            "terraform {",
            "  required_providers {",
            "    grafana = {",
            f"      source  = {hcl_string('grafana/grafana')}",
            f"      version = {hcl_string(version.removeprefix('v'))}",
            "    }",
            "  }",
            "}",
        ]
    )


def provider_block(attributes: dict[str, str | None]) -> str:
    """Render a ``provider "grafana"`` block; ``None`` attributes are omitted."""
    present = {key: value for key, value in attributes.items() if value is not None}
    width = max((len(key) for key in present), default=0)
    lines = ['provider "grafana" {']
    lines.extend(f"  {key.ljust(width)} = {hcl_string(value)}" for key, value in present.items())
    lines.append("}")
    return "\n".join(lines)
