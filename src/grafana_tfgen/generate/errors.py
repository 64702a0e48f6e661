"""
Errors raised by the generation pipeline.

Filter and output-directory errors are raised before any remote call is
made. Lister errors are raised only once every enumeration task of a pass
has finished.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class GenerateError(RuntimeError):
    """Base class for all generation failures."""


class ConfigurationError(GenerateError):
    """Raised when a generation run is incompletely or inconsistently configured."""


class OutputExistsError(GenerateError):
    """Raised when the output directory exists and clobbering was not requested."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"output dir {str(path)!r} already exists. Use the clobber option to delete it")


class MalformedPatternError(GenerateError):
    """Raised for include patterns that are not ``<type>.<name>`` globs."""

    def __init__(self, pattern: str, reason: str | None = None) -> None:
        self.pattern = pattern
        message = f"included resource {pattern!r} is not in the format <type>.<name>"
        if reason:
            message = f"included resource {pattern!r} is not a valid pattern: {reason}"
        super().__init__(message)


class ListerError(GenerateError):
    """Raised when listing the identifiers of a resource type failed."""

    def __init__(self, resource_type: str, cause: BaseException) -> None:
        self.resource_type = resource_type
        super().__init__(f"failed to generate {resource_type} resources: {cause}")


class StackDiscoveryError(GenerateError):
    """Raised when the Grafana Cloud stacks of an organization cannot be listed."""

    def __init__(self, org: str, cause: BaseException) -> None:
        self.org = org
        super().__init__(f"failed to list Grafana Cloud stacks for org {org!r}: {cause}")


class TerraformNotFoundError(GenerateError):
    """Raised when the terraform executable cannot be found."""

    def __init__(self, binary: str) -> None:
        self.binary = binary
        super().__init__(f"terraform executable {binary!r} not found; install it or set terraform_binary")


class ExternalToolError(GenerateError):
    """Raised when a Terraform invocation fails."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        output = "\n".join(part for part in (stdout.strip(), stderr.strip()) if part)
        message = f"{' '.join(self.command)} exited with status {returncode}"
        if output:
            message = f"{message}:\n{output}"
        super().__init__(message)


class NotSupportedError(GenerateError):
    """Raised for output formats without a converter."""

    def __init__(self, output_format: str) -> None:
        self.output_format = output_format
        super().__init__(f"{output_format} output format is not yet supported")


class HCLParseError(GenerateError):
    """Raised when a generated configuration file cannot be split into blocks."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"failed to parse {path}: {reason}")
