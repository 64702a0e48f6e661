"""
Terraform CLI invocation.

Generation hands files to Terraform and reads files back: ``terraform init``
installs the provider, ``terraform plan -generate-config-out=...`` writes
resource blocks for every ``import`` block it finds. Invocations are
synchronous and never overlap.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import structlog

from grafana_tfgen.generate.errors import ExternalToolError

logger = structlog.get_logger()


class TerraformRunner:
    """Runs the Terraform CLI inside a working directory.

    Example:
        terraform = TerraformRunner("/usr/local/bin/terraform")
        terraform.init(Path("generated"))
        terraform.generate_config(Path("generated"), "resources.tf")
    """

    def __init__(self, binary: str = "terraform", *, timeout: float | None = None) -> None:
        self.binary = binary
        self.timeout = timeout

    @property
    def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    def run(self, workdir: Path, *args: str) -> subprocess.CompletedProcess[str]:
        command = [self.binary, *args]
        logger.info("terraform_run", command=" ".join(command), workdir=str(workdir))
        try:
            result = subprocess.run(
                command,
                cwd=workdir,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise ExternalToolError(command, None, stderr=f"{self.binary} not found: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ExternalToolError(
                command,
                None,
                stdout=_text(exc.stdout),
                stderr=_text(exc.stderr) or f"timed out after {self.timeout}s",
            ) from exc

        if result.returncode != 0:
            logger.error("terraform_failed", command=" ".join(command), returncode=result.returncode)
            raise ExternalToolError(command, result.returncode, result.stdout, result.stderr)
        return result

    def init(self, workdir: Path) -> None:
        self.run(workdir, "init")

    def generate_config(self, workdir: Path, out_file: str) -> None:
        """Run a plan that writes configuration for pending imports to ``out_file``.

        ``out_file`` is relative to ``workdir``.
        """
        self.run(workdir, "plan", f"-generate-config-out={out_file}")


def _text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return value
