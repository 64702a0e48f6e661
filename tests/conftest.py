"""Root test configuration."""

import logging
import re
from pathlib import Path

import pytest
import structlog

from grafana_tfgen.catalog import ResourceCatalog, ResourceDescriptor
from grafana_tfgen.generate.errors import ExternalToolError
from grafana_tfgen.generate.terraform import TerraformRunner

_IMPORT_BLOCK = re.compile(r"import \{\n(.*?)\n\}", re.DOTALL)
_TO = re.compile(r"^\s*to\s*=\s*(\S+)\s*$", re.MULTILINE)
_ID = re.compile(r'^\s*id\s*=\s*(".*")\s*$', re.MULTILINE)


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


class FakeTerraform(TerraformRunner):
    """Stands in for the terraform binary.

    ``plan -generate-config-out=<file>`` writes one resource block per import
    block of the matching imports file, in reverse order, the way Terraform
    gives no ordering guarantee.
    """

    def __init__(self, *, fail_on: str | None = None, available: bool = True) -> None:
        super().__init__("terraform")
        self.calls: list[tuple[Path, tuple[str, ...]]] = []
        self.fail_on = fail_on
        self.available = available

    @property
    def is_available(self) -> bool:
        return self.available

    def run(self, workdir, *args):
        self.calls.append((Path(workdir), args))
        if self.fail_on and args and args[0] == self.fail_on:
            raise ExternalToolError(["terraform", *args], 1, "", "Error: simulated failure")
        if args and args[0] == "plan":
            out_file = args[1].split("=", 1)[1]
            self._generate(Path(workdir), out_file)
        return None

    @staticmethod
    def _generate(workdir: Path, out_file: str) -> None:
        imports_file = workdir / out_file.replace("resources.tf", "imports.tf")
        blocks = _IMPORT_BLOCK.findall(imports_file.read_text())
        if not blocks:
            return
        rendered = []
        for body in reversed(blocks):
            address = _TO.search(body).group(1)
            remote_id = _ID.search(body).group(1)
            resource_type, name = address.split(".", 1)
            rendered.append(
                f"# __generated__ by Terraform from {remote_id}\n"
                f'resource "{resource_type}" "{name}" {{\n'
                f"  title = {remote_id}\n"
                "}\n"
            )
        header = (
            "# __generated__ by Terraform\n"
            "# Please review these resources and move them into your main configuration files.\n"
        )
        (workdir / out_file).write_text(header + "\n" + "\n".join(rendered))

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [args for _, args in self.calls]


def static_lister(identifiers, calls=None, name=None):
    """Lister returning fixed identifiers, optionally recording that it ran."""

    async def lister(client, data):
        if calls is not None:
            calls.append(name)
        return list(identifiers)

    return lister


def failing_lister(message="boom"):
    async def lister(client, data):
        raise RuntimeError(message)

    return lister


@pytest.fixture
def fake_terraform():
    return FakeTerraform()


@pytest.fixture
def lister_calls():
    return []


@pytest.fixture
def dashboard_folder_catalog(lister_calls):
    return ResourceCatalog(
        [
            ResourceDescriptor("dashboard", static_lister(["abc"], lister_calls, "dashboard")),
            ResourceDescriptor("folder", static_lister(["xyz"], lister_calls, "folder")),
        ]
    )
