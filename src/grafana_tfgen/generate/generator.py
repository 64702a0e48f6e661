"""
Generation orchestrator.

Runs the full pipeline: prepare the output directory, pin and install the
provider, then for every environment (the Grafana Cloud organization, each
of its stacks, a standalone Grafana instance) enumerate resources, write
import blocks and let Terraform generate the matching configuration.
Passes run one after another; the first failure ends the run.
"""

from __future__ import annotations

import shutil
from enum import StrEnum
from pathlib import Path
from typing import Any

import structlog

from grafana_tfgen.catalog.cloud import default_cloud_catalog
from grafana_tfgen.catalog.grafana import default_grafana_catalog
from grafana_tfgen.catalog.models import ListerData, ResourceCatalog
from grafana_tfgen.clients.base import APIError
from grafana_tfgen.clients.cloud import CloudClient
from grafana_tfgen.clients.grafana import GrafanaClient
from grafana_tfgen.config.models import CloudTarget, GenerateConfig, OutputFormat
from grafana_tfgen.generate.convert import convert_to_tf_json
from grafana_tfgen.generate.enumerate import enumerate_resources
from grafana_tfgen.generate.errors import (
    NotSupportedError,
    OutputExistsError,
    StackDiscoveryError,
    TerraformNotFoundError,
)
from grafana_tfgen.generate.filters import filter_resources, validate_patterns
from grafana_tfgen.generate.hcl import provider_block, required_providers_block
from grafana_tfgen.generate.imports import DEFAULT_ENVIRONMENT_ALIAS, synthesize
from grafana_tfgen.generate.materialize import materialize
from grafana_tfgen.generate.models import GenerationSummary, PassSummary
from grafana_tfgen.generate.stacks import CloudStackSource, StackSource
from grafana_tfgen.generate.terraform import TerraformRunner
from grafana_tfgen.logging import bind_context

logger = structlog.get_logger()

PROVIDER_FILE = "provider.tf"


class GeneratorState(StrEnum):
    INIT = "init"
    DIRECTORY_PREPARED = "directory_prepared"
    PROVIDER_BLOCK_WRITTEN = "provider_block_written"
    PROVIDER_INITIALIZED = "provider_initialized"
    FORMAT_CONVERTED = "format_converted"
    DONE = "done"


class Generator:
    """Drives one generation run for a GenerateConfig."""

    def __init__(
        self,
        config: GenerateConfig,
        *,
        grafana_catalog: ResourceCatalog | None = None,
        cloud_catalog: ResourceCatalog | None = None,
        terraform: TerraformRunner | None = None,
        stack_source: StackSource | None = None,
    ) -> None:
        self.config = config
        self.grafana_catalog = grafana_catalog if grafana_catalog is not None else default_grafana_catalog()
        self.cloud_catalog = cloud_catalog if cloud_catalog is not None else default_cloud_catalog()
        self.terraform = terraform or TerraformRunner(config.terraform_binary)
        self.stack_source = stack_source
        self.state = GeneratorState.INIT

    @property
    def output_dir(self) -> Path:
        return self.config.output_dir

    def _transition(self, state: GeneratorState) -> None:
        logger.debug("generator_state", previous=self.state.value, state=state.value)
        self.state = state

    async def run(self) -> GenerationSummary:
        validate_patterns(self.config.include_resources)
        if not self.terraform.is_available:
            raise TerraformNotFoundError(self.terraform.binary)

        self._prepare_output_dir()
        self._transition(GeneratorState.DIRECTORY_PREPARED)

        (self.output_dir / PROVIDER_FILE).write_text(
            required_providers_block(self.config.provider_version) + "\n",
            encoding="utf-8",
        )
        self._transition(GeneratorState.PROVIDER_BLOCK_WRITTEN)

        self.terraform.init(self.output_dir)
        self._transition(GeneratorState.PROVIDER_INITIALIZED)

        summary = GenerationSummary(output_dir=self.output_dir)
        if self.config.cloud is not None:
            summary.passes.extend(await self._generate_cloud(self.config.cloud))
        if self.config.grafana is not None:
            grafana = self.config.grafana
            summary.passes.append(
                await self._generate_grafana(grafana.url, grafana.auth, label="")
            )

        if self.config.output_format == OutputFormat.JSON:
            convert_to_tf_json(self.output_dir)
            self._transition(GeneratorState.FORMAT_CONVERTED)
        elif self.config.output_format != OutputFormat.HCL:
            raise NotSupportedError(self.config.output_format.value)

        summary.files = sorted(path for path in self.output_dir.iterdir() if path.is_file())
        self._transition(GeneratorState.DONE)
        logger.info(
            "generation_finished",
            output_dir=str(self.output_dir),
            passes=len(summary.passes),
            imports=summary.total_imports,
        )
        return summary

    def _prepare_output_dir(self) -> None:
        output_dir = self.output_dir
        if output_dir.exists():
            if not self.config.clobber:
                raise OutputExistsError(output_dir)
            logger.info("output_dir_clobbered", output_dir=str(output_dir))
            if output_dir.is_dir():
                shutil.rmtree(output_dir)
            else:
                output_dir.unlink()

        logger.info("output_dir_created", output_dir=str(output_dir))
        output_dir.mkdir(parents=True)

    def _append_provider(self, **attributes: str | None) -> None:
        with open(self.output_dir / PROVIDER_FILE, "a", encoding="utf-8") as f:
            f.write("\n" + provider_block(attributes) + "\n")

    async def _generate_cloud(self, target: CloudTarget) -> list[PassSummary]:
        client = CloudClient(
            target.access_policy_token,
            base_url=target.api_url,
            timeout=self.config.http_timeout,
        )
        self._append_provider(
            alias=DEFAULT_ENVIRONMENT_ALIAS,
            cloud_access_policy_token=target.access_policy_token,
            cloud_api_url=target.api_url,
        )
        passes = [
            await self._run_pass(
                self.cloud_catalog,
                client,
                ListerData(cloud_org=target.org),
                label=DEFAULT_ENVIRONMENT_ALIAS,
                alias=DEFAULT_ENVIRONMENT_ALIAS,
            )
        ]

        source = self.stack_source or CloudStackSource(client, target)
        try:
            stacks = await source.list_stacks()
        except APIError as exc:
            raise StackDiscoveryError(target.org, exc) from exc
        logger.info("stacks_discovered", count=len(stacks))
        for stack in stacks:
            logger.info("stack_pass", stack=stack.slug, region=stack.region)
            passes.append(
                await self._generate_grafana(stack.url, stack.auth, label=stack.label)
            )
        return passes

    async def _generate_grafana(self, url: str, auth: str, *, label: str) -> PassSummary:
        client = GrafanaClient(url, auth, timeout=self.config.http_timeout)
        self._append_provider(alias=label or None, url=url, auth=auth)
        return await self._run_pass(
            self.grafana_catalog,
            client,
            ListerData(single_org=not client.uses_basic_auth),
            label=label,
            alias=label or None,
        )

    async def _run_pass(
        self,
        catalog: ResourceCatalog,
        client: Any,
        lister_data: ListerData,
        *,
        label: str,
        alias: str | None,
    ) -> PassSummary:
        log = bind_context(environment=label or "grafana")
        patterns = self.config.include_resources

        selected = filter_resources(catalog, patterns)
        log.info("pass_started", resource_types=len(selected))

        results = await enumerate_resources(selected, client, lister_data)
        directives = synthesize(results, patterns, alias)
        imports_path, resources_path = materialize(directives, self.output_dir, label, self.terraform)

        summary = PassSummary(
            label=label,
            imports=len(directives),
            imports_file=imports_path,
            resources_file=resources_path,
        )
        for directive in directives:
            summary.resource_types[directive.resource_type] = (
                summary.resource_types.get(directive.resource_type, 0) + 1
            )
        log.info("pass_finished", imports=summary.imports)
        return summary


async def generate(config: GenerateConfig, **kwargs: Any) -> GenerationSummary:
    """Run a full generation; see Generator for the injectable collaborators."""
    return await Generator(config, **kwargs).run()
