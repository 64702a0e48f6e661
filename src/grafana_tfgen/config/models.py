"""
Pydantic models describing one generation run.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from grafana_tfgen.clients.cloud import DEFAULT_CLOUD_API_URL

DEFAULT_PROVIDER_VERSION = ">= 3.0.0"


class OutputFormat(StrEnum):
    """Serialization of the generated tree."""
    HCL = "hcl"
    JSON = "json"
    CROSSPLANE = "crossplane"


class GrafanaTarget(BaseModel):
    """A single Grafana instance, reached with a token or ``user:password``."""

    url: str = Field(..., description="Grafana URL")
    auth: str = Field(..., description="Service account token or basic auth credentials")


class CloudTarget(BaseModel):
    """A Grafana Cloud organization and the stacks to generate for."""

    access_policy_token: str = Field(..., description="Cloud access policy token")
    org: str = Field(..., description="Grafana Cloud organization slug")
    api_url: str = Field(DEFAULT_CLOUD_API_URL, description="Grafana Cloud API URL")
    stack_tokens: dict[str, str] = Field(
        default_factory=dict,
        description="Service account token per stack slug",
    )
    stacks: list[str] = Field(
        default_factory=list,
        description="Stack slugs to generate for (all stacks when empty)",
    )


class GenerateConfig(BaseModel):
    """Everything a generation run needs."""

    output_dir: Path
    clobber: bool = False
    output_format: OutputFormat = OutputFormat.HCL
    provider_version: str = DEFAULT_PROVIDER_VERSION
    include_resources: list[str] = Field(default_factory=list)
    grafana: GrafanaTarget | None = None
    cloud: CloudTarget | None = None
    terraform_binary: str = "terraform"
    http_timeout: float = 30.0

    @model_validator(mode="after")
    def _require_target(self) -> GenerateConfig:
        if self.grafana is None and self.cloud is None:
            raise ValueError("either a Grafana instance or a Grafana Cloud organization must be configured")
        return self
