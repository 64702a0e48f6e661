"""
Configuration loading and merging.

Precedence, highest first:
1. Command line options
2. YAML configuration file (--config)
3. GRAFANA_TFGEN_* environment variables / .env file
4. Model defaults
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from grafana_tfgen.config.models import GenerateConfig
from grafana_tfgen.config.settings import Settings, get_settings
from grafana_tfgen.generate.errors import ConfigurationError

logger = structlog.get_logger()


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML configuration file into a plain dict."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"configuration file not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"configuration file {path} must contain a mapping")
    logger.debug("config_file_loaded", path=str(path))
    return data


def _first(*values: Any) -> Any:
    for value in values:
        if value not in (None, "", [], {}):
            return value
    return None


def _grafana_section(overrides: dict[str, Any], data: dict[str, Any], settings: Settings) -> dict[str, Any] | None:
    section = data.get("grafana") or {}
    url = _first(overrides.get("grafana_url"), section.get("url"), settings.grafana_url)
    auth = _first(overrides.get("grafana_auth"), section.get("auth"), settings.grafana_auth)
    if url is None and auth is None:
        return None
    if url is None or auth is None:
        raise ConfigurationError("both a Grafana URL and Grafana auth are required")
    return {"url": url, "auth": auth}


def _cloud_section(overrides: dict[str, Any], data: dict[str, Any], settings: Settings) -> dict[str, Any] | None:
    section = data.get("cloud") or {}
    token = _first(
        overrides.get("cloud_access_policy_token"),
        section.get("access_policy_token"),
        settings.cloud_access_policy_token,
    )
    org = _first(overrides.get("cloud_org"), section.get("org"), settings.cloud_org)
    if token is None and org is None:
        return None
    if token is None or org is None:
        raise ConfigurationError("both a Grafana Cloud access policy token and an organization are required")

    cloud: dict[str, Any] = {"access_policy_token": token, "org": org}
    api_url = _first(overrides.get("cloud_api_url"), section.get("api_url"), settings.cloud_api_url)
    if api_url:
        cloud["api_url"] = api_url
    stack_tokens = dict(section.get("stack_tokens") or {})
    stack_tokens.update(overrides.get("stack_tokens") or {})
    cloud["stack_tokens"] = stack_tokens
    cloud["stacks"] = _first(overrides.get("stacks"), section.get("stacks")) or []
    return cloud


def build_generate_config(
    overrides: dict[str, Any],
    *,
    config_file: str | Path | None = None,
    settings: Settings | None = None,
) -> GenerateConfig:
    """Merge command line overrides, an optional config file and settings."""
    settings = settings or get_settings()
    data = load_config_file(config_file) if config_file else {}

    merged: dict[str, Any] = {
        "output_dir": _first(overrides.get("output_dir"), data.get("output_dir")),
        "clobber": bool(overrides.get("clobber") or data.get("clobber", False)),
        "include_resources": _first(overrides.get("include_resources"), data.get("include_resources")) or [],
        "terraform_binary": _first(
            overrides.get("terraform_binary"),
            data.get("terraform_binary"),
            settings.terraform_binary,
        ),
        "http_timeout": _first(overrides.get("http_timeout"), data.get("http_timeout"), settings.http_timeout),
        "grafana": _grafana_section(overrides, data, settings),
        "cloud": _cloud_section(overrides, data, settings),
    }
    output_format = _first(overrides.get("output_format"), data.get("output_format"))
    if output_format:
        merged["output_format"] = output_format
    provider_version = _first(
        overrides.get("provider_version"),
        data.get("provider_version"),
        settings.provider_version,
    )
    if provider_version:
        merged["provider_version"] = provider_version

    if merged["output_dir"] is None:
        raise ConfigurationError("an output directory is required")

    try:
        return GenerateConfig(**merged)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
