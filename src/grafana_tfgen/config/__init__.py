"""
Configuration for generation runs.

- Pydantic-based settings (environment variables, .env files)
- Pydantic models for a run (targets, output format, filters)
- YAML configuration files
"""

from grafana_tfgen.config.loader import build_generate_config, load_config_file
from grafana_tfgen.config.models import (
    CloudTarget,
    GenerateConfig,
    GrafanaTarget,
    OutputFormat,
)
from grafana_tfgen.config.settings import Settings, get_settings

__all__ = [
    "CloudTarget",
    "GenerateConfig",
    "GrafanaTarget",
    "OutputFormat",
    "Settings",
    "build_generate_config",
    "get_settings",
    "load_config_file",
]
