"""
Import block generation pipeline.

filter -> enumerate -> synthesize -> materialize, once per environment,
driven by the Generator.
"""

from grafana_tfgen.generate.enumerate import enumerate_resources, raise_for_failures
from grafana_tfgen.generate.errors import (
    ConfigurationError,
    ExternalToolError,
    GenerateError,
    HCLParseError,
    ListerError,
    MalformedPatternError,
    NotSupportedError,
    OutputExistsError,
    StackDiscoveryError,
    TerraformNotFoundError,
)
from grafana_tfgen.generate.filters import filter_resources, matches_any_pattern
from grafana_tfgen.generate.generator import Generator, GeneratorState, generate
from grafana_tfgen.generate.imports import sanitize_identifier, synthesize
from grafana_tfgen.generate.materialize import materialize
from grafana_tfgen.generate.models import (
    EnumerationResult,
    GenerationSummary,
    ImportDirective,
    PassSummary,
)
from grafana_tfgen.generate.stacks import CloudStack, CloudStackSource, StackSource
from grafana_tfgen.generate.terraform import TerraformRunner

__all__ = [
    "CloudStack",
    "CloudStackSource",
    "ConfigurationError",
    "EnumerationResult",
    "ExternalToolError",
    "GenerateError",
    "GenerationSummary",
    "Generator",
    "GeneratorState",
    "HCLParseError",
    "ImportDirective",
    "ListerError",
    "MalformedPatternError",
    "NotSupportedError",
    "OutputExistsError",
    "PassSummary",
    "StackDiscoveryError",
    "StackSource",
    "TerraformNotFoundError",
    "TerraformRunner",
    "enumerate_resources",
    "filter_resources",
    "generate",
    "materialize",
    "matches_any_pattern",
    "raise_for_failures",
    "sanitize_identifier",
    "synthesize",
]
