"""
CLI commands for grafana-tfgen.
"""

from grafana_tfgen.cli.generate import generate_command
from grafana_tfgen.cli.resources import list_resources_command

__all__ = [
    "generate_command",
    "list_resources_command",
]
