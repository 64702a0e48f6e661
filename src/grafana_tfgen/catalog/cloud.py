"""Listers for resources managed through the Grafana Cloud API."""

from __future__ import annotations

from grafana_tfgen.catalog.models import ListerData, ResourceCatalog, ResourceDescriptor
from grafana_tfgen.clients.cloud import CloudClient


async def list_stacks(client: CloudClient, data: ListerData) -> list[str]:
    if not data.cloud_org:
        raise ValueError("a Grafana Cloud organization is required to list stacks")
    return [stack["slug"] for stack in await client.list_stacks(data.cloud_org)]


def default_cloud_catalog() -> ResourceCatalog:
    """Build the catalog of resource types importable from a Grafana Cloud org."""
    return ResourceCatalog(
        [
            ResourceDescriptor("grafana_cloud_stack", list_stacks, category="Cloud"),
        ]
    )
