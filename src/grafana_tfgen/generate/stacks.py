"""
Grafana Cloud stack discovery.

Stacks are listed from the Cloud API; credentials for each stack are not
provisioned here and must be supplied in configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog

from grafana_tfgen.clients.cloud import CloudClient
from grafana_tfgen.config.models import CloudTarget

logger = structlog.get_logger()


@dataclass(frozen=True)
class CloudStack:
    """A Grafana Cloud stack ready to be enumerated."""

    slug: str
    url: str
    auth: str
    region: str | None = None

    @property
    def label(self) -> str:
        return f"stack-{self.slug}"


class StackSource(Protocol):
    """Discovers the stacks a cloud run generates for."""

    async def list_stacks(self) -> list[CloudStack]:
        ...


class CloudStackSource:
    """Lists the organization's stacks and pairs them with configured tokens."""

    def __init__(self, client: CloudClient, target: CloudTarget) -> None:
        self._client = client
        self._target = target

    async def list_stacks(self) -> list[CloudStack]:
        wanted = set(self._target.stacks)
        stacks: list[CloudStack] = []
        listed: set[str] = set()
        for item in await self._client.list_stacks(self._target.org):
            slug = item["slug"]
            listed.add(slug)
            if wanted and slug not in wanted:
                continue
            token = self._target.stack_tokens.get(slug)
            if not token:
                logger.warning("stack_skipped", stack=slug, reason="no token configured")
                continue
            stacks.append(
                CloudStack(
                    slug=slug,
                    url=item["url"],
                    auth=token,
                    region=item.get("regionSlug"),
                )
            )
        missing = wanted - listed
        if missing:
            logger.warning("stacks_not_found", stacks=sorted(missing))
        return sorted(stacks, key=lambda stack: stack.slug)
