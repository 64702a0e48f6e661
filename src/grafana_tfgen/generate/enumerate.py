"""
Concurrent enumeration of remote identifiers.

One asyncio task is started per resource type. A failing lister never
cancels its siblings: every task runs to completion, results are sorted by
resource type, and only then is the first failure reported. Cancelling the
awaiting coroutine cancels every in-flight lister.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

import structlog

from grafana_tfgen.catalog.models import ListerData, ResourceCatalog, ResourceDescriptor
from grafana_tfgen.generate.errors import ListerError
from grafana_tfgen.generate.models import EnumerationResult

logger = structlog.get_logger()


async def _enumerate_one(
    descriptor: ResourceDescriptor,
    client: Any,
    lister_data: ListerData,
) -> EnumerationResult:
    if descriptor.lister is None:
        logger.info("resource_type_skipped", resource_type=descriptor.name, reason="no lister")
        return EnumerationResult(descriptor, skipped=True)

    logger.info("resource_type_listing", resource_type=descriptor.name)
    try:
        identifiers = await descriptor.lister(client, lister_data)
    except Exception as exc:
        logger.warning("resource_type_failed", resource_type=descriptor.name, error=str(exc))
        return EnumerationResult(descriptor, error=exc)

    logger.info("resource_type_listed", resource_type=descriptor.name, count=len(identifiers))
    return EnumerationResult(descriptor, identifiers=list(identifiers))


async def enumerate_resources(
    catalog: ResourceCatalog,
    client: Any,
    lister_data: ListerData,
) -> list[EnumerationResult]:
    """List identifiers for every resource type in the catalog concurrently.

    Returns one result per descriptor, sorted by resource type name. Lister
    failures are captured in the results, not raised.
    """
    tasks = [_enumerate_one(descriptor, client, lister_data) for descriptor in catalog]
    results = await asyncio.gather(*tasks)
    return sorted(results, key=lambda result: result.name)


def raise_for_failures(results: Iterable[EnumerationResult]) -> list[EnumerationResult]:
    """Raise ListerError for the first failed resource type in name order.

    The remaining failures, and every successful result of the pass, are
    discarded with it.
    """
    ordered = sorted(results, key=lambda result: result.name)
    for result in ordered:
        if result.error is not None:
            raise ListerError(result.name, result.error) from result.error
    return ordered
