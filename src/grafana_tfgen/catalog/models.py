from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

Lister = Callable[[Any, "ListerData"], Awaitable[list[str]]]


@dataclass(frozen=True)
class ResourceDescriptor:
    """Metadata describing a supported Terraform resource type."""

    name: str
    lister: Lister | None = None
    category: str = ""
    description: str | None = None

    @property
    def has_lister(self) -> bool:
        return self.lister is not None


class ResourceCatalog:
    """Immutable, name-ordered collection of resource descriptors."""

    def __init__(self, descriptors: Iterable[ResourceDescriptor] = ()) -> None:
        by_name: dict[str, ResourceDescriptor] = {}
        for descriptor in descriptors:
            if not descriptor.name:
                raise ValueError("Resource name is required")
            if descriptor.name in by_name:
                raise ValueError(f"Resource '{descriptor.name}' is registered twice")
            by_name[descriptor.name] = descriptor
        self._descriptors = tuple(by_name[name] for name in sorted(by_name))
        self._by_name = by_name

    def __iter__(self) -> Iterator[ResourceDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"ResourceCatalog({list(self.names())!r})"

    def get(self, name: str) -> ResourceDescriptor:
        descriptor = self._by_name.get(name)
        if descriptor is None:
            raise KeyError(f"Resource '{name}' is not registered")
        return descriptor

    def names(self) -> tuple[str, ...]:
        return tuple(descriptor.name for descriptor in self._descriptors)

    def select(self, predicate: Callable[[ResourceDescriptor], bool]) -> ResourceCatalog:
        return ResourceCatalog(d for d in self._descriptors if predicate(d))


class ListerData:
    """Per-environment arguments handed to every lister of a pass.

    In multi-organization mode org-scoped listers walk every organization
    and prefix identifiers with the org id. The organization list is fetched
    once per pass and shared by the concurrent listers.
    """

    def __init__(self, *, single_org: bool = True, cloud_org: str | None = None) -> None:
        self.single_org = single_org
        self.cloud_org = cloud_org
        self._org_ids: list[int] | None = None
        self._lock = asyncio.Lock()

    async def org_ids(self, client: Any) -> list[int | None]:
        if self.single_org:
            return [None]
        async with self._lock:
            if self._org_ids is None:
                self._org_ids = await client.list_org_ids()
        return list(self._org_ids)


def org_scoped_id(org_id: int | None, *parts: Any) -> str:
    """Build a Terraform import id, prefixed with the org id when one is given."""
    values = [str(part) for part in parts]
    if org_id is not None:
        values.insert(0, str(org_id))
    return ":".join(values)
