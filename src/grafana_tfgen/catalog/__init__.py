"""
Resource catalog: the resource types generation knows how to enumerate.

Catalogs are plain immutable values. Build them once with
``default_grafana_catalog()`` / ``default_cloud_catalog()`` and hand them to
the generator, or build a custom one (e.g. with fake listers in tests).
"""

from grafana_tfgen.catalog.cloud import default_cloud_catalog
from grafana_tfgen.catalog.grafana import default_grafana_catalog
from grafana_tfgen.catalog.models import (
    Lister,
    ListerData,
    ResourceCatalog,
    ResourceDescriptor,
    org_scoped_id,
)

__all__ = [
    "Lister",
    "ListerData",
    "ResourceCatalog",
    "ResourceDescriptor",
    "default_cloud_catalog",
    "default_grafana_catalog",
    "org_scoped_id",
]
