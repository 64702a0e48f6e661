"""Tests for the resource catalog."""

import pytest

from grafana_tfgen.catalog import (
    ListerData,
    ResourceCatalog,
    ResourceDescriptor,
    default_cloud_catalog,
    default_grafana_catalog,
    org_scoped_id,
)


async def _noop(client, data):
    return []


class TestResourceCatalog:
    def test_iterates_in_name_order(self):
        catalog = ResourceCatalog(
            [
                ResourceDescriptor("grafana_team", _noop),
                ResourceDescriptor("grafana_dashboard", _noop),
                ResourceDescriptor("grafana_folder", _noop),
            ]
        )

        assert catalog.names() == ("grafana_dashboard", "grafana_folder", "grafana_team")
        assert [d.name for d in catalog] == list(catalog.names())
        assert len(catalog) == 3

    def test_rejects_duplicates(self):
        with pytest.raises(ValueError, match="registered twice"):
            ResourceCatalog([ResourceDescriptor("a"), ResourceDescriptor("a")])

    def test_rejects_empty_name(self):
        with pytest.raises(ValueError, match="name is required"):
            ResourceCatalog([ResourceDescriptor("")])

    def test_get_and_contains(self):
        descriptor = ResourceDescriptor("grafana_folder", _noop)
        catalog = ResourceCatalog([descriptor])

        assert "grafana_folder" in catalog
        assert "grafana_team" not in catalog
        assert catalog.get("grafana_folder") is descriptor
        with pytest.raises(KeyError):
            catalog.get("grafana_team")

    def test_select_returns_new_catalog(self):
        catalog = ResourceCatalog([ResourceDescriptor("a", _noop), ResourceDescriptor("b")])

        listable = catalog.select(lambda d: d.has_lister)

        assert listable.names() == ("a",)
        assert catalog.names() == ("a", "b")

    def test_descriptor_is_immutable(self):
        descriptor = ResourceDescriptor("a")
        with pytest.raises(AttributeError):
            descriptor.name = "b"


class TestDefaultCatalogs:
    def test_grafana_catalog_contents(self):
        catalog = default_grafana_catalog()

        for name in (
            "grafana_folder",
            "grafana_dashboard",
            "grafana_data_source",
            "grafana_team",
            "grafana_contact_point",
            "grafana_rule_group",
        ):
            assert catalog.get(name).has_lister

        assert not catalog.get("grafana_dashboard_permission").has_lister
        assert not catalog.get("grafana_folder_permission").has_lister

    def test_cloud_catalog_contents(self):
        catalog = default_cloud_catalog()
        assert catalog.names() == ("grafana_cloud_stack",)

    def test_catalogs_are_built_fresh(self):
        assert default_grafana_catalog() is not default_grafana_catalog()


class TestListerData:
    @pytest.mark.asyncio
    async def test_single_org_needs_no_lookup(self):
        class Client:
            async def list_org_ids(self):
                raise AssertionError("should not be called")

        assert await ListerData(single_org=True).org_ids(Client()) == [None]

    @pytest.mark.asyncio
    async def test_org_ids_fetched_once(self):
        calls = []

        class Client:
            async def list_org_ids(self):
                calls.append(1)
                return [1, 2]

        data = ListerData(single_org=False)
        client = Client()

        assert await data.org_ids(client) == [1, 2]
        assert await data.org_ids(client) == [1, 2]
        assert len(calls) == 1


class TestOrgScopedId:
    def test_without_org(self):
        assert org_scoped_id(None, "abc") == "abc"

    def test_with_org(self):
        assert org_scoped_id(3, "abc") == "3:abc"

    def test_multiple_parts(self):
        assert org_scoped_id(2, "folder", 7) == "2:folder:7"
