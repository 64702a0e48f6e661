"""
Listers for resources managed through the Grafana HTTP API.

Each lister returns identifiers in the format the Terraform provider accepts
on import: the bare id in single-org mode, ``<orgID>:<id>`` otherwise.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from grafana_tfgen.catalog.models import (
    Lister,
    ListerData,
    ResourceCatalog,
    ResourceDescriptor,
    org_scoped_id,
)
from grafana_tfgen.clients.grafana import GrafanaClient

Fetch = Callable[[GrafanaClient, "int | None"], Awaitable[list[dict[str, Any]]]]


def org_scoped_lister(fetch: Fetch, key: str) -> Lister:
    """Build a lister that reads ``key`` from every item of every organization."""

    async def lister(client: GrafanaClient, data: ListerData) -> list[str]:
        ids: list[str] = []
        for org_id in await data.org_ids(client):
            for item in await fetch(client, org_id):
                ids.append(org_scoped_id(org_id, item[key]))
        return ids

    return lister


async def list_contact_points(client: GrafanaClient, data: ListerData) -> list[str]:
    # Several integrations share one contact point name.
    ids: list[str] = []
    for org_id in await data.org_ids(client):
        seen: set[str] = set()
        for point in await client.list_contact_points(org_id):
            if point["name"] in seen:
                continue
            seen.add(point["name"])
            ids.append(org_scoped_id(org_id, point["name"]))
    return ids


async def list_rule_groups(client: GrafanaClient, data: ListerData) -> list[str]:
    ids: list[str] = []
    for org_id in await data.org_ids(client):
        seen: set[tuple[str, str]] = set()
        for rule in await client.list_alert_rules(org_id):
            group = (rule["folderUID"], rule["ruleGroup"])
            if group in seen:
                continue
            seen.add(group)
            ids.append(org_scoped_id(org_id, *group))
    return ids


async def list_organizations(client: GrafanaClient, data: ListerData) -> list[str]:
    if data.single_org:
        return []
    return [str(org_id) for org_id in await data.org_ids(client)]


async def list_users(client: GrafanaClient, data: ListerData) -> list[str]:
    # Users are server-wide and only visible to a server admin.
    if data.single_org:
        return []
    return [str(user["id"]) for user in await client.search_users()]


def default_grafana_catalog() -> ResourceCatalog:
    """Build the catalog of resource types importable from a Grafana instance."""
    return ResourceCatalog(
        [
            ResourceDescriptor(
                "grafana_folder",
                org_scoped_lister(GrafanaClient.list_folders, "uid"),
                category="Grafana OSS",
            ),
            ResourceDescriptor(
                "grafana_dashboard",
                org_scoped_lister(GrafanaClient.search_dashboards, "uid"),
                category="Grafana OSS",
            ),
            ResourceDescriptor(
                "grafana_data_source",
                org_scoped_lister(GrafanaClient.list_data_sources, "uid"),
                category="Grafana OSS",
            ),
            ResourceDescriptor(
                "grafana_team",
                org_scoped_lister(GrafanaClient.search_teams, "id"),
                category="Grafana OSS",
            ),
            ResourceDescriptor(
                "grafana_service_account",
                org_scoped_lister(GrafanaClient.search_service_accounts, "id"),
                category="Grafana OSS",
            ),
            ResourceDescriptor(
                "grafana_library_panel",
                org_scoped_lister(GrafanaClient.list_library_panels, "uid"),
                category="Grafana OSS",
            ),
            ResourceDescriptor(
                "grafana_playlist",
                org_scoped_lister(GrafanaClient.list_playlists, "uid"),
                category="Grafana OSS",
            ),
            ResourceDescriptor("grafana_organization", list_organizations, category="Grafana OSS"),
            ResourceDescriptor("grafana_user", list_users, category="Grafana OSS"),
            ResourceDescriptor(
                "grafana_dashboard_permission",
                category="Grafana OSS",
                description="Managed together with dashboards; not listed",
            ),
            ResourceDescriptor(
                "grafana_folder_permission",
                category="Grafana OSS",
                description="Managed together with folders; not listed",
            ),
            ResourceDescriptor("grafana_contact_point", list_contact_points, category="Alerting"),
            ResourceDescriptor(
                "grafana_message_template",
                org_scoped_lister(GrafanaClient.list_message_templates, "name"),
                category="Alerting",
            ),
            ResourceDescriptor(
                "grafana_mute_timing",
                org_scoped_lister(GrafanaClient.list_mute_timings, "name"),
                category="Alerting",
            ),
            ResourceDescriptor("grafana_rule_group", list_rule_groups, category="Alerting"),
        ]
    )
