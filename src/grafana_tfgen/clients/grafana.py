"""
Read-only Grafana HTTP API client used by the resource listers.

A single instance is shared by every lister of a pass, so it holds no
per-request state.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from grafana_tfgen import __version__
from grafana_tfgen.clients.base import BaseHTTPClient

DEFAULT_USER_AGENT = f"grafana-tfgen/{__version__}"
DEFAULT_PAGE_SIZE = 1000


class GrafanaClient(BaseHTTPClient):
    """Grafana API client authenticated by token or ``user:password``."""

    def __init__(
        self,
        url: str,
        auth: str | None = None,
        *,
        timeout: float = 30.0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        super().__init__(url, timeout=timeout, user_agent=DEFAULT_USER_AGENT)
        self._credentials = auth
        self._page_size = page_size

    @property
    def uses_basic_auth(self) -> bool:
        return bool(self._credentials) and ":" in self._credentials

    def _auth(self) -> httpx.Auth | None:
        if self.uses_basic_auth:
            username, _, password = self._credentials.partition(":")
            return httpx.BasicAuth(username, password)
        return None

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self._credentials and not self.uses_basic_auth:
            headers["Authorization"] = f"Bearer {self._credentials}"
        return headers

    @staticmethod
    def _org_headers(org_id: int | None) -> dict[str, str] | None:
        if org_id is None:
            return None
        return {"X-Grafana-Org-Id": str(org_id)}

    async def _paginate(
        self,
        path: str,
        items: Callable[[Any], list[dict[str, Any]]],
        *,
        org_id: int | None = None,
        params: dict[str, Any] | None = None,
        size_param: str = "limit",
    ) -> list[dict[str, Any]]:
        """Fetch pages until a short page is returned."""
        collected: list[dict[str, Any]] = []
        page = 1
        while True:
            page_params = dict(params or {})
            page_params[size_param] = self._page_size
            page_params["page"] = page
            data = await self.get(path, params=page_params, headers=self._org_headers(org_id))
            batch = items(data) or []
            collected.extend(batch)
            if len(batch) < self._page_size:
                return collected
            page += 1

    async def list_org_ids(self) -> list[int]:
        orgs = await self._paginate("/api/orgs", lambda data: data, size_param="perpage")
        return [org["id"] for org in orgs]

    async def list_folders(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self._paginate("/api/folders", lambda data: data, org_id=org_id)

    async def search_dashboards(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self._paginate(
            "/api/search",
            lambda data: data,
            org_id=org_id,
            params={"type": "dash-db"},
        )

    async def list_data_sources(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self.get("/api/datasources", headers=self._org_headers(org_id)) or []

    async def search_teams(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self._paginate(
            "/api/teams/search",
            lambda data: data.get("teams", []),
            org_id=org_id,
            size_param="perpage",
        )

    async def search_service_accounts(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self._paginate(
            "/api/serviceaccounts/search",
            lambda data: data.get("serviceAccounts", []),
            org_id=org_id,
            size_param="perpage",
        )

    async def list_library_panels(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self._paginate(
            "/api/library-elements",
            lambda data: data.get("result", {}).get("elements", []),
            org_id=org_id,
            params={"kind": 1},
            size_param="perPage",
        )

    async def list_playlists(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self.get("/api/playlists", headers=self._org_headers(org_id)) or []

    async def list_contact_points(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self.get("/api/v1/provisioning/contact-points", headers=self._org_headers(org_id)) or []

    async def list_message_templates(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self.get("/api/v1/provisioning/templates", headers=self._org_headers(org_id)) or []

    async def list_mute_timings(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self.get("/api/v1/provisioning/mute-timings", headers=self._org_headers(org_id)) or []

    async def list_alert_rules(self, org_id: int | None = None) -> list[dict[str, Any]]:
        return await self.get("/api/v1/provisioning/alert-rules", headers=self._org_headers(org_id)) or []

    async def search_users(self) -> list[dict[str, Any]]:
        return await self._paginate(
            "/api/users/search",
            lambda data: data.get("users", []),
            size_param="perpage",
        )
