from __future__ import annotations

from typing import Any

from grafana_tfgen.clients.base import BaseHTTPClient
from grafana_tfgen.clients.grafana import DEFAULT_USER_AGENT

DEFAULT_CLOUD_API_URL = "https://grafana.com"


class CloudClient(BaseHTTPClient):
    """Grafana Cloud API client authenticated with an access policy token."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_CLOUD_API_URL,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(base_url, timeout=timeout, user_agent=DEFAULT_USER_AGENT)
        self._token = token

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def list_stacks(self, org_slug: str) -> list[dict[str, Any]]:
        data = await self.get("/api/instances", params={"org": org_slug})
        return data.get("items", [])
