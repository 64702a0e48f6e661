from __future__ import annotations

from typing import Any

import httpx
import structlog

logger = structlog.get_logger()


class APIError(RuntimeError):
    """HTTP error returned by a remote API."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BaseHTTPClient:
    """Base async HTTP client.

    Requests are never retried: a failed read surfaces to the caller, and a
    transient failure is handled by re-running the whole generation.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        user_agent: str | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        """Override to provide custom headers."""
        headers = {"Accept": "application/json"}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        return headers

    def _auth(self) -> httpx.Auth | None:
        """Override to provide request authentication."""
        return None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        req_headers = self._headers()
        if headers:
            req_headers.update(headers)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, auth=self._auth()) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    headers=req_headers,
                )
                response.raise_for_status()
                return response.json() if response.content else {}

        except httpx.HTTPStatusError as exc:
            logger.error(
                "http_status_error",
                status=exc.response.status_code,
                method=method,
                url=url,
            )
            raise APIError(
                f"{method} {url}: HTTP {exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("http_network_error", method=method, url=url, error=str(exc))
            raise APIError(f"{method} {url}: {exc}") from exc

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Execute GET request."""
        return await self._request("GET", path, params=params, headers=headers)
