"""
Base API client: one shared httpx.AsyncClient per upstream
"""

from abc import ABC
from typing import Optional, Dict, Any
import httpx
from clickup_dashboard.utils.logger import logger
from clickup_dashboard.utils.error_handler import UpstreamAPIError


class BaseAPIClient(ABC):
    """Thin async wrapper that turns transport failures into UpstreamAPIError"""

    def __init__(self, base_url: str, timeout: int = 30, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize base API client

        Args:
            base_url: Root URL that relative paths are joined to
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.logger = logger

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def _send(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request; the status code is left for the caller to judge

        Args:
            method: HTTP method
            endpoint: Path relative to base_url, or an absolute URL
            headers: Request headers
            params: Extra query parameters

        Returns:
            httpx response

        Raises:
            UpstreamAPIError: Connection failure or timeout (502)
        """
        url = self._build_url(endpoint)
        self.logger.debug(f"[HTTP] {method} {url}")

        try:
            response = await self.client.request(method, url, headers=headers, params=params)
        except httpx.RequestError as e:
            self.logger.error(f"[HTTP] {method} {url} failed: {e!r}")
            raise UpstreamAPIError(
                "Failed to reach ClickUp API",
                status_code=502,
                details=str(e) or type(e).__name__,
                request_url=url,
            ) from e

        self.logger.debug(f"[HTTP] {response.status_code} {response.reason_phrase} ({len(response.content)} bytes)")
        return response

    async def get(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        return await self._send("GET", endpoint, headers=headers, params=params)

    async def close(self):
        """Release pooled connections"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
