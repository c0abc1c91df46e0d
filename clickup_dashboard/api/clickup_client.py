"""
ClickUp API client
"""

import asyncio
import json
from typing import Optional, Dict, Any
import httpx
from clickup_dashboard.api.base_client import BaseAPIClient
from clickup_dashboard.config.settings import settings
from clickup_dashboard.config.constants import (
    CLICKUP_PERSONAL_TOKEN_PREFIX,
    PAGE_SIZE,
    MAX_PAGES,
    PAGE_REQUEST_DELAY,
)
from clickup_dashboard.models.response import PaginationResult
from clickup_dashboard.utils.error_handler import UpstreamAPIError, ResponseParseError
from clickup_dashboard.utils.logger import logger, mask_api_key


def build_auth_header(api_key: str) -> Dict[str, str]:
    """
    Build request headers for ClickUp

    Personal tokens (pk_...) go into Authorization as-is,
    anything else is sent as a Bearer token.

    Args:
        api_key: ClickUp API key or token

    Returns:
        Headers dict
    """
    if api_key.startswith(CLICKUP_PERSONAL_TOKEN_PREFIX):
        authorization = api_key
    else:
        authorization = f"Bearer {api_key}"

    return {
        "Authorization": authorization,
        "Content-Type": "application/json",
    }


def ensure_task_query(url: str) -> httpx.URL:
    """
    Add limit and include_closed to a task URL unless already present

    Args:
        url: Task list URL

    Returns:
        URL with both query parameters set
    """
    parsed = httpx.URL(url)
    if "limit" not in parsed.params:
        parsed = parsed.copy_add_param("limit", str(PAGE_SIZE))
    if "include_closed" not in parsed.params:
        parsed = parsed.copy_add_param("include_closed", "true")
    return parsed


def _page_limit(url: httpx.URL) -> int:
    try:
        limit = int(url.params.get("limit", PAGE_SIZE))
    except ValueError:
        return PAGE_SIZE
    return limit if limit > 0 else PAGE_SIZE


def _error_details(response: httpx.Response) -> Any:
    """Best-effort decoding of an error body"""
    content_type = response.headers.get("content-type", "")
    try:
        if "application/json" in content_type:
            return response.json()
        return response.text
    except (ValueError, UnicodeDecodeError):
        return "Failed to parse error response"


class ClickUpClient(BaseAPIClient):
    """Client for the ClickUp REST API v2"""

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        page_delay: float = PAGE_REQUEST_DELAY,
    ):
        """
        Initialize ClickUp client

        Args:
            transport: Optional httpx transport
            page_delay: Pause between page requests in seconds
        """
        super().__init__(settings.CLICKUP_API_BASE_URL, timeout=settings.REQUEST_TIMEOUT, transport=transport)
        self.page_delay = page_delay
        self.logger = logger

    def _raise_for_status(
        self,
        response: httpx.Response,
        url: str,
        tasks_collected: Optional[int] = None,
    ) -> None:
        if response.is_success:
            return

        details = _error_details(response)
        self.logger.error(
            f"[ClickUpClient] API error: {response.status_code} {response.reason_phrase} "
            f"(url={url}, collected={tasks_collected})"
        )
        raise UpstreamAPIError(
            f"ClickUp API Error: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            details=details,
            request_url=url,
            tasks_collected=tasks_collected,
        )

    async def fetch_json(self, url: str, api_key: str) -> Any:
        """
        Fetch a single ClickUp resource

        Args:
            url: Absolute URL (placeholders already substituted)
            api_key: ClickUp API key

        Returns:
            Decoded JSON body

        Raises:
            UpstreamAPIError: On non-success status
            ResponseParseError: On empty or invalid JSON body
        """
        self.logger.info(f"[ClickUpClient] GET {url} (key={mask_api_key(api_key)})")
        response = await self.get(url, headers=build_auth_header(api_key))
        self._raise_for_status(response, url)

        text = response.text
        if not text.strip():
            raise ResponseParseError("Empty response from ClickUp API", request_url=url)

        try:
            return json.loads(text)
        except ValueError as e:
            self.logger.error(f"[ClickUpClient] JSON parsing error: {e}; body: {text[:200]}...")
            raise ResponseParseError(details=str(e), request_url=url) from e

    async def fetch_all_pages(
        self,
        url: str,
        api_key: str,
        max_pages: int = MAX_PAGES,
        paginate: bool = True,
    ) -> PaginationResult:
        """
        Fetch task pages sequentially and concatenate their tasks

        Stops on an empty body, a non-JSON content type, a page without a
        tasks list, a page shorter than the limit, or the page ceiling.

        Args:
            url: Task list URL
            api_key: ClickUp API key
            max_pages: Page ceiling
            paginate: False fetches page 0 only; a full page is then not a ceiling hit

        Returns:
            PaginationResult with all collected tasks

        Raises:
            UpstreamAPIError: On a non-success page; carries the count collected so far
            ResponseParseError: On a JSON page that cannot be decoded
        """
        base_url = ensure_task_query(url)
        limit = _page_limit(base_url)
        headers = build_auth_header(api_key)
        result = PaginationResult()
        page_count = max_pages if paginate else 1

        self.logger.info(
            f"[ClickUpClient] Fetching tasks: {base_url} (key={mask_api_key(api_key)}, pages<={page_count})"
        )

        for page in range(page_count):
            if page > 0:
                await asyncio.sleep(self.page_delay)

            page_url = str(base_url.copy_set_param("page", str(page)))
            self.logger.debug(f"[ClickUpClient] Fetching page {page}: {page_url}")

            response = await self.get(page_url, headers=headers)
            self._raise_for_status(response, page_url, tasks_collected=len(result.tasks))

            text = response.text
            if not text.strip():
                self.logger.info(f"[ClickUpClient] Page {page}: empty response, stopping")
                break

            content_type = response.headers.get("content-type", "")
            if content_type and "json" not in content_type.lower():
                self.logger.info(f"[ClickUpClient] Page {page}: non-JSON content type '{content_type}', stopping")
                break

            try:
                data = json.loads(text)
            except ValueError as e:
                self.logger.error(f"[ClickUpClient] JSON parsing error on page {page}: {e}")
                raise ResponseParseError(
                    details=str(e),
                    request_url=page_url,
                    tasks_collected=len(result.tasks),
                ) from e

            page_tasks = data.get("tasks") if isinstance(data, dict) else None
            if not isinstance(page_tasks, list):
                self.logger.info(f"[ClickUpClient] Page {page}: no tasks in response, stopping")
                break

            result.tasks.extend(page_tasks)
            result.pages_collected = page + 1
            self.logger.info(
                f"[ClickUpClient] Page {page}: {len(page_tasks)} tasks (total: {len(result.tasks)})"
            )

            if len(page_tasks) < limit:
                self.logger.info("[ClickUpClient] Last page reached")
                break
        else:
            if paginate:
                result.ceiling_reached = True
                self.logger.warning(f"[ClickUpClient] Max page limit reached ({max_pages})")

        return result
