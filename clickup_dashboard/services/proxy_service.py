"""
Proxy service: validates requests and forwards them to ClickUp
"""

import re
from typing import Optional, Dict, Any
from clickup_dashboard.api.clickup_client import ClickUpClient
from clickup_dashboard.config.settings import settings
from clickup_dashboard.config.constants import (
    NUMERIC_ID_PATTERN,
    MAX_PAGES,
    TASKS_ROUTE_MAX_PAGES,
    PAGE_SIZE,
)
from clickup_dashboard.models.settings import ProxyRequest
from clickup_dashboard.models.response import ProxyResponse, RequestInfo, PaginatedTasks
from clickup_dashboard.utils.date_utils import get_current_utc_iso
from clickup_dashboard.utils.error_handler import ValidationError
from clickup_dashboard.utils.logger import logger, mask_api_key

_NUMERIC_ID = re.compile(NUMERIC_ID_PATTERN, re.ASCII)

LIST_PLACEHOLDER = "{listId}"
SPACE_PLACEHOLDER = "{spaceId}"

_ID_RULES = {
    "listId": ("List ID", "123456789"),
    "spaceId": ("Space ID", "123456"),
}


def validate_identifier(field: str, value: Optional[str]) -> str:
    """
    Check that a ClickUp list/space identifier is purely decimal digits

    Args:
        field: Wire name of the field ("listId" or "spaceId")
        value: Provided value

    Returns:
        The value, unchanged

    Raises:
        ValidationError: If the value is missing or not numeric
    """
    label, example = _ID_RULES[field]
    if not value:
        raise ValidationError(f"{field} is required", field=field)

    if not _NUMERIC_ID.fullmatch(value):
        raise ValidationError(
            f"Invalid {label} format",
            details=f"{label} should contain only numbers (e.g., '{example}')",
            field=field,
            value=value,
        )

    return value


def resolve_endpoint(endpoint: Optional[str], list_id: Optional[str], space_id: Optional[str]) -> str:
    """
    Validate identifiers required by an endpoint template and substitute them

    Args:
        endpoint: URL template, may contain {listId} / {spaceId}
        list_id: List identifier
        space_id: Space identifier

    Returns:
        Absolute request URL

    Raises:
        ValidationError: If a required identifier is missing or malformed
    """
    template = endpoint or f"{settings.CLICKUP_API_BASE_URL}/list/{LIST_PLACEHOLDER}/task"

    if LIST_PLACEHOLDER in template:
        template = template.replace(LIST_PLACEHOLDER, validate_identifier("listId", list_id))

    if SPACE_PLACEHOLDER in template:
        template = template.replace(SPACE_PLACEHOLDER, validate_identifier("spaceId", space_id))

    return template


class ProxyService:
    """Forwards dashboard requests to ClickUp"""

    def __init__(self, clickup_client: ClickUpClient):
        """
        Initialize proxy service

        Args:
            clickup_client: ClickUp API client
        """
        self.client = clickup_client
        self.logger = logger

    async def proxy_request(self, request: ProxyRequest, max_pages: int = MAX_PAGES) -> Dict[str, Any]:
        """
        Handle POST /api/clickup-test

        Args:
            request: Parsed request body
            max_pages: Page ceiling when fetchAllPages is set

        Returns:
            Response payload with success, data and requestInfo
        """
        if not request.api_key:
            raise ValidationError("apiKey is required", field="apiKey")

        api_url = resolve_endpoint(request.endpoint, request.list_id, request.space_id)
        self.logger.info(
            f"[ProxyService] Forwarding to {api_url} "
            f"(key={mask_api_key(request.api_key)}, fetchAllPages={request.fetch_all_pages})"
        )

        if request.fetch_all_pages:
            pages = await self.client.fetch_all_pages(api_url, request.api_key, max_pages=max_pages)
            data = PaginatedTasks(
                tasks=pages.tasks,
                total_tasks=len(pages.tasks),
                pages_collected=pages.pages_collected,
            ).model_dump(by_alias=True)
        else:
            data = await self.client.fetch_json(api_url, request.api_key)

        response = ProxyResponse(
            data=data,
            request_info=RequestInfo(
                space_id=request.space_id,
                list_id=request.list_id,
                endpoint=api_url,
                timestamp=get_current_utc_iso(),
                fetch_all_pages=request.fetch_all_pages,
            ),
        )
        return response.model_dump(by_alias=True)

    async def fetch_list_tasks(
        self,
        api_key: Optional[str],
        list_id: Optional[str],
        fetch_all_pages: bool = False,
        max_pages: int = TASKS_ROUTE_MAX_PAGES,
    ) -> Dict[str, Any]:
        """
        Handle GET /api/clickup-tasks: all tasks (any status) of one list

        Args:
            api_key: ClickUp API key
            list_id: List identifier
            fetch_all_pages: Follow pages up to max_pages, else a single page
            max_pages: Page ceiling

        Returns:
            Payload with tasks, totalTasks, pagesProcessed, fetchAllPages
        """
        if not api_key:
            raise ValidationError("apiKey is required", field="apiKey")
        validate_identifier("listId", list_id)

        url = f"{settings.CLICKUP_API_BASE_URL}/list/{list_id}/task?include_closed=true&limit={PAGE_SIZE}"
        pages = await self.client.fetch_all_pages(
            url,
            api_key,
            max_pages=max_pages,
            paginate=fetch_all_pages,
        )

        self.logger.info(
            f"[ProxyService] Final result: {len(pages.tasks)} tasks, "
            f"{pages.pages_collected} pages, fetchAllPages={fetch_all_pages}"
        )

        return {
            "tasks": pages.tasks,
            "totalTasks": len(pages.tasks),
            "pagesProcessed": max(pages.pages_collected, 1),
            "fetchAllPages": fetch_all_pages,
        }
