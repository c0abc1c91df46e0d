"""
Error handling utilities
"""

from typing import Optional, Any, Tuple
from clickup_dashboard.models.response import ErrorResponse
from clickup_dashboard.utils.logger import logger

# Rejected identifier values are echoed next to the error
_PROVIDED_FIELDS = {
    "listId": "provided_list_id",
    "spaceId": "provided_space_id",
}


class DashboardError(Exception):
    """Base exception for dashboard errors"""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(DashboardError):
    """Invalid input, rejected before any upstream request"""

    status_code = 400

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class UpstreamAPIError(DashboardError):
    """ClickUp answered with a non-success status or could not be reached"""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        details: Optional[Any] = None,
        request_url: Optional[str] = None,
        tasks_collected: Optional[int] = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.request_url = request_url
        self.tasks_collected = tasks_collected


class ResponseParseError(DashboardError):
    """ClickUp response claimed JSON but could not be decoded"""

    status_code = 502

    def __init__(
        self,
        message: str = "Failed to parse JSON response",
        details: Optional[Any] = None,
        request_url: Optional[str] = None,
        tasks_collected: Optional[int] = None,
    ):
        super().__init__(message, details)
        self.request_url = request_url
        self.tasks_collected = tasks_collected


class SettingsNotFoundError(DashboardError):
    """No usable settings stored"""

    status_code = 404


def handle_error(error: Exception) -> Tuple[ErrorResponse, int]:
    """
    Map an exception to an error response and HTTP status

    Args:
        error: Exception to handle

    Returns:
        Tuple of (ErrorResponse, status code)
    """
    if isinstance(error, ValidationError):
        logger.warning(f"Validation error: {error.message}")
        provided = {}
        if error.field in _PROVIDED_FIELDS and error.value is not None:
            provided[_PROVIDED_FIELDS[error.field]] = error.value
        return ErrorResponse(error=error.message, details=error.details, **provided), error.status_code

    if isinstance(error, (UpstreamAPIError, ResponseParseError)):
        logger.error(f"Upstream error: {error.message} (url={error.request_url}, collected={error.tasks_collected})")
        return ErrorResponse(
            error=error.message,
            details=error.details,
            request_url=error.request_url,
            tasks_collected=error.tasks_collected,
        ), error.status_code

    if isinstance(error, DashboardError):
        logger.warning(f"Dashboard error: {error.message}")
        return ErrorResponse(error=error.message, details=error.details), error.status_code

    logger.error(f"Error occurred: {error}", exc_info=True)
    return ErrorResponse(error="Internal server error", details=str(error) or type(error).__name__), 500
