"""
Tests for error handling
"""

from clickup_dashboard.utils.error_handler import (
    handle_error,
    ValidationError,
    UpstreamAPIError,
    ResponseParseError,
    SettingsNotFoundError,
)


def test_validation_error_with_value():
    error = ValidationError(
        "Invalid List ID format",
        details="List ID should contain only numbers (e.g., '123456789')",
        field="listId",
        value="abc",
    )

    response, status = handle_error(error)

    assert status == 400
    assert response.to_wire() == {
        "error": "Invalid List ID format",
        "details": "List ID should contain only numbers (e.g., '123456789')",
        "providedListId": "abc",
    }


def test_validation_error_echoes_space_id():
    error = ValidationError("Invalid Space ID format", details="digits only", field="spaceId", value="sp-1")

    wire = handle_error(error)[0].to_wire()

    assert wire["providedSpaceId"] == "sp-1"
    assert "providedListId" not in wire


def test_validation_error_without_value():
    response, status = handle_error(ValidationError("apiKey is required", field="apiKey"))

    assert status == 400
    assert response.to_wire() == {"error": "apiKey is required"}


def test_upstream_error_keeps_status_and_progress():
    error = UpstreamAPIError(
        "ClickUp API Error: 429 Too Many Requests",
        status_code=429,
        details={"err": "Rate limit reached"},
        request_url="https://api.clickup.com/api/v2/list/1/task?page=4",
        tasks_collected=400,
    )

    response, status = handle_error(error)

    assert status == 429
    wire = response.to_wire()
    assert wire["tasksCollected"] == 400
    assert wire["requestUrl"].endswith("page=4")


def test_parse_error_is_bad_gateway():
    response, status = handle_error(ResponseParseError(details="Expecting value"))

    assert status == 502
    assert response.error == "Failed to parse JSON response"


def test_settings_not_found():
    response, status = handle_error(SettingsNotFoundError("No settings stored"))

    assert status == 404
    assert response.error == "No settings stored"


def test_unexpected_error():
    response, status = handle_error(RuntimeError("boom"))

    assert status == 500
    assert response.error == "Internal server error"
    assert response.details == "boom"
