"""
Web interface: ClickUp proxy API and dashboard page
"""

from fastapi import FastAPI, Request, File, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from pathlib import Path
from typing import Optional
from clickup_dashboard.api.clickup_client import ClickUpClient
from clickup_dashboard.services.proxy_service import ProxyService
from clickup_dashboard.services.settings_store import SettingsStore
from clickup_dashboard.services.dashboard_service import DashboardService
from clickup_dashboard.models.settings import DashboardSettings, ProxyRequest
from clickup_dashboard.config.constants import (
    PREDEFINED_ENDPOINTS,
    SETTINGS_EXPORT_FILENAME,
    STATUS_COLORS,
    DEFAULT_STATUS_COLOR,
)
from clickup_dashboard.utils.formatters import format_date, short_task_id, format_assignees, format_day_delta
from clickup_dashboard.utils.logger import logger
from clickup_dashboard.utils.error_handler import handle_error, SettingsNotFoundError, ValidationError
from clickup_dashboard.config.settings import settings

app = FastAPI(title="ClickUp Dashboard")
templates_dir = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))
templates.env.filters["format_date"] = format_date
templates.env.filters["short_id"] = short_task_id
templates.env.filters["assignees"] = format_assignees
templates.env.filters["day_delta"] = format_day_delta

# Global service instances
clickup_client = ClickUpClient()
settings_store = SettingsStore()
proxy_service = ProxyService(clickup_client)
dashboard_service = DashboardService(proxy_service, settings_store)


def _error_response(error: Exception) -> JSONResponse:
    """Convert an exception into the JSON error payload"""
    error_response, status_code = handle_error(error)
    return JSONResponse(status_code=status_code, content=error_response.to_wire())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters get the same error payload as other 400s"""
    problems = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]
    logger.warning(f"[Web] Invalid request to {request.method} {request.url.path}: {problems}")
    return _error_response(ValidationError("Invalid request body", details=problems))


@app.on_event("startup")
async def startup():
    """Validate configuration on startup"""
    settings.validate()
    logger.info(f"[Startup] ClickUp API base: {settings.CLICKUP_API_BASE_URL}")
    logger.info(f"[Startup] Settings file: {settings_store.storage_file}")


@app.on_event("shutdown")
async def shutdown():
    """Close the upstream HTTP client"""
    await clickup_client.close()


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Dashboard page"""
    context = {"dashboard": None, "error": None, "status_colors": STATUS_COLORS, "default_color": DEFAULT_STATUS_COLOR}
    try:
        context["dashboard"] = await dashboard_service.build_dashboard()
    except SettingsNotFoundError as e:
        context["error"] = f"{e.message}: {e.details}"
    except Exception as e:
        error_response, _ = handle_error(e)
        context["error"] = error_response.error
    return templates.TemplateResponse(request, "dashboard.html", context)


@app.post("/api/clickup-test")
async def clickup_test(payload: ProxyRequest):
    """Forward a request to ClickUp, optionally following pages"""
    try:
        return await proxy_service.proxy_request(payload)
    except Exception as e:
        return _error_response(e)


@app.get("/api/clickup-tasks")
async def clickup_tasks(
    apiKey: Optional[str] = None,
    listId: Optional[str] = None,
    spaceId: Optional[str] = None,
    fetchAllPages: Optional[str] = None,
):
    """All tasks of a list (spaceId is accepted but not used)"""
    try:
        return await proxy_service.fetch_list_tasks(
            api_key=apiKey,
            list_id=listId,
            fetch_all_pages=fetchAllPages == "true",
        )
    except Exception as e:
        return _error_response(e)


@app.get("/api/settings")
async def get_settings():
    """Stored settings"""
    stored = settings_store.load()
    if stored is None:
        return _error_response(SettingsNotFoundError("No settings stored"))
    return stored.to_wire()


@app.put("/api/settings")
async def save_settings(payload: DashboardSettings):
    """Save settings"""
    return settings_store.save(payload).to_wire()


@app.delete("/api/settings")
async def clear_settings():
    """Clear settings"""
    settings_store.clear()
    return {"success": True}


@app.get("/api/settings/export")
async def export_settings():
    """Download stored settings as a JSON file"""
    try:
        document = settings_store.export_json()
    except Exception as e:
        return _error_response(e)
    return Response(
        content=document,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{SETTINGS_EXPORT_FILENAME}"'},
    )


@app.post("/api/settings/import")
async def import_settings(file: UploadFile = File(...)):
    """Replace stored settings with an uploaded JSON file"""
    try:
        raw = await file.read()
        imported = settings_store.import_json(raw.decode("utf-8"))
        return {"success": True, "settings": imported.to_wire()}
    except UnicodeDecodeError as e:
        return _error_response(ValidationError("Invalid settings file", details=f"Not UTF-8 text: {e}"))
    except Exception as e:
        return _error_response(e)


@app.get("/api/endpoints")
async def list_endpoints():
    """Endpoint templates for the API test form"""
    return PREDEFINED_ENDPOINTS


@app.get("/api/dashboard")
async def dashboard():
    """Dashboard metrics as JSON"""
    try:
        return await dashboard_service.build_dashboard()
    except Exception as e:
        return _error_response(e)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.WEB_HOST, port=settings.WEB_PORT)
