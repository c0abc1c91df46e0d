"""
Main application entry point
"""

import uvicorn
from clickup_dashboard.config.settings import settings
from clickup_dashboard.utils.logger import logger


def main():
    """Run the dashboard web server"""
    settings.validate()
    logger.info(f"Starting ClickUp dashboard on {settings.WEB_HOST}:{settings.WEB_PORT}")
    uvicorn.run(
        "clickup_dashboard.web.main:app",
        host=settings.WEB_HOST,
        port=settings.WEB_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
