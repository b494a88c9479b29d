"""Run the admin API locally: python main.py"""

import uvicorn

from scripts.lib import settings
from scripts.lib.logger import setup_logger

logger = setup_logger("studio_admin_hub")

if __name__ == "__main__":
    logger.info(
        "Serving Studio Admin Hub (%s) on port %d",
        settings.ENVIRONMENT, settings.DASHBOARD_PORT,
    )
    uvicorn.run(
        "dashboard.api.main:app",
        host="0.0.0.0",
        port=settings.DASHBOARD_PORT,
        reload=settings.DEBUG,
    )
