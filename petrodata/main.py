"""
FastAPI application entry point for the PetroData field operations dashboard.
"""

import logging
import sys
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime

from petrodata.shared.config.settings import get_settings
from petrodata.shared.dependencies import build_app_config, configure_dependencies, get_container
from petrodata.interfaces.api.report_routes import router as reports_router

APP_TITLE = "PetroData Nexus API"
APP_VERSION = "1.0.0"

# Ensure logs directory exists
settings = get_settings()
Path(settings.LOGS_DIR_NAME).mkdir(exist_ok=True)

# Configure logging with both console and file handlers
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(f"{settings.LOGS_DIR_NAME}/{settings.LOG_FILENAME}", mode="a")
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure dependencies and seed sample history on first start."""
    logger.info(f"Starting {APP_TITLE}...")

    configure_dependencies(config=build_app_config(settings))

    if settings.SEED_ON_STARTUP:
        try:
            inserted = await get_container().get_report_record_service().seed_if_empty()
            if inserted:
                logger.info(f"Seeded {inserted} sample reports")
        except Exception as e:
            logger.error(f"Sample data seeding failed: {str(e)}", exc_info=True)

    yield

    logger.info(f"Shutting down {APP_TITLE}...")


app = FastAPI(
    title=APP_TITLE,
    description="""
    Daily field operations reporting for oil wells.

    ## Features
    - **Report capture**: one report per field, well and day; resubmission replaces
    - **Dashboard**: all-time production, safety status and recent activity
    - **Period reports**: daily, trailing-week and monthly statistics with per-well breakdowns
    - **CSV export**: spreadsheet download of all or period reports
    - **AI audit**: Gemini-written audit of a period's operations
    """,
    version=APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

app.include_router(reports_router)


@app.get("/")
async def root():
    """API root endpoint with service information."""
    return {
        "message": APP_TITLE,
        "version": APP_VERSION,
        "endpoints": {
            "reports": "/api/v1/reports/",
            "overview": "/api/v1/reports/overview",
            "period": "/api/v1/reports/period",
            "export": "/api/v1/reports/export",
            "audit": "/api/v1/reports/audit",
            "seed": "/api/v1/reports/seed",
            "health": "/health",
            "docs": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health")
async def health_check():
    """Store reachability, record count and AI adapter status."""
    try:
        container = get_container()
        record_count = await container.get_record_store().count()
        text_generator = container.get_text_generator()

        return {
            "status": "healthy",
            "service": "petrodata-nexus-api",
            "version": APP_VERSION,
            "timestamp": datetime.now().isoformat(),
            "database": settings.STORAGE_BACKEND,
            "record_count": record_count,
            "ai": text_generator.get_status()
        }

    except Exception as e:
        logger.error(f"Error in health check: {str(e)}")
        return {
            "status": "unhealthy",
            "service": "petrodata-nexus-api",
            "version": APP_VERSION,
            "timestamp": datetime.now().isoformat(),
            "error": str(e)
        }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT)
