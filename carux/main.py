from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

load_dotenv()

from carux.config import settings
from carux.core.exceptions import ReviewPlatformException
from carux.core.logging import configure_logging
from carux.routers.errors import domain_exception_handler, validation_exception_handler
from carux.routers.evaluations import router as evaluations_router
from carux.routers.health import router as health_router
from carux.routers.reports import router as reports_router
from carux.routers.reviews import router as reviews_router
from carux.routers.scoring_config import router as scoring_config_router
from carux.routers.taxonomy import router as taxonomy_router

import structlog

logger = structlog.get_logger(__name__)


# SWAGGER UI: tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Taxonomy"},
    {"name": "Reviews"},
    {"name": "Evaluations"},
    {"name": "Scoring Config"},
    {"name": "Reports"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ReviewPlatformException, domain_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS)
app.include_router(health_router)          # Health
app.include_router(taxonomy_router)        # Taxonomy
app.include_router(reviews_router)         # Reviews
app.include_router(evaluations_router)     # Evaluations
app.include_router(scoring_config_router)  # Scoring Config
app.include_router(reports_router)         # Reports


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    configure_logging()
    logger.info("app_starting", app=settings.APP_NAME, env=settings.APP_ENV)


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("app_stopping", app=settings.APP_NAME)
