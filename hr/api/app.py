"""
FastAPI application for the HR records service.

The API provides endpoints for:
- User collection management (list, create, get, delete, department)
- Personal documents nested in a user record (add, update)
- Login by email lookup
- Health checks

Failures raised by the use cases are translated into HTTP responses by the
handlers in ``hr.api.errors``.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hr.api.errors import install_exception_handlers
from hr.api.responses import HealthCheckResponse
from hr.api.routers import hr_management, user_management
from hr.config import Settings, setup_logging

__version__ = "1.0.0"

settings = Settings.from_env()

# Setup logging when module is imported
setup_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="HR Management API",
    description="Employee records with nested personal documents",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "PUT", "POST", "DELETE", "PATCH"],
    allow_headers=["Origin", "Authorization", "Content-Type"],
    max_age=12 * 60 * 60,
)

install_exception_handlers(app)

# Document routes are registered first so that /users/login is not shadowed
app.include_router(user_management.router, prefix="/users", tags=["Users"])
app.include_router(hr_management.router, prefix="/users", tags=["HR"])


@app.get("/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint"""
    logger.debug("Health check requested")
    return HealthCheckResponse(status="ok", version=__version__)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hr.api.app:app",
        host="0.0.0.0",
        port=settings.port,
        reload=not settings.is_production,
        log_level="info",
    )
