"""FastAPI application for the Youth Profile Service."""

from fastapi import FastAPI

from libs.common.logging import configure_logging
from services.youth_profile_service.routers import youth_profiles_router


def create_app() -> FastAPI:
    """Create and configure the Youth Profile Service FastAPI app."""
    configure_logging()

    app = FastAPI(
        title="Youth Profile Service",
        version="0.1.0",
        description="Age-gated validation and reconciliation for youth membership profiles.",
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "youth-profile"}

    app.include_router(youth_profiles_router)

    return app


app = create_app()
