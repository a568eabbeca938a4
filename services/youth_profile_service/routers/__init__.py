"""Youth profile service routers package."""

from services.youth_profile_service.routers.youth_profiles import (
    router as youth_profiles_router,
)

__all__ = [
    "youth_profiles_router",
]
