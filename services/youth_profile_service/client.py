"""HTTP client for the remote profile store.

The store owns the profile record; this service only reads a snapshot and
sends create/update requests built by the reconciler.
"""

import json
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from libs.common.config import get_settings
from libs.common.logging import get_logger
from libs.common.service_client import service_get, service_post, service_put
from services.youth_profile_service.schemas import (
    CreateRequest,
    Profile,
    ResendNotificationRequest,
    UpdateRequest,
)

logger = get_logger(__name__)

MY_PROFILE_PATH = "/youth-profiles/me"
PROFILES_PATH = "/youth-profiles"
RESEND_NOTIFICATION_PATH = "/youth-profiles/me/resend-notification"


class ProfileStoreError(Exception):
    """The profile store could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProfileStoreClient:
    """Thin async wrapper over the profile store's REST endpoints."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.PROFILE_SERVICE_URL
        self.api_token = api_token
        self.timeout = timeout if timeout is not None else settings.PROFILE_SERVICE_TIMEOUT
        self.transport = transport

    async def fetch_profile(self) -> Optional[Profile]:
        """Return the caller's stored profile, or None if there is none yet."""
        response = await self._send(service_get, MY_PROFILE_PATH)
        if response.status_code == 404:
            return None
        self._raise_for_status(response, "fetch profile")
        return self._parse_profile(response, "fetch profile")

    async def update_profile(self, request: UpdateRequest) -> Profile:
        response = await self._send(
            service_put, MY_PROFILE_PATH, json=request.to_payload()
        )
        self._raise_for_status(response, "update profile")
        return self._parse_profile(response, "update profile")

    async def create_profile(self, request: CreateRequest) -> Profile:
        response = await self._send(
            service_post, PROFILES_PATH, json=request.to_payload()
        )
        self._raise_for_status(response, "create profile")
        return self._parse_profile(response, "create profile")

    async def resend_notification(self, request: ResendNotificationRequest) -> None:
        response = await self._send(
            service_post, RESEND_NOTIFICATION_PATH, json=request.to_payload()
        )
        self._raise_for_status(response, "resend approver notification")

    async def _send(self, call: Any, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await call(
                service_url=self.base_url,
                path=path,
                api_token=self.api_token,
                timeout=self.timeout,
                transport=self.transport,
                **kwargs,
            )
        except httpx.RequestError as e:
            logger.warning("Profile store unreachable (%s): %s", path, e)
            raise ProfileStoreError(f"Profile store unreachable: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        logger.warning(
            "Profile store failed to %s: HTTP %s", action, response.status_code
        )
        raise ProfileStoreError(
            f"Failed to {action}: HTTP {response.status_code}",
            status_code=response.status_code,
        )

    @staticmethod
    def _parse_profile(response: httpx.Response, action: str) -> Profile:
        try:
            return Profile.model_validate(response.json())
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(
                "Profile store returned an unreadable body to %s: %s", action, e
            )
            raise ProfileStoreError(
                f"Failed to {action}: unreadable response",
                status_code=response.status_code,
            ) from e
