"""Reusable async HTTP helper for calls to the remote profile store.

All profile-store traffic should go through this helper so that timeouts,
auth headers and logging stay in one place.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from libs.common.logging import get_logger

logger = get_logger(__name__)

# Default timeout for outbound calls (seconds).
_DEFAULT_TIMEOUT = 10.0


async def service_request(
    *,
    service_url: str,
    method: str,
    path: str,
    api_token: Optional[str] = None,
    json: Any = None,
    params: Optional[dict] = None,
    timeout: float = _DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Make an HTTP call to a remote service.

    Args:
        service_url: Base URL of the target service (e.g. settings.PROFILE_SERVICE_URL).
        method: HTTP method (GET, POST, PUT, ...).
        path: URL path on the target service (e.g. "/youth-profiles/me").
        api_token: Optional bearer token forwarded as the Authorization header.
        json: Optional JSON body.
        params: Optional query parameters.
        timeout: Request timeout in seconds.
        transport: Optional transport override, used by tests.

    Returns:
        The httpx.Response object.

    Raises:
        httpx.RequestError on connection failures.
    """
    url = f"{service_url.rstrip('/')}{path}"
    headers = {}
    if api_token:
        headers["Authorization"] = f"Bearer {api_token}"

    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        response = await client.request(
            method,
            url,
            headers=headers,
            json=json,
            params=params,
        )
    logger.debug("%s %s -> %s", method, path, response.status_code)
    return response


async def service_get(
    *,
    service_url: str,
    path: str,
    api_token: Optional[str] = None,
    params: Optional[dict] = None,
    timeout: float = _DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Convenience wrapper for GET requests."""
    return await service_request(
        service_url=service_url,
        method="GET",
        path=path,
        api_token=api_token,
        params=params,
        timeout=timeout,
        transport=transport,
    )


async def service_post(
    *,
    service_url: str,
    path: str,
    api_token: Optional[str] = None,
    json: Any = None,
    timeout: float = _DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Convenience wrapper for POST requests."""
    return await service_request(
        service_url=service_url,
        method="POST",
        path=path,
        api_token=api_token,
        json=json,
        timeout=timeout,
        transport=transport,
    )


async def service_put(
    *,
    service_url: str,
    path: str,
    api_token: Optional[str] = None,
    json: Any = None,
    timeout: float = _DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Convenience wrapper for PUT requests."""
    return await service_request(
        service_url=service_url,
        method="PUT",
        path=path,
        api_token=api_token,
        json=json,
        timeout=timeout,
        transport=transport,
    )
