from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from libs.common.config import get_settings
from services.youth_profile_service.app.main import app
from services.youth_profile_service.routers.youth_profiles import get_rule_set


@pytest.fixture(autouse=True)
def fresh_settings():
    """
    Clear cached settings around every test so env overrides made with
    monkeypatch take effect and do not leak into other tests.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient bound to the in-process FastAPI app.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def override_rule_set():
    """Swap the rule set dependency for the duration of a test."""

    def _override(rule_set):
        app.dependency_overrides[get_rule_set] = lambda: rule_set

    yield _override
    app.dependency_overrides.pop(get_rule_set, None)
