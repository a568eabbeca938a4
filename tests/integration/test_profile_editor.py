"""Integration tests for the create/edit workflow against a mocked profile store.

The profile store is replaced with an httpx.MockTransport so the full path
from Draft to HTTP payload and back is exercised.
"""

import json

import httpx
import pytest

from services.youth_profile_service.client import ProfileStoreClient, ProfileStoreError
from services.youth_profile_service.services.profile_editor import (
    DraftValidationError,
    YouthProfileEditor,
)
from services.youth_profile_service.services.submission import SubmissionGuard
from tests.factories import TODAY, DraftFactory, ProfileFactory, birth_date_for_age


class FakeProfileStore:
    """Records requests and answers them from a stored profile."""

    def __init__(self, profile=None, fail_writes_with=None):
        self.profile = profile
        self.fail_writes_with = fail_writes_with
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path == "/youth-profiles/me":
            if self.profile is None:
                return httpx.Response(404, json={"detail": "Not found"})
            return httpx.Response(200, json=self.profile.to_payload())

        if self.fail_writes_with is not None:
            return httpx.Response(self.fail_writes_with, json={"detail": "error"})

        if path == "/youth-profiles/me/resend-notification":
            return httpx.Response(204)

        body = json.loads(request.content)
        saved = ProfileFactory.create(
            first_name=body["profile"]["firstName"],
            last_name=body["profile"]["lastName"],
        )
        self.profile = saved
        return httpx.Response(200, json=saved.to_payload())

    def client(self, **kwargs) -> ProfileStoreClient:
        return ProfileStoreClient(
            base_url="http://profile-store.test",
            transport=httpx.MockTransport(self.handler),
            **kwargs,
        )


def _sent_json(request: httpx.Request) -> dict:
    return json.loads(request.content)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_load_existing_profile_starts_edit_flow(stored_profile):
    store = FakeProfileStore(stored_profile)
    editor = YouthProfileEditor(store.client())

    draft = await editor.load()

    assert editor.is_editing is True
    assert draft.first_name == "Test"
    assert draft.addresses.primary.id == "A1"
    assert draft.terms is True


@pytest.mark.asyncio
@pytest.mark.integration
async def test_load_missing_profile_starts_create_flow():
    store = FakeProfileStore(None)
    editor = YouthProfileEditor(store.client())

    draft = await editor.load()

    assert editor.is_editing is False
    assert draft.terms is False
    assert editor.field_statuses(now=TODAY)["terms"].value == "required"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_load_failure_raises_store_error():
    def handler(request):
        return httpx.Response(500)

    client = ProfileStoreClient(
        base_url="http://profile-store.test", transport=httpx.MockTransport(handler)
    )
    editor = YouthProfileEditor(client)

    with pytest.raises(ProfileStoreError) as exc_info:
        await editor.load()
    assert exc_info.value.status_code == 500


# ---------------------------------------------------------------------------
# Submitting
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_submission_sends_update_with_ids(stored_profile):
    store = FakeProfileStore(stored_profile)
    editor = YouthProfileEditor(store.client(api_token="secret"))
    await editor.load()

    editor.draft.first_name = "Renamed"
    saved = await editor.submit(now=TODAY)

    assert saved is not None
    assert saved.first_name == "Renamed"
    update = store.requests[-1]
    assert update.method == "PUT"
    assert update.url.path == "/youth-profiles/me"
    assert update.headers["Authorization"] == "Bearer secret"
    body = _sent_json(update)
    assert body["profile"]["updateAddresses"][0]["id"] == "A1"
    assert body["profile"]["updatePhones"][0]["id"] == "P1"
    assert editor.draft.first_name == "Renamed"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_edit_without_primary_address_sends_null_slot():
    original = ProfileFactory.create(primary_address=None, addresses=[])
    store = FakeProfileStore(original)
    editor = YouthProfileEditor(store.client())
    await editor.load()

    editor.draft.addresses.primary.address = "Uusikatu 3"
    editor.draft.addresses.primary.postal_code = "00200"
    editor.draft.addresses.primary.city = "Helsinki"
    await editor.submit(now=TODAY)

    body = _sent_json(store.requests[-1])
    assert body["profile"]["updateAddresses"] == [None]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_submission_posts_new_profile(valid_draft):
    store = FakeProfileStore(None)
    editor = YouthProfileEditor(store.client())
    await editor.load()
    editor.draft = valid_draft

    saved = await editor.submit(now=TODAY)

    assert saved is not None
    create = store.requests[-1]
    assert create.method == "POST"
    assert create.url.path == "/youth-profiles"
    body = _sent_json(create)
    assert body["profile"]["addAddresses"][-1]["primary"] is True
    assert "id" not in body["profile"]["addAddresses"][-1]
    assert body["youthProfile"]["birthDate"] == valid_draft.birth_date.isoformat()
    assert editor.is_editing is True


@pytest.mark.asyncio
@pytest.mark.integration
async def test_invalid_draft_is_not_sent(stored_profile):
    store = FakeProfileStore(stored_profile)
    editor = YouthProfileEditor(store.client())
    await editor.load()
    editor.draft.phone = ""

    with pytest.raises(DraftValidationError) as exc_info:
        await editor.submit(now=TODAY)

    assert exc_info.value.errors == {"phone": "required"}
    assert [r.method for r in store.requests] == ["GET"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_too_young_applicant_cannot_create(valid_draft):
    store = FakeProfileStore(None)
    editor = YouthProfileEditor(store.client())
    valid_draft.birth_date = birth_date_for_age(12)
    editor.draft = valid_draft

    with pytest.raises(DraftValidationError) as exc_info:
        await editor.submit(now=TODAY)
    assert "birthDate" in exc_info.value.errors


@pytest.mark.asyncio
@pytest.mark.integration
async def test_store_failure_keeps_draft_and_reports(stored_profile):
    store = FakeProfileStore(stored_profile, fail_writes_with=500)
    reported = []
    editor = YouthProfileEditor(
        store.client(), guard=SubmissionGuard(error_reporter=reported.append)
    )
    await editor.load()
    editor.draft.first_name = "Unsaved"

    assert await editor.submit(now=TODAY) is None

    assert editor.draft.first_name == "Unsaved"
    assert editor.guard.show_notification is True
    assert isinstance(reported[0], ProfileStoreError)
    assert reported[0].status_code == 500


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unreachable_store_is_reported():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = ProfileStoreClient(
        base_url="http://profile-store.test", transport=httpx.MockTransport(handler)
    )
    reported = []
    editor = YouthProfileEditor(
        client, guard=SubmissionGuard(error_reporter=reported.append)
    )
    editor.draft = DraftFactory.create()

    assert await editor.submit(now=TODAY) is None
    assert isinstance(reported[0], ProfileStoreError)
    assert reported[0].status_code is None


# ---------------------------------------------------------------------------
# Approver notification
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_resend_notification(stored_profile):
    store = FakeProfileStore(stored_profile)
    editor = YouthProfileEditor(store.client())

    assert await editor.resend_notification("token-1") is True

    request = store.requests[-1]
    assert request.url.path == "/youth-profiles/me/resend-notification"
    assert _sent_json(request) == {
        "youthProfile": {"resendRequestNotification": True},
        "profileApiToken": "token-1",
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_resend_notification_failure(stored_profile):
    store = FakeProfileStore(stored_profile, fail_writes_with=502)
    editor = YouthProfileEditor(
        store.client(), guard=SubmissionGuard(error_reporter=lambda e: None)
    )

    assert await editor.resend_notification() is False
    assert editor.guard.error.status_code == 502


# ---------------------------------------------------------------------------
# Stored birth date and unreadable store responses
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_edited_birth_date_does_not_relax_approver_rules(stored_profile):
    store = FakeProfileStore(stored_profile)
    editor = YouthProfileEditor(store.client())
    await editor.load()

    editor.draft.birth_date = birth_date_for_age(30)
    editor.draft.approver_first_name = ""
    editor.draft.approver_last_name = ""
    editor.draft.approver_phone = ""
    editor.draft.approver_email = ""

    assert editor.field_statuses(now=TODAY)["approverPhone"].value == "required"
    with pytest.raises(DraftValidationError) as exc_info:
        await editor.submit(now=TODAY)

    assert exc_info.value.errors == {
        "approverFirstName": "required",
        "approverLastName": "required",
        "approverPhone": "required",
        "approverEmail": "required",
    }
    assert [r.method for r in store.requests] == ["GET"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unreadable_save_response_is_reported(stored_profile):
    def handler(request):
        if request.method == "GET":
            return httpx.Response(200, json=stored_profile.to_payload())
        return httpx.Response(
            200, text="<html>gateway</html>", headers={"content-type": "text/html"}
        )

    client = ProfileStoreClient(
        base_url="http://profile-store.test", transport=httpx.MockTransport(handler)
    )
    reported = []
    editor = YouthProfileEditor(
        client, guard=SubmissionGuard(error_reporter=reported.append)
    )
    await editor.load()
    editor.draft.first_name = "Retry"

    assert await editor.submit(now=TODAY) is None

    assert isinstance(reported[0], ProfileStoreError)
    assert reported[0].status_code == 200
    assert editor.guard.show_notification is True
    assert editor.draft.first_name == "Retry"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_profile_with_wrong_shape_raises_store_error():
    def handler(request):
        return httpx.Response(200, json={"addresses": "not-a-list"})

    client = ProfileStoreClient(
        base_url="http://profile-store.test", transport=httpx.MockTransport(handler)
    )

    with pytest.raises(ProfileStoreError):
        await client.fetch_profile()


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unreachable_store_is_logged_with_path(caplog):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = ProfileStoreClient(
        base_url="http://profile-store.test", transport=httpx.MockTransport(handler)
    )

    with caplog.at_level("WARNING", logger="services.youth_profile_service.client"):
        with pytest.raises(ProfileStoreError):
            await client.fetch_profile()

    record = caplog.records[-1]
    assert record.msg == "Profile store unreachable (%s): %s"
    assert record.args[0] == "/youth-profiles/me"
    assert "connection refused" in record.getMessage()
