"""
Profile reconciliation: stored profile + edited Draft -> store request.

The primary address and primary phone are update-only. Every profile has
exactly one slot for each, and the edit flow may only touch a slot that
already exists; when the stored profile has no id for it, the slot is sent
as ``None``. Secondary addresses are an open collection and may be created
through the same request.
"""

from datetime import date
from typing import Optional

from libs.common.config import get_settings
from libs.common.logging import get_logger
from services.youth_profile_service.models import AddressType, Language, YouthLanguage
from services.youth_profile_service.schemas.draft import (
    AddressDraft,
    AddressListModel,
    Draft,
)
from services.youth_profile_service.schemas.profile import Profile, ProfileAddress
from services.youth_profile_service.schemas.requests import (
    AddressUpdate,
    CreateRequest,
    PhoneUpdate,
    ProfileCreate,
    ProfileUpdate,
    ResendNotificationRequest,
    UpdateRequest,
    YouthProfileUpdate,
)

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Loading: Profile -> Draft
# ---------------------------------------------------------------------------


def _address_draft(address: ProfileAddress, *, primary: bool) -> AddressDraft:
    return AddressDraft(
        id=address.id,
        address=address.address or "",
        postal_code=address.postal_code or "",
        city=address.city or "",
        country_code=address.country_code or get_settings().DEFAULT_COUNTRY_CODE,
        primary=primary,
        address_type=address.address_type or AddressType.OTHER,
    )


def normalize_profile(profile: Optional[Profile], *, is_editing: bool) -> Draft:
    """
    Build a fully populated Draft from a stored profile.

    This is the only place where defaults are filled in: text fields become
    empty strings, the country falls back to DEFAULT_COUNTRY_CODE, languages
    to Finnish and photo consent to "false". ``terms`` starts accepted when
    editing, since it only applies to first-time creation.
    """
    if profile is None:
        return Draft(terms=is_editing)

    youth = profile.youth_profile
    primary = profile.primary_address

    addresses = AddressListModel(
        primary=(
            _address_draft(primary, primary=True)
            if primary is not None
            else AddressDraft(primary=True)
        ),
        secondaries=[
            _address_draft(address, primary=False)
            for address in profile.secondary_addresses()
        ],
    )

    return Draft(
        first_name=profile.first_name or "",
        last_name=profile.last_name or "",
        email=(profile.primary_email.email if profile.primary_email else None) or "",
        phone=(profile.primary_phone.phone if profile.primary_phone else None) or "",
        birth_date=youth.birth_date if youth else None,
        school_name=(youth.school_name if youth else None) or "",
        school_class=(youth.school_class if youth else None) or "",
        approver_first_name=(youth.approver_first_name if youth else None) or "",
        approver_last_name=(youth.approver_last_name if youth else None) or "",
        approver_phone=(youth.approver_phone if youth else None) or "",
        approver_email=(youth.approver_email if youth else None) or "",
        profile_language=profile.language or Language.FINNISH,
        language_at_home=(youth.language_at_home if youth else None)
        or YouthLanguage.FINNISH,
        photo_usage_approved=(
            "true" if youth is not None and youth.photo_usage_approved else "false"
        ),
        terms=is_editing,
        addresses=addresses,
    )


# ---------------------------------------------------------------------------
# Submitting: Draft -> request
# ---------------------------------------------------------------------------


def _address_update(
    entry: AddressDraft, *, primary: bool, id: Optional[str] = None
) -> AddressUpdate:
    return AddressUpdate(
        id=id,
        address=entry.address,
        postal_code=entry.postal_code,
        city=entry.city,
        address_type=AddressType.OTHER,
        primary=primary,
        country_code=entry.country_code,
    )


def _youth_profile_update(
    draft: Draft, birth_date: Optional[date]
) -> YouthProfileUpdate:
    return YouthProfileUpdate(
        birth_date=birth_date,
        school_name=draft.school_name,
        school_class=draft.school_class,
        approver_first_name=draft.approver_first_name,
        approver_last_name=draft.approver_last_name,
        approver_phone=draft.approver_phone,
        approver_email=draft.approver_email,
        language_at_home=draft.language_at_home,
        photo_usage_approved=draft.photo_usage_approved == "true",
    )


def with_stored_birth_date(original: Optional[Profile], draft: Draft) -> Draft:
    """
    Draft as the edit flow must evaluate it.

    The birth date cannot be edited once a profile exists, so the stored
    value replaces whatever the Draft carries. Without an original profile
    the Draft is returned unchanged.
    """
    if original is None:
        return draft
    stored = original.youth_profile.birth_date if original.youth_profile else None
    if draft.birth_date == stored:
        return draft
    return draft.model_copy(update={"birth_date": stored})


def build_update_request(original: Optional[Profile], draft: Draft) -> UpdateRequest:
    """
    Build the edit-flow request for ``draft`` against ``original``.

    Pure: the same inputs always give an equal request.
    """
    snapshot = draft.addresses.snapshot()

    primary_address_id = (
        original.primary_address.id
        if original is not None and original.primary_address is not None
        else None
    )
    primary_phone_id = (
        original.primary_phone.id
        if original is not None and original.primary_phone is not None
        else None
    )

    if primary_address_id:
        primary_address_update = _address_update(
            snapshot.primary, primary=True, id=primary_address_id
        )
    else:
        logger.info("Stored profile has no primary address; sending null slot")
        primary_address_update = None

    if primary_phone_id:
        primary_phone_update = PhoneUpdate(
            id=primary_phone_id, phone=draft.phone, primary=True
        )
    else:
        logger.info("Stored profile has no primary phone; sending null slot")
        primary_phone_update = None

    secondary_updates = [
        _address_update(entry, primary=False, id=entry.id)
        for entry in snapshot.secondaries
        if not entry.is_blank()
    ]

    birth_date = (
        original.youth_profile.birth_date
        if original is not None and original.youth_profile is not None
        else None
    )

    return UpdateRequest(
        profile=ProfileUpdate(
            first_name=draft.first_name,
            last_name=draft.last_name,
            language=draft.profile_language,
            update_addresses=[primary_address_update, *secondary_updates],
            update_phones=[primary_phone_update],
        ),
        youth_profile=_youth_profile_update(draft, birth_date),
    )


def build_create_request(draft: Draft) -> CreateRequest:
    """
    Build the first-time registration request.

    Every relation is new: secondaries are listed first and the primary
    address last, and the phone is created as the primary phone.
    """
    snapshot = draft.addresses.snapshot()
    addresses = [
        _address_update(entry, primary=False)
        for entry in snapshot.secondaries
        if not entry.is_blank()
    ]
    addresses.append(_address_update(snapshot.primary, primary=True))

    phones = [PhoneUpdate(phone=draft.phone, primary=True)] if draft.phone else []

    return CreateRequest(
        profile=ProfileCreate(
            first_name=draft.first_name,
            last_name=draft.last_name,
            language=draft.profile_language,
            add_addresses=addresses,
            add_phones=phones,
        ),
        youth_profile=_youth_profile_update(draft, draft.birth_date),
    )


def build_resend_notification_request(
    api_token: Optional[str] = None,
) -> ResendNotificationRequest:
    """Request asking the store to send the approval e-mail again."""
    return ResendNotificationRequest(profile_api_token=api_token)
