"""Outgoing payloads for the profile store.

Relations the store must update carry their ``id``; entries without one are
created. The ``id`` key is omitted entirely when unset, while ``None`` slots
in the update lists are kept as explicit ``null`` markers.
"""

from datetime import date
from typing import Any, Optional

from pydantic import Field, model_serializer

from services.youth_profile_service.models import (
    AddressType,
    Language,
    PhoneType,
    YouthLanguage,
)
from services.youth_profile_service.schemas.base import CamelModel


class _OptionalIdModel(CamelModel):
    id: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_unset_id(self, handler: Any) -> dict:
        data = handler(self)
        if data.get("id") is None:
            data.pop("id", None)
        return data


class AddressUpdate(_OptionalIdModel):
    address: str
    postal_code: str
    city: str
    address_type: AddressType = AddressType.OTHER
    primary: bool = False
    country_code: str


class PhoneUpdate(_OptionalIdModel):
    phone: str
    phone_type: PhoneType = PhoneType.OTHER
    primary: bool = True


class YouthProfileUpdate(CamelModel):
    birth_date: Optional[date] = None
    school_name: str = ""
    school_class: str = ""
    approver_first_name: str = ""
    approver_last_name: str = ""
    approver_phone: str = ""
    approver_email: str = ""
    language_at_home: YouthLanguage = YouthLanguage.FINNISH
    photo_usage_approved: bool = False


class ProfileUpdate(CamelModel):
    first_name: str
    last_name: str
    language: Language
    update_addresses: list[Optional[AddressUpdate]] = Field(default_factory=list)
    update_phones: list[Optional[PhoneUpdate]] = Field(default_factory=list)


class UpdateRequest(CamelModel):
    """Edit-flow request: existing relations are updated, never created."""

    profile: ProfileUpdate
    youth_profile: YouthProfileUpdate


class ProfileCreate(CamelModel):
    first_name: str
    last_name: str
    language: Language
    add_addresses: list[AddressUpdate] = Field(default_factory=list)
    add_phones: list[PhoneUpdate] = Field(default_factory=list)


class CreateRequest(CamelModel):
    """First-time registration request: every relation is created."""

    profile: ProfileCreate
    youth_profile: YouthProfileUpdate


class ResendNotificationInput(CamelModel):
    resend_request_notification: bool = True


class ResendNotificationRequest(CamelModel):
    """Ask the store to e-mail the approval request to the approver again."""

    youth_profile: ResendNotificationInput = Field(
        default_factory=ResendNotificationInput
    )
    profile_api_token: Optional[str] = None
