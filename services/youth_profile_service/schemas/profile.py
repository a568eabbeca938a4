"""Read-only snapshot of a stored youth profile.

Every relation may be missing: a profile is not guaranteed to have a primary
address, phone or e-mail yet, and the youth sub-record may not exist.
"""

from datetime import date
from typing import Optional

from pydantic import Field

from services.youth_profile_service.models import (
    AddressType,
    Language,
    PhoneType,
    YouthLanguage,
)
from services.youth_profile_service.schemas.base import CamelModel


class ProfileAddress(CamelModel):
    id: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country_code: Optional[str] = None
    primary: bool = False
    address_type: Optional[AddressType] = None


class ProfilePhone(CamelModel):
    id: Optional[str] = None
    phone: Optional[str] = None
    phone_type: Optional[PhoneType] = None
    primary: bool = True


class ProfileEmail(CamelModel):
    id: Optional[str] = None
    email: Optional[str] = None


class YouthProfileData(CamelModel):
    """Youth-specific part of the profile."""

    birth_date: Optional[date] = None
    school_name: Optional[str] = None
    school_class: Optional[str] = None
    approver_first_name: Optional[str] = None
    approver_last_name: Optional[str] = None
    approver_phone: Optional[str] = None
    approver_email: Optional[str] = None
    language_at_home: Optional[YouthLanguage] = None
    photo_usage_approved: Optional[bool] = None


class Profile(CamelModel):
    """Stored profile as returned by the profile store."""

    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    language: Optional[Language] = None
    primary_email: Optional[ProfileEmail] = None
    primary_phone: Optional[ProfilePhone] = None
    primary_address: Optional[ProfileAddress] = None
    # All stored addresses; the primary one may be repeated here.
    addresses: list[ProfileAddress] = Field(default_factory=list)
    youth_profile: Optional[YouthProfileData] = None

    def secondary_addresses(self) -> list[ProfileAddress]:
        """Stored addresses other than the primary one, in stored order."""
        primary_id = self.primary_address.id if self.primary_address else None
        return [
            a
            for a in self.addresses
            if not a.primary and (a.id is None or a.id != primary_id)
        ]
