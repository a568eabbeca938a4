"""Editable form state: the Draft and its address list.

A Draft is produced once by ``normalize_profile`` (or ``Draft()`` for a
fresh registration) and is then mutated field by field by the single
interactive caller.
"""

from datetime import date
from typing import Literal, Optional, Union

from pydantic import Field, model_validator

from libs.common.config import get_settings
from services.youth_profile_service.models import AddressType, Language, YouthLanguage
from services.youth_profile_service.schemas.base import CamelModel

PhotoConsent = Literal["", "true", "false"]


def _default_country_code() -> str:
    return get_settings().DEFAULT_COUNTRY_CODE


class AddressDraft(CamelModel):
    """One address entry as edited in the form."""

    # Present only for addresses loaded from the store.
    id: Optional[str] = None
    address: str = ""
    postal_code: str = ""
    city: str = ""
    country_code: str = Field(default_factory=_default_country_code)
    primary: bool = False
    address_type: AddressType = AddressType.OTHER

    def is_blank(self) -> bool:
        """True when nothing beyond the defaults has been filled in."""
        return not (
            self.id
            or self.address.strip()
            or self.postal_code.strip()
            or self.city.strip()
        )


class AddressSnapshot(CamelModel):
    """Point-in-time copy of an AddressListModel."""

    primary: AddressDraft
    secondaries: list[AddressDraft] = Field(default_factory=list)


class AddressListModel(CamelModel):
    """The primary address plus an ordered list of secondary addresses.

    Add and remove are plain state transitions; whatever UI triggers them is
    not this model's concern.
    """

    primary: AddressDraft = Field(default_factory=lambda: AddressDraft(primary=True))
    secondaries: list[AddressDraft] = Field(default_factory=list)

    @model_validator(mode="after")
    def enforce_single_primary(self) -> "AddressListModel":
        self.primary.primary = True
        for entry in self.secondaries:
            entry.primary = False
        return self

    def add_secondary(
        self, defaults: Optional[Union[AddressDraft, dict]] = None
    ) -> int:
        """Append a secondary address and return its index."""
        if defaults is None:
            entry = AddressDraft()
        elif isinstance(defaults, AddressDraft):
            entry = defaults.model_copy(deep=True)
        else:
            entry = AddressDraft.model_validate(defaults)
        entry.primary = False
        self.secondaries.append(entry)
        return len(self.secondaries) - 1

    def remove_secondary(self, index: int) -> None:
        """Remove the secondary at ``index``; out-of-range indexes are ignored."""
        if 0 <= index < len(self.secondaries):
            del self.secondaries[index]

    def snapshot(self) -> AddressSnapshot:
        return AddressSnapshot(
            primary=self.primary.model_copy(deep=True),
            secondaries=[entry.model_copy(deep=True) for entry in self.secondaries],
        )


class Draft(CamelModel):
    """In-progress form values for creating or editing a youth profile."""

    first_name: str = ""
    last_name: str = ""
    # Read-only in the form; shown for reference.
    email: str = ""
    phone: str = ""
    birth_date: Optional[date] = None

    school_name: str = ""
    school_class: str = ""

    approver_first_name: str = ""
    approver_last_name: str = ""
    approver_phone: str = ""
    approver_email: str = ""

    profile_language: Language = Language.FINNISH
    language_at_home: YouthLanguage = YouthLanguage.FINNISH
    photo_usage_approved: PhotoConsent = "false"

    # Only meaningful on first-time creation.
    terms: bool = False

    addresses: AddressListModel = Field(default_factory=AddressListModel)
