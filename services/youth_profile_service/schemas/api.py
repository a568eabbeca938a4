"""Request and response bodies for the youth profile HTTP endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from services.youth_profile_service.models import FieldStatus, ValidationErrorKind
from services.youth_profile_service.schemas.base import CamelModel
from services.youth_profile_service.schemas.draft import Draft
from services.youth_profile_service.schemas.profile import Profile
from services.youth_profile_service.schemas.validation import AgePolicyFlags


class DraftEvaluationRequest(CamelModel):
    draft: Draft
    is_editing: bool = False
    # Reference instant for age calculations; defaults to now.
    now: Optional[datetime] = None


class FieldRulesResponse(CamelModel):
    age: Optional[int] = None
    flags: AgePolicyFlags
    fields: dict[str, FieldStatus]


class ValidationResponse(CamelModel):
    valid: bool
    errors: dict[str, ValidationErrorKind] = Field(default_factory=dict)


class UpdateRequestBody(CamelModel):
    original: Optional[Profile] = None
    draft: Draft
    now: Optional[datetime] = None


class FormatAddressRequest(CamelModel):
    profile: Profile
    # Localized country names keyed by ISO-3166 alpha-2 code.
    country_names: dict[str, str] = Field(default_factory=dict)


class FormatAddressResponse(CamelModel):
    formatted: str


class SubmitRequest(CamelModel):
    draft: Draft
    now: Optional[datetime] = None
