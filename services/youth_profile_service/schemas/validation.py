"""Validation result types."""

from pydantic import ConfigDict

from services.youth_profile_service.models import ValidationErrorKind
from services.youth_profile_service.schemas.base import CamelModel


class FieldError(CamelModel):
    """A single field-level validation failure."""

    model_config = ConfigDict(frozen=True)

    path: str
    kind: ValidationErrorKind


class AgePolicyFlags(CamelModel):
    """Policy flags derived from the applicant's age."""

    model_config = ConfigDict(frozen=True)

    requires_manual_registration: bool
    requires_approver_consent: bool
    asks_photo_consent: bool
