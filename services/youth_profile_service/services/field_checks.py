"""Single-value checks shared by the address validator and the rule set.

An empty value counts as absent: it only fails when the field is required,
and length/format checks are skipped for it.
"""

from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from services.youth_profile_service.models import ValidationErrorKind

_email_adapter = TypeAdapter(EmailStr)


def check_text(
    value: Optional[str],
    *,
    required: bool,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> Optional[ValidationErrorKind]:
    """Return the first failing error kind for a text value, or None."""
    if not value:
        return ValidationErrorKind.REQUIRED if required else None
    if min_length is not None and len(value) < min_length:
        return ValidationErrorKind.TOO_SHORT
    if max_length is not None and len(value) > max_length:
        return ValidationErrorKind.TOO_LONG
    return None


def is_valid_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def check_email(value: Optional[str], *, required: bool) -> Optional[ValidationErrorKind]:
    if not value:
        return ValidationErrorKind.REQUIRED if required else None
    if not is_valid_email(value):
        return ValidationErrorKind.INVALID_EMAIL
    return None
