"""
Address validation and formatting.

Postal codes are checked against a per-country pattern when one is
registered; any other country falls back to a generic length rule.
"""

import re
from typing import Mapping, Optional

from libs.common.config import get_settings
from services.youth_profile_service.models import ValidationErrorKind
from services.youth_profile_service.schemas.draft import AddressDraft
from services.youth_profile_service.schemas.profile import Profile
from services.youth_profile_service.schemas.validation import FieldError
from services.youth_profile_service.services.field_checks import check_text

ADDRESS_MIN_LENGTH = 2
ADDRESS_MAX_LENGTH = 255
CITY_MIN_LENGTH = 2
CITY_MAX_LENGTH = 255
# Generic rule: postal codes must be strictly shorter than this.
GENERIC_POSTAL_CODE_CEILING = 32

POSTAL_CODE_PATTERNS: dict[str, re.Pattern] = {
    code: re.compile(pattern)
    for code, pattern in {
        "FI": r"^\d{5}$",
        "AX": r"^22\d{3}$",
        "SE": r"^\d{3}\s?\d{2}$",
        "NO": r"^\d{4}$",
        "DK": r"^\d{4}$",
        "IS": r"^\d{3}$",
        "EE": r"^\d{5}$",
        "LV": r"^LV-\d{4}$",
        "LT": r"^(LT-)?\d{5}$",
        "DE": r"^\d{5}$",
        "AT": r"^\d{4}$",
        "CH": r"^\d{4}$",
        "FR": r"^\d{5}$",
        "ES": r"^\d{5}$",
        "IT": r"^\d{5}$",
        "NL": r"^\d{4}\s?[A-Za-z]{2}$",
        "BE": r"^\d{4}$",
        "PL": r"^\d{2}-\d{3}$",
        "RU": r"^\d{6}$",
        "GB": r"^[A-Za-z]{1,2}\d[A-Za-z\d]?\s?\d[A-Za-z]{2}$",
        "US": r"^\d{5}(-\d{4})?$",
        "CA": r"^[A-Za-z]\d[A-Za-z]\s?\d[A-Za-z]\d$",
        "JP": r"^\d{3}-?\d{4}$",
    }.items()
}


def has_postal_code_rule(country_code: Optional[str]) -> bool:
    return (country_code or "").upper() in POSTAL_CODE_PATTERNS


def validate_postal_code(postal_code: Optional[str], country_code: Optional[str]) -> bool:
    """Return True when ``postal_code`` is acceptable for ``country_code``."""
    postal_code = postal_code or ""
    pattern = POSTAL_CODE_PATTERNS.get((country_code or "").upper())
    if pattern is not None:
        return bool(pattern.match(postal_code.strip()))
    return 0 < len(postal_code) < GENERIC_POSTAL_CODE_CEILING


def validate_address(
    address: AddressDraft, *, required: bool, prefix: str = ""
) -> list[FieldError]:
    """
    Validate one address entry.

    ``required`` is True for the primary address. Secondary entries use the
    same length and postal code rules, but empty street/city are accepted.
    Error paths are ``prefix`` + field name, e.g. ``primaryAddress.city``.
    """
    errors: list[FieldError] = []

    kind = check_text(
        address.address,
        required=required,
        min_length=ADDRESS_MIN_LENGTH,
        max_length=ADDRESS_MAX_LENGTH,
    )
    if kind:
        errors.append(FieldError(path=f"{prefix}address", kind=kind))

    if required and not address.postal_code:
        errors.append(
            FieldError(path=f"{prefix}postalCode", kind=ValidationErrorKind.REQUIRED)
        )
    elif not validate_postal_code(address.postal_code, address.country_code):
        errors.append(
            FieldError(
                path=f"{prefix}postalCode", kind=ValidationErrorKind.INVALID_VALUE
            )
        )

    kind = check_text(
        address.city,
        required=required,
        min_length=CITY_MIN_LENGTH,
        max_length=CITY_MAX_LENGTH,
    )
    if kind:
        errors.append(FieldError(path=f"{prefix}city", kind=kind))

    return errors


def format_address(profile: Profile, country_names: Mapping[str, str]) -> str:
    """
    Render the primary address as two lines.

    ``"<address>, <postal code> <city>\\n<country name>"``. Empty parts are
    kept so the separators stay in place; a profile without a primary
    address renders as an empty string.
    """
    primary = profile.primary_address
    if primary is None:
        return ""
    country_code = (primary.country_code or get_settings().DEFAULT_COUNTRY_CODE).upper()
    country_name = country_names.get(country_code, country_code)
    return (
        f"{primary.address or ''}, {primary.postal_code or ''} {primary.city or ''}"
        f"\n{country_name}"
    )
