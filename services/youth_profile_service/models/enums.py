"""Enum definitions for the youth profile service.

Wire values follow the profile store's upper-case enum names.
"""

import enum


class AddressType(str, enum.Enum):
    HOME = "HOME"
    WORK = "WORK"
    OTHER = "OTHER"


class PhoneType(str, enum.Enum):
    HOME = "HOME"
    WORK = "WORK"
    MOBILE = "MOBILE"
    OTHER = "OTHER"


class Language(str, enum.Enum):
    """Profile (communication) language."""

    FINNISH = "FINNISH"
    SWEDISH = "SWEDISH"
    ENGLISH = "ENGLISH"


class YouthLanguage(str, enum.Enum):
    """Language spoken at home."""

    FINNISH = "FINNISH"
    SWEDISH = "SWEDISH"
    ENGLISH = "ENGLISH"


class FieldStatus(str, enum.Enum):
    """How a form field is presented and enforced."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    HIDDEN = "hidden"


class ValidationErrorKind(str, enum.Enum):
    """Symbolic validation errors; the presentation layer localizes them."""

    REQUIRED = "required"
    TOO_SHORT = "tooShort"
    TOO_LONG = "tooLong"
    INVALID_VALUE = "invalidValue"
    INVALID_EMAIL = "invalidEmail"
