"""Youth Profile Service models package.

Re-exports the enums so that
``from services.youth_profile_service.models import AddressType`` works.
"""

from services.youth_profile_service.models.enums import (  # noqa: F401
    AddressType,
    FieldStatus,
    Language,
    PhoneType,
    ValidationErrorKind,
    YouthLanguage,
)
