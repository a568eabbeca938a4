"""
Age-dependent registration policy.

Pure functions with no I/O for easy testing. Thresholds are inclusive lower
bounds: an applicant whose age equals a threshold meets it.
"""

from datetime import date, datetime
from typing import NamedTuple, Optional

from libs.common.config import get_settings
from libs.common.datetime_utils import local_today, to_local_date
from services.youth_profile_service.schemas.validation import AgePolicyFlags


class AgeThresholds(NamedTuple):
    manual_registration_min: int
    photo_permission_min: int
    adult: int

    @classmethod
    def from_settings(cls) -> "AgeThresholds":
        settings = get_settings()
        return cls(
            manual_registration_min=settings.MANUAL_REGISTRATION_MIN_AGE,
            photo_permission_min=settings.PHOTO_PERMISSION_MIN_AGE,
            adult=settings.ADULT_AGE,
        )


def compute_age(birth_date: date, now: date | datetime) -> int:
    """
    Age in whole calendar years at ``now``.

    A person turns N on the calendar anniversary of their birth date (a
    Feb 29 birthday is reached on Mar 1 in common years); a birth date
    after ``now`` gives a negative age.
    """
    today = to_local_date(now)
    before_birthday = (today.month, today.day) < (birth_date.month, birth_date.day)
    return today.year - birth_date.year - int(before_birthday)


def derive_flags(
    age: int, thresholds: Optional[AgeThresholds] = None
) -> AgePolicyFlags:
    """Map an age onto the registration policy flags."""
    thresholds = thresholds or AgeThresholds.from_settings()
    return AgePolicyFlags(
        requires_manual_registration=age < thresholds.manual_registration_min,
        requires_approver_consent=age < thresholds.adult,
        asks_photo_consent=age >= thresholds.photo_permission_min,
    )


# Used while the birth date is unknown.
STRICTEST_FLAGS = AgePolicyFlags(
    requires_manual_registration=False,
    requires_approver_consent=True,
    asks_photo_consent=False,
)


def flags_for_birth_date(
    birth_date: Optional[date],
    now: Optional[date | datetime] = None,
    thresholds: Optional[AgeThresholds] = None,
) -> tuple[Optional[int], AgePolicyFlags]:
    """
    Compute (age, flags) for a birth date.

    Returns (None, STRICTEST_FLAGS) when the birth date is missing.
    """
    if birth_date is None:
        return None, STRICTEST_FLAGS
    age = compute_age(birth_date, now if now is not None else local_today())
    return age, derive_flags(age, thresholds)
