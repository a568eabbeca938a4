"""
Field rules for the youth profile form.

Every rule is evaluated against the live Draft on each pass; nothing is
cached between passes, so a changed birth date immediately changes which
fields are required.
"""

from datetime import date, datetime
from typing import Callable, NamedTuple, Optional

from libs.common.datetime_utils import to_local_date, utc_now
from services.youth_profile_service.models import FieldStatus, ValidationErrorKind
from services.youth_profile_service.schemas.draft import Draft
from services.youth_profile_service.schemas.validation import AgePolicyFlags
from services.youth_profile_service.services.address_validator import validate_address
from services.youth_profile_service.services.age_policy import (
    AgeThresholds,
    flags_for_birth_date,
)
from services.youth_profile_service.services.field_checks import (
    check_email,
    check_text,
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
PHONE_MIN_LENGTH = 6
SCHOOL_NAME_MAX_LENGTH = 128
SCHOOL_CLASS_MAX_LENGTH = 10

PHOTO_CONSENT_CHOICES = ("true", "false")

PRIMARY_ADDRESS_PREFIX = "primaryAddress."
PRIMARY_ADDRESS_FIELDS = ("address", "postalCode", "city")


class RuleContext(NamedTuple):
    draft: Draft
    flags: AgePolicyFlags
    age: Optional[int]
    is_editing: bool


StatusFn = Callable[[RuleContext], FieldStatus]
CheckFn = Callable[[RuleContext, FieldStatus], Optional[ValidationErrorKind]]


class FieldRule(NamedTuple):
    path: str
    status: StatusFn
    check: CheckFn


# ---------------------------------------------------------------------------
# Status functions
# ---------------------------------------------------------------------------


def _always(status: FieldStatus) -> StatusFn:
    return lambda ctx: status


def _approver_status(ctx: RuleContext) -> FieldStatus:
    if ctx.flags.requires_approver_consent:
        return FieldStatus.REQUIRED
    return FieldStatus.OPTIONAL


def _photo_consent_status(ctx: RuleContext) -> FieldStatus:
    # Still enforced while hidden; the normalized default answers it.
    if ctx.flags.asks_photo_consent:
        return FieldStatus.REQUIRED
    return FieldStatus.HIDDEN


def _terms_status(ctx: RuleContext) -> FieldStatus:
    return FieldStatus.HIDDEN if ctx.is_editing else FieldStatus.REQUIRED


# ---------------------------------------------------------------------------
# Check functions
# ---------------------------------------------------------------------------


def _text(
    attr: str, min_length: Optional[int] = None, max_length: Optional[int] = None
) -> CheckFn:
    def check(ctx: RuleContext, status: FieldStatus) -> Optional[ValidationErrorKind]:
        return check_text(
            getattr(ctx.draft, attr),
            required=status is FieldStatus.REQUIRED,
            min_length=min_length,
            max_length=max_length,
        )

    return check


def _email(attr: str) -> CheckFn:
    def check(ctx: RuleContext, status: FieldStatus) -> Optional[ValidationErrorKind]:
        return check_email(
            getattr(ctx.draft, attr), required=status is FieldStatus.REQUIRED
        )

    return check


def _check_birth_date(
    ctx: RuleContext, status: FieldStatus
) -> Optional[ValidationErrorKind]:
    if ctx.draft.birth_date is None:
        return ValidationErrorKind.REQUIRED
    if ctx.age is not None and ctx.age < 0:
        return ValidationErrorKind.INVALID_VALUE
    if not ctx.is_editing and ctx.flags.requires_manual_registration:
        return ValidationErrorKind.INVALID_VALUE
    return None


def _check_photo_consent(
    ctx: RuleContext, status: FieldStatus
) -> Optional[ValidationErrorKind]:
    if ctx.draft.photo_usage_approved not in PHOTO_CONSENT_CHOICES:
        return ValidationErrorKind.REQUIRED
    return None


def _check_terms(ctx: RuleContext, status: FieldStatus) -> Optional[ValidationErrorKind]:
    if status is FieldStatus.REQUIRED and not ctx.draft.terms:
        return ValidationErrorKind.REQUIRED
    return None


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "firstName",
        _always(FieldStatus.REQUIRED),
        _text("first_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH),
    ),
    FieldRule(
        "lastName",
        _always(FieldStatus.REQUIRED),
        _text("last_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH),
    ),
    FieldRule("birthDate", _always(FieldStatus.REQUIRED), _check_birth_date),
    FieldRule(
        "phone", _always(FieldStatus.REQUIRED), _text("phone", PHONE_MIN_LENGTH)
    ),
    FieldRule(
        "schoolName",
        _always(FieldStatus.OPTIONAL),
        _text("school_name", max_length=SCHOOL_NAME_MAX_LENGTH),
    ),
    FieldRule(
        "schoolClass",
        _always(FieldStatus.OPTIONAL),
        _text("school_class", max_length=SCHOOL_CLASS_MAX_LENGTH),
    ),
    FieldRule(
        "approverFirstName",
        _approver_status,
        _text("approver_first_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH),
    ),
    FieldRule(
        "approverLastName",
        _approver_status,
        _text("approver_last_name", NAME_MIN_LENGTH, NAME_MAX_LENGTH),
    ),
    FieldRule(
        "approverPhone", _approver_status, _text("approver_phone", PHONE_MIN_LENGTH)
    ),
    FieldRule("approverEmail", _approver_status, _email("approver_email")),
    FieldRule("photoUsageApproved", _photo_consent_status, _check_photo_consent),
    FieldRule("terms", _terms_status, _check_terms),
)


class ValidationRuleSet:
    """Evaluates field statuses and validation errors for a Draft."""

    def __init__(
        self,
        thresholds: Optional[AgeThresholds] = None,
        rules: tuple[FieldRule, ...] = FIELD_RULES,
    ):
        self.thresholds = thresholds
        self.rules = rules

    def context(
        self,
        draft: Draft,
        *,
        is_editing: bool,
        now: Optional[date | datetime] = None,
    ) -> RuleContext:
        today = to_local_date(now if now is not None else utc_now())
        age, flags = flags_for_birth_date(draft.birth_date, today, self.thresholds)
        return RuleContext(draft=draft, flags=flags, age=age, is_editing=is_editing)

    def field_statuses(
        self,
        draft: Draft,
        *,
        is_editing: bool,
        now: Optional[date | datetime] = None,
    ) -> dict[str, FieldStatus]:
        """Status of every field, including one entry per address field."""
        ctx = self.context(draft, is_editing=is_editing, now=now)
        statuses = {rule.path: rule.status(ctx) for rule in self.rules}
        for name in PRIMARY_ADDRESS_FIELDS:
            statuses[f"{PRIMARY_ADDRESS_PREFIX}{name}"] = FieldStatus.REQUIRED
        for index, _ in enumerate(draft.addresses.secondaries):
            for name in PRIMARY_ADDRESS_FIELDS:
                statuses[f"addresses.{index}.{name}"] = FieldStatus.OPTIONAL
        return statuses

    def validate(
        self,
        draft: Draft,
        *,
        is_editing: bool,
        now: Optional[date | datetime] = None,
    ) -> dict[str, ValidationErrorKind]:
        """Map of field path to error kind; empty when the draft is valid."""
        ctx = self.context(draft, is_editing=is_editing, now=now)
        errors: dict[str, ValidationErrorKind] = {}

        for rule in self.rules:
            kind = rule.check(ctx, rule.status(ctx))
            if kind is not None:
                errors[rule.path] = kind

        for error in validate_address(
            draft.addresses.primary, required=True, prefix=PRIMARY_ADDRESS_PREFIX
        ):
            errors[error.path] = error.kind

        for index, entry in enumerate(draft.addresses.secondaries):
            if entry.is_blank():
                continue
            for error in validate_address(
                entry, required=False, prefix=f"addresses.{index}."
            ):
                errors[error.path] = error.kind

        return errors

    def is_valid(
        self,
        draft: Draft,
        *,
        is_editing: bool,
        now: Optional[date | datetime] = None,
    ) -> bool:
        return not self.validate(draft, is_editing=is_editing, now=now)
