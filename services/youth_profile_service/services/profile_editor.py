"""Create/edit workflow for a single youth profile.

Ties the pieces together: load the stored profile, normalize it into a
Draft, evaluate the rule set against the live Draft, build the store request
and submit it through the single-flight guard.
"""

from datetime import date, datetime
from typing import Optional, Union

from libs.common.logging import get_logger
from services.youth_profile_service.client import ProfileStoreClient
from services.youth_profile_service.models import FieldStatus, ValidationErrorKind
from services.youth_profile_service.schemas import (
    CreateRequest,
    Draft,
    Profile,
    UpdateRequest,
)
from services.youth_profile_service.services.reconciler import (
    build_create_request,
    build_resend_notification_request,
    build_update_request,
    normalize_profile,
    with_stored_birth_date,
)
from services.youth_profile_service.services.rule_set import ValidationRuleSet
from services.youth_profile_service.services.submission import SubmissionGuard

logger = get_logger(__name__)


class DraftValidationError(Exception):
    """Submission was blocked by field validation errors."""

    def __init__(self, errors: dict[str, ValidationErrorKind]):
        super().__init__(f"Draft has {len(errors)} invalid field(s)")
        self.errors = errors


class YouthProfileEditor:
    """Holds the Draft for one create or edit session."""

    def __init__(
        self,
        client: ProfileStoreClient,
        *,
        rule_set: Optional[ValidationRuleSet] = None,
        guard: Optional[SubmissionGuard] = None,
    ):
        self.client = client
        self.rule_set = rule_set or ValidationRuleSet()
        self.guard = guard or SubmissionGuard()
        self.original: Optional[Profile] = None
        self.draft: Draft = normalize_profile(None, is_editing=False)

    @property
    def is_editing(self) -> bool:
        return self.original is not None

    async def load(self) -> Draft:
        """Fetch the stored profile and seed the Draft from it."""
        self.original = await self.client.fetch_profile()
        self.draft = normalize_profile(self.original, is_editing=self.is_editing)
        logger.info(
            "Loaded youth profile draft",
            extra={"extra_fields": {"editing": self.is_editing}},
        )
        return self.draft

    def field_statuses(
        self, now: Optional[date | datetime] = None
    ) -> dict[str, FieldStatus]:
        return self.rule_set.field_statuses(
            self._evaluated_draft(), is_editing=self.is_editing, now=now
        )

    def validate(
        self, now: Optional[date | datetime] = None
    ) -> dict[str, ValidationErrorKind]:
        return self.rule_set.validate(
            self._evaluated_draft(), is_editing=self.is_editing, now=now
        )

    def build_request(self) -> Union[UpdateRequest, CreateRequest]:
        if self.is_editing:
            return build_update_request(self.original, self.draft)
        return build_create_request(self.draft)

    async def submit(self, now: Optional[date | datetime] = None) -> Optional[Profile]:
        """
        Validate and send the Draft.

        Returns the stored profile on success and None when the store call
        failed (see ``guard.error``) or the editor was closed meanwhile.

        Raises:
            DraftValidationError: the Draft has field errors.
            SubmissionInProgressError: a submission is already outstanding.
        """
        errors = self.validate(now=now)
        if errors:
            raise DraftValidationError(errors)

        request = self.build_request()
        if isinstance(request, UpdateRequest):
            operation = lambda: self.client.update_profile(request)  # noqa: E731
        else:
            operation = lambda: self.client.create_profile(request)  # noqa: E731

        return await self.guard.submit(operation, on_success=self._on_saved)

    async def resend_notification(self, api_token: Optional[str] = None) -> bool:
        """Ask the store to e-mail the approver again. True on success."""
        request = build_resend_notification_request(api_token)

        async def _send() -> bool:
            await self.client.resend_notification(request)
            return True

        return bool(await self.guard.submit(_send))

    def close(self) -> None:
        self.guard.close()

    def _evaluated_draft(self) -> Draft:
        if self.is_editing:
            return with_stored_birth_date(self.original, self.draft)
        return self.draft

    def _on_saved(self, profile: Profile) -> None:
        self.original = profile
        self.draft = normalize_profile(profile, is_editing=True)
        logger.info("Youth profile saved")
