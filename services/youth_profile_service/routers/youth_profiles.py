"""Youth profile form endpoints.

The evaluation endpoints are stateless: every call carries the Draft (and,
for reconciliation, the stored profile) and gets back field rules,
validation errors or the request to send to the profile store. The /me
endpoints forward to the profile store with the caller's bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status

from libs.common.logging import get_logger
from services.youth_profile_service.client import ProfileStoreClient, ProfileStoreError
from services.youth_profile_service.models import ValidationErrorKind
from services.youth_profile_service.schemas import (
    CreateRequest,
    DraftEvaluationRequest,
    FieldRulesResponse,
    FormatAddressRequest,
    FormatAddressResponse,
    Profile,
    SubmitRequest,
    UpdateRequest,
    UpdateRequestBody,
    ValidationResponse,
)
from services.youth_profile_service.services.address_validator import format_address
from services.youth_profile_service.services.profile_editor import (
    DraftValidationError,
    YouthProfileEditor,
)
from services.youth_profile_service.services.reconciler import (
    build_create_request,
    build_update_request,
    with_stored_birth_date,
)
from services.youth_profile_service.services.rule_set import ValidationRuleSet
from services.youth_profile_service.services.submission import (
    SubmissionGuardRegistry,
    SubmissionInProgressError,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/youth-profiles", tags=["youth-profiles"])

submission_guards = SubmissionGuardRegistry()


def get_rule_set() -> ValidationRuleSet:
    return ValidationRuleSet()


def get_submission_guards() -> SubmissionGuardRegistry:
    return submission_guards


def get_profile_client(
    authorization: Optional[str] = Header(default=None),
) -> ProfileStoreClient:
    """Profile store client acting with the caller's bearer token."""
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer ") :].strip() or None
    return ProfileStoreClient(api_token=token)


def _validation_failed(errors: dict[str, ValidationErrorKind]) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"errors": {path: kind.value for path, kind in errors.items()}},
    )


@router.post("/rules", response_model=FieldRulesResponse)
async def evaluate_field_rules(
    body: DraftEvaluationRequest,
    rule_set: ValidationRuleSet = Depends(get_rule_set),
):
    """Required/optional/hidden status for every form field."""
    ctx = rule_set.context(body.draft, is_editing=body.is_editing, now=body.now)
    return FieldRulesResponse(
        age=ctx.age,
        flags=ctx.flags,
        fields=rule_set.field_statuses(
            body.draft, is_editing=body.is_editing, now=body.now
        ),
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_draft(
    body: DraftEvaluationRequest,
    rule_set: ValidationRuleSet = Depends(get_rule_set),
):
    errors = rule_set.validate(body.draft, is_editing=body.is_editing, now=body.now)
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/update-request", response_model=UpdateRequest)
async def reconcile_update_request(
    body: UpdateRequestBody,
    rule_set: ValidationRuleSet = Depends(get_rule_set),
):
    """
    Build the edit-flow request for the profile store.

    The Draft is validated against the stored birth date, since it cannot be
    changed once a profile exists. Rejected with 422 while the Draft has
    validation errors.
    """
    draft = with_stored_birth_date(body.original, body.draft)
    errors = rule_set.validate(draft, is_editing=True, now=body.now)
    if errors:
        raise _validation_failed(errors)
    return build_update_request(body.original, body.draft)


@router.post("/create-request", response_model=CreateRequest)
async def reconcile_create_request(
    body: DraftEvaluationRequest,
    rule_set: ValidationRuleSet = Depends(get_rule_set),
):
    """Build the first-time registration request for the profile store."""
    errors = rule_set.validate(body.draft, is_editing=False, now=body.now)
    if errors:
        raise _validation_failed(errors)
    return build_create_request(body.draft)


@router.post("/format-address", response_model=FormatAddressResponse)
async def render_address(body: FormatAddressRequest):
    return FormatAddressResponse(
        formatted=format_address(body.profile, body.country_names)
    )


@router.post("/me/submit", response_model=Profile)
async def submit_profile(
    body: SubmitRequest,
    client: ProfileStoreClient = Depends(get_profile_client),
    rule_set: ValidationRuleSet = Depends(get_rule_set),
    guards: SubmissionGuardRegistry = Depends(get_submission_guards),
):
    """
    Validate the Draft and save it to the profile store.

    Updates the caller's stored profile when one exists, otherwise creates
    it. Store failures surface as 502, and a second submission while the
    caller's previous one is still running as 409.
    """
    guard = guards.guard_for(client.api_token)
    editor = YouthProfileEditor(client, rule_set=rule_set, guard=guard)
    try:
        try:
            await editor.load()
        except ProfileStoreError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Unable to load your profile right now. Please try again in a moment.",
            ) from e

        editor.draft = body.draft
        try:
            saved = await editor.submit(now=body.now)
        except DraftValidationError as e:
            raise _validation_failed(e.errors) from e
        except SubmissionInProgressError as e:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A submission for this profile is already in progress.",
            ) from e
    finally:
        guards.release(client.api_token, guard)

    if saved is None:
        logger.warning(
            "Youth profile submission failed",
            extra={"extra_fields": {"status_code": editor.guard.error.status_code}},
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unable to save your profile right now. Please try again in a moment.",
        )
    return saved


@router.post("/me/resend-notification", status_code=status.HTTP_204_NO_CONTENT)
async def resend_approver_notification(
    client: ProfileStoreClient = Depends(get_profile_client),
):
    """Ask the profile store to e-mail the approval request again."""
    editor = YouthProfileEditor(client)
    if not await editor.resend_notification(client.api_token):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unable to resend the approval request right now.",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
