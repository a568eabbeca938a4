"""Single-flight guard around profile store submissions.

Only one submission may be outstanding at a time, since the store does not
make create/update idempotent. A submission that finishes after the owner
was closed is dropped without touching any state.
"""

from typing import Awaitable, Callable, Generic, Optional, TypeVar

from libs.common.logging import get_logger
from services.youth_profile_service.client import ProfileStoreError

logger = get_logger(__name__)

T = TypeVar("T")

ErrorReporter = Callable[[BaseException], None]


class SubmissionInProgressError(Exception):
    """A second submission was attempted while one is still outstanding."""


def log_submission_error(error: BaseException) -> None:
    """Default error reporter."""
    logger.error("Profile submission failed", exc_info=error)


class SubmissionGuard(Generic[T]):
    """Tracks the in-flight submission and the user-facing error state."""

    def __init__(self, error_reporter: Optional[ErrorReporter] = None):
        self._report = error_reporter or log_submission_error
        self._in_flight = False
        self._closed = False
        self.error: Optional[ProfileStoreError] = None
        self.show_notification = False

    @property
    def is_submitting(self) -> bool:
        return self._in_flight

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def submit(
        self,
        operation: Callable[[], Awaitable[T]],
        on_success: Optional[Callable[[T], None]] = None,
    ) -> Optional[T]:
        """
        Run ``operation`` unless another submission is outstanding.

        Returns the operation's result, or None when it failed with a
        ProfileStoreError (reported and kept in ``error``) or when the guard
        was closed before it finished.

        Raises:
            SubmissionInProgressError: a submission is already running.
        """
        if self._closed:
            logger.info("Submission ignored: owner already closed")
            return None
        if self._in_flight:
            raise SubmissionInProgressError("A submission is already in progress")

        self._in_flight = True
        try:
            result = await operation()
        except ProfileStoreError as e:
            if self._closed:
                logger.info("Submission failed after close; error discarded")
                return None
            self._report(e)
            self.error = e
            self.show_notification = True
            return None
        finally:
            self._in_flight = False

        if self._closed:
            logger.info("Submission finished after close; result discarded")
            return None

        self.error = None
        self.show_notification = False
        if on_success is not None:
            on_success(result)
        return result

    def dismiss_notification(self) -> None:
        self.show_notification = False

    def close(self) -> None:
        """Mark the owner as torn down; late results are discarded."""
        self._closed = True


class SubmissionGuardRegistry:
    """
    One shared guard per caller, so overlapping requests from the same
    caller are single-flight too.

    Guards live in process memory and are dropped once idle. Callers
    without a key get a private guard.
    """

    def __init__(self):
        self._guards: dict[str, SubmissionGuard] = {}

    def guard_for(self, key: Optional[str]) -> SubmissionGuard:
        if key is None:
            return SubmissionGuard()
        return self._guards.setdefault(key, SubmissionGuard())

    def release(self, key: Optional[str], guard: SubmissionGuard) -> None:
        """Forget ``guard`` unless a submission through it is still running."""
        if key is None or guard.is_submitting:
            return
        if self._guards.get(key) is guard:
            del self._guards[key]

    def __len__(self) -> int:
        return len(self._guards)
