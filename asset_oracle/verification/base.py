"""Shared check interface and degraded-signal helper."""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar

from asset_oracle.oracle_logging import get_logger
from asset_oracle.verification.models import CheckName, CheckResult, SubmissionData

logger = get_logger(__name__)

# Score substituted for a signal whose provider failed.
DEGRADED_SCORE = 0.0

T = TypeVar("T")


class VerificationCheck(Protocol):
    name: CheckName

    def verify(self, submission: SubmissionData) -> CheckResult:
        ...


def call_provider(
    fn: Callable[..., T],
    *args: Any,
    check: CheckName,
    signal: str,
    submission_id: str,
) -> tuple[T | None, str | None]:
    """
    Call a provider; return (value, None) or (None, error) when it raises.
    Provider failures never propagate out of a check.
    """
    try:
        return fn(*args), None
    except Exception as e:
        logger.warning(
            "check_signal_degraded",
            check=check.value,
            signal=signal,
            submission_id=submission_id,
            error=str(e),
        )
        return None, str(e)
