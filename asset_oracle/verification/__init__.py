"""
Verification checks: existence, ownership and activity.

Every check implements verify(submission) -> CheckResult and never raises
because of a provider failure: the failing signal is degraded to 0.0 instead.
"""

from asset_oracle.verification.activity import ActivityCheck
from asset_oracle.verification.base import VerificationCheck
from asset_oracle.verification.existence import ExistenceCheck
from asset_oracle.verification.models import (
    AttestationData,
    CheckName,
    CheckResult,
    Coordinates,
    LedgerOutcome,
    LedgerStatus,
    OracleResult,
    SignalData,
    SignalKind,
    SubmissionData,
)
from asset_oracle.verification.ownership import OwnershipCheck

__all__ = [
    "ActivityCheck",
    "AttestationData",
    "CheckName",
    "CheckResult",
    "Coordinates",
    "ExistenceCheck",
    "LedgerOutcome",
    "LedgerStatus",
    "OracleResult",
    "OwnershipCheck",
    "SignalData",
    "SignalKind",
    "SubmissionData",
    "VerificationCheck",
]
