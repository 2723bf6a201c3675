"""
Activity check placeholder.

Emits one fixed foot_traffic signal until a real-time activity source is
integrated. Keeps the same verify() interface as the other checks so the
aggregator does not change when it is replaced.
"""

from __future__ import annotations

from asset_oracle.verification.models import (
    CheckName,
    CheckResult,
    SignalData,
    SignalKind,
    SubmissionData,
)

ACTIVITY_SOURCE = "MockGooglePlaces"
ACTIVITY_SCORE = 0.9


class ActivityCheck:
    name = CheckName.ACTIVITY

    def verify(self, submission: SubmissionData) -> CheckResult:
        signals = {
            SignalKind.FOOT_TRAFFIC: SignalData(source=ACTIVITY_SOURCE, score=ACTIVITY_SCORE),
        }
        return CheckResult.from_score(self.name, ACTIVITY_SCORE, signals)
