"""
Ownership check: is the claimed SPV active and is the title deed present?

score = 0.6 * registry + 0.4 * deed. Both signals are binary, so the check only
passes (score > 0.8) when the registry reports the entity active AND a deed
hash was supplied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from asset_oracle.integrations.spv_fingerprint import detect_spv_fingerprint
from asset_oracle.verification.base import DEGRADED_SCORE, call_provider
from asset_oracle.verification.models import (
    CheckName,
    CheckResult,
    SignalData,
    SignalKind,
    SubmissionData,
)

if TYPE_CHECKING:
    from asset_oracle.integrations.registry import CompanyRegistry

REGISTRY_WEIGHT = 0.6
DEED_WEIGHT = 0.4
DEED_SOURCE = "HashRegistry"


class OwnershipCheck:
    name = CheckName.OWNERSHIP

    def __init__(self, registry: CompanyRegistry) -> None:
        self._registry = registry

    def verify(self, submission: SubmissionData) -> CheckResult:
        signals: dict[SignalKind, SignalData] = {}
        fingerprint = detect_spv_fingerprint(submission.reg_id)

        active, error = call_provider(
            self._registry.is_active,
            submission.reg_id,
            check=self.name,
            signal=SignalKind.MCA_REGISTRY.value,
            submission_id=submission.id,
        )
        registry_score = 1.0 if active else DEGRADED_SCORE
        registry_evidence: dict[str, object] = {
            "active": bool(active),
            "verification_mode": fingerprint.verification_mode,
        }
        if error is not None:
            registry_evidence["error"] = error
        signals[SignalKind.MCA_REGISTRY] = SignalData(
            source=self._registry.source,
            score=registry_score,
            data=registry_evidence,
        )

        # Hash presence is taken as integrity until a deed registry lookup exists.
        deed_score = 1.0 if submission.deed_hash else 0.0
        signals[SignalKind.DEED_INTEGRITY] = SignalData(
            source=DEED_SOURCE,
            score=deed_score,
            data=submission.deed_hash,
        )

        final_score = (registry_score * REGISTRY_WEIGHT) + (deed_score * DEED_WEIGHT)
        return CheckResult.from_score(self.name, final_score, signals)
