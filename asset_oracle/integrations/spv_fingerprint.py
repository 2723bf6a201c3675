"""
Mock SPV detection from the registration id (CIN) pattern.

Registration ids starting with MOCK-, DEMO- or TEST- (any case) belong to
test/demo SPVs: legal-wrapper verification is skipped for them and ledger
records are flagged as mock. Oracle verification itself always runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MOCK_SPV_PATTERNS = ("MOCK-", "DEMO-", "TEST-")

VERIFICATION_MODE_FULL = "FULL"
VERIFICATION_MODE_SKIP_LEGAL = "SKIP_LEGAL"


@dataclass(frozen=True)
class SPVFingerprint:
    is_mock_spv: bool
    pattern: str | None

    @property
    def skip_legal_wrapper(self) -> bool:
        return self.is_mock_spv

    @property
    def verification_mode(self) -> str:
        return VERIFICATION_MODE_SKIP_LEGAL if self.skip_legal_wrapper else VERIFICATION_MODE_FULL

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_mock_spv": self.is_mock_spv,
            "pattern": self.pattern,
            "verification_mode": self.verification_mode,
        }


def detect_spv_fingerprint(reg_id: str) -> SPVFingerprint:
    upper = (reg_id or "").strip().upper()
    pattern = next((p for p in MOCK_SPV_PATTERNS if upper.startswith(p)), None)
    return SPVFingerprint(is_mock_spv=pattern is not None, pattern=pattern)


def requires_legal_wrapper(reg_id: str) -> bool:
    return not detect_spv_fingerprint(reg_id).skip_legal_wrapper
