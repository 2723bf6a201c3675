"""
Data models for one verification pass.

Submission (input), signals and check results (per check), attestation and
ledger outcome, and the final oracle result. Created by the checks and the
aggregator; nothing here outlives the returned OracleResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from asset_oracle.core.exceptions import InvalidSubmissionError

# Check passes when its aggregate score is strictly above this.
PASS_THRESHOLD = 0.8


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def clamp_score(score: float) -> float:
    """Clamp a provider score into [0, 1]."""
    return max(0.0, min(1.0, float(score)))


def is_passing(score: float) -> bool:
    return score > PASS_THRESHOLD


class SignalKind(str, Enum):
    """Closed set of evidentiary signals a check can produce."""

    SATELLITE_IMAGE = "satellite_image"
    VISION_ANALYSIS = "vision_analysis"
    MCA_REGISTRY = "mca_registry"
    DEED_INTEGRITY = "deed_integrity"
    FOOT_TRAFFIC = "foot_traffic"


class CheckName(str, Enum):
    """Verification dimension; also the commitment namespace."""

    EXISTENCE = "existence"
    OWNERSHIP = "ownership"
    ACTIVITY = "activity"


class LedgerStatus(str, Enum):
    """Outcome of the best-effort ledger write."""

    SUBMITTED = "submitted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class SubmissionData:
    """
    Asset claim under evaluation. Immutable; owned by the caller.

    reg_id is the legal-entity (SPV) registration id, deed_hash the
    document-integrity hash (empty when no deed was supplied).
    """

    id: str
    coordinates: Coordinates
    reg_id: str = ""
    directors: tuple[str, ...] = ()
    deed_hash: str = ""
    valuation: float = 0.0
    is_mock: bool = False
    address: str = ""
    city: str = ""
    state: str = ""

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise InvalidSubmissionError("submission id must be non-empty")
        if not -90.0 <= self.coordinates.lat <= 90.0:
            raise InvalidSubmissionError(f"latitude out of range: {self.coordinates.lat}")
        if not -180.0 <= self.coordinates.lng <= 180.0:
            raise InvalidSubmissionError(f"longitude out of range: {self.coordinates.lng}")

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SubmissionData:
        """
        Build from the nested wire shape:
        {"id", "location": {"address", "coordinates": {"lat", "lng"}, "city", "state"},
         "spv": {"reg_id", "directors"}, "documents": {"deed_hash"},
         "financials": {"valuation"}, "is_mock"}
        """
        if not isinstance(payload, dict):
            raise InvalidSubmissionError("submission must be an object")
        location = payload.get("location") or {}
        coords = location.get("coordinates") or {}
        spv = payload.get("spv") or {}
        documents = payload.get("documents") or {}
        financials = payload.get("financials") or {}
        try:
            coordinates = Coordinates(lat=float(coords.get("lat", 0.0)), lng=float(coords.get("lng", 0.0)))
            valuation = float(financials.get("valuation", 0.0) or 0.0)
        except (TypeError, ValueError) as e:
            raise InvalidSubmissionError(f"invalid numeric field: {e}") from e
        return cls(
            id=str(payload.get("id") or ""),
            coordinates=coordinates,
            reg_id=str(spv.get("reg_id") or ""),
            directors=tuple(str(d) for d in (spv.get("directors") or [])),
            deed_hash=str(documents.get("deed_hash") or ""),
            valuation=valuation,
            is_mock=bool(payload.get("is_mock", False)),
            address=str(location.get("address") or ""),
            city=str(location.get("city") or ""),
            state=str(location.get("state") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "location": {
                "address": self.address,
                "coordinates": self.coordinates.to_dict(),
                "city": self.city,
                "state": self.state,
            },
            "spv": {"reg_id": self.reg_id, "directors": list(self.directors)},
            "documents": {"deed_hash": self.deed_hash},
            "financials": {"valuation": self.valuation},
            "is_mock": self.is_mock,
        }


@dataclass(frozen=True)
class SignalData:
    """One evidentiary fact: source label, score in [0, 1], raw evidence, observation time."""

    source: str
    score: float
    data: Any = None
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "score": self.score,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class CheckResult:
    """
    Result of one verification check.

    score: weighted combination of the check's signals (weights fixed per check).
    passed: score > PASS_THRESHOLD.
    signals: one entry per SignalKind the check produced.
    confidence: reported by checks that carry one (existence).
    """

    check: CheckName
    score: float
    passed: bool
    signals: dict[SignalKind, SignalData] = field(default_factory=dict)
    confidence: float | None = None

    @classmethod
    def from_score(
        cls,
        check: CheckName,
        score: float,
        signals: dict[SignalKind, SignalData],
        confidence: float | None = None,
    ) -> CheckResult:
        return cls(check=check, score=score, passed=is_passing(score), signals=signals, confidence=confidence)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "score": self.score,
            "passed": self.passed,
            "signals": {kind.value: sig.to_dict() for kind, sig in self.signals.items()},
        }
        if self.confidence is not None:
            out["confidence"] = self.confidence
        return out


@dataclass(frozen=True)
class AttestationData:
    """Signed artifact: commitment root bound to the submission id under the oracle key."""

    commitment_root: str
    oracle_address: str
    signature: str
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "commitment_root": self.commitment_root,
            "oracle_address": self.oracle_address,
            "signature": self.signature,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class LedgerOutcome:
    """submitted (with transaction_ref), skipped (no ledger configured) or failed (with error)."""

    status: LedgerStatus
    transaction_ref: str | None = None
    error: str | None = None

    @classmethod
    def submitted(cls, transaction_ref: str) -> LedgerOutcome:
        return cls(status=LedgerStatus.SUBMITTED, transaction_ref=transaction_ref)

    @classmethod
    def skipped(cls) -> LedgerOutcome:
        return cls(status=LedgerStatus.SKIPPED)

    @classmethod
    def failed(cls, error: str) -> LedgerOutcome:
        return cls(status=LedgerStatus.FAILED, error=error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "transaction_ref": self.transaction_ref,
            "error": self.error,
        }


@dataclass
class OracleResult:
    """Final output of one verification pass."""

    submission_id: str
    existence: CheckResult
    ownership: CheckResult
    activity: CheckResult
    attestation: AttestationData
    ledger: LedgerOutcome
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def checks(self) -> tuple[CheckResult, CheckResult, CheckResult]:
        return (self.existence, self.ownership, self.activity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "submission_id": self.submission_id,
            "existence": self.existence.to_dict(),
            "ownership": self.ownership.to_dict(),
            "activity": self.activity.to_dict(),
            "attestation": self.attestation.to_dict(),
            "ledger": self.ledger.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }
