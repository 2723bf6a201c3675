"""
Tests for submission parsing and result serialization.
"""

from __future__ import annotations

import pytest

from asset_oracle.core.exceptions import InvalidSubmissionError
from asset_oracle.verification.models import (
    CheckName,
    CheckResult,
    Coordinates,
    LedgerOutcome,
    LedgerStatus,
    SignalData,
    SignalKind,
    SubmissionData,
    clamp_score,
    is_passing,
)

from fakes import build_submission


def test_from_dict_nested_shape():
    sub = SubmissionData.from_dict(
        {
            "id": "sub-9",
            "location": {"address": "A", "coordinates": {"lat": "12.5", "lng": 77.1}, "city": "Bengaluru"},
            "spv": {"reg_id": "MOCK-1", "directors": ["X", "Y"]},
            "documents": {"deed_hash": "0x01"},
            "financials": {"valuation": None},
            "is_mock": True,
        }
    )
    assert sub.coordinates == Coordinates(lat=12.5, lng=77.1)
    assert sub.directors == ("X", "Y")
    assert sub.valuation == 0.0
    assert sub.is_mock is True
    assert sub.state == ""


def test_from_dict_to_dict_preserves_fields():
    sub = build_submission()
    assert SubmissionData.from_dict(sub.to_dict()) == sub


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "", "location": {"coordinates": {"lat": 0, "lng": 0}}},
        {"id": "a", "location": {"coordinates": {"lat": 91, "lng": 0}}},
        {"id": "a", "location": {"coordinates": {"lat": 0, "lng": -181}}},
        {"id": "a", "location": {"coordinates": {"lat": "north", "lng": 0}}},
        ["not", "an", "object"],
    ],
)
def test_invalid_submission_rejected(payload):
    with pytest.raises(InvalidSubmissionError):
        SubmissionData.from_dict(payload)


def test_pass_threshold_is_strict():
    assert is_passing(0.81) is True
    assert is_passing(0.8) is False
    assert CheckResult.from_score(CheckName.OWNERSHIP, 0.8, {}).passed is False


def test_clamp_score():
    assert clamp_score(1.7) == 1.0
    assert clamp_score(-0.2) == 0.0
    assert clamp_score(0.42) == 0.42


def test_check_result_to_dict_omits_missing_confidence():
    sig = SignalData(source="S", score=1.0, data={"k": "v"})
    result = CheckResult.from_score(CheckName.OWNERSHIP, 1.0, {SignalKind.MCA_REGISTRY: sig})
    out = result.to_dict()
    assert "confidence" not in out
    assert out["signals"]["mca_registry"]["data"] == {"k": "v"}
    assert CheckResult.from_score(CheckName.EXISTENCE, 0.9, {}, confidence=0.95).to_dict()["confidence"] == 0.95


def test_ledger_outcome_constructors():
    assert LedgerOutcome.skipped().to_dict() == {"status": "skipped", "transaction_ref": None, "error": None}
    assert LedgerOutcome.submitted("5x").transaction_ref == "5x"
    failed = LedgerOutcome.failed("boom")
    assert failed.status is LedgerStatus.FAILED
    assert failed.error == "boom"
