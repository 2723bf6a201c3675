"""
Tests for the commitment builder (build_commitment, format_score, commitment_leaves).
"""

from __future__ import annotations

import hashlib
import itertools

from asset_oracle.crypto.commitment import (
    build_commitment,
    commitment_leaves,
    format_leaf,
    format_score,
)
from asset_oracle.verification.activity import ActivityCheck
from asset_oracle.verification.models import CheckName, CheckResult, SignalData, SignalKind

from fakes import build_submission

SIGNALS = [
    ("existence", "satellite_image", 1.0),
    ("existence", "vision_analysis", 0.93),
    ("ownership", "mca_registry", 1.0),
    ("ownership", "deed_integrity", 0.0),
]


def test_format_score_integral_values_drop_decimal():
    """1.0 and 0.0 render as "1" and "0"."""
    assert format_score(1.0) == "1"
    assert format_score(0.0) == "0"
    assert format_score(1) == "1"


def test_format_score_fractions_shortest_repr():
    """Fractions render with the shortest round-trip decimal."""
    assert format_score(0.6) == "0.6"
    assert format_score(0.93) == "0.93"
    assert format_score(0.1 + 0.2) == "0.30000000000000004"
    assert format_score(0.00001) == "1e-05"


def test_format_leaf():
    assert format_leaf("ownership", "mca_registry", 1.0) == "ownership:mca_registry:1"


def test_commitment_matches_sorted_concatenation_sha256():
    """Root is SHA-256 over the byte-sorted leaves concatenated with no separator."""
    leaves = sorted(format_leaf(*s) for s in SIGNALS)
    expected = hashlib.sha256("".join(leaves).encode("utf-8")).hexdigest()
    assert build_commitment(SIGNALS) == expected
    assert len(expected) == 64


def test_commitment_order_independent():
    """Every permutation of the signal set yields the same root."""
    roots = {build_commitment(list(p)) for p in itertools.permutations(SIGNALS)}
    assert len(roots) == 1


def test_commitment_idempotent():
    """Same signal set twice -> same root (no hidden state)."""
    assert build_commitment(SIGNALS) == build_commitment(SIGNALS)
    assert build_commitment(iter(SIGNALS)) == build_commitment(tuple(SIGNALS))


def test_commitment_changes_when_any_score_changes():
    tampered = list(SIGNALS)
    tampered[1] = ("existence", "vision_analysis", 0.94)
    assert build_commitment(tampered) != build_commitment(SIGNALS)


def test_commitment_empty_input_returns_empty_string():
    """Empty signal list -> "" (defined result, not a crash)."""
    assert build_commitment([]) == ""
    assert build_commitment(iter(())) == ""


def test_commitment_leaves_skip_activity():
    """Only existence and ownership signals are committed."""
    existence = CheckResult.from_score(
        CheckName.EXISTENCE,
        1.0,
        {SignalKind.SATELLITE_IMAGE: SignalData(source="s", score=1.0)},
    )
    ownership = CheckResult.from_score(
        CheckName.OWNERSHIP,
        0.6,
        {SignalKind.MCA_REGISTRY: SignalData(source="r", score=1.0)},
    )
    activity = ActivityCheck().verify(build_submission())
    triples = commitment_leaves([existence, ownership, activity])
    assert sorted(triples) == [
        ("existence", "satellite_image", 1.0),
        ("ownership", "mca_registry", 1.0),
    ]
