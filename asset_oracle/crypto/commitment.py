"""
Commitment root over the signal set of one verification pass.

Each signal becomes a leaf "<namespace>:<key>:<score>"; leaves are sorted
byte-wise, concatenated without a separator and hashed once with SHA-256.
The hex digest is the commitment root.

This is a flat content commitment, not a binary Merkle tree: it detects any
change to the committed signals but cannot prove inclusion of a single leaf.
The leaf format and hash must stay stable for anything verifying old roots.
"""

from __future__ import annotations

import hashlib
from typing import Iterable

from asset_oracle.verification.models import CheckName, CheckResult

# Activity is a fixed placeholder signal and is not committed.
COMMITTED_CHECKS = (CheckName.EXISTENCE, CheckName.OWNERSHIP)

EMPTY_COMMITMENT = ""


def format_score(score: float) -> str:
    """
    Shortest round-trip decimal for a score; integral values drop the ".0".

    1.0 -> "1", 0.0 -> "0", 0.6 -> "0.6", 0.00001 -> "1e-05".
    """
    text = repr(float(score))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_leaf(namespace: str, key: str, score: float) -> str:
    return f"{namespace}:{key}:{format_score(score)}"


def commitment_leaves(results: Iterable[CheckResult]) -> list[tuple[str, str, float]]:
    """Flatten committed check results into (namespace, key, score) triples."""
    triples: list[tuple[str, str, float]] = []
    for result in results:
        if result.check not in COMMITTED_CHECKS:
            continue
        for kind, signal in result.signals.items():
            triples.append((result.check.value, kind.value, signal.score))
    return triples


def build_commitment(signals: Iterable[tuple[str, str, float]]) -> str:
    """
    Return the hex SHA-256 commitment root for (namespace, key, score) triples.

    Order of the input does not matter. Empty input returns "".
    """
    leaves = sorted(format_leaf(ns, key, score).encode("utf-8") for ns, key, score in signals)
    if not leaves:
        return EMPTY_COMMITMENT
    return hashlib.sha256(b"".join(leaves)).hexdigest()
