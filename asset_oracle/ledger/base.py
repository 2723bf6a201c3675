"""
Ledger boundary contract.

submit_attestation returns a transaction reference, or raises
LedgerSubmissionError. Retry/backoff is the client's concern; the aggregator
calls it once and never fails verification because of it.
"""

from __future__ import annotations

from typing import Protocol


class LedgerClient(Protocol):
    def submit_attestation(
        self,
        submission_id: str,
        commitment_root: str,
        *,
        is_mock: bool = False,
    ) -> str:
        ...
