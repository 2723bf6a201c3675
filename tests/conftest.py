"""
Pytest fixtures for asset oracle tests.

Fake signal providers and ledgers stand in for the external collaborators so
the pipeline runs offline and deterministically.
"""

from __future__ import annotations

import pytest

from asset_oracle.crypto.signer import AttestationSigner
from asset_oracle.pipeline.aggregator import OracleAggregator
from asset_oracle.verification.existence import ExistenceCheck
from asset_oracle.verification.models import SubmissionData
from asset_oracle.verification.ownership import OwnershipCheck

from fakes import TEST_PRIVATE_KEY, FakeClassifier, FakeImagery, FakeRegistry, build_submission


@pytest.fixture
def submission() -> SubmissionData:
    return build_submission()


@pytest.fixture
def signer() -> AttestationSigner:
    return AttestationSigner(TEST_PRIVATE_KEY)


@pytest.fixture
def make_aggregator(signer):
    """Factory: aggregator over fake providers. Override any collaborator by keyword."""

    def _make(
        *,
        imagery=None,
        classifier=None,
        registry=None,
        ledger=None,
        signer_override=None,
        concurrent: bool = True,
    ) -> OracleAggregator:
        return OracleAggregator(
            ExistenceCheck(imagery or FakeImagery(), classifier or FakeClassifier()),
            OwnershipCheck(registry or FakeRegistry()),
            signer_override or signer,
            ledger,
            concurrent=concurrent,
        )

    return _make


@pytest.fixture
def client(make_aggregator):
    """FastAPI TestClient over an injected aggregator (no ledger)."""
    from fastapi.testclient import TestClient

    from asset_oracle.api_server.server import create_app

    return TestClient(create_app(make_aggregator()))
