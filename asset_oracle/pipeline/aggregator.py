"""
Oracle aggregator: one verification pass per submission.

Steps:
1. Run existence, ownership and activity checks (concurrently) and wait for all three.
2. Flatten committed signals and build the commitment root.
3. Sign the root bound to the submission id. SigningError is fatal.
4. Submit to the ledger if one is configured. Best-effort: failures are logged
   and reported in LedgerOutcome, never raised.
5. Return the OracleResult.

Each call is independent; the aggregator holds no per-submission state.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from asset_oracle.crypto.commitment import build_commitment, commitment_leaves
from asset_oracle.crypto.signer import AttestationSigner
from asset_oracle.integrations.spv_fingerprint import detect_spv_fingerprint
from asset_oracle.ledger.base import LedgerClient
from asset_oracle.oracle_logging import bind_submission, get_logger
from asset_oracle.verification.activity import ActivityCheck
from asset_oracle.verification.base import VerificationCheck
from asset_oracle.verification.models import (
    AttestationData,
    CheckResult,
    LedgerOutcome,
    OracleResult,
    SubmissionData,
    utc_now,
)

logger = get_logger(__name__)

CHECK_WORKERS = 3


class OracleAggregator:
    """
    Verification-aggregation-and-attestation pipeline.

    ledger may be None: attestations are then signed and returned with a
    skipped ledger outcome.
    """

    def __init__(
        self,
        existence: VerificationCheck,
        ownership: VerificationCheck,
        signer: AttestationSigner,
        ledger: LedgerClient | None = None,
        activity: VerificationCheck | None = None,
        *,
        concurrent: bool = True,
    ) -> None:
        self._existence = existence
        self._ownership = ownership
        self._activity = activity or ActivityCheck()
        self._signer = signer
        self._ledger = ledger
        self._concurrent = concurrent

    @property
    def oracle_address(self) -> str:
        return self._signer.address

    @property
    def ledger_enabled(self) -> bool:
        return self._ledger is not None

    def _run_checks(self, submission: SubmissionData) -> tuple[CheckResult, CheckResult, CheckResult]:
        checks = (self._existence, self._ownership, self._activity)
        if not self._concurrent:
            return tuple(check.verify(submission) for check in checks)  # type: ignore[return-value]
        with ThreadPoolExecutor(max_workers=CHECK_WORKERS, thread_name_prefix="oracle-check") as executor:
            futures = [executor.submit(check.verify, submission) for check in checks]
            # result() re-raises a check's unexpected exception; no partial commitment.
            existence, ownership, activity = (fut.result() for fut in futures)
        return existence, ownership, activity

    def _submit_to_ledger(self, submission: SubmissionData, commitment_root: str, log: Any) -> LedgerOutcome:
        if self._ledger is None:
            log.info("ledger_skipped", reason="no_ledger_configured")
            return LedgerOutcome.skipped()
        is_mock = submission.is_mock or detect_spv_fingerprint(submission.reg_id).is_mock_spv
        try:
            tx_ref = self._ledger.submit_attestation(submission.id, commitment_root, is_mock=is_mock)
        except Exception as e:
            log.warning("ledger_submission_failed", error=str(e), is_mock=is_mock)
            return LedgerOutcome.failed(str(e))
        log.info("ledger_submitted", transaction_ref=tx_ref, is_mock=is_mock)
        return LedgerOutcome.submitted(tx_ref)

    def verify_submission(self, submission: SubmissionData) -> OracleResult:
        log = bind_submission(submission.id, __name__)
        started = time.monotonic()

        existence, ownership, activity = self._run_checks(submission)

        leaves = commitment_leaves((existence, ownership, activity))
        commitment_root = build_commitment(leaves)
        log.info("commitment_built", leaf_count=len(leaves), commitment_root=commitment_root)

        signature = self._signer.sign(commitment_root, submission.id)
        attestation = AttestationData(
            commitment_root=commitment_root,
            oracle_address=self._signer.address,
            signature=signature,
            timestamp=utc_now(),
        )
        log.info("attestation_signed", oracle_address=attestation.oracle_address)

        ledger_outcome = self._submit_to_ledger(submission, commitment_root, log)

        result = OracleResult(
            submission_id=submission.id,
            existence=existence,
            ownership=ownership,
            activity=activity,
            attestation=attestation,
            ledger=ledger_outcome,
            timestamp=utc_now(),
        )
        log.info(
            "verification_completed",
            existence_score=existence.score,
            ownership_score=ownership.score,
            activity_score=activity.score,
            passed=[c.check.value for c in result.checks if c.passed],
            ledger_status=ledger_outcome.status.value,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )
        return result


def build_aggregator(settings: Any = None) -> OracleAggregator:
    """
    Wire an aggregator from settings (env when not given): providers, signer
    and, when LEDGER_PROGRAM_ID and LEDGER_PAYER_KEY are set,
    the Solana ledger client. A ledger that fails to initialise is logged and
    left out; an invalid signer key raises SigningError.
    """
    from asset_oracle.config import get_settings
    from asset_oracle.config.env import mask_url
    from asset_oracle.integrations.registry import CompanyRegistryClient
    from asset_oracle.integrations.satellite import StaticMapImageryClient
    from asset_oracle.integrations.vision import MockVisionClassifier
    from asset_oracle.verification.existence import ExistenceCheck
    from asset_oracle.verification.ownership import OwnershipCheck

    cfg = settings or get_settings()
    imagery = StaticMapImageryClient(
        cfg.satellite_api_key,
        verify_fetch=cfg.imagery_verify_fetch,
        timeout_sec=cfg.provider_timeout_sec,
    )
    classifier = MockVisionClassifier(seed=cfg.vision_seed)
    registry = CompanyRegistryClient(
        cfg.registry_api_url,
        cfg.registry_api_key,
        timeout_sec=cfg.provider_timeout_sec,
    )
    signer = AttestationSigner(cfg.oracle_private_key)

    ledger = None
    if cfg.ledger_enabled:
        from asset_oracle.ledger.solana_registry import LedgerConfig, SolanaAssetRegistry

        try:
            ledger = SolanaAssetRegistry(LedgerConfig.from_settings(cfg))
            logger.info(
                "ledger_enabled",
                network=cfg.solana_network,
                rpc_url=mask_url(cfg.solana_rpc_url),
                program_id=cfg.ledger_program_id,
            )
        except Exception as e:
            logger.warning("ledger_init_failed", error=str(e))
    else:
        logger.info("ledger_disabled", reason="LEDGER_PROGRAM_ID or LEDGER_PAYER_KEY not set")

    logger.info(
        "aggregator_built",
        oracle_address=signer.address,
        registry_mode="offline" if registry.offline else "http",
        concurrent_checks=cfg.concurrent_checks,
    )
    return OracleAggregator(
        ExistenceCheck(imagery, classifier),
        OwnershipCheck(registry),
        signer,
        ledger,
        concurrent=cfg.concurrent_checks,
    )
