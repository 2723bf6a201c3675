"""
Application-level exceptions.

Each error carries a stable ``code`` so the API server and logs report the same
identifier. Only SigningError and ConfigurationError are fatal to a request or
to startup; ProviderError is absorbed by the checks and LedgerSubmissionError by
the aggregator.
"""

from __future__ import annotations


class OracleError(Exception):
    """Base class for all oracle errors."""

    code = "oracle_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ConfigurationError(OracleError):
    """Settings are missing or invalid at startup."""

    code = "configuration_error"


class ProviderError(OracleError):
    """A signal provider call failed; the check degrades the signal to 0.0."""

    code = "provider_error"

    def __init__(self, provider: str, message: str = "") -> None:
        super().__init__(f"{provider}: {message}" if message else provider)
        self.provider = provider


class SigningError(OracleError):
    """Oracle key material is invalid or signing failed. Fatal."""

    code = "signing_error"


class LedgerSubmissionError(OracleError):
    """Ledger write failed after retries. Reported, never fatal to verification."""

    code = "ledger_submission_error"


class InvalidSubmissionError(OracleError):
    """Submission payload rejected before entering the pipeline."""

    code = "invalid_submission"
