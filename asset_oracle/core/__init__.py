"""
Core utilities: shared exceptions and cross-cutting concerns.

Error types used across integrations, crypto, ledger, pipeline and API server.
"""

from asset_oracle.core.exceptions import (
    ConfigurationError,
    InvalidSubmissionError,
    LedgerSubmissionError,
    OracleError,
    ProviderError,
    SigningError,
)

__all__ = [
    "ConfigurationError",
    "InvalidSubmissionError",
    "LedgerSubmissionError",
    "OracleError",
    "ProviderError",
    "SigningError",
]
