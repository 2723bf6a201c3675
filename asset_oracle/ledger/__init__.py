# Ledger: boundary to the on-chain asset registry.

from asset_oracle.ledger.base import LedgerClient
from asset_oracle.ledger.solana_registry import (
    LedgerConfig,
    SolanaAssetRegistry,
    submission_fingerprint,
)

__all__ = [
    "LedgerClient",
    "LedgerConfig",
    "SolanaAssetRegistry",
    "submission_fingerprint",
]
