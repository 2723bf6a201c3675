"""
Crypto: signal commitment and attestation signing.
"""

from asset_oracle.crypto.commitment import (
    COMMITTED_CHECKS,
    build_commitment,
    commitment_leaves,
    format_leaf,
    format_score,
)
from asset_oracle.crypto.signer import (
    AttestationSigner,
    attestation_digest,
    attestation_message,
    keccak256,
    recover_address,
    verify_attestation,
)

__all__ = [
    "COMMITTED_CHECKS",
    "AttestationSigner",
    "attestation_digest",
    "attestation_message",
    "build_commitment",
    "commitment_leaves",
    "format_leaf",
    "format_score",
    "keccak256",
    "recover_address",
    "verify_attestation",
]
