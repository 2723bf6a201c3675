"""
Attestation signer: binds a commitment root to a submission id under the oracle key.

Message: "Submission:<submission_id>|Root:<commitment_root>", hashed with
Keccak-256 and signed with recoverable secp256k1 ECDSA (coincurve). The signature
is 0x-prefixed hex of 65 bytes (r || s || recovery_id), so a verifier recovers
the signer's public key, and from it the oracle address, without being handed
the key.

Oracle address: 0x + last 20 bytes of Keccak-256 over the 64-byte uncompressed
public key (without the 0x04 prefix), i.e. the Ethereum address of the key.
"""

from __future__ import annotations

from Crypto.Hash import keccak
from coincurve import PrivateKey, PublicKey

from asset_oracle.core.exceptions import SigningError
from asset_oracle.oracle_logging import get_logger
from asset_oracle.verification.models import AttestationData

logger = get_logger(__name__)

SIGNATURE_LENGTH = 65
PRIVATE_KEY_LENGTH = 32
# Recovery ids offset by 27 are accepted when verifying.
LEGACY_RECOVERY_OFFSET = 27


def _strip_hex_prefix(value: str) -> str:
    value = value.strip()
    if value[:2].lower() == "0x":
        return value[2:]
    return value


def keccak256(data: bytes) -> bytes:
    """Keccak-256 (pre-standard SHA-3 padding, as used by Ethereum)."""
    return keccak.new(digest_bits=256, data=data).digest()


def attestation_message(commitment_root: str, submission_id: str) -> str:
    return f"Submission:{submission_id}|Root:{commitment_root}"


def attestation_digest(commitment_root: str, submission_id: str) -> bytes:
    """32-byte digest that is actually signed."""
    return keccak256(attestation_message(commitment_root, submission_id).encode("utf-8"))


def public_key_to_address(public_key: PublicKey) -> str:
    uncompressed = public_key.format(compressed=False)
    return "0x" + keccak256(uncompressed[1:])[-20:].hex()


class AttestationSigner:
    """
    Holds the oracle private key and signs attestations.

    Invalid key material raises SigningError at construction; this is a fatal
    configuration error, not a per-request condition.
    """

    def __init__(self, private_key_hex: str) -> None:
        raw = _strip_hex_prefix(private_key_hex or "")
        try:
            secret = bytes.fromhex(raw)
        except ValueError as e:
            raise SigningError("oracle private key is not valid hex") from e
        if len(secret) != PRIVATE_KEY_LENGTH:
            raise SigningError(f"oracle private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(secret)}")
        try:
            self._key = PrivateKey(secret)
        except ValueError as e:
            raise SigningError("oracle private key is outside the secp256k1 range") from e
        self._address = public_key_to_address(self._key.public_key)

    @property
    def address(self) -> str:
        return self._address

    def sign(self, commitment_root: str, submission_id: str) -> str:
        """Return 0x-prefixed hex signature over the attestation digest."""
        digest = attestation_digest(commitment_root, submission_id)
        try:
            signature = self._key.sign_recoverable(digest, hasher=None)
        except Exception as e:
            logger.error("attestation_sign_failed", submission_id=submission_id, error=str(e))
            raise SigningError(str(e)) from e
        return "0x" + signature.hex()

    def __repr__(self) -> str:
        return f"AttestationSigner(address={self._address!r})"


def recover_address(signature: str, commitment_root: str, submission_id: str) -> str:
    """Recover the signer address from a signature; raises SigningError if malformed."""
    try:
        sig = bytearray(bytes.fromhex(_strip_hex_prefix(signature)))
    except ValueError as e:
        raise SigningError("signature is not valid hex") from e
    if len(sig) != SIGNATURE_LENGTH:
        raise SigningError(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(sig)}")
    if sig[64] >= LEGACY_RECOVERY_OFFSET:
        sig[64] -= LEGACY_RECOVERY_OFFSET
    digest = attestation_digest(commitment_root, submission_id)
    try:
        public_key = PublicKey.from_signature_and_message(bytes(sig), digest, hasher=None)
    except Exception as e:
        raise SigningError(f"signature recovery failed: {e}") from e
    return public_key_to_address(public_key)


def verify_attestation(attestation: AttestationData, submission_id: str) -> bool:
    """True when the attestation signature recovers to its oracle address."""
    try:
        recovered = recover_address(attestation.signature, attestation.commitment_root, submission_id)
    except SigningError:
        return False
    return recovered.lower() == attestation.oracle_address.lower()
