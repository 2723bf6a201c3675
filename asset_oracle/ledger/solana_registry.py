"""
Solana asset registry client: record signed attestations via register_asset.

- Builds the register_asset Anchor instruction (discriminator = first 8 bytes
  of sha256("global:register_asset")) for the program at LEDGER_PROGRAM_ID.
- Asset record PDA seeds: [b"asset", fingerprint]. Fingerprint is the
  submission id when it is 0x + 64 hex chars, otherwise Keccak-256 of the id.
- The recorded owner is the payer (oracle) key, not the claimed owner.
- Retries failed transactions with linear backoff; logs tx signatures.
Config: SOLANA_RPC_URL (network default), LEDGER_PROGRAM_ID, LEDGER_PAYER_KEY.
"""

from __future__ import annotations

import hashlib
import json
import struct
import time
from dataclasses import dataclass
from typing import Any

from asset_oracle.config.env import mask_url
from asset_oracle.core.exceptions import ConfigurationError, LedgerSubmissionError
from asset_oracle.crypto.signer import keccak256
from asset_oracle.oracle_logging import get_logger

logger = get_logger(__name__)

# Anchor: instruction discriminator = first 8 bytes of sha256("global:instruction_name")
REGISTER_ASSET_DISCRIMINATOR = hashlib.sha256(b"global:register_asset").digest()[:8]
SYS_PROGRAM_ID_STR = "11111111111111111111111111111111"
ASSET_SEED = b"asset"
FINGERPRINT_LENGTH = 32
# Fixed-point scale for on-chain scores (1.0 == 10**18).
SCORE_SCALE = 10**18
# [existence, ownership, activity, market]; only the first two are asserted for now.
DEFAULT_ONCHAIN_SCORES = (SCORE_SCALE, SCORE_SCALE, 0, 0)
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_BACKOFF_SEC = 2.0


def submission_fingerprint(submission_id: str) -> bytes:
    """32-byte asset fingerprint for a submission id."""
    sid = submission_id.strip()
    if len(sid) == 2 + 2 * FINGERPRINT_LENGTH and sid[:2].lower() == "0x":
        try:
            return bytes.fromhex(sid[2:])
        except ValueError:
            pass
    return keccak256(sid.encode("utf-8"))


def commitment_root_bytes(commitment_root: str) -> bytes:
    """Decode a hex commitment root to 32 bytes; empty root maps to zeros."""
    raw = commitment_root.strip()
    if raw[:2].lower() == "0x":
        raw = raw[2:]
    if not raw:
        return bytes(FINGERPRINT_LENGTH)
    try:
        data = bytes.fromhex(raw)
    except ValueError as e:
        raise LedgerSubmissionError(f"commitment root is not hex: {commitment_root!r}") from e
    if len(data) != FINGERPRINT_LENGTH:
        raise LedgerSubmissionError(f"commitment root must be {FINGERPRINT_LENGTH} bytes, got {len(data)}")
    return data


def encode_register_asset_args(
    fingerprint: bytes,
    owner: bytes,
    oracle_attestation: bytes,
    abm_output_hash: bytes,
    scores: tuple[int, int, int, int],
    eligible: bool,
    is_mock: bool,
) -> bytes:
    """
    Borsh layout of register_asset: discriminator, fingerprint [u8;32], owner pubkey,
    oracle_attestation [u8;32], abm_output_hash [u8;32], scores [u64;4], eligible, is_mock.
    """
    for name, value in (
        ("fingerprint", fingerprint),
        ("owner", owner),
        ("oracle_attestation", oracle_attestation),
        ("abm_output_hash", abm_output_hash),
    ):
        if len(value) != FINGERPRINT_LENGTH:
            raise ValueError(f"{name} must be {FINGERPRINT_LENGTH} bytes")
    data = bytearray(REGISTER_ASSET_DISCRIMINATOR)
    data += fingerprint + owner + oracle_attestation + abm_output_hash
    data += struct.pack("<4Q", *scores)
    data.append(1 if eligible else 0)
    data.append(1 if is_mock else 0)
    return bytes(data)


def get_asset_record_pda(program_id: Any, fingerprint: bytes) -> Any:
    from solders.pubkey import Pubkey

    pda, _ = Pubkey.find_program_address([ASSET_SEED, fingerprint], program_id)
    return pda


def build_register_asset_instruction(
    program_id: Any,
    oracle_pubkey: Any,
    fingerprint: bytes,
    oracle_attestation: bytes,
    sys_program_id: Any,
    *,
    is_mock: bool = False,
    scores: tuple[int, int, int, int] = DEFAULT_ONCHAIN_SCORES,
) -> tuple[Any, Any]:
    """
    Build register_asset instruction. Returns (Instruction, asset_record_pubkey).
    """
    from solders.instruction import AccountMeta, Instruction

    asset_record = get_asset_record_pda(program_id, fingerprint)
    data = encode_register_asset_args(
        fingerprint,
        bytes(oracle_pubkey),
        oracle_attestation,
        bytes(FINGERPRINT_LENGTH),
        scores,
        True,
        is_mock,
    )
    accounts = [
        AccountMeta(pubkey=asset_record, is_signer=False, is_writable=True),
        AccountMeta(pubkey=oracle_pubkey, is_signer=True, is_writable=True),
        AccountMeta(pubkey=sys_program_id, is_signer=False, is_writable=False),
    ]
    return Instruction(program_id=program_id, data=data, accounts=accounts), asset_record


def load_keypair(private_key: str) -> Any:
    """Load Keypair from LEDGER_PAYER_KEY: base58 string or JSON array of 64 bytes."""
    from solders.keypair import Keypair

    raw = private_key.strip()
    if raw.startswith("["):
        try:
            arr = json.loads(raw)
            if len(arr) >= 64:
                return Keypair.from_bytes(bytes(arr[:64]))
        except (json.JSONDecodeError, TypeError, ValueError):
            pass
    try:
        import base58

        secret = base58.b58decode(raw)
        return Keypair.from_bytes(secret)
    except Exception as e:
        logger.warning("ledger_keypair_load_failed", error=str(e))
        raise ConfigurationError("Invalid LEDGER_PAYER_KEY") from e


@dataclass
class LedgerConfig:
    """Config for the Solana asset registry client."""

    rpc_url: str
    program_id: str
    payer_key: str
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_backoff_sec: float = DEFAULT_RETRY_BACKOFF_SEC

    def __post_init__(self) -> None:
        if not self.rpc_url:
            raise ConfigurationError("SOLANA_RPC_URL must be set for ledger submission")
        if not self.program_id:
            raise ConfigurationError("LEDGER_PROGRAM_ID must be set for ledger submission")
        if not self.payer_key:
            raise ConfigurationError("LEDGER_PAYER_KEY must be set for ledger submission")
        self.retry_attempts = max(1, int(self.retry_attempts))
        self.retry_backoff_sec = max(0.0, float(self.retry_backoff_sec))

    @classmethod
    def from_settings(cls, settings: Any) -> LedgerConfig:
        return cls(
            rpc_url=settings.solana_rpc_url,
            program_id=settings.ledger_program_id,
            payer_key=settings.ledger_payer_key,
            retry_attempts=settings.ledger_retry_attempts,
            retry_backoff_sec=settings.ledger_retry_backoff_sec,
        )


class SolanaAssetRegistry:
    """
    Submit attestations to the asset registry program. One tx per attestation;
    retries on failure; raises LedgerSubmissionError once retries are exhausted.
    """

    def __init__(self, config: LedgerConfig, client: Any = None) -> None:
        from solders.pubkey import Pubkey

        self._config = config
        self._keypair = load_keypair(config.payer_key)
        try:
            self._program_id = Pubkey.from_string(config.program_id)
        except Exception as e:
            raise ConfigurationError(f"Invalid LEDGER_PROGRAM_ID: {config.program_id}") from e
        self._sys_program_id = Pubkey.from_string(SYS_PROGRAM_ID_STR)
        self._client = client

    @property
    def payer_pubkey(self) -> Any:
        return self._keypair.pubkey()

    def _client_ensure(self) -> Any:
        if self._client is None:
            from solana.rpc.api import Client

            self._client = Client(self._config.rpc_url)
            logger.info("ledger_client_connected", rpc_url=mask_url(self._config.rpc_url))
        return self._client

    def _send(self, instruction: Any) -> str:
        from solders.message import Message
        from solders.transaction import Transaction

        client = self._client_ensure()
        resp = client.get_latest_blockhash()
        value = getattr(resp, "value", None)
        blockhash = getattr(value, "blockhash", None)
        if blockhash is None:
            raise RuntimeError("No blockhash")
        payer = self._keypair.pubkey()
        tx = Transaction([self._keypair], Message([instruction], payer), blockhash)
        result = client.send_transaction(tx)
        sig_val = getattr(result, "value", None)
        if not sig_val:
            raise RuntimeError(str(getattr(result, "error", None) or result))
        return str(sig_val)

    def submit_attestation(
        self,
        submission_id: str,
        commitment_root: str,
        *,
        is_mock: bool = False,
    ) -> str:
        """Register the asset attestation on-chain; return the tx signature."""
        fingerprint = submission_fingerprint(submission_id)
        attestation = commitment_root_bytes(commitment_root)
        ix, asset_record = build_register_asset_instruction(
            self._program_id,
            self._keypair.pubkey(),
            fingerprint,
            attestation,
            self._sys_program_id,
            is_mock=is_mock,
        )
        last_error = ""
        for attempt in range(self._config.retry_attempts):
            try:
                sig = self._send(ix)
                logger.info(
                    "ledger_tx_sent",
                    submission_id=submission_id,
                    signature=sig,
                    asset_record=str(asset_record),
                    is_mock=is_mock,
                )
                return sig
            except Exception as e:
                last_error = str(e)
                logger.warning(
                    "ledger_tx_failed",
                    submission_id=submission_id,
                    attempt=attempt + 1,
                    error=last_error,
                )
                if attempt < self._config.retry_attempts - 1:
                    time.sleep(self._config.retry_backoff_sec * (attempt + 1))
        logger.error("ledger_tx_retries_exhausted", submission_id=submission_id, error=last_error)
        raise LedgerSubmissionError(f"register_asset failed after {self._config.retry_attempts} attempts: {last_error}")
