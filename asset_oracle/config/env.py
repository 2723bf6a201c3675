"""
Environment variable loading for the asset oracle.

- ORACLE_PRIVATE_KEY: hex secp256k1 key used to sign attestations (0x optional)
- SOLANA_NETWORK: devnet | mainnet (default: devnet)
- SOLANA_RPC_URL: RPC endpoint for ledger submission (default: public RPC for SOLANA_NETWORK)
- LEDGER_PROGRAM_ID: deployed asset registry program ID
- LEDGER_PAYER_KEY: Solana keypair paying for ledger transactions
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from asset_oracle.oracle_logging import get_logger

logger = get_logger(__name__)

# Project root: config is asset_oracle/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

# Well-known development key; never use outside local runs.
DEV_ORACLE_PRIVATE_KEY = "0x" + "0" * 63 + "1"

DEVNET_RPC_URL = "https://api.devnet.solana.com"
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"

_TRUTHY = ("1", "true", "yes", "on")


def load_oracle_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def _get(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def get_bool(name: str, default: bool = False) -> bool:
    raw = _get(name).lower()
    if not raw:
        return default
    return raw in _TRUTHY


def get_oracle_private_key() -> str:
    """
    Return ORACLE_PRIVATE_KEY, or the development key with a warning when unset.
    """
    load_oracle_env()
    key = _get("ORACLE_PRIVATE_KEY")
    if key:
        return key
    logger.warning("oracle_dev_key_in_use", message="ORACLE_PRIVATE_KEY not set; using development key")
    return DEV_ORACLE_PRIVATE_KEY


def get_solana_network() -> str:
    """Return SOLANA_NETWORK from env: devnet | mainnet. Default: devnet."""
    load_oracle_env()
    raw = (_get("SOLANA_NETWORK") or _get("SOLANA_CLUSTER") or "devnet").lower()
    if raw in ("mainnet", "mainnet-beta"):
        return "mainnet"
    return "devnet"


def get_solana_rpc_url() -> str:
    """
    Return SOLANA_RPC_URL if set, else the public RPC for SOLANA_NETWORK.
    """
    load_oracle_env()
    url = _get("SOLANA_RPC_URL")
    if url:
        return url
    return default_rpc_url_for_network(get_solana_network())


def default_rpc_url_for_network(network: str) -> str:
    return MAINNET_RPC_URL if network == "mainnet" else DEVNET_RPC_URL


def get_ledger_program_id() -> str:
    load_oracle_env()
    return _get("LEDGER_PROGRAM_ID")


def get_ledger_payer_key() -> str:
    load_oracle_env()
    return _get("LEDGER_PAYER_KEY")


def mask_url(url: str) -> str:
    """Mask API key query values so URLs can be logged."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url
