"""
Application settings and environment configuration.

Responsibilities:
- Load configuration from environment variables and .env files.
- Validate required settings and provide defaults for optional ones.
- Expose typed settings (signer key, provider endpoints, ledger RPC, API port)
  for use across integrations, pipeline, ledger and API server.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from asset_oracle.config import env
from asset_oracle.core.exceptions import ConfigurationError

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8080
DEFAULT_LEDGER_RETRY_ATTEMPTS = 3
DEFAULT_LEDGER_RETRY_BACKOFF_SEC = 2.0
DEFAULT_PROVIDER_TIMEOUT_SEC = 10.0


def _optional_int(name: str) -> int | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer") from e


def _float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number") from e


@dataclass
class OracleSettings:
    """Oracle configuration (env or explicit)."""

    oracle_private_key: str = field(default_factory=env.get_oracle_private_key)

    # Signal providers
    registry_api_url: str = field(default_factory=lambda: (os.getenv("REGISTRY_API_URL") or "").strip())
    registry_api_key: str = field(default_factory=lambda: (os.getenv("REGISTRY_API_KEY") or "").strip())
    satellite_api_key: str = field(default_factory=lambda: (os.getenv("SATELLITE_API_KEY") or "").strip())
    imagery_verify_fetch: bool = field(default_factory=lambda: env.get_bool("IMAGERY_VERIFY_FETCH"))
    vision_seed: int | None = field(default_factory=lambda: _optional_int("VISION_SEED"))
    provider_timeout_sec: float = field(default_factory=lambda: _float("PROVIDER_TIMEOUT_SEC", DEFAULT_PROVIDER_TIMEOUT_SEC))

    # Pipeline
    concurrent_checks: bool = field(default_factory=lambda: env.get_bool("ORACLE_CONCURRENT_CHECKS", True))

    # Ledger
    solana_network: str = field(default_factory=env.get_solana_network)
    solana_rpc_url: str = field(default_factory=env.get_solana_rpc_url)
    ledger_program_id: str = field(default_factory=env.get_ledger_program_id)
    ledger_payer_key: str = field(default_factory=env.get_ledger_payer_key)
    ledger_retry_attempts: int = field(
        default_factory=lambda: _optional_int("LEDGER_RETRY_ATTEMPTS") or DEFAULT_LEDGER_RETRY_ATTEMPTS
    )
    ledger_retry_backoff_sec: float = field(
        default_factory=lambda: _float("LEDGER_RETRY_BACKOFF_SEC", DEFAULT_LEDGER_RETRY_BACKOFF_SEC)
    )

    # API server
    api_host: str = field(default_factory=lambda: (os.getenv("API_HOST") or DEFAULT_API_HOST).strip())
    api_port: int = field(default_factory=lambda: _optional_int("ORACLE_PORT") or DEFAULT_API_PORT)

    def __post_init__(self) -> None:
        if not self.oracle_private_key:
            raise ConfigurationError("ORACLE_PRIVATE_KEY must be set")
        if self.provider_timeout_sec <= 0:
            self.provider_timeout_sec = DEFAULT_PROVIDER_TIMEOUT_SEC
        if not self.solana_rpc_url:
            self.solana_rpc_url = env.default_rpc_url_for_network(self.solana_network)
        self.ledger_retry_attempts = max(1, int(self.ledger_retry_attempts))
        self.ledger_retry_backoff_sec = max(0.0, float(self.ledger_retry_backoff_sec))
        if not 0 < self.api_port < 65536:
            raise ConfigurationError(f"ORACLE_PORT out of range: {self.api_port}")

    @property
    def ledger_enabled(self) -> bool:
        """Ledger submission needs a program id and a payer key (the RPC URL has a network default)."""
        return bool(self.solana_rpc_url and self.ledger_program_id and self.ledger_payer_key)


_settings: OracleSettings | None = None


def get_settings() -> OracleSettings:
    """
    Return the current application settings, built from env on first call.
    """
    global _settings
    if _settings is None:
        env.load_oracle_env()
        _settings = OracleSettings()
    return _settings


def reset_settings_for_test() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
