"""
Configuration management for the asset oracle.

Loads and validates settings from environment variables and an optional .env
file. Exposes a single source of truth for signer, provider, ledger and API
configuration.
"""

from asset_oracle.config.settings import OracleSettings, get_settings  # noqa: F401

__all__ = ["OracleSettings", "get_settings"]
