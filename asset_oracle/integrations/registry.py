"""
Company registry lookup (MCA) for the ownership check.

With a base URL configured, queries GET {base_url}/companies/{reg_id} and
reads the company status. Without one, runs offline: any non-empty
registration id is reported active (free-tier demo behaviour).
"""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

import requests

from asset_oracle.core.exceptions import ProviderError
from asset_oracle.oracle_logging import get_logger

logger = get_logger(__name__)

REGISTRY_SOURCE = "MCA_Registry"
OFFLINE_REGISTRY_SOURCE = "MCA_Mock"
DEFAULT_TIMEOUT_SEC = 10.0
ACTIVE_STATUSES = ("active",)


class CompanyRegistry(Protocol):
    source: str

    def is_active(self, reg_id: str) -> bool:
        """True if the registered entity is active, False if not found/inactive; raise ProviderError on failure."""
        ...


class CompanyRegistryClient:
    """MCA company registry client with an offline fallback."""

    def __init__(
        self,
        base_url: str = "",
        api_key: str = "",
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout_sec = timeout_sec
        self._session = session

    @property
    def offline(self) -> bool:
        return not self._base_url

    @property
    def source(self) -> str:
        return OFFLINE_REGISTRY_SOURCE if self.offline else REGISTRY_SOURCE

    def is_active(self, reg_id: str) -> bool:
        reg_id = (reg_id or "").strip()
        if not reg_id:
            return False
        if self.offline:
            return True
        return self._lookup(reg_id)

    def _lookup(self, reg_id: str) -> bool:
        # reg_id is a single path segment.
        segment = quote(reg_id, safe="")
        url = f"{self._base_url}/companies/{segment}"
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        http = self._session or requests
        try:
            resp = http.get(url, headers=headers, timeout=self._timeout_sec)
            if resp.status_code == 404:
                logger.info("registry_company_not_found", reg_id=reg_id)
                return False
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("registry_lookup_failed", reg_id=reg_id, error=str(e))
            raise ProviderError(self.source, str(e)) from e
        try:
            body = resp.json()
        except ValueError as e:
            raise ProviderError(self.source, f"invalid JSON response: {e}") from e
        status = str((body or {}).get("status") or "").strip().lower()
        return status in ACTIVE_STATUSES
