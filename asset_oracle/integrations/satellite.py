"""
Satellite imagery lookup for the existence check.

Builds a static-map satellite tile URL centred on the asset coordinates.
With verify_fetch enabled the URL is fetched once so an unreachable imagery
service degrades the signal instead of passing silently.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import requests

from asset_oracle.core.exceptions import ProviderError
from asset_oracle.oracle_logging import get_logger

if TYPE_CHECKING:
    from asset_oracle.verification.models import Coordinates

logger = get_logger(__name__)

STATIC_MAP_URL_TEMPLATE = (
    "https://static-maps.yandex.ru/1.x/?lang=en_US&ll={lng:f},{lat:f}&z=17&l=sat&size=600,450"
)
IMAGERY_SOURCE = "OpenStreetMap/Yandex"
DEFAULT_TIMEOUT_SEC = 10.0


class ImageryProvider(Protocol):
    source: str

    def fetch_image(self, coordinates: Coordinates) -> str:
        """Return a URL for imagery of the coordinates; raise ProviderError on failure."""
        ...


class StaticMapImageryClient:
    """Static-map satellite imagery (free tier)."""

    source = IMAGERY_SOURCE

    def __init__(
        self,
        api_key: str = "",
        *,
        verify_fetch: bool = False,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self._verify_fetch = verify_fetch
        self._timeout_sec = timeout_sec
        self._session = session

    def image_url(self, coordinates: Coordinates) -> str:
        url = STATIC_MAP_URL_TEMPLATE.format(lat=coordinates.lat, lng=coordinates.lng)
        if self._api_key:
            url += f"&apikey={self._api_key}"
        return url

    def fetch_image(self, coordinates: Coordinates) -> str:
        url = self.image_url(coordinates)
        if not self._verify_fetch:
            return url
        http = self._session or requests
        try:
            resp = http.get(url, timeout=self._timeout_sec)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("imagery_fetch_failed", lat=coordinates.lat, lng=coordinates.lng, error=str(e))
            raise ProviderError(self.source, str(e)) from e
        return url
