"""
geocoding.py
Forward geocoding of free-text place queries through Nominatim (OpenStreetMap).
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from areamap.geo import Coordinate

from .errors import GeocodingError

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    def __init__(
        self,
        url: str = "https://nominatim.openstreetmap.org/search",
        user_agent: str = "areamap/1.0",
        timeout_s: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.user_agent = user_agent
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def search(self, query: str) -> Optional[Coordinate]:
        """
        Return (lat, lon) of the first match for `query`, or None when nothing matches.
        """
        try:
            resp = self.session.get(
                self.url,
                params={"q": query, "format": "json", "limit": 1},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_s,
            )
            resp.raise_for_status()
            results = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Geocoding %r failed: %s", query, exc)
            raise GeocodingError(str(exc)) from exc

        if not results:
            return None
        first = results[0]
        try:
            return float(first["lat"]), float(first["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError(f"unexpected geocoder result: {first!r}") from exc
