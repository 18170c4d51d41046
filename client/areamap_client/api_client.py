"""
api_client.py
Minimal HTTP client for the areas API. One request per call, no retries.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import requests

from areamap.geo import Coordinate

from .errors import AreasApiError

logger = logging.getLogger(__name__)


class AreasApiClient:
    def __init__(
        self,
        base_url: str,
        timeout_s: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def list_areas(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", params={"userId": user_id})

    def create_area(self, name: str, coordinates: Sequence[Coordinate], user_id: str) -> Dict[str, Any]:
        body = {
            "name": name,
            "coordinates": [[lat, lon] for lat, lon in coordinates],
            "userId": user_id,
        }
        return self._request("POST", json=body)

    def delete_area(self, area_id: str) -> None:
        self._request("DELETE", params={"id": area_id})

    def _request(self, method: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/api/areas"
        try:
            resp = self.session.request(method, url, timeout=self.timeout_s, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise AreasApiError(f"areas API unreachable: {exc}") from exc
        if not resp.ok:
            error, details = _error_from(resp)
            logger.warning("%s %s -> %s %s", method, url, resp.status_code, error)
            raise AreasApiError(error, status_code=resp.status_code, details=details)
        try:
            return resp.json()
        except ValueError as exc:
            raise AreasApiError("areas API returned invalid JSON", status_code=resp.status_code) from exc


def _error_from(resp: requests.Response):
    try:
        body = resp.json()
    except ValueError:
        return resp.reason or f"HTTP {resp.status_code}", None
    if isinstance(body, dict):
        return body.get("error") or f"HTTP {resp.status_code}", body.get("details")
    return f"HTTP {resp.status_code}", body
