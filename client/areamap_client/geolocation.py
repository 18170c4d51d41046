"""
geolocation.py
Device location lookup. Providers may block; locate_within() bounds the wait.
"""

from __future__ import annotations

import queue
import threading
from typing import Optional, Protocol

from areamap.geo import Coordinate

from .errors import GeolocationError


class Geolocator(Protocol):
    def locate(self) -> Coordinate:
        ...


class FixedGeolocator:
    """Reports a location known up front (e.g. passed on the command line)."""

    def __init__(self, coordinate: Coordinate):
        self.coordinate = coordinate

    def locate(self) -> Coordinate:
        return self.coordinate


def locate_within(geolocator: Geolocator, timeout_s: float) -> Coordinate:
    """
    Ask `geolocator` for a fix, giving up after timeout_s.
    A provider that never answers is left running on a daemon thread and its
    late answer is dropped. Any provider failure surfaces as GeolocationError.
    """
    answers: "queue.Queue[tuple]" = queue.Queue(maxsize=1)

    def worker():
        try:
            answers.put(("ok", geolocator.locate()))
        except Exception as exc:  # noqa: BLE001 - handed back to the caller below
            answers.put(("error", exc))

    threading.Thread(target=worker, name="geolocation", daemon=True).start()
    try:
        kind, value = answers.get(timeout=timeout_s)
    except queue.Empty as exc:
        raise GeolocationError(f"location not available within {timeout_s}s") from exc

    if kind == "error":
        if isinstance(value, GeolocationError):
            raise value
        raise GeolocationError(str(value)) from value
    lat, lon = value
    return float(lat), float(lon)


def parse_location(text: Optional[str]) -> Optional[Coordinate]:
    """'28.61,77.20' -> (28.61, 77.20)."""
    if not text:
        return None
    lat, sep, lon = text.partition(",")
    if not sep:
        raise ValueError(f"expected LAT,LON, got {text!r}")
    return float(lat), float(lon)
