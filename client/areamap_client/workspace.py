"""
workspace.py
Client-side controller for drawing areas.

Pending points are collected from map clicks, manual entry, place search and
the device location, checked against the Delhi NCR box, and submitted as one
named polygon. Previously created areas can be highlighted, expanded to show
their coordinates, or deleted.

Each user action returns True on success. On failure it returns False and
leaves a message in `error`; the action is not retried.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from areamap.geo import DEFAULT_ZOOM, DELHI_CENTER, DELHI_NCR, BoundingBox, Coordinate

from .api_client import AreasApiClient
from .errors import (
    AreasApiError,
    GeocodingError,
    GeolocationError,
    InputError,
    LocationNotFoundError,
    OutOfBoundsError,
    ServiceError,
    WorkspaceError,
)
from .geocoding import NominatimGeocoder
from .geolocation import Geolocator, locate_within

logger = logging.getLogger(__name__)

MIN_AREA_POINTS = 3


@dataclass
class Area:
    id: str
    name: str
    coordinates: List[Coordinate]
    user_id: str

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "Area":
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            coordinates=[(float(lat), float(lon)) for lat, lon in doc["coordinates"]],
            user_id=doc["userId"],
        )


def user_action(method):
    @functools.wraps(method)
    def wrapper(self: "AreaWorkspace", *args, **kwargs) -> bool:
        try:
            return method(self, *args, **kwargs)
        except WorkspaceError as exc:
            self.error = str(exc)
            logger.debug("%s rejected: %s", method.__name__, exc)
            return False

    return wrapper


@dataclass
class AreaWorkspace:
    api: AreasApiClient
    user_id: str
    geocoder: Optional[NominatimGeocoder] = None
    geolocator: Optional[Geolocator] = None
    bounds: BoundingBox = DELHI_NCR
    geolocation_timeout_s: float = 5.0

    markers: List[Coordinate] = field(default_factory=list)
    areas: List[Area] = field(default_factory=list)
    selected_area: List[Coordinate] = field(default_factory=list)
    current_location: Optional[Coordinate] = None
    center: Coordinate = DELHI_CENTER
    zoom: int = DEFAULT_ZOOM

    lat_input: str = ""
    lon_input: str = ""
    area_name: str = ""
    search_query: str = ""
    error: Optional[str] = None
    open_coordinates_area_id: Optional[str] = None

    # ---- reads ----

    @property
    def visible_areas(self) -> List[Area]:
        return [a for a in self.areas if a.user_id == self.user_id]

    def find_area(self, area_id: str) -> Optional[Area]:
        return next((a for a in self.areas if a.id == area_id), None)

    def is_coordinates_open(self, area_id: str) -> bool:
        return self.open_coordinates_area_id == area_id

    # ---- server round trips ----

    @user_action
    def load_areas(self) -> bool:
        try:
            docs = self.api.list_areas(self.user_id)
        except AreasApiError as exc:
            raise ServiceError("Failed to load areas") from exc
        self.areas = [Area.from_doc(d) for d in docs if d.get("userId") == self.user_id]
        return True

    @user_action
    def create_area(self) -> bool:
        if len(self.markers) < MIN_AREA_POINTS:
            raise InputError("Please select at least 3 points to create an area")
        name = self.area_name.strip()
        if not name:
            raise InputError("Please enter a name for the area")
        try:
            doc = self.api.create_area(name, list(self.markers), self.user_id)
        except AreasApiError as exc:
            raise ServiceError("Failed to create area") from exc
        area = Area.from_doc(doc)
        self.areas.append(area)
        self.selected_area = list(area.coordinates)
        self.markers = []
        self.area_name = ""
        self.error = None
        return True

    @user_action
    def delete_area(self, area_id: str) -> bool:
        try:
            self.api.delete_area(area_id)
        except AreasApiError as exc:
            raise ServiceError("Failed to delete area") from exc
        self.areas = [a for a in self.areas if a.id != area_id]
        if self.selected_area:
            self.selected_area = []
        if self.open_coordinates_area_id == area_id:
            self.open_coordinates_area_id = None
        self.error = None
        return True

    # ---- pending points ----

    @user_action
    def handle_map_click(self, latlng: Coordinate) -> bool:
        lat, lon = latlng
        self.markers.append((lat, lon))
        self.error = None
        return True

    @user_action
    def add_marker(self) -> bool:
        try:
            lat = float(self.lat_input)
            lon = float(self.lon_input)
        except ValueError:
            raise InputError("Please enter valid latitude and longitude") from None
        if math.isnan(lat) or math.isnan(lon):
            raise InputError("Please enter valid latitude and longitude")
        if not self.bounds.contains(lat, lon):
            raise OutOfBoundsError("Coordinates are outside Delhi NCR boundaries")
        self.markers.append((lat, lon))
        self.center = (lat, lon)
        self.lat_input = ""
        self.lon_input = ""
        self.error = None
        return True

    @user_action
    def search_location(self) -> bool:
        if not self.search_query.strip():
            return False
        if self.geocoder is None:
            raise ServiceError("Error searching location")
        try:
            found = self.geocoder.search(self.search_query)
        except GeocodingError as exc:
            raise ServiceError("Error searching location") from exc
        if found is None:
            raise LocationNotFoundError("Location not found")
        lat, lon = found
        if not self.bounds.contains(lat, lon):
            raise OutOfBoundsError("The searched location is outside Delhi NCR boundaries")
        self.markers.append((lat, lon))
        self.center = (lat, lon)
        self.search_query = ""
        self.error = None
        return True

    @user_action
    def find_current_location(self) -> bool:
        if self.geolocator is None:
            raise ServiceError("Geolocation is not available")
        try:
            lat, lon = locate_within(self.geolocator, self.geolocation_timeout_s)
        except GeolocationError as exc:
            logger.warning("Error getting location: %s", exc)
            raise ServiceError(
                "Unable to retrieve your location. Please ensure you have granted permission."
            ) from exc
        if not self.bounds.contains(lat, lon):
            raise OutOfBoundsError("Your current location is outside Delhi NCR boundaries")
        self.current_location = (lat, lon)
        self.center = (lat, lon)
        self.markers.append((lat, lon))
        self.error = None
        return True

    @user_action
    def clear_markers(self) -> bool:
        self.markers = []
        self.error = None
        self.current_location = None
        return True

    # ---- listed areas ----

    @user_action
    def clear_area(self) -> bool:
        self.selected_area = []
        self.error = None
        return True

    @user_action
    def select_area(self, area_id: str) -> bool:
        area = self.find_area(area_id)
        if area is None:
            raise InputError(f"Unknown area {area_id}")
        self.selected_area = list(area.coordinates)
        if area.coordinates:
            self.center = area.coordinates[0]
        return True

    @user_action
    def toggle_coordinates(self, area_id: str) -> bool:
        if self.open_coordinates_area_id == area_id:
            self.open_coordinates_area_id = None
        else:
            self.open_coordinates_area_id = area_id
        return True
