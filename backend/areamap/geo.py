"""
geo.py
Fixed Delhi NCR rectangle and the coordinate checks shared by the API and the workspace.
Coordinates are (lat, lon) everywhere; shapely wants (x=lon, y=lat).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from shapely.geometry import MultiPoint, Polygon, box

Coordinate = Tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float
    _shape: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_shape", box(self.west, self.south, self.east, self.north))

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east

    def covers_all(self, coordinates: Iterable[Coordinate]) -> bool:
        points = [(lon, lat) for lat, lon in coordinates]
        if not points:
            return True
        return self._shape.covers(MultiPoint(points))

    def as_leaflet_bounds(self) -> List[List[float]]:
        return [[self.south, self.west], [self.north, self.east]]


# Approximate bounds for Delhi NCR
DELHI_NCR = BoundingBox(south=28.2, west=76.5, north=29.0, east=77.8)
DELHI_CENTER: Coordinate = (28.6139, 77.2090)
DEFAULT_ZOOM = 10
MIN_ZOOM = 10


def is_within_bounds(coordinate: Coordinate, bounds: BoundingBox = DELHI_NCR) -> bool:
    lat, lon = coordinate
    return bounds.contains(lat, lon)
