"""
map_view.py
Leaflet map (via folium) for the workspace: base tiles, pending markers, the
current-location marker and the highlighted polygon. Clicks are handed to
`on_click` as (lat, lon); the view keeps no business state.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

import folium

from areamap.geo import DEFAULT_ZOOM, DELHI_CENTER, DELHI_NCR, MIN_ZOOM, BoundingBox, Coordinate

logger = logging.getLogger(__name__)

OSM_TILES = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
OSM_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'

MARKER_COLOR = "blue"
CURRENT_LOCATION_COLOR = "red"


class MapView:
    def __init__(
        self,
        bounds: BoundingBox = DELHI_NCR,
        on_click: Optional[Callable[[Coordinate], object]] = None,
        min_zoom: int = MIN_ZOOM,
    ):
        self.bounds = bounds
        self.on_click = on_click
        self.min_zoom = min_zoom
        self.center: Coordinate = DELHI_CENTER
        self.zoom: int = DEFAULT_ZOOM
        self.markers: List[Coordinate] = []
        self.selected_area: List[Coordinate] = []
        self.current_location: Optional[Coordinate] = None
        self._map: Optional[folium.Map] = None

    def update(
        self,
        center: Coordinate,
        zoom: int,
        markers: Sequence[Coordinate],
        selected_area: Sequence[Coordinate],
        current_location: Optional[Coordinate],
    ) -> None:
        props = (tuple(center), zoom, list(markers), list(selected_area), current_location)
        if props == self._props():
            return
        self.center, self.zoom, self.markers, self.selected_area, self.current_location = props
        # Rebuilt on next access.
        self._map = None

    def show(self, workspace) -> None:
        self.update(
            center=workspace.center,
            zoom=workspace.zoom,
            markers=workspace.markers,
            selected_area=workspace.selected_area,
            current_location=workspace.current_location,
        )

    def click(self, lat: float, lon: float) -> None:
        if self.on_click is not None:
            self.on_click((lat, lon))

    @property
    def map(self) -> folium.Map:
        if self._map is None:
            self._map = self._build()
        return self._map

    def to_html(self) -> str:
        return self.map.get_root().render()

    def save(self, path: str) -> None:
        self.map.save(path)
        logger.info("Map written to %s", path)

    def close(self) -> None:
        self._map = None

    def _props(self):
        return (self.center, self.zoom, self.markers, self.selected_area, self.current_location)

    def _build(self) -> folium.Map:
        m = folium.Map(
            location=list(self.center),
            zoom_start=self.zoom,
            tiles=None,
            min_zoom=self.min_zoom,
            max_bounds=True,
            min_lat=self.bounds.south,
            max_lat=self.bounds.north,
            min_lon=self.bounds.west,
            max_lon=self.bounds.east,
            scroll_wheel_zoom=False,
        )
        folium.TileLayer(tiles=OSM_TILES, attr=OSM_ATTRIBUTION, name="OpenStreetMap").add_to(m)

        for idx, position in enumerate(self.markers):
            folium.Marker(
                location=list(position),
                popup=f"Marker {idx + 1}",
                icon=folium.Icon(color=MARKER_COLOR),
            ).add_to(m)

        if len(self.selected_area) > 2:
            folium.Polygon(locations=[list(p) for p in self.selected_area], fill=True).add_to(m)

        if self.current_location is not None:
            folium.Marker(
                location=list(self.current_location),
                popup="You are here",
                icon=folium.Icon(color=CURRENT_LOCATION_COLOR),
            ).add_to(m)

        folium.LatLngPopup().add_to(m)
        return m
