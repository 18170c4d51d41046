from .api_client import AreasApiClient
from .geocoding import NominatimGeocoder
from .geolocation import FixedGeolocator
from .map_view import MapView
from .workspace import Area, AreaWorkspace

__all__ = ["Area", "AreaWorkspace", "AreasApiClient", "FixedGeolocator", "MapView", "NominatimGeocoder"]
