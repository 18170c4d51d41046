"""
cli.py
Line-oriented driver for the area workspace. Reads one command per line from
stdin (or a script file) and prints the workspace state or the error after each.

    click LAT LON       add a point as if the map was clicked
    add LAT LON         manual entry (validated against Delhi NCR)
    search TEXT...      geocode a place and add it
    locate              add the device location
    name TEXT...        set the area name
    create              submit the pending points as an area
    clear-markers       drop pending points and the location marker
    clear-area          drop the highlight
    select ID           highlight an area
    delete ID           delete an area
    toggle ID           expand/collapse an area's coordinate list
    list                show areas
    render PATH         write the map as HTML
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from typing import Callable, Dict, List, Optional, TextIO

from .api_client import AreasApiClient
from .config import ClientSettings
from .geocoding import NominatimGeocoder
from .geolocation import FixedGeolocator, parse_location
from .map_view import MapView
from .workspace import AreaWorkspace

class WorkspaceShell:
    def __init__(self, workspace: AreaWorkspace, view: MapView, out: TextIO = sys.stdout):
        self.ws = workspace
        self.view = view
        self.out = out
        self.view.on_click = self.ws.handle_map_click
        self.commands: Dict[str, Callable[[List[str]], bool]] = {
            "click": self._click,
            "add": self._add,
            "search": self._search,
            "locate": lambda args: self.ws.find_current_location(),
            "name": self._name,
            "create": lambda args: self.ws.create_area(),
            "clear-markers": lambda args: self.ws.clear_markers(),
            "clear-area": lambda args: self.ws.clear_area(),
            "select": lambda args: self.ws.select_area(_one(args)),
            "delete": lambda args: self.ws.delete_area(_one(args)),
            "toggle": lambda args: self.ws.toggle_coordinates(_one(args)),
            "list": lambda args: self.ws.load_areas(),
            "render": self._render,
        }

    def run_line(self, line: str) -> Optional[bool]:
        line = line.strip()
        if not line or line.startswith("#"):
            return None
        try:
            cmd, *args = shlex.split(line)
        except ValueError as exc:
            self._print(f"error: {exc}")
            return False
        handler = self.commands.get(cmd)
        if handler is None:
            self._print(f"error: unknown command {cmd!r}")
            return False
        try:
            ok = handler(args)
        except (IndexError, ValueError) as exc:
            self._print(f"error: bad arguments for {cmd}: {exc}")
            return False
        self.view.show(self.ws)
        self._report(ok)
        return ok

    def run(self, lines) -> int:
        failures = 0
        for line in lines:
            if self.run_line(line) is False:
                failures += 1
        return failures

    def _click(self, args: List[str]) -> bool:
        self.view.click(float(args[0]), float(args[1]))
        return self.ws.error is None

    def _add(self, args: List[str]) -> bool:
        self.ws.lat_input, self.ws.lon_input = args[0], args[1]
        return self.ws.add_marker()

    def _search(self, args: List[str]) -> bool:
        self.ws.search_query = " ".join(args)
        return self.ws.search_location()

    def _name(self, args: List[str]) -> bool:
        self.ws.area_name = " ".join(args)
        return True

    def _render(self, args: List[str]) -> bool:
        self.view.show(self.ws)
        self.view.save(_one(args))
        return True

    def _report(self, ok: bool) -> None:
        if not ok and self.ws.error:
            self._print(f"error: {self.ws.error}")
        self._print(f"markers: {len(self.ws.markers)}  center: {self.ws.center[0]:.6f},{self.ws.center[1]:.6f}")
        if self.ws.current_location:
            lat, lon = self.ws.current_location
            self._print(f"you are here: {lat:.6f},{lon:.6f}")
        areas = self.ws.visible_areas
        if not areas:
            self._print("No areas created yet.")
        for area in areas:
            mark = "*" if self.ws.selected_area and self.ws.selected_area == area.coordinates else " "
            self._print(f"{mark} {area.id}  {area.name}  ({len(area.coordinates)} points)")
            if self.ws.is_coordinates_open(area.id):
                for lat, lon in area.coordinates:
                    self._print(f"    Latitude: {lat:.6f}, Longitude: {lon:.6f}")

    def _print(self, text: str) -> None:
        print(text, file=self.out)


def _one(args: List[str]) -> str:
    if len(args) != 1:
        raise ValueError("expected exactly one argument")
    return args[0]


def build_workspace(settings: ClientSettings, location: Optional[str] = None) -> AreaWorkspace:
    fixed = parse_location(location)
    return AreaWorkspace(
        api=AreasApiClient(settings.api_base_url, timeout_s=settings.http_timeout_s),
        user_id=settings.user_id,
        geocoder=NominatimGeocoder(
            url=settings.nominatim_url,
            user_agent=settings.user_agent,
            timeout_s=settings.http_timeout_s,
        ),
        geolocator=FixedGeolocator(fixed) if fixed else None,
        geolocation_timeout_s=settings.geolocation_timeout_s,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Draw and manage Delhi NCR areas from the command line.")
    parser.add_argument("--api-url", help="Areas API base URL (e.g. http://127.0.0.1:8000)")
    parser.add_argument("--user-id", help="User the areas belong to")
    parser.add_argument("--location", help="Device location as LAT,LON for the 'locate' command")
    parser.add_argument("--script", help="Read commands from this file instead of stdin")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP failures and lookups")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    overrides = {}
    if args.api_url:
        overrides["AREAMAP_API_URL"] = args.api_url
    if args.user_id:
        overrides["AREAMAP_USER_ID"] = args.user_id
    settings = ClientSettings(**overrides)

    workspace = build_workspace(settings, args.location)
    shell = WorkspaceShell(workspace, MapView())
    if not workspace.load_areas():
        print(f"error: {workspace.error}", file=sys.stderr)

    if args.script:
        with open(args.script, "r", encoding="utf-8") as f:
            failures = shell.run(f)
    else:
        failures = shell.run(sys.stdin)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
