import io

from areamap_client.cli import WorkspaceShell
from areamap_client.map_view import MapView
from areamap_client.workspace import AreaWorkspace

from test_workspace import FakeApi


def _shell():
    api = FakeApi()
    ws = AreaWorkspace(api=api, user_id="user1")
    out = io.StringIO()
    return WorkspaceShell(ws, MapView(), out=out), ws, api, out


def test_draw_create_and_render(tmp_path) -> None:
    shell, ws, api, out = _shell()
    path = tmp_path / "map.html"
    failures = shell.run(
        [
            "click 28.6 77.2",
            "add 28.7 77.3",
            "click 28.65 77.25",
            "# comment lines are skipped",
            "name Lodhi Garden",
            "create",
            "toggle id1",
            f"render {path}",
        ]
    )
    assert failures == 0
    assert [a.name for a in ws.visible_areas] == ["Lodhi Garden"]
    assert ws.selected_area == [(28.6, 77.2), (28.7, 77.3), (28.65, 77.25)]
    assert path.exists()
    text = out.getvalue()
    assert "* id1  Lodhi Garden  (3 points)" in text
    assert "Latitude: 28.700000, Longitude: 77.300000" in text


def test_errors_are_reported_and_counted() -> None:
    shell, ws, api, out = _shell()
    failures = shell.run(["create", "add abc 77.2", "bogus", "select"])
    assert failures == 4
    text = out.getvalue()
    assert "error: Please select at least 3 points to create an area" in text
    assert "error: Please enter valid latitude and longitude" in text
    assert "error: unknown command 'bogus'" in text
    assert api.calls == []
