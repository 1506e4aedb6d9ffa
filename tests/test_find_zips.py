from __future__ import annotations

import importlib.util
import json
from pathlib import Path

from zipfinder.exceptions import SourceUnavailable
from zipfinder.extract.dataset import GeometryStore

PROJECT_ROOT = Path(__file__).resolve().parents[1]

_SCRIPT_SPEC = importlib.util.spec_from_file_location("find_zips", PROJECT_ROOT / "scripts" / "find_zips.py")
assert _SCRIPT_SPEC and _SCRIPT_SPEC.loader  # pragma: no cover - sanity check
find_zips = importlib.util.module_from_spec(_SCRIPT_SPEC)
_SCRIPT_SPEC.loader.exec_module(find_zips)

SQUARE_28277 = {
    "type": "Polygon",
    "coordinates": [[[-80.9, 35.0], [-80.8, 35.0], [-80.8, 35.1], [-80.9, 35.1], [-80.9, 35.0]]],
}
DOCUMENT = {
    "type": "FeatureCollection",
    "features": [{"type": "Feature", "properties": {"ZCTA5CE10": "28277"}, "geometry": SQUARE_28277}],
}


def _use_fetcher(monkeypatch, fetcher) -> None:
    monkeypatch.setattr(find_zips, "GeometryStore", lambda config: GeometryStore(config, fetcher=fetcher))


def test_cli_polygon_and_zip_lookup(tmp_path, monkeypatch, capsys):
    _use_fetcher(monkeypatch, lambda url, timeout: DOCUMENT)
    polygon_path = tmp_path / "drawn.geojson"
    polygon_path.write_text(
        json.dumps(
            {
                "type": "Feature",
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[[-80.86, 35.04], [-80.84, 35.04], [-80.85, 35.06]]],
                },
            }
        ),
        encoding="utf-8",
    )
    csv_path = tmp_path / "out" / "selection.csv"
    geojson_path = tmp_path / "out" / "selection.geojson"

    exit_code = find_zips.main(
        [
            "--polygon",
            str(polygon_path),
            "--zip",
            "28277",
            "--zip",
            "99999",
            "--url",
            "https://example.test/zips.json",
            "--output",
            str(csv_path),
            "--geojson-output",
            str(geojson_path),
        ]
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "28277\tfound" in out
    assert "99999\tnot found" in out
    assert out.count("28277\t") == 1
    assert "bounds: [[35.0, -80.9], [35.1, -80.8]]" in out
    assert csv_path.exists()
    assert len(json.loads(geojson_path.read_text(encoding="utf-8"))["features"]) == 1


def test_cli_reports_unavailable_dataset(monkeypatch):
    def down(url, timeout):
        raise SourceUnavailable("offline", url=url)

    _use_fetcher(monkeypatch, down)

    assert find_zips.main(["--zip", "28277"]) == 1
