"""Command line interface to find the zip codes touched by a drawn area."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path


def _ensure_project_root_on_path() -> None:
    """Make the repository root importable when running as a script."""

    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_project_root_on_path()

from zipfinder.config import configure_logging  # noqa: E402  (import after path fix)
from zipfinder.exceptions import InvalidGeometry, SourceUnavailable  # noqa: E402
from zipfinder.extract.dataset import DatasetConfig, GeometryStore  # noqa: E402
from zipfinder.load.csv import save_geometry, save_selection  # noqa: E402
from zipfinder.matcher import ZipMatcher  # noqa: E402
from zipfinder.models import ZipRecord  # noqa: E402
from zipfinder.selection import merge_selection, selection_bounds  # noqa: E402

logger = logging.getLogger("find_zips")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--polygon",
        type=Path,
        default=None,
        help="GeoJSON file (Feature or geometry) with the drawn Polygon/MultiPolygon.",
    )
    parser.add_argument(
        "--zip",
        dest="zip_codes",
        action="append",
        help="Zip code to look up directly (may be given multiple times).",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="URL of the reference zip GeoJSON dataset.",
    )
    parser.add_argument(
        "--cache",
        type=Path,
        default=None,
        help="File used to store/reuse the downloaded dataset.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds for the dataset download.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="CSV file where the selection is saved.",
    )
    parser.add_argument(
        "--geojson-output",
        type=Path,
        default=None,
        help="GeoJSON file where the found zip polygons are saved.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return parser


def _build_config(args: argparse.Namespace) -> DatasetConfig:
    config_kwargs: dict[str, object] = {}
    if args.url:
        config_kwargs["url"] = args.url
    if args.cache is not None:
        config_kwargs["cache_path"] = args.cache
    if args.timeout is not None:
        config_kwargs["timeout"] = args.timeout
    return DatasetConfig(**config_kwargs)


async def _collect(matcher: ZipMatcher, polygon_path: Path | None, zip_codes: list[str]) -> list[ZipRecord]:
    selection: list[ZipRecord] = []
    if polygon_path is not None:
        drawn = json.loads(polygon_path.read_text(encoding="utf-8"))
        selection = merge_selection(selection, await matcher.find_intersecting(drawn))
    if zip_codes:
        selection = merge_selection(selection, await matcher.lookup_many(zip_codes))
    return selection


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.polygon is None and not args.zip_codes:
        parser.error("provide --polygon and/or at least one --zip")

    configure_logging(args.log_level)

    matcher = ZipMatcher(GeometryStore(_build_config(args)))

    try:
        selection = asyncio.run(_collect(matcher, args.polygon, args.zip_codes or []))
    except SourceUnavailable as exc:
        logger.error("Zip dataset unavailable: %s", exc)
        return 1
    except (InvalidGeometry, OSError, ValueError) as exc:
        logger.error("Invalid polygon input: %s", exc)
        return 1

    for record in selection:
        print(f"{record.zip_code}\t{'found' if record.found else 'not found'}")

    box = selection_bounds(selection)
    if box is not None:
        print(f"bounds: {box.to_leaflet_bounds()}")

    if args.output is not None:
        save_selection(selection, args.output)
        print(f"CSV saved: {args.output}  ({len(selection)} rows)")
    if args.geojson_output is not None:
        save_geometry(selection, args.geojson_output)
        print(f"GeoJSON saved: {args.geojson_output}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
