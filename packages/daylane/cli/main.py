"""Command-line interface for daylane.

Loads an events file, runs the layout engine against in-memory
surfaces, and prints the resulting rectangles.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daylane.core.config.loader import configure_logging, load_app_config, load_config
from daylane.core.config.models import AppConfig, LayoutConfig
from daylane.core.layout import (
    InMemoryContainer,
    InMemorySurface,
    LayoutEngine,
    LayoutError,
    LayoutResult,
    check_layout,
)
from daylane.core.utils.json import dumps_json, write_json

console = Console()
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_CHECK_FAILED = 2


def _parse_instant(value: Any, day: date) -> datetime | int:
    """Parse an event time from an events file.

    Accepts datetimes (YAML timestamps), epoch milliseconds, ISO-8601
    strings, and ``HH:MM`` strings anchored to ``day``.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) <= 5 and ":" in text:
            return datetime.combine(day, time.fromisoformat(text.zfill(5)))
        return datetime.fromisoformat(text)
    raise ValueError(f"Unsupported time value: {value!r}")


def load_events(path: Path, day: date | None = None) -> list[dict[str, Any]]:
    """Load event definitions from a JSON or YAML file.

    The file holds a mapping with an ``events`` list and an optional
    ``date`` used to anchor ``HH:MM`` times.

    Args:
        path: Events file.
        day: Anchor date; overrides the file's ``date``.

    Returns:
        Event field mappings (without render targets).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file or an event time is malformed.
    """
    raw = load_config(path)
    entries = raw.get("events")
    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected an 'events' list")

    if day is None:
        file_day = raw.get("date")
        if isinstance(file_day, date):
            day = file_day
        elif isinstance(file_day, str):
            day = date.fromisoformat(file_day)
        else:
            day = date.today()

    events: list[dict[str, Any]] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: event #{index} is not a mapping")
        event = {
            "id": str(entry.get("id") or f"event-{index}"),
            "start_time": _parse_instant(entry.get("start"), day),
            "end_time": _parse_instant(entry.get("end"), day),
            "title": str(entry.get("title") or ""),
        }
        if entry.get("kind"):
            event["kind"] = entry["kind"]
        if entry.get("calendar_id"):
            event["calendar_id"] = str(entry["calendar_id"])
        events.append(event)

    logger.debug("Loaded %d event(s) from %s", len(events), path)
    return events


def run_layout(
    events: list[dict[str, Any]],
    width: int,
    config: LayoutConfig | None = None,
) -> tuple[LayoutEngine, dict[str, InMemorySurface], LayoutResult]:
    """Register events against in-memory surfaces and run one layout pass."""
    host = InMemoryContainer(width)
    engine = LayoutEngine(host, config=config)
    surfaces: dict[str, InMemorySurface] = {}
    for event in events:
        surface = InMemorySurface(event["id"])
        record = engine.register_event({**event, "render_target": surface})
        surfaces[record.id] = surface
    return engine, surfaces, engine.calculate_layout()


def _result_payload(result: LayoutResult, engine: LayoutEngine) -> dict[str, Any]:
    titles = {e.id: e.title for e in engine.events}
    return {
        "container_width": result.container_width,
        "available_width": result.available_width,
        "rects": [
            {"title": titles.get(event_id, ""), **rect.model_dump(mode="json")}
            for event_id, rect in result.rects.items()
        ],
        "groups": [
            {
                "event_ids": g.group.event_ids,
                "lane_count": g.lane_count,
                "lanes": dict(g.assignment.lanes),
            }
            for g in result.groups
        ],
        "diagnostics": [d.model_dump(mode="json") for d in result.diagnostics],
    }


def _print_table(result: LayoutResult, engine: LayoutEngine) -> None:
    titles = {e.id: e.title for e in engine.events}
    table = Table(title=f"Layout ({result.available_width}px available)")
    for column in ("id", "title", "lane", "left", "width", "top", "height", "density", "flags"):
        table.add_column(column)

    for event_id, rect in result.rects.items():
        flags = []
        if rect.title_only:
            flags.append("title-only")
        if rect.overflow:
            flags.append("overflow")
        table.add_row(
            escape(event_id),
            escape(titles.get(event_id, "")),
            f"{rect.lane}/{rect.lane_count}",
            str(rect.left),
            str(rect.width),
            str(rect.top),
            str(rect.height),
            rect.density.value,
            ",".join(flags),
        )
    console.print(table)


def _print_diagnostics(diagnostics: list[Any]) -> None:
    colors = {"info": "cyan", "warning": "yellow", "error": "red"}
    for d in diagnostics:
        color = colors.get(d.level, "white")
        console.print(f"[{color}]{d.level.upper()}[/{color}] {escape(d.message)}")


def _load_app_config(config_path: Path | None, log_level: str | None) -> AppConfig:
    """Resolve the app config for one command without mutating the loader cache."""
    app_config = load_app_config(config_path) if config_path else AppConfig()
    if log_level:
        level = log_level.upper()
    elif config_path is None:
        level = "WARNING"
    else:
        return app_config
    logging_config = app_config.logging.model_copy(update={"level": level})
    return app_config.model_copy(update={"logging": logging_config})


def cmd_layout(args: argparse.Namespace) -> int:
    """Compute and print the layout for an events file."""
    try:
        app_config = _load_app_config(args.config, args.log_level)
        configure_logging(app_config)
        events = load_events(args.events, args.date)
        engine, _surfaces, result = run_layout(events, args.width, app_config.layout)
    except (FileNotFoundError, ValueError, ValidationError, LayoutError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return EXIT_INPUT_ERROR

    checks = check_layout(result)
    payload = _result_payload(result, engine)
    payload["checks"] = [d.model_dump(mode="json") for d in checks]
    if args.output:
        write_json(args.output, payload)
        logger.info("Wrote layout to %s", args.output)

    if args.json:
        print(dumps_json(payload))
    else:
        _print_table(result, engine)
        _print_diagnostics([*result.diagnostics, *checks])

    return EXIT_CHECK_FAILED if checks else EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    """Run the layout property checks only."""
    try:
        app_config = _load_app_config(args.config, args.log_level)
        configure_logging(app_config)
        events = load_events(args.events, args.date)
        _engine, _surfaces, result = run_layout(events, args.width, app_config.layout)
    except (FileNotFoundError, ValueError, ValidationError, LayoutError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return EXIT_INPUT_ERROR

    checks = check_layout(result)
    if checks:
        _print_diagnostics(checks)
        return EXIT_CHECK_FAILED

    console.print(
        f"[green]OK[/green] {len(result.rects)} events, {len(result.groups)} groups, "
        f"max {result.max_lane_count} lanes"
    )
    return EXIT_OK


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("events", type=Path, help="Events file (.json, .yaml, .yml)")
    parser.add_argument("--width", type=int, required=True, help="Container width in pixels")
    parser.add_argument("--config", type=Path, default=None, help="App config file")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Anchor date for HH:MM times (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daylane",
        description="Lay out overlapping events on a 24-hour timeline",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    layout_parser = subparsers.add_parser("layout", help="Compute and print event rectangles")
    _add_common_arguments(layout_parser)
    layout_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    layout_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Also write the JSON layout to this file",
    )
    layout_parser.set_defaults(func=cmd_layout)

    check_parser = subparsers.add_parser("check", help="Verify layout properties")
    _add_common_arguments(check_parser)
    check_parser.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
