#!/usr/bin/env python3
"""Run one refresh cycle and dump every view's display model.

This script polls the telemetry API once, renders each view into an
in-memory surface and prints the resulting display models, so you can
check what the dashboard would draw without a browser.

Usage
-----
::

    export MONITOR_BASE_URL="http://localhost:5051/api"
    python scripts/dump_dashboard.py

Options::

    --view cameras       Only dump this view (default: all views)
    --camera LPR2        Camera tab to select
    --event-type entrada Event type filter for the camera history
    --authorized true    Authorization filter for the camera history
    --search sensor      Device search term
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    -v                   Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pymonitoreo import Group, MonitorConfig, MonitorDashboard, RecordingSurface, View  # noqa: E402
from pymonitoreo.surface import AUTH_CONTROL, DEVICE_SEARCH_CONTROL, EVENT_TYPE_CONTROL  # noqa: E402
from pymonitoreo.views.display import Chart, Counter, DisplayModel, Panel, Table  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_mount(name: str, content: Any, out: list[str]) -> None:
    out.append(f"\n  ── {name} ──")
    if isinstance(content, Counter):
        out.append(f"    {content.value}")
    elif isinstance(content, Panel):
        if content.placeholder:
            out.append(f"    ({content.placeholder})")
        for item in content.items:
            out.append(f"    {item.label}: {item.value}")
    elif isinstance(content, Table):
        if content.placeholder:
            out.append(f"    ({content.placeholder})")
        for row in content.rows:
            if row.visible:
                out.append("    " + " | ".join(cell.text for cell in row.cells))
        if content.has_more:
            out.append("    [Ver más]")
    elif isinstance(content, Chart):
        for dataset in content.datasets:
            out.append(f"    {content.chart_type} {dataset.label}: {list(dataset.data)}")


def _print_model(model: DisplayModel, out: list[str]) -> None:
    suffix = f" ({model.entity_id})" if model.entity_id else ""
    out.append(_section(f"{model.title}{suffix}"))
    for name, content in model.mounts.items():
        _format_mount(name, content, out)


# ── main ─────────────────────────────────────────────────────


async def dump(args: argparse.Namespace) -> tuple[list[str], list[dict[str, Any]]]:
    surface = RecordingSurface(
        controls={
            EVENT_TYPE_CONTROL: args.event_type,
            AUTH_CONTROL: args.authorized,
            DEVICE_SEARCH_CONTROL: args.search,
        }
    )
    config = MonitorConfig.from_env(auto_refresh=False)
    out: list[str] = []
    models: list[dict[str, Any]] = []

    async with MonitorDashboard(config, surface) as dashboard:
        await dashboard.refresh()
        if args.camera:
            dashboard.select_entity(Group.CAMERAS, args.camera)
        for control in (EVENT_TYPE_CONTROL, AUTH_CONTROL, DEVICE_SEARCH_CONTROL):
            dashboard.on_control_changed(control)

        views = [View(args.view)] if args.view else list(View)
        for view in views:
            model = dashboard.navigate(view)
            _print_model(model, out)
            models.append(model.model_dump(mode="json"))

    return out, models


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--view", choices=[v.value for v in View])
    parser.add_argument("--camera")
    parser.add_argument("--event-type", default="")
    parser.add_argument("--authorized", default="", choices=["", "true", "false"])
    parser.add_argument("--search", default="")
    parser.add_argument("--json", action="store_true", dest="json_mode")
    parser.add_argument("--output", type=Path)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out, models = asyncio.run(dump(args))
    text = json.dumps(models, indent=2, ensure_ascii=False) if args.json_mode else "\n".join(out)

    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
