#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.portfolio.content import (
    gallery_collection_from_dict,
    gallery_layout_items,
    playground_layout_items,
    playground_section_from_dict,
    project_from_dict,
    project_layout_items,
)
from app.portfolio.layout.breakpoints import row_metrics
from app.portfolio.layout.controller import LayoutController


def main() -> None:
    parser = argparse.ArgumentParser(description="Demo: lay out a content JSON document at several viewport widths")
    parser.add_argument("content", help="JSON file with 'gallery', 'playground' and/or 'projects' lists")
    parser.add_argument("--width", action="append", type=int, default=[], help="Viewport width (repeatable)")
    args = parser.parse_args()

    doc = json.loads(Path(args.content).read_text(encoding="utf-8"))
    grids = []
    for data in doc.get("gallery", []):
        c = gallery_collection_from_dict(data)
        grids.append(("gallery", c.title, gallery_layout_items(c)))
    for data in doc.get("playground", []):
        s = playground_section_from_dict(data)
        grids.append(("playground", s.title, playground_layout_items(s)))
    if doc.get("projects"):
        grids.append(("projects", "Projects", project_layout_items(project_from_dict(p) for p in doc["projects"])))

    controller = LayoutController()
    for width in args.width or [375, 800, 1440]:
        controller.measure(width)
        print(f"== viewport {width}px")
        for view, title, items in grids:
            metrics = row_metrics(view=view, viewport_width_px=width)
            result = controller.layout(items, metrics.target_row_height, metrics.gap)
            sizes = [len(r.placements) for r in result.rows]
            print(f"- [{view}] {title}: {len(result.rows)} rows {sizes}, height {result.total_height}px")


if __name__ == "__main__":
    main()
