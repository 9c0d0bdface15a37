from __future__ import annotations

from pathlib import Path
import argparse
import logging

from app.portfolio.layout.breakpoints import VIEW_BREAKPOINTS, row_metrics
from app.portfolio.layout.justified import JustifiedLayout, layout_justified
from app.portfolio.utils.imaging import scan_image_items


def layout_folder(
    folder: str,
    *,
    container_width: int = 1200,
    target_row_height: int | None = None,
    gap: int | None = None,
    view: str = "gallery",
) -> JustifiedLayout:
    metrics = row_metrics(view=view, viewport_width_px=container_width)
    return layout_justified(
        scan_image_items(folder),
        container_width=container_width,
        target_row_height=target_row_height if target_row_height is not None else metrics.target_row_height,
        gap=gap if gap is not None else metrics.gap,
    )


def format_layout(layout: JustifiedLayout) -> list[str]:
    lines = []
    for n, row in enumerate(layout.rows, start=1):
        tag = "" if row.filled else " (last, unstretched)"
        cells = ", ".join(
            f"{Path(str(p.key)).name} {p.pixel_width}x{p.pixel_height}" for p in row.placements
        )
        lines.append(f"row {n} @y={row.top} h={row.pixel_height}{tag}: {cells}")
    lines.append(f"Total height: {layout.total_height}px")
    return lines


def main() -> None:
    parser = argparse.ArgumentParser(description="Lay out a folder of images as a justified grid")
    parser.add_argument("folder", help="Folder containing images")
    parser.add_argument("--width", type=int, default=1200, help="Container width in px")
    parser.add_argument("--view", default="gallery", choices=sorted(VIEW_BREAKPOINTS), help="Breakpoint preset")
    parser.add_argument("--row-height", type=int, default=None, help="Override target row height")
    parser.add_argument("--gap", type=int, default=None, help="Override gap between items")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    result = layout_folder(
        args.folder,
        container_width=args.width,
        target_row_height=args.row_height,
        gap=args.gap,
        view=args.view,
    )
    print(f"Folder: {Path(args.folder).resolve()}")
    print(f"Rows: {len(result.rows)}")
    for line in format_layout(result):
        print(line)


if __name__ == "__main__":
    main()
