"""Responsive row-height helpers for the justified grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class RowMetrics:
    target_row_height: int
    gap: int


SMALL_VIEWPORT_PX = 640
MEDIUM_VIEWPORT_PX = 1024

# view -> ((small, medium, large) row heights, gap)
VIEW_BREAKPOINTS: Dict[str, Tuple[Tuple[int, int, int], int]] = {
    "gallery": ((160, 300, 400), 4),
    "playground": ((115, 300, 400), 4),
    # Projects use a fixed 1.5:1 tile, so the rows run taller.
    "projects": ((280, 380, 440), 8),
}


def row_metrics(*, view: str, viewport_width_px: int) -> RowMetrics:
    """Pick target row height and gap for a view at a viewport width.

    Policy:
    - < 640px: small phones
    - < 1024px: tablets / narrow windows
    - otherwise desktop

    Heights above 440px made single images huge on very wide screens, so the
    large breakpoint stays capped there.
    """

    if view not in VIEW_BREAKPOINTS:
        raise ValueError(f"unknown view: {view!r}")
    if viewport_width_px <= 0:
        raise ValueError("viewport_width_px must be > 0")

    (small, medium, large), gap = VIEW_BREAKPOINTS[view]
    if viewport_width_px < SMALL_VIEWPORT_PX:
        height = small
    elif viewport_width_px < MEDIUM_VIEWPORT_PX:
        height = medium
    else:
        height = large
    return RowMetrics(target_row_height=height, gap=gap)
