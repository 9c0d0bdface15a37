"""Justified (row-based) image layout.

This module is intentionally UI-framework agnostic.

Goal: given a *known* container width and an ordered list of items with an
aspect ratio, group the items into rows that fill the width at close to a
target row height, without cropping. Output is pure geometry; drawing is the
caller's job.

Pipeline: normalize ratios -> pack rows (greedy) -> scale each row to the
container width -> keep an under-filled trailing row at the target height.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from app.portfolio.layout.ratios import LayoutItem, normalized_ratios

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Computed geometry for one item.

    width/height are exact (width == aspect_ratio * height). x, pixel_width and
    pixel_height are rounded for drawing; in a filled row the last item absorbs
    the rounding remainder so the row sums to the container width.
    """

    item: LayoutItem
    aspect_ratio: float
    width: float
    height: float
    x: int
    pixel_width: int
    pixel_height: int

    @property
    def key(self):
        return self.item.key


@dataclass(frozen=True)
class Row:
    placements: Tuple[Placement, ...]
    height: float
    top: int
    is_last: bool
    filled: bool

    @property
    def pixel_height(self) -> int:
        return self.placements[0].pixel_height if self.placements else 0

    @property
    def pixel_width(self) -> int:
        if not self.placements:
            return 0
        tail = self.placements[-1]
        return tail.x + tail.pixel_width


@dataclass(frozen=True)
class JustifiedLayout:
    rows: Tuple[Row, ...]
    container_width: float
    target_row_height: float
    gap: float
    total_height: int

    def placements(self) -> List[Placement]:
        return [p for row in self.rows for p in row.placements]


def _validate_config(target_row_height: float, gap: float) -> None:
    if not math.isfinite(target_row_height) or target_row_height <= 0:
        raise ValueError("target_row_height must be > 0")
    if not math.isfinite(gap) or gap < 0:
        raise ValueError("gap must be >= 0")


def natural_width(ratios: Sequence[float], target_row_height: float, gap: float) -> float:
    """Width the items would take at the target row height, gaps included."""

    if not ratios:
        return 0.0
    return target_row_height * sum(ratios) + gap * (len(ratios) - 1)


def pack_rows(
    ratios: Sequence[float],
    *,
    container_width: float,
    target_row_height: float,
    gap: float,
) -> List[List[int]]:
    """Partition item indices into rows.

    Greedy, single pass. When an item would overflow the row we keep it only if
    overshooting is closer to the container width than stopping short; ties
    close the row.
    """

    groups: List[List[int]] = []
    current: List[int] = []
    ratio_sum = 0.0

    for idx, ratio in enumerate(ratios):
        if not current:
            # A lone item always forms a row, even if wider than the container.
            current.append(idx)
            ratio_sum = ratio
            continue

        without = target_row_height * ratio_sum + gap * (len(current) - 1)
        with_item = without + target_row_height * ratio + gap

        if with_item <= container_width:
            current.append(idx)
            ratio_sum += ratio
            continue

        under_fill = container_width - without
        over_fill = with_item - container_width
        # Gaps alone would eat the whole width; scaling could not fit it.
        no_room = container_width - gap * len(current) <= 0
        if no_room or under_fill <= over_fill:
            groups.append(current)
            current = [idx]
            ratio_sum = ratio
        else:
            current.append(idx)
            groups.append(current)
            current = []
            ratio_sum = 0.0

    if current:
        groups.append(current)
    return groups


def scale_row(
    ratios: Sequence[float],
    *,
    container_width: float,
    target_row_height: float,
    gap: float,
) -> Tuple[float, List[float]]:
    """Uniformly scale a row so it spans the container exactly.

    Returns (row_height, widths). A single panorama wider than the container
    gets scale < 1; that is the only way to fit it without cropping.
    """

    n = len(ratios)
    usable = container_width - gap * (n - 1)
    scale = usable / (target_row_height * sum(ratios))
    height = target_row_height * scale
    return height, [r * height for r in ratios]


def is_underfilled(
    ratios: Sequence[float],
    *,
    container_width: float,
    target_row_height: float,
    gap: float,
) -> bool:
    return natural_width(ratios, target_row_height, gap) < container_width


def place_last_row(ratios: Sequence[float], *, target_row_height: float) -> Tuple[float, List[float]]:
    """Trailing short row: no stretch, every item at the target height."""

    return float(target_row_height), [r * target_row_height for r in ratios]


def _snap_row(
    items: Sequence[LayoutItem],
    ratios: Sequence[float],
    height: float,
    widths: Sequence[float],
    *,
    gap: float,
    fill_width: Optional[float],
) -> Tuple[Placement, ...]:
    pixel_height = max(1, int(round(height)))
    pixel_widths = [max(1, int(round(w))) for w in widths]

    if fill_width is not None and pixel_widths:
        span = int(round(fill_width - gap * (len(pixel_widths) - 1)))
        pixel_widths[-1] = max(1, span - sum(pixel_widths[:-1]))

    placements = []
    cursor = 0
    for i, (item, ratio, w) in enumerate(zip(items, ratios, widths)):
        x = int(round(cursor + gap * i))
        placements.append(
            Placement(
                item=item,
                aspect_ratio=ratio,
                width=w,
                height=height,
                x=x,
                pixel_width=pixel_widths[i],
                pixel_height=pixel_height,
            )
        )
        cursor += pixel_widths[i]
    return tuple(placements)


def _check_unique_keys(items: Sequence[LayoutItem]) -> None:
    seen = set()
    for item in items:
        if item.key in seen:
            raise ValueError(f"duplicate item key: {item.key!r}")
        seen.add(item.key)


def layout_justified(
    items: Iterable[LayoutItem],
    *,
    container_width: float,
    target_row_height: float,
    gap: float,
) -> JustifiedLayout:
    """Compute rows and per-item sizes.

    Returns an empty layout (no rows) for an empty item list or a container
    that has not been measured yet (width <= 0).
    """

    _validate_config(target_row_height, gap)
    items = list(items)
    _check_unique_keys(items)

    if not items or not math.isfinite(container_width) or container_width <= 0:
        if items:
            logger.debug("container width %r not usable yet; empty layout", container_width)
        return JustifiedLayout((), container_width, target_row_height, gap, 0)

    ratios = normalized_ratios(items)
    groups = pack_rows(
        ratios,
        container_width=container_width,
        target_row_height=target_row_height,
        gap=gap,
    )

    rows: List[Row] = []
    top = 0
    for group_no, group in enumerate(groups):
        row_items = [items[i] for i in group]
        row_ratios = [ratios[i] for i in group]
        is_last = group_no == len(groups) - 1

        if is_last and is_underfilled(
            row_ratios,
            container_width=container_width,
            target_row_height=target_row_height,
            gap=gap,
        ):
            height, widths = place_last_row(row_ratios, target_row_height=target_row_height)
            fill_width = None
        else:
            height, widths = scale_row(
                row_ratios,
                container_width=container_width,
                target_row_height=target_row_height,
                gap=gap,
            )
            fill_width = container_width

        placements = _snap_row(row_items, row_ratios, height, widths, gap=gap, fill_width=fill_width)
        row = Row(
            placements=placements,
            height=height,
            top=int(round(top)),
            is_last=is_last,
            filled=fill_width is not None,
        )
        rows.append(row)
        top += row.pixel_height + gap

    total = rows[-1].top + rows[-1].pixel_height
    return JustifiedLayout(tuple(rows), container_width, target_row_height, gap, int(total))
