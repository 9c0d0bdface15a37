"""Aspect-ratio normalization for layout items.

A single item with broken dimensions must never take down the layout of its
siblings, so anything we can't turn into a sane ratio becomes a square.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional

logger = logging.getLogger(__name__)

DEFAULT_ASPECT_RATIO = 1.0
MIN_ASPECT_RATIO = 0.02
MAX_ASPECT_RATIO = 50.0


def _positive_finite(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f) or f <= 0:
        return None
    return f


def normalize_aspect_ratio(
    width: Any = None,
    height: Any = None,
    aspect_ratio: Any = None,
) -> float:
    """Return width / height, clamped, or 1.0 when it can't be derived.

    An explicit aspect_ratio wins over width/height when it is usable.
    """

    ratio = _positive_finite(aspect_ratio)
    if ratio is None:
        w = _positive_finite(width)
        h = _positive_finite(height)
        if w is None or h is None:
            return DEFAULT_ASPECT_RATIO
        ratio = w / h
        if not math.isfinite(ratio) or ratio <= 0:
            return DEFAULT_ASPECT_RATIO

    return min(MAX_ASPECT_RATIO, max(MIN_ASPECT_RATIO, ratio))


@dataclass(frozen=True)
class LayoutItem:
    """Input item for justified layout.

    key: opaque id, unique within one layout call.
    payload: caller-owned reference; handed back untouched in placements.
    """

    key: Hashable
    width: Optional[float] = None
    height: Optional[float] = None
    aspect_ratio_hint: Optional[float] = None
    payload: Any = field(default=None, compare=False, repr=False)

    @property
    def aspect_ratio(self) -> float:
        return normalize_aspect_ratio(self.width, self.height, self.aspect_ratio_hint)


def normalized_ratios(items: list[LayoutItem]) -> list[float]:
    ratios: list[float] = []
    for item in items:
        ratio = item.aspect_ratio
        usable = _positive_finite(item.aspect_ratio_hint) is not None or (
            _positive_finite(item.width) is not None and _positive_finite(item.height) is not None
        )
        if not usable:
            logger.debug("item %r has unusable dimensions (%r x %r); using 1:1", item.key, item.width, item.height)
        ratios.append(ratio)
    return ratios
