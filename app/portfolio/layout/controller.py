"""Container-width tracking and memoized layout for one grid.

The host (Qt widget, test, ...) reports width measurements; we debounce them
through a scheduler and only ever apply the newest one. Layout itself is the
pure `layout_justified` call, cached on its inputs.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Callable, Iterable, List, Optional, Protocol, Sequence, Tuple, TypeVar

from app.portfolio.layout.justified import JustifiedLayout, Placement, layout_justified
from app.portfolio.layout.ratios import LayoutItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DEBOUNCE_MS = 150
DEFAULT_CACHE_SIZE = 32


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        ...


def _cache_key(items: Sequence[LayoutItem], width: float, target_row_height: float, gap: float) -> tuple:
    # payload identity is part of the key: placements hand payloads back.
    content = tuple(
        (it.key, it.width, it.height, it.aspect_ratio_hint, id(it.payload)) for it in items
    )
    return (content, width, target_row_height, gap)


class LayoutController:
    def __init__(
        self,
        *,
        scheduler: Optional[Scheduler] = None,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        cache_size: int = DEFAULT_CACHE_SIZE,
        container_width: float = 0,
    ) -> None:
        if debounce_ms < 0:
            raise ValueError("debounce_ms must be >= 0")
        if cache_size <= 0:
            raise ValueError("cache_size must be > 0")

        self._scheduler = scheduler
        self._debounce_ms = int(debounce_ms)
        self._cache_size = int(cache_size)
        self._cache: "OrderedDict[tuple, JustifiedLayout]" = OrderedDict()
        self._listeners: List[Callable[[float], None]] = []

        self._width = container_width
        self._generation = 0
        self._pending: Optional[Tuple[int, float]] = None

    @property
    def container_width(self) -> float:
        return self._width

    @property
    def has_pending_measurement(self) -> bool:
        return self._pending is not None

    def subscribe(self, callback: Callable[[float], None]) -> Callable[[], None]:
        """Call `callback(width)` whenever an applied width differs. Returns an unsubscribe."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def measure(self, width: float) -> int:
        """Record a width measurement; returns its generation number.

        Rapid successive measurements coalesce: every scheduled application
        checks its generation and drops itself if a newer one exists.
        """

        self._generation += 1
        generation = self._generation
        self._pending = (generation, width)

        if self._scheduler is None:
            self._apply(generation)
        else:
            self._scheduler.call_later(self._debounce_ms, lambda: self._apply(generation))
        return generation

    def flush(self) -> None:
        """Apply the newest pending measurement immediately."""
        if self._pending is not None:
            self._apply(self._pending[0])

    def _apply(self, generation: int) -> None:
        if self._pending is None or self._pending[0] != generation:
            logger.debug("dropping superseded width measurement (generation %d)", generation)
            return

        _, width = self._pending
        self._pending = None
        if width == self._width:
            return

        self._width = width
        logger.debug("container width -> %s", width)
        for listener in list(self._listeners):
            listener(width)

    def layout(
        self,
        items: Iterable[LayoutItem],
        target_row_height: float,
        gap: float,
    ) -> JustifiedLayout:
        items = list(items)
        key = _cache_key(items, self._width, target_row_height, gap)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            return cached

        result = layout_justified(
            items,
            container_width=self._width,
            target_row_height=target_row_height,
            gap=gap,
        )
        self._cache[key] = result
        while len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)
        return result

    def render(
        self,
        items: Iterable[LayoutItem],
        target_row_height: float,
        gap: float,
        render_item: Callable[[Placement], T],
    ) -> List[List[T]]:
        """Run `render_item` once per item, in input order, grouped per row."""
        result = self.layout(items, target_row_height, gap)
        return [[render_item(p) for p in row.placements] for row in result.rows]

    def clear_cache(self) -> None:
        self._cache.clear()
