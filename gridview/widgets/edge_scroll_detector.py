"""Debounced detection of a scroll container reaching its trailing edge."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from PySide6.QtCore import QRectF, QTimer

from gridview.models.grid_partition import ConfigurationError, PriorityMode
from gridview.utils.flow_log import log_flow
from gridview.utils.settings import get_edge_margin, get_scroll_debounce_ms

logger = logging.getLogger(__name__)


class ScrollAxis(Enum):
    VERTICAL = 'vertical'
    HORIZONTAL = 'horizontal'
    BOTH = 'both'

    @classmethod
    def for_mode(cls, mode: PriorityMode) -> ScrollAxis:
        """Row-priority grids grow downwards, column-priority grids sideways."""
        return cls.VERTICAL if mode is PriorityMode.ROW else cls.HORIZONTAL


@dataclass
class ScrollEdgeState:
    last_rect: QRectF | None = None
    debounce_ms: int = 100
    edge_reached: bool = False
    first_geometry_seen: bool = False


def is_at_edge(offset: float, content_extent: float, viewport_extent: float,
               margin: float = 0.0) -> bool:
    """
    Return whether the trailing end of the content is fully in view.

    Args:
        offset: Distance scrolled from the content origin.
        content_extent: Size of the content along the scroll axis.
        viewport_extent: Size of the visible area along the scroll axis.
        margin: Trigger this much before the exact edge.
    """
    if viewport_extent <= 0:
        return False
    remaining = content_extent - viewport_extent
    if remaining < 0:
        return False
    if offset <= 0:
        return False
    return offset > remaining - margin


class EdgeScrollDetector:
    """
    Fires `on_edge_reached` once per approach to the trailing edge.

    Geometry updates are coalesced: every update restarts the debounce
    timer and only the last rect is evaluated when the timer expires. The
    first rect ever received is the initial layout and is ignored. After
    firing, nothing fires again until a rect is evaluated that is away from
    the edge.
    """

    def __init__(self, axis: ScrollAxis, on_edge_reached: Callable[[], None],
                 *, debounce_ms: int | None = None,
                 edge_margin: float | None = None,
                 viewport_extent: float = 0.0, timer=None):
        if axis is ScrollAxis.BOTH:
            raise ConfigurationError('Edge detection needs a single scroll axis')
        if debounce_ms is None:
            debounce_ms = get_scroll_debounce_ms()
        if debounce_ms < 0:
            raise ConfigurationError(
                f'Debounce window must not be negative, got {debounce_ms}')
        self.axis = axis
        self.edge_margin = get_edge_margin() if edge_margin is None else float(edge_margin)
        self._on_edge_reached = on_edge_reached
        self._viewport_extent = float(viewport_extent)
        self._state = ScrollEdgeState(debounce_ms=int(debounce_ms))
        self._pending_rect: QRectF | None = None
        self._shut_down = False

        if timer is None:
            timer = QTimer()
            timer.setSingleShot(True)
        self._timer = timer
        self._timer.timeout.connect(self.flush)

    @classmethod
    def for_mode(cls, mode: PriorityMode, on_edge_reached: Callable[[], None],
                 **kwargs) -> EdgeScrollDetector:
        return cls(ScrollAxis.for_mode(mode), on_edge_reached, **kwargs)

    @property
    def state(self) -> ScrollEdgeState:
        return self._state

    @property
    def edge_reached(self) -> bool:
        return self._state.edge_reached

    @property
    def viewport_extent(self) -> float:
        return self._viewport_extent

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def has_pending(self) -> bool:
        return self._pending_rect is not None

    def set_viewport_extent(self, extent: float):
        self._viewport_extent = max(0.0, float(extent))

    def on_geometry_changed(self, rect):
        """Receive the content frame in viewport coordinates."""
        if self._shut_down:
            return
        if not self._state.first_geometry_seen:
            self._state.first_geometry_seen = True
            return
        self._pending_rect = QRectF(rect)
        self._timer.stop()
        self._timer.start(self._state.debounce_ms)

    def flush(self):
        """Evaluate the pending rect now instead of waiting for the timer."""
        if self._shut_down or self._pending_rect is None:
            return
        self._timer.stop()
        rect = self._pending_rect
        self._pending_rect = None
        self._state.last_rect = rect
        self._evaluate(rect)

    def _evaluate(self, rect: QRectF):
        if self.axis is ScrollAxis.VERTICAL:
            offset, extent = -rect.y(), rect.height()
        else:
            offset, extent = -rect.x(), rect.width()

        at_edge = is_at_edge(offset, extent, self._viewport_extent,
                             self.edge_margin)
        if not at_edge:
            if self._state.edge_reached:
                log_flow("EDGE", f"Left {self.axis.value} edge at offset={offset:.1f}")
            self._state.edge_reached = False
            return
        if self._state.edge_reached:
            return

        # Flag before the callback so a callback that scrolls or loads data
        # synchronously cannot trigger a second page for the same approach.
        self._state.edge_reached = True
        log_flow("EDGE", f"Reached {self.axis.value} edge: offset={offset:.1f} "
                         f"content={extent:.1f} viewport={self._viewport_extent:.1f}")
        try:
            self._on_edge_reached()
        except Exception:
            logger.exception('Pagination callback failed')

    def reset(self):
        """Forget the current approach, e.g. after the data was replaced."""
        self._timer.stop()
        self._pending_rect = None
        self._state.edge_reached = False

    def shutdown(self):
        """Cancel the pending check; the detector ignores all later events."""
        if self._shut_down:
            return
        self._shut_down = True
        self._pending_rect = None
        self._timer.stop()
