"""Row-priority and column-priority grid widgets with scroll pagination."""

from .models.grid_partition import (Band, ConfigurationError, GridState,
                                    Placement, PriorityMode, partition, update)
from .models.grid_data_model import GridDataModel
from .widgets.edge_scroll_detector import (EdgeScrollDetector, ScrollAxis,
                                           ScrollEdgeState, is_at_edge)
from .widgets.grid_view import GridScrollArea, GridView

__all__ = [
    'Band',
    'ConfigurationError',
    'EdgeScrollDetector',
    'GridDataModel',
    'GridScrollArea',
    'GridState',
    'GridView',
    'Placement',
    'PriorityMode',
    'ScrollAxis',
    'ScrollEdgeState',
    'is_at_edge',
    'partition',
    'update',
]
