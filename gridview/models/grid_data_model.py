"""
Observable grid state for the grid widget.

Wraps the pure partitioner in a QObject so views can subscribe to changes
instead of polling. The model owns exactly one GridState at a time and
replaces it wholesale whenever the data changes.
"""

from __future__ import annotations

from typing import Iterable

from PySide6.QtCore import QObject, Signal

from gridview.models.grid_partition import (Band, ConfigurationError,
                                            GridState, Placement,
                                            PriorityMode, partition, update)
from gridview.utils.flow_log import log_flow


class GridDataModel(QObject):
    """
    Holds the partitioned grid for one grid widget.

    Pass `max_row_element` for a row-priority grid or `max_column_element`
    for a column-priority grid, never both.
    """

    # Emitted after the state was rebuilt (new version number)
    bands_changed = Signal(int)

    def __init__(self, data: Iterable[object], *,
                 max_row_element: int | None = None,
                 max_column_element: int | None = None, parent=None):
        super().__init__(parent)
        if (max_row_element is None) == (max_column_element is None):
            raise ConfigurationError(
                'Pass exactly one of max_row_element or max_column_element')
        if max_row_element is not None:
            mode, capacity = PriorityMode.ROW, max_row_element
        else:
            mode, capacity = PriorityMode.COLUMN, max_column_element

        self._data = tuple(data)
        self._state: GridState = partition(self._data, mode, capacity)
        self._version = 0
        log_flow("GRID", f"Built {self._state.band_count} bands from "
                         f"{len(self._data)} items ({mode.value}-priority, "
                         f"capacity={capacity})")

    def update_data_array(self, updated_data: Iterable[object]):
        """Replace the data and rebuild every band from scratch."""
        self._data = tuple(updated_data)
        self._state = update(self._state, self._data)
        self._version += 1
        log_flow("GRID", f"Rebuilt v{self._version}: {self._state.band_count} "
                         f"bands from {len(self._data)} items",
                 throttle_key="grid_rebuild", every_s=0.25)
        self.bands_changed.emit(self._version)

    @property
    def state(self) -> GridState:
        return self._state

    @property
    def data(self) -> tuple:
        return self._data

    @property
    def bands(self) -> tuple[Band, ...]:
        return self._state.bands

    @property
    def placements(self) -> tuple[Placement, ...]:
        return self._state.placements

    @property
    def mode(self) -> PriorityMode:
        return self._state.mode

    @property
    def capacity(self) -> int:
        return self._state.capacity

    @property
    def version(self) -> int:
        return self._version

    def is_row_priority(self) -> bool:
        return self._state.mode is PriorityMode.ROW

    def is_column_priority(self) -> bool:
        return self._state.mode is PriorityMode.COLUMN

    def band_count(self) -> int:
        return self._state.band_count

    def row_total_count(self) -> int:
        return self._state.row_count

    def column_total_count(self) -> int:
        return self._state.column_count
