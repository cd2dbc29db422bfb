"""
Grid partitioning for row-priority and column-priority grids.

Assigns 1-based (row, column) coordinates to every element of a flat
sequence and groups the resulting placements into ordered bands. A band is
one row of a row-priority grid or one column of a column-priority grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class ConfigurationError(ValueError):
    """Raised when a grid is configured in a way that cannot be laid out."""


class PriorityMode(Enum):
    ROW = 'row'
    COLUMN = 'column'


@dataclass(frozen=True)
class Placement:
    """One element positioned in the grid."""
    row: int
    column: int
    data: object

    def band_key(self, mode: PriorityMode) -> int:
        """Coordinate shared by every placement of the same band."""
        return self.row if mode is PriorityMode.ROW else self.column

    def slot_key(self, mode: PriorityMode) -> int:
        """Position of the placement inside its band."""
        return self.column if mode is PriorityMode.ROW else self.row


Band = tuple[Placement, ...]


@dataclass(frozen=True)
class GridState:
    """Partitioned grid, rebuilt wholesale on every data change."""
    placements: tuple[Placement, ...]
    bands: tuple[Band, ...]
    mode: PriorityMode
    capacity: int

    @property
    def band_count(self) -> int:
        return len(self.bands)

    @property
    def is_empty(self) -> bool:
        return not self.placements

    @property
    def row_count(self) -> int:
        if self.mode is PriorityMode.ROW:
            return self.band_count
        return min(len(self.placements), self.capacity)

    @property
    def column_count(self) -> int:
        if self.mode is PriorityMode.COLUMN:
            return self.band_count
        return min(len(self.placements), self.capacity)


def coerce_mode(mode: PriorityMode | str) -> PriorityMode:
    if isinstance(mode, PriorityMode):
        return mode
    try:
        return PriorityMode(str(mode).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f'Unknown priority mode {mode!r}, expected "row" or "column"'
        ) from None


def validate_capacity(capacity: int) -> int:
    """Return `capacity` unchanged, or raise if a band could never fill."""
    # bool is an int subclass; True would silently mean a capacity of 1.
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ConfigurationError(
            f'Band capacity must be an integer, got {capacity!r}')
    if capacity < 1:
        raise ConfigurationError(
            f'Band capacity must be at least 1, got {capacity}')
    return capacity


def partition(data: Iterable[object], mode: PriorityMode | str,
              capacity: int) -> GridState:
    """
    Lay out `data` in a grid.

    In row-priority mode elements fill a row of `capacity` cells before
    wrapping to the next row; column-priority mode fills columns instead.

    Args:
        data: Elements in display order.
        mode: Which axis is filled first.
        capacity: Maximum number of elements in a band.

    Returns:
        GridState with one placement per element and bands ordered by their
        shared coordinate.

    Raises:
        ConfigurationError: If `capacity` is below 1 or `mode` is unknown.
    """
    mode = coerce_mode(mode)
    capacity = validate_capacity(capacity)

    placements = []
    axis_index = 1
    within_band_index = 0
    for element in data:
        if mode is PriorityMode.ROW:
            placement = Placement(row=axis_index,
                                  column=within_band_index + 1, data=element)
        else:
            placement = Placement(row=within_band_index + 1,
                                  column=axis_index, data=element)
        placements.append(placement)
        within_band_index += 1
        if within_band_index == capacity:
            within_band_index = 0
            axis_index += 1

    # Explicit sort instead of relying on dict order; stable for equal keys.
    ordered = sorted(placements,
                     key=lambda p: (p.band_key(mode), p.slot_key(mode)))
    bands = []
    current_key = None
    for placement in ordered:
        key = placement.band_key(mode)
        if key != current_key:
            bands.append([])
            current_key = key
        bands[-1].append(placement)

    return GridState(placements=tuple(placements),
                     bands=tuple(tuple(band) for band in bands),
                     mode=mode, capacity=capacity)


def update(state: GridState, new_data: Iterable[object]) -> GridState:
    """Discard `state` and partition `new_data` with the same configuration."""
    return partition(new_data, state.mode, state.capacity)
