"""
Grid widget built from row-priority or column-priority bands.

Use `max_row_element` to fill rows first (a new row starts below the
current one once it holds `max_row_element` cells) or `max_column_element`
to fill columns first (a new column starts to the right).

Example:

    grid = GridView(items, lambda placement: ItemCard(placement.data),
                    max_column_element=3,
                    alignment=Qt.AlignmentFlag.AlignTop,
                    pagination_callback=load_next_page)
    layout.addWidget(grid.make_grid_scrollable(disable_outer_scroll=True))
"""

from __future__ import annotations

from typing import Callable, Iterable

from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtWidgets import (QBoxLayout, QFrame, QHBoxLayout,
                               QScrollArea, QVBoxLayout, QWidget)

from gridview.models.grid_data_model import GridDataModel
from gridview.models.grid_partition import Band, Placement
from gridview.utils.settings import (get_column_spacing, get_row_spacing,
                                     get_show_scroll_indicator)
from gridview.widgets.edge_scroll_detector import (EdgeScrollDetector,
                                                   ScrollAxis)


class GridView(QWidget):
    # Emitted right before the pagination callback runs
    pagination_requested = Signal()

    def __init__(self, data: Iterable[object],
                 render_cell: Callable[[Placement], QWidget], *,
                 max_row_element: int | None = None,
                 max_column_element: int | None = None,
                 alignment: Qt.AlignmentFlag | None = None,
                 row_spacing: int | None = None,
                 column_spacing: int | None = None,
                 pagination_callback: Callable[[], None] | None = None,
                 edge_margin: float | None = None,
                 debounce_ms: int | None = None,
                 parent=None):
        """
        Args:
            data: Elements to show, in display order.
            render_cell: Builds the widget for one placement.
            max_row_element: Maximum cells in a row (row-priority grid).
            max_column_element: Maximum cells in a column
                (column-priority grid).
            alignment: Cross-axis alignment of bands that are not full.
            row_spacing: Spacing between rows.
            column_spacing: Spacing between columns.
            pagination_callback: Called when the scroll area reaches the
                trailing edge of the grid.
            edge_margin: Fire pagination this far before the trailing edge;
                defaults to the `grid_edge_margin` setting.
            debounce_ms: Quiet period after the last scroll event before
                the edge check; defaults to `grid_scroll_debounce_ms`.
        """
        super().__init__(parent)
        # Validates the configuration before any widget is built.
        self.data_model = GridDataModel(data, max_row_element=max_row_element,
                                        max_column_element=max_column_element,
                                        parent=self)
        self._render_cell = render_cell
        self._pagination_callback = pagination_callback or (lambda: None)
        self.row_spacing = get_row_spacing() if row_spacing is None else row_spacing
        self.column_spacing = (get_column_spacing() if column_spacing is None
                               else column_spacing)
        if alignment is None:
            alignment = (Qt.AlignmentFlag.AlignLeading if self.is_row_priority()
                         else Qt.AlignmentFlag.AlignTop)
        self.alignment = alignment

        self.detector = EdgeScrollDetector.for_mode(self.data_model.mode,
                                                    self._on_edge_reached,
                                                    edge_margin=edge_margin,
                                                    debounce_ms=debounce_ms)
        self._cells: dict[tuple[int, int], QWidget] = {}
        self._band_widgets: list[QWidget] = []

        # VBox of rows for row priority, HBox of columns for column priority.
        if self.is_row_priority():
            self._outer_layout: QBoxLayout = QVBoxLayout(self)
            self._outer_layout.setSpacing(self.row_spacing)
            self._outer_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        else:
            self._outer_layout = QHBoxLayout(self)
            self._outer_layout.setSpacing(self.column_spacing)
            self._outer_layout.setAlignment(Qt.AlignmentFlag.AlignLeading)
        self._outer_layout.setContentsMargins(0, 0, 0, 0)

        self.data_model.bands_changed.connect(self._rebuild)
        detector = self.detector
        self.destroyed.connect(lambda *_: detector.shutdown())
        self._rebuild()

    @property
    def bands(self) -> tuple[Band, ...]:
        return self.data_model.bands

    @property
    def scroll_axis(self) -> ScrollAxis:
        return self.detector.axis

    def is_row_priority(self) -> bool:
        return self.data_model.is_row_priority()

    def is_column_priority(self) -> bool:
        return self.data_model.is_column_priority()

    def band_count(self) -> int:
        return self.data_model.band_count()

    def update_data_array(self, updated_data: Iterable[object]):
        self.data_model.update_data_array(updated_data)

    def cell_widget(self, row: int, column: int) -> QWidget | None:
        return self._cells.get((row, column))

    def band_widget(self, index: int) -> QWidget:
        return self._band_widgets[index]

    def _clear(self):
        for band_widget in self._band_widgets:
            self._outer_layout.removeWidget(band_widget)
            band_widget.setParent(None)
            band_widget.deleteLater()
        self._band_widgets = []
        self._cells = {}

    def _rebuild(self, *_):
        """Replace every band and cell with ones built from the current state."""
        self._clear()
        for band in self.bands:
            band_widget = QWidget(self)
            if self.is_row_priority():
                band_layout = QHBoxLayout(band_widget)
                band_layout.setSpacing(self.column_spacing)
            else:
                band_layout = QVBoxLayout(band_widget)
                band_layout.setSpacing(self.row_spacing)
            band_layout.setContentsMargins(0, 0, 0, 0)
            for placement in band:
                cell = self._render_cell(placement)
                band_layout.addWidget(cell)
                self._cells[(placement.row, placement.column)] = cell
            self._outer_layout.addWidget(band_widget, 0, self.alignment)
            self._band_widgets.append(band_widget)

    def _on_edge_reached(self):
        self.pagination_requested.emit()
        self._pagination_callback()

    def make_grid_scrollable(self, disable_outer_scroll: bool = False,
                             show_indicator: bool | None = None,
                             axis: ScrollAxis | None = None) -> GridScrollArea:
        """
        Wrap the grid in a scroll area that reports its geometry to the
        pagination detector.

        Args:
            disable_outer_scroll: Keep wheel gestures over the grid from
                scrolling an enclosing scroll area.
            show_indicator: Show scroll bars on the scrolling axes.
            axis: Axes that may scroll; defaults to the grid's growth axis.
        """
        if show_indicator is None:
            show_indicator = get_show_scroll_indicator()
        return GridScrollArea(self, axis=axis or self.scroll_axis,
                              disable_outer_scroll=disable_outer_scroll,
                              show_indicator=show_indicator)

    def shutdown(self):
        self.detector.shutdown()

    def closeEvent(self, event):
        self.shutdown()
        super().closeEvent(event)


class GridScrollArea(QScrollArea):
    def __init__(self, grid: GridView, *, axis: ScrollAxis,
                 disable_outer_scroll: bool = False,
                 show_indicator: bool = False, parent=None):
        super().__init__(parent)
        self.grid = grid
        self.axis = axis
        self.disable_outer_scroll = disable_outer_scroll
        self.show_indicator = show_indicator

        on = (Qt.ScrollBarPolicy.ScrollBarAsNeeded if show_indicator
              else Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        off = Qt.ScrollBarPolicy.ScrollBarAlwaysOff
        vertical = axis in (ScrollAxis.VERTICAL, ScrollAxis.BOTH)
        horizontal = axis in (ScrollAxis.HORIZONTAL, ScrollAxis.BOTH)
        self.setVerticalScrollBarPolicy(on if vertical else off)
        self.setHorizontalScrollBarPolicy(on if horizontal else off)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setWidgetResizable(True)
        self.setWidget(grid)

        # Content growth (pagination) changes the range without scrolling.
        self.verticalScrollBar().rangeChanged.connect(self._forward_geometry)
        self.horizontalScrollBar().rangeChanged.connect(self._forward_geometry)

    def _forward_geometry(self, *_):
        grid = self.widget()
        if grid is None:
            return
        viewport = self.viewport()
        rect = QRectF(grid.geometry())
        if self.grid.scroll_axis is ScrollAxis.VERTICAL:
            bar = self.verticalScrollBar()
            self.grid.detector.set_viewport_extent(viewport.height())
        else:
            bar = self.horizontalScrollBar()
            self.grid.detector.set_viewport_extent(viewport.width())
        # A scroll area stops exactly at its maximum and never overscrolls,
        # so report the end position as one unit past the remaining extent.
        if bar.maximum() > 0 and bar.value() >= bar.maximum():
            if self.grid.scroll_axis is ScrollAxis.VERTICAL:
                rect.translate(0, -1)
            else:
                rect.translate(-1, 0)
        self.grid.detector.on_geometry_changed(rect)

    def scrollContentsBy(self, dx, dy):
        super().scrollContentsBy(dx, dy)
        self._forward_geometry()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._forward_geometry()

    def wheelEvent(self, event):
        super().wheelEvent(event)
        if self.disable_outer_scroll:
            # Unhandled wheel events would bubble to an enclosing scroll area.
            event.accept()
