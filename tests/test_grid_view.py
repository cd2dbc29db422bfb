import pytest
from PySide6.QtCore import QRectF, Qt
from PySide6.QtWidgets import QLabel

from gridview.models.grid_partition import ConfigurationError
from gridview.widgets.edge_scroll_detector import ScrollAxis
from gridview.widgets.grid_view import GridScrollArea, GridView


def render_label(placement):
    return QLabel(f"{placement.row},{placement.column}:{placement.data}")


@pytest.fixture
def make_grid(qapp):
    grids = []

    def _make(data, **kwargs):
        kwargs.setdefault("row_spacing", 4)
        kwargs.setdefault("column_spacing", 6)
        grid = GridView(data, render_label, **kwargs)
        grids.append(grid)
        return grid

    yield _make
    for grid in grids:
        grid.shutdown()


def test_row_priority_grid_builds_bands_and_cells(make_grid):
    grid = make_grid(range(9), max_row_element=4)

    assert grid.is_row_priority() is True
    assert grid.band_count() == 3
    assert grid.scroll_axis is ScrollAxis.VERTICAL
    assert grid.cell_widget(3, 1).text() == "3,1:8"
    assert grid.cell_widget(3, 2) is None
    assert grid.band_widget(0).layout().count() == 4
    assert grid.band_widget(2).layout().count() == 1


def test_column_priority_grid_mirrors_layout(make_grid):
    grid = make_grid(range(9), max_column_element=3)

    assert grid.is_column_priority() is True
    assert grid.scroll_axis is ScrollAxis.HORIZONTAL
    assert grid.cell_widget(2, 1).text() == "2,1:1"
    assert grid.cell_widget(1, 3).text() == "1,3:6"
    assert grid.band_widget(1).layout().spacing() == 4


def test_update_rekeys_cells(make_grid):
    grid = make_grid(["a", "b"], max_row_element=2)

    grid.update_data_array(["x", "y", "z"])

    assert grid.band_count() == 2
    assert grid.cell_widget(1, 1).text() == "1,1:x"
    assert grid.cell_widget(2, 1).text() == "2,1:z"


def test_empty_grid_has_no_bands(make_grid):
    grid = make_grid([], max_row_element=3)

    assert grid.band_count() == 0
    assert grid.bands == ()


def test_invalid_capacity_prevents_construction(qapp):
    with pytest.raises(ConfigurationError):
        GridView(range(3), render_label, max_row_element=0)


def test_pagination_callback_runs_on_edge(make_grid):
    pages = []
    grid = make_grid(range(9), max_row_element=3,
                     pagination_callback=lambda: pages.append(1))
    requested = []
    grid.pagination_requested.connect(lambda: requested.append(1))
    detector = grid.detector
    detector.set_viewport_extent(100)

    detector.on_geometry_changed(QRectF(0, 0, 300, 400))
    detector.on_geometry_changed(QRectF(0, -350, 300, 400))
    detector.flush()

    assert pages == [1]
    assert requested == [1]


def test_default_pagination_callback_is_noop(make_grid):
    grid = make_grid(range(9), max_row_element=3)
    grid.detector.set_viewport_extent(100)

    grid.detector.on_geometry_changed(QRectF(0, 0, 300, 400))
    grid.detector.on_geometry_changed(QRectF(0, -350, 300, 400))
    grid.detector.flush()

    assert grid.detector.edge_reached is True


def test_make_grid_scrollable_sets_scroll_policies(make_grid):
    grid = make_grid(range(9), max_column_element=3)

    area = grid.make_grid_scrollable(disable_outer_scroll=True,
                                     show_indicator=True)

    assert isinstance(area, GridScrollArea)
    assert area.widget() is grid
    assert area.disable_outer_scroll is True
    assert area.horizontalScrollBarPolicy() == Qt.ScrollBarPolicy.ScrollBarAsNeeded
    assert area.verticalScrollBarPolicy() == Qt.ScrollBarPolicy.ScrollBarAlwaysOff


def test_hidden_indicator_turns_scroll_bars_off(make_grid):
    grid = make_grid(range(9), max_row_element=3)

    area = grid.make_grid_scrollable(show_indicator=False, axis=ScrollAxis.BOTH)

    assert area.axis is ScrollAxis.BOTH
    assert area.verticalScrollBarPolicy() == Qt.ScrollBarPolicy.ScrollBarAlwaysOff
    assert area.horizontalScrollBarPolicy() == Qt.ScrollBarPolicy.ScrollBarAlwaysOff


def test_shutdown_stops_edge_detection(make_grid):
    pages = []
    grid = make_grid(range(9), max_row_element=3,
                     pagination_callback=lambda: pages.append(1))
    grid.detector.set_viewport_extent(100)
    grid.detector.on_geometry_changed(QRectF(0, 0, 300, 400))
    grid.detector.on_geometry_changed(QRectF(0, -350, 300, 400))

    grid.shutdown()
    grid.detector.flush()

    assert pages == []
    assert grid.detector.is_shut_down is True


def render_block(placement):
    block = QLabel(str(placement.data))
    block.setFixedSize(100, 100)
    return block


@pytest.fixture
def scrollable_grid(qapp):
    made = []

    def _make(count, pages, **kwargs):
        grid = GridView(range(count), render_block, row_spacing=4,
                        column_spacing=4,
                        pagination_callback=lambda: pages.append(1),
                        debounce_ms=10_000, edge_margin=0, **kwargs)
        area = grid.make_grid_scrollable(show_indicator=False)
        area.resize(300, 300)
        area.show()
        qapp.processEvents()
        made.append((grid, area))
        return grid, area

    yield _make
    for grid, area in made:
        grid.shutdown()
        area.close()


def test_scrolling_to_the_real_end_paginates(scrollable_grid):
    pages = []
    grid, area = scrollable_grid(50, pages, max_row_element=2)
    bar = area.verticalScrollBar()
    assert bar.maximum() > 0

    bar.setValue(bar.maximum() // 2)
    grid.detector.flush()
    assert pages == []
    assert grid.detector.viewport_extent == area.viewport().height()

    bar.setValue(bar.maximum())
    assert grid.detector.has_pending() is True
    grid.detector.flush()

    assert pages == [1]
    assert grid.detector.edge_reached is True


def test_horizontal_scroll_area_paginates_at_right_end(scrollable_grid):
    pages = []
    grid, area = scrollable_grid(30, pages, max_column_element=2)
    bar = area.horizontalScrollBar()
    assert bar.maximum() > 0

    bar.setValue(bar.maximum())
    grid.detector.flush()

    assert pages == [1]
    assert grid.detector.viewport_extent == area.viewport().width()


def test_content_growth_rearms_through_range_change(qapp, scrollable_grid):
    pages = []
    grid, area = scrollable_grid(50, pages, max_row_element=2)
    bar = area.verticalScrollBar()
    bar.setValue(bar.maximum())
    grid.detector.flush()
    assert pages == [1]
    old_maximum = bar.maximum()

    grid.update_data_array(range(80))
    qapp.processEvents()
    qapp.processEvents()

    assert bar.maximum() > old_maximum
    assert grid.detector.has_pending() is True
    grid.detector.flush()
    assert grid.detector.edge_reached is False

    bar.setValue(bar.maximum())
    grid.detector.flush()
    assert pages == [1, 1]


def test_resize_forwards_viewport_extent(qapp, scrollable_grid):
    grid, area = scrollable_grid(50, [], max_row_element=2)

    area.resize(300, 200)
    qapp.processEvents()

    assert grid.detector.viewport_extent == area.viewport().height()


def test_grid_passes_edge_settings_to_detector(make_grid):
    grid = make_grid(range(9), max_row_element=3, edge_margin=96,
                     debounce_ms=250)

    assert grid.detector.edge_margin == 96.0
    assert grid.detector.state.debounce_ms == 250


def test_edge_margin_fires_before_the_end(scrollable_grid):
    pages = []
    grid, area = scrollable_grid(50, pages, max_row_element=2)
    grid.detector.edge_margin = 150
    bar = area.verticalScrollBar()

    bar.setValue(bar.maximum() - 100)
    grid.detector.flush()

    assert pages == [1]
