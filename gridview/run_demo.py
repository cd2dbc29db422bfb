import logging
import os
import sys
import warnings
from dataclasses import dataclass

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (QApplication, QLabel, QMainWindow, QVBoxLayout,
                               QWidget)

from gridview.models.grid_partition import Placement
from gridview.widgets.grid_view import GridView

logger = logging.getLogger(__name__)

INITIAL_ITEM_COUNT = 50


@dataclass(frozen=True)
class SampleItem:
    color: str
    title: str


def render_sample_cell(placement: Placement) -> QWidget:
    label = QLabel(f'{placement.data.title}\nRow: {placement.row} '
                   f'Column: {placement.column}')
    label.setAlignment(Qt.AlignmentFlag.AlignCenter)
    label.setFixedSize(100, 100)
    label.setStyleSheet(f'background-color: {placement.data.color};')
    return label


class DemoWindow(QMainWindow):
    """One column-priority and one row-priority grid that grow on scroll."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle('GridView demo')
        self.resize(900, 700)
        self.column_data = [SampleItem('lightblue', 'Blue')] * INITIAL_ITEM_COUNT
        self.row_data = [SampleItem('lightblue', 'Blue')] * INITIAL_ITEM_COUNT

        self.column_grid = GridView(self.column_data, render_sample_cell,
                                    max_column_element=3,
                                    alignment=Qt.AlignmentFlag.AlignTop,
                                    row_spacing=8, column_spacing=8,
                                    pagination_callback=self._load_more_columns)
        self.row_grid = GridView(self.row_data, render_sample_cell,
                                 max_row_element=4,
                                 alignment=Qt.AlignmentFlag.AlignLeft,
                                 row_spacing=8, column_spacing=8,
                                 pagination_callback=self._load_more_rows)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.addWidget(
            self.column_grid.make_grid_scrollable(disable_outer_scroll=True))
        layout.addWidget(self.row_grid.make_grid_scrollable())
        self.setCentralWidget(container)

    def _load_more_columns(self):
        self.column_data.append(SampleItem('khaki', 'Yellow'))
        self.column_grid.update_data_array(self.column_data)
        logger.info('Reached right edge, %d items', len(self.column_data))

    def _load_more_rows(self):
        self.row_data.append(SampleItem('salmon', 'Red'))
        self.row_grid.update_data_array(self.row_data)
        logger.info('Reached bottom edge, %d items', len(self.row_data))


def suppress_warnings():
    """Quieten logging and warnings when not in a development environment."""
    environment = os.getenv('GRIDVIEW_ENVIRONMENT')
    if environment == 'development':
        logging.basicConfig(level=logging.DEBUG)
        print('Running in development environment.')
        return
    logging.basicConfig(level=logging.ERROR)
    warnings.simplefilter('ignore')


def run_demo() -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    # The application name is shown in the taskbar.
    app.setApplicationName('GridView')
    app.setStyle('Fusion')

    window = DemoWindow()
    window.show()
    return int(app.exec())


def main():
    suppress_warnings()
    sys.exit(run_demo())


if __name__ == '__main__':
    main()
