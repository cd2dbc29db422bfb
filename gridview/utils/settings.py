from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    # Quiet period after the last scroll event before the edge check runs.
    'grid_scroll_debounce_ms': 100,
    # Extra distance before the trailing edge at which pagination triggers.
    'grid_edge_margin': 0.0,
    'grid_row_spacing': 8,
    'grid_column_spacing': 8,
    'grid_show_scroll_indicator': False,
    # Timestamped flow traces for partitioning and edge detection.
    'grid_trace_logs': False,
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changes
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('gridview', 'gridview')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


def _typed_value(key: str, type_):
    default = DEFAULT_SETTINGS[key]
    try:
        return type_(settings.value(key, defaultValue=default, type=type_))
    except (TypeError, ValueError):
        return default


def get_scroll_debounce_ms() -> int:
    return max(0, _typed_value('grid_scroll_debounce_ms', int))


def get_edge_margin() -> float:
    return _typed_value('grid_edge_margin', float)


def get_row_spacing() -> int:
    return _typed_value('grid_row_spacing', int)


def get_column_spacing() -> int:
    return _typed_value('grid_column_spacing', int)


def get_show_scroll_indicator() -> bool:
    return _typed_value('grid_show_scroll_indicator', bool)


def trace_logs_enabled() -> bool:
    return _typed_value('grid_trace_logs', bool)
