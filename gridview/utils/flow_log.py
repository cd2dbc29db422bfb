import logging
import time

from gridview.utils.settings import trace_logs_enabled

logger = logging.getLogger('gridview.flow')

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}
_flow_log_last: dict[str, float] = {}


def log_flow(component: str, message: str, *, level: str = "DEBUG",
             throttle_key: str | None = None, every_s: float | None = None):
    """Timestamped, optionally throttled flow logging for grid diagnostics."""
    try:
        enabled = trace_logs_enabled()
    except Exception:
        enabled = False
    if not enabled:
        return

    now = time.time()
    if throttle_key and every_s is not None:
        last = _flow_log_last.get(throttle_key, 0.0)
        if (now - last) < every_s:
            return
        _flow_log_last[throttle_key] = now
    ts = time.strftime("%H:%M:%S", time.localtime(now)) + f".{int((now % 1) * 1000):03d}"
    logger.log(_LEVELS.get(level.upper(), logging.DEBUG),
               f"[{ts}][TRACE][{component}][{level}] {message}")
