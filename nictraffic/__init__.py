"""NIC traffic monitor.

Samples per-interface byte/packet counters from ``/proc/net/dev``, derives
throughput and packet rates over a fixed interval, and writes them to a
rotating CSV log and a live console table.
"""

__version__ = "0.0.1"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_console_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to keep skiplog and errorlog records off the console."""
    extra = record.get("extra", {})
    return not extra.get("skiplog", False) and not extra.get("errorlog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_console_filter,
    level: str | None = None,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = level or os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False, "errorlog": False})
    glogger.enable(__name__)


from nictraffic.errorlog import ErrorLog  # noqa: E402
from nictraffic.exceptions import FatalConfigError, MonitorError  # noqa: E402
from nictraffic.logroll import LogRoller  # noqa: E402
from nictraffic.models import (  # noqa: E402
    CounterSnapshot,
    InterfaceResult,
    MonitorConfig,
    RateRecord,
)
from nictraffic.monitor import TrafficMonitor  # noqa: E402
from nictraffic.rates import compute_rates, format_throughput  # noqa: E402
from nictraffic.retry import StallRetrier  # noqa: E402
from nictraffic.source import ProcNetDevSource  # noqa: E402
from nictraffic.validation import is_stalled, parse_counter, validate_sample  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "ErrorLog",
    "MonitorError",
    "FatalConfigError",
    "LogRoller",
    "CounterSnapshot",
    "InterfaceResult",
    "MonitorConfig",
    "RateRecord",
    "TrafficMonitor",
    "compute_rates",
    "format_throughput",
    "StallRetrier",
    "ProcNetDevSource",
    "is_stalled",
    "parse_counter",
    "validate_sample",
]
