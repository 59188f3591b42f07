"""Diagnostic sink for validation failures, stall warnings and fatal startup errors."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

# Records bound with errorlog=True go to the error log file only.
error_logger = logger.bind(errorlog=True)

ERROR_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} {message}"


def _errorlog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    return bool(record["extra"].get("errorlog", False))


class ErrorLog:
    """loguru file sink holding ``<timestamp> <message>`` lines, truncated when opened."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._sink_id: int | None = None

    def open(self) -> ErrorLog:
        if self._sink_id is None:
            # The package is disabled on import; diagnostics must reach the file.
            logger.enable("nictraffic")
            self._sink_id = logger.add(
                self.path,
                mode="w",
                format=ERROR_LOG_FORMAT,
                filter=_errorlog_filter,
                level="DEBUG",
                colorize=False,
            )
        return self

    def close(self) -> None:
        if self._sink_id is not None:
            logger.remove(self._sink_id)
            self._sink_id = None

    def __enter__(self) -> ErrorLog:
        return self.open()

    def __exit__(self, *args: object) -> None:
        self.close()
