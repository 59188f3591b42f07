"""Exception hierarchy for the traffic monitor."""


class MonitorError(Exception):
    """Base exception for all traffic monitor errors."""


class FatalConfigError(MonitorError):
    """Startup precondition violated (no interfaces, unreadable statistics table, bad settings)."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
