"""Bounded re-polling of interfaces whose counters did not move during the interval."""

from __future__ import annotations

import time
from typing import Callable, Protocol

from loguru import logger

from nictraffic.errorlog import error_logger
from nictraffic.models import CounterSnapshot
from nictraffic.source import RawCounters
from nictraffic.validation import is_stalled, validate_sample


class CounterReader(Protocol):
    def read(self, interface: str) -> RawCounters: ...


class StallRetrier:
    """Re-sample an interface while its counters equal the previous snapshot.

    Each valid but unchanged re-read uses one attempt. An invalid re-read is
    logged by the validator, uses no attempt and drops the interface for the
    current cycle. When the budget runs out and nothing moved, one stall
    diagnostic is logged and the unchanged snapshot is accepted.
    """

    def __init__(
        self,
        source: CounterReader,
        max_retries: int = 3,
        backoff: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.source = source
        self.max_retries = max_retries
        self.backoff = backoff
        self._sleep = sleep

    def settle(self, interface: str, old: CounterSnapshot, new: CounterSnapshot) -> CounterSnapshot | None:
        """Return the accepted new snapshot, or ``None`` when a re-read was invalid."""
        attempts = 0
        while is_stalled(old, new) and attempts < self.max_retries:
            self._sleep(self.backoff)
            candidate = validate_sample(self.source.read(interface))
            if candidate is None:
                return None
            new = candidate
            attempts += 1
            logger.bind(classname=self.__class__.__name__).debug(f"{interface}: retry {attempts}/{self.max_retries}")

        if is_stalled(old, new):
            error_logger.warning(f"No traffic change detected for {interface} after multiple retries")
        return new
