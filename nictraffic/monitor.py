"""Monitor loop: sample, wait, re-sample, derive rates, emit, rotate."""

from __future__ import annotations

import signal
import time
from datetime import datetime
from types import FrameType
from typing import Callable, Mapping

from loguru import logger

from nictraffic.formatters import CsvFormatter, TerminalFormatter
from nictraffic.logroll import TIMESTAMP_FMT, LogRoller
from nictraffic.models import CounterSnapshot, InterfaceResult, MonitorConfig
from nictraffic.rates import compute_rates
from nictraffic.retry import CounterReader, StallRetrier
from nictraffic.source import ProcNetDevSource
from nictraffic.validation import validate_sample


class TrafficMonitor:
    """Run monitoring cycles over a fixed, ordered set of interfaces.

    Each cycle takes an old snapshot set, sleeps one interval, takes a new
    snapshot set (re-polling stalled interfaces), and emits one console line
    and one CSV row. An interface that is invalid in either sample is
    rendered with the placeholder for that cycle. Stop requests are honoured
    between cycles only.
    """

    def __init__(
        self,
        config: MonitorConfig,
        source: CounterReader | None = None,
        roller: LogRoller | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = datetime.now,
        output: Callable[[str], None] = print,
    ) -> None:
        self.config = config
        self.interfaces = list(config.interfaces)
        self.source: CounterReader = source if source is not None else ProcNetDevSource(config.stats_path)
        self.terminal = TerminalFormatter(self.interfaces, config.placeholder)
        self.csv = CsvFormatter(self.interfaces, config.placeholder)
        self.roller = roller if roller is not None else LogRoller(
            config.log_file, self.csv.header(), threshold=config.roll_size, clock=clock
        )
        self.retrier = StallRetrier(self.source, config.max_retries, config.retry_backoff, sleep=sleep)
        self._sleep = sleep
        self._clock = clock
        self._output = output
        self._stop_requested = False
        self._log = logger.bind(classname=self.__class__.__name__)

    # ── lifecycle ──────────────────────────────────────────────────────

    def check_preconditions(self) -> None:
        """Raise FatalConfigError when the statistics table is unreadable."""
        check = getattr(self.source, "check_readable", None)
        if check is not None:
            check()

    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGINT, self.request_stop)
        signal.signal(signal.SIGTERM, self.request_stop)

    def request_stop(self, signum: int | None = None, frame: FrameType | None = None) -> None:
        if signum is not None:
            self._log.info(f"Received signal {signal.Signals(signum).name}, stopping after this cycle")
        self._stop_requested = True

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def start(self) -> None:
        self.roller.start()
        self._output(self.terminal.header())

    def shutdown(self) -> None:
        self.roller.stop()
        self._log.info("Network monitoring stopped")

    def run(self) -> int:
        """Loop until a stop is requested or ``config.count`` cycles ran; return the cycle count."""
        self.start()
        cycles = 0
        while not self._stop_requested and (self.config.count is None or cycles < self.config.count):
            self.run_cycle()
            cycles += 1
        self.shutdown()
        return cycles

    # ── one cycle ──────────────────────────────────────────────────────

    def capture(self) -> dict[str, CounterSnapshot]:
        """Snapshot every interface in order; invalid reads are left out."""
        snapshots: dict[str, CounterSnapshot] = {}
        for nic in self.interfaces:
            snap = validate_sample(self.source.read(nic))
            if snap is not None:
                snapshots[nic] = snap
        return snapshots

    def capture_new(self, old: Mapping[str, CounterSnapshot]) -> dict[str, CounterSnapshot]:
        """Second sample of a cycle, only for interfaces present in ``old``."""
        snapshots: dict[str, CounterSnapshot] = {}
        for nic in self.interfaces:
            if nic not in old:
                continue
            snap = validate_sample(self.source.read(nic))
            if snap is None:
                continue
            settled = self.retrier.settle(nic, old[nic], snap)
            if settled is not None:
                snapshots[nic] = settled
        return snapshots

    def compute(
        self, old: Mapping[str, CounterSnapshot], new: Mapping[str, CounterSnapshot]
    ) -> list[InterfaceResult]:
        results: list[InterfaceResult] = []
        for nic in self.interfaces:
            if nic in old and nic in new:
                rates = compute_rates(old[nic], new[nic], self.config.interval)
                results.append(InterfaceResult(interface=nic, rates=rates))
            else:
                results.append(InterfaceResult(interface=nic))
        return results

    def emit(self, timestamp: str, results: list[InterfaceResult]) -> None:
        self._output(self.terminal.row(timestamp, results))
        self.roller.append(self.csv.row(timestamp, results))
        if self.roller.check_and_roll() is not None:
            self._output(self.terminal.header())

    def run_cycle(self) -> list[InterfaceResult]:
        timestamp = self._clock().strftime(TIMESTAMP_FMT)
        old = self.capture()
        self._sleep(self.config.interval)
        new = self.capture_new(old)
        results = self.compute(old, new)
        self.emit(timestamp, results)
        return results
