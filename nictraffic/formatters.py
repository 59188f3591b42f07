"""Console and CSV row formatters for per-cycle interface results."""

from __future__ import annotations

from typing import Sequence

from nictraffic.logroll import csv_header
from nictraffic.models import PLACEHOLDER, InterfaceResult
from nictraffic.rates import format_count, format_throughput

TIME_WIDTH = 20
FIELD_WIDTH = 15


def result_fields(result: InterfaceResult, placeholder: str = PLACEHOLDER) -> list[str]:
    """The four output values of one interface; the placeholder in every column when omitted."""
    if result.rates is None:
        return [placeholder] * 4
    r = result.rates
    return [
        format_throughput(r.in_bytes_per_sec),
        format_throughput(r.out_bytes_per_sec),
        format_count(r.rx_pps),
        format_count(r.tx_pps),
    ]


class TerminalFormatter:
    """Fixed-width console table: 20-char TIME column, four 15-char columns per interface."""

    def __init__(self, interfaces: Sequence[str], placeholder: str = PLACEHOLDER) -> None:
        self.interfaces = list(interfaces)
        self.placeholder = placeholder

    def header(self) -> str:
        line = f"{'TIME':<{TIME_WIDTH}}"
        for nic in self.interfaces:
            for col in (f"{nic}_IN_TPUT", f"{nic}_OUT_TPUT", f"{nic}_RX_PPS", f"{nic}_TX_PPS"):
                line += f" {col:<{FIELD_WIDTH}}"
        return line

    def row(self, timestamp: str, results: Sequence[InterfaceResult]) -> str:
        line = f"{timestamp:<{TIME_WIDTH}}"
        for result in results:
            for value in result_fields(result, self.placeholder):
                line += f" {value:<{FIELD_WIDTH}}"
        return line


class CsvFormatter:
    """Comma-delimited log rows matching :func:`csv_header`."""

    def __init__(self, interfaces: Sequence[str], placeholder: str = PLACEHOLDER) -> None:
        self.interfaces = list(interfaces)
        self.placeholder = placeholder

    def header(self) -> str:
        return csv_header(self.interfaces)

    def row(self, timestamp: str, results: Sequence[InterfaceResult]) -> str:
        values = [timestamp]
        for result in results:
            values.extend(result_fields(result, self.placeholder))
        return ",".join(values)
