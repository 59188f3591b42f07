"""Rate derivation and human-readable throughput formatting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from fractions import Fraction

from nictraffic.models import CounterSnapshot, RateRecord

_UNITS = (
    (1000**3, "Gbps"),
    (1000**2, "Mbps"),
    (1000, "Kbps"),
)

_ONE_DECIMAL = Decimal("0.1")


def _per_second(delta: int, interval: float) -> int:
    """Divide and truncate toward zero, exactly for counters of any size."""
    if float(interval).is_integer():
        q = abs(delta) // int(interval)
        return q if delta >= 0 else -q
    # interval as written, so 0.1 means one tenth
    return int(Fraction(delta) / Fraction(repr(float(interval))))


def compute_rates(old: CounterSnapshot, new: CounterSnapshot, interval: float) -> RateRecord:
    """Per-second deltas between two snapshots. Counter decreases yield negative rates."""
    return RateRecord(
        in_bytes_per_sec=_per_second(new.bytes_in - old.bytes_in, interval),
        out_bytes_per_sec=_per_second(new.bytes_out - old.bytes_out, interval),
        rx_pps=_per_second(new.packets_in - old.packets_in, interval),
        tx_pps=_per_second(new.packets_out - old.packets_out, interval),
    )


def _scaled(bits: int, factor: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = bits.bit_length() // 3 + 4
        return (Decimal(bits) / factor).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def format_throughput(bytes_per_sec: int) -> str:
    """Format a byte rate as bits/s using 1000-based units, e.g. ``125`` -> ``1.0 Kbps``.

    One decimal, ties rounded half up (``156250`` -> ``1.3 Mbps``).
    """
    bits = bytes_per_sec * 8
    if bits == 0:
        return "0 bps"
    for factor, unit in _UNITS:
        if bits >= factor:
            return f"{_scaled(bits, factor)} {unit}"
    return f"{Decimal(bits)} bps"


def format_count(value: int) -> str:
    """Unscaled integer text, without the int-to-str digit limit."""
    return str(Decimal(value))
