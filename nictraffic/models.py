"""Pydantic models for counter snapshots, derived rates and monitor settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from nictraffic.exceptions import FatalConfigError

DEFAULT_STATS_PATH = Path("/proc/net/dev")
DEFAULT_LOG_FILE = Path("network_monitor.csv")
DEFAULT_ERROR_LOG_FILE = Path("network_monitor_error.csv")
DEFAULT_ROLL_SIZE = 10 * 1024 * 1024
PLACEHOLDER = "N/A"


class CounterSnapshot(BaseModel):
    """Cumulative counters of one interface at one point in time."""

    model_config = ConfigDict(frozen=True)

    bytes_in: int = Field(ge=0)
    bytes_out: int = Field(ge=0)
    packets_in: int = Field(ge=0)
    packets_out: int = Field(ge=0)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.bytes_in, self.bytes_out, self.packets_in, self.packets_out)


class RateRecord(BaseModel):
    """Per-second deltas of one interface for one cycle. May be negative after a counter reset."""

    model_config = ConfigDict(frozen=True)

    in_bytes_per_sec: int
    out_bytes_per_sec: int
    rx_pps: int
    tx_pps: int


class InterfaceResult(BaseModel):
    """Outcome of one cycle for one interface; ``rates`` is ``None`` when the interface was omitted."""

    model_config = ConfigDict(frozen=True)

    interface: str
    rates: RateRecord | None = None

    @property
    def omitted(self) -> bool:
        return self.rates is None


class MonitorConfig(BaseModel):
    """Runtime settings of the traffic monitor."""

    interfaces: list[str]
    interval: float = 1.0
    stats_path: Path = DEFAULT_STATS_PATH
    log_file: Path = DEFAULT_LOG_FILE
    error_log_file: Path = DEFAULT_ERROR_LOG_FILE
    roll_size: int = DEFAULT_ROLL_SIZE
    max_retries: int = 3
    retry_backoff: float = 0.1
    placeholder: str = PLACEHOLDER
    count: int | None = None

    @field_validator("interfaces")
    @classmethod
    def _require_interfaces(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one network interface must be given")
        return v

    @field_validator("interval")
    @classmethod
    def _positive_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("interval must be positive")
        return v

    @field_validator("roll_size")
    @classmethod
    def _positive_roll_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("roll size must be positive")
        return v

    @field_validator("max_retries", "count")
    @classmethod
    def _non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("must not be negative")
        return v

    @field_validator("retry_backoff")
    @classmethod
    def _non_negative_backoff(cls, v: float) -> float:
        if v < 0:
            raise ValueError("retry backoff must not be negative")
        return v

    @classmethod
    def build(cls, **kwargs: object) -> MonitorConfig:
        """Validate settings, turning pydantic errors into :class:`FatalConfigError`."""
        try:
            return cls(**kwargs)  # type: ignore[arg-type]
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
            raise FatalConfigError(f"Invalid configuration: {problems}") from e
