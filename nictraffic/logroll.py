"""Active CSV log with size-based rotation."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Sequence

from loguru import logger

from nictraffic.models import DEFAULT_ROLL_SIZE

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"
ROTATION_SUFFIX_FMT = "%Y%m%d%H%M%S"

START_BANNER = "Network monitoring started..."
STOP_BANNER = "Network monitoring stopped..."


def csv_header(interfaces: Sequence[str]) -> str:
    """``TIME`` followed by four columns per interface."""
    columns = ["TIME"]
    for nic in interfaces:
        columns.extend([f"{nic}_IN_TPUT", f"{nic}_OUT_TPUT", f"{nic}_RX_PPS", f"{nic}_TX_PPS"])
    return ",".join(columns)


class LogRoller:
    """Owns the active log file: initial banner/header, row appends, rotation and the stop banner.

    Rotation renames the active file to ``<name>.<YYYYMMDDHHMMSS>``. Two
    rotations within the same second collide on that name and the later
    rename replaces the earlier archive.
    """

    def __init__(
        self,
        path: Path | str,
        header: str,
        threshold: int = DEFAULT_ROLL_SIZE,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.path = Path(path)
        self.header = header
        self.threshold = threshold
        self._clock = clock

    def start(self) -> None:
        """Create (truncate) the active log with the start banner and header."""
        with open(self.path, "w") as f:
            f.write(f"{self._clock().strftime(TIMESTAMP_FMT)} {START_BANNER}\n")
            f.write(self.header + "\n")

    def append(self, line: str) -> None:
        with open(self.path, "a") as f:
            f.write(line + "\n")

    def stop(self) -> None:
        self.append(f"{self._clock().strftime(TIMESTAMP_FMT)} {STOP_BANNER}")

    def check_and_roll(self) -> Path | None:
        """Rotate when the active log reached the threshold; return the archive path if rotated."""
        try:
            size = self.path.stat().st_size
        except FileNotFoundError:
            logger.warning(f"Active log {self.path} vanished, recreating it")
            self.start()
            return None

        if size < self.threshold:
            return None

        archive = self.path.with_name(f"{self.path.name}.{self._clock().strftime(ROTATION_SUFFIX_FMT)}")
        self.path.replace(archive)
        logger.bind(classname=self.__class__.__name__).info(f"Rotated {self.path} ({size} bytes) to {archive}")
        self.start()
        return archive
