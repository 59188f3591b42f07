"""CLI entry point for the NIC traffic monitor, standalone-capable.

Examples:
  nictraffic eth0
  nictraffic eth0 wlan0 --interval 2 --log-file /var/log/nic.csv
  nictraffic eth0 --count 60 --roll-size 1
"""

from __future__ import annotations

import argparse
import os
import sys

from loguru import logger

from nictraffic import configure_logging
from nictraffic.errorlog import ErrorLog, error_logger
from nictraffic.exceptions import FatalConfigError, MonitorError
from nictraffic.models import (
    DEFAULT_ERROR_LOG_FILE,
    DEFAULT_LOG_FILE,
    DEFAULT_ROLL_SIZE,
    DEFAULT_STATS_PATH,
    MonitorConfig,
)
from nictraffic.monitor import TrafficMonitor


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for the traffic monitor."""
    parser = argparse.ArgumentParser(
        prog="nictraffic",
        description="Monitor per-interface throughput and packet rates from /proc/net/dev.",
    )
    parser.add_argument(
        "interfaces",
        nargs="*",
        metavar="IFACE",
        help="Network interface(s) to monitor, e.g. eth0 wlan0",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=1.0,
        help="Seconds between the two samples of a cycle (default: 1)",
    )
    parser.add_argument(
        "--stats-file",
        default=str(DEFAULT_STATS_PATH),
        help=f"Interface statistics table (default: {DEFAULT_STATS_PATH})",
    )
    parser.add_argument(
        "-o",
        "--log-file",
        default=str(DEFAULT_LOG_FILE),
        help=f"Active CSV log (default: {DEFAULT_LOG_FILE})",
    )
    parser.add_argument(
        "-e",
        "--error-log",
        default=str(DEFAULT_ERROR_LOG_FILE),
        help=f"Diagnostic log, truncated at start (default: {DEFAULT_ERROR_LOG_FILE})",
    )
    parser.add_argument(
        "--roll-size",
        type=float,
        default=DEFAULT_ROLL_SIZE / (1024 * 1024),
        help="Rotate the active log at this size in MiB (default: 10)",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=3,
        help="Re-polls when counters did not change (default: 3)",
    )
    parser.add_argument(
        "--retry-backoff",
        type=float,
        default=0.1,
        help="Seconds between re-polls (default: 0.1)",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=int,
        help="Stop after this many cycles (default: run until interrupted)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(args)


def build_config(parsed: argparse.Namespace) -> MonitorConfig:
    return MonitorConfig.build(
        interfaces=parsed.interfaces,
        interval=parsed.interval,
        stats_path=parsed.stats_file,
        log_file=parsed.log_file,
        error_log_file=parsed.error_log,
        roll_size=int(parsed.roll_size * 1024 * 1024),
        max_retries=parsed.max_retries,
        retry_backoff=parsed.retry_backoff,
        count=parsed.count,
    )


def main(args: list[str] | None = None) -> None:
    """Main entry point for the traffic monitor CLI."""
    parsed = parse_args(args)

    configure_logging(level=None if parsed.verbose else os.getenv("LOGURU_LEVEL", "INFO"))

    try:
        config = build_config(parsed)
    except FatalConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        if not parsed.interfaces:
            print(
                "Please provide the names of network interfaces to be monitored as parameters. "
                "Multiple NICs can be specified, separated by spaces.",
                file=sys.stderr,
            )
        sys.exit(1)

    with ErrorLog(config.error_log_file):
        monitor = TrafficMonitor(config)
        try:
            monitor.check_preconditions()
        except FatalConfigError as e:
            error_logger.critical(str(e))
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        monitor.install_signal_handlers()
        try:
            cycles = monitor.run()
        except MonitorError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except KeyboardInterrupt:
            print("\nAborted.", file=sys.stderr)
            sys.exit(130)
        logger.debug(f"Completed {cycles} cycles")


if __name__ == "__main__":
    main()
