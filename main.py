#!/usr/bin/env python3
"""DHT22 Station — Entry point.

Reads a DHT22 a fixed number of times at a fixed interval and prints
temperature, humidity, heat index and dew point for each read.

Usage:
    python3 main.py                     # Read real hardware (BCM 16)
    python3 main.py --demo              # Simulated sensor, no wiring needed
    python3 main.py --pin 4 --count 10  # Ten reads from GPIO 4
    python3 main.py --log-level DEBUG   # Show decode diagnostics

A failed read prints the last good reading as "Cached Temp". Until one
read has succeeded a failed read prints "Data not good, Skipped".
Bit-banging the sensor needs root for the priority boost; without it
more reads fail.
"""

__version__ = "1.0.0"

import argparse
import logging
import sys
import time

from config import DEFAULT_CONFIG_PATH, load_config
from output.console import format_record
from sensors.dht22 import DHT22Sensor


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="DHT22 Station — temperature & humidity reader",
    )
    parser.add_argument(
        "--demo", action="store_true",
        help="Read a simulated sensor instead of GPIO",
    )
    parser.add_argument(
        "--pin", type=int, default=None,
        help="BCM GPIO number of the DHT22 data line",
    )
    parser.add_argument(
        "--count", type=int, default=None,
        help="Number of reads before exiting",
    )
    parser.add_argument(
        "--interval", type=float, default=None,
        help="Seconds between reads",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH,
        help=f"Path to station YAML config (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"DHT22 Station {__version__}",
    )
    return parser.parse_args(argv)


def setup_logging(level_name: str) -> None:
    """Configure root logger with a consistent format."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-7s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def run(sensor: DHT22Sensor, count: int, interval: float, demo: bool = False,
        out=None, sleep=time.sleep) -> int:
    """Read ``count`` times, printing one line per read.

    Returns the number of reads that produced data (fresh or cached).
    """
    out = out or sys.stdout
    with_data = 0
    for i in range(count):
        record = sensor.read_record(demo=demo)
        if record.has_data:
            with_data += 1
        print(format_record(record), file=out, flush=True)
        if i < count - 1:
            sleep(interval)
    return with_data


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("DHT22 Station v%s starting", __version__)

    cfg = load_config(args.config)["dht22"]
    pin = args.pin if args.pin is not None else cfg["pin"]
    count = args.count if args.count is not None else cfg["count"]
    interval = args.interval if args.interval is not None else cfg["interval_ms"] / 1000.0

    # Demo mode leaves the GPIO line alone
    sensor = DHT22Sensor(-1 if args.demo else pin, cfg)
    if sensor.simulated and not args.demo:
        logger.warning("DHT22 on GPIO %d unavailable; every read will report no data "
                       "(use --demo for a simulated sensor)", pin)

    try:
        run(sensor, count, interval, demo=args.demo)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        sensor.close()
        logger.info("Read success rate %.1f%% over %d reads",
                    sensor.reliability, sensor.total_reads)
        logger.info("Shutdown complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
