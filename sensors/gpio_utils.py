"""GPIO utilities for the DHT22 Station.

Raspberry Pi GPIO pins are accessed through the gpiod library, which talks
to the kernel's GPIO character device (/dev/gpiochipN).

Each Pi model has one or more GPIO chips:
  Pi 3B/3B+/4  ->  /dev/gpiochip0  (BCM2835/BCM2711, 54 lines)
  Pi 5         ->  /dev/gpiochip4  (RP1, 54 lines)

We auto-detect the correct chip so the code works across Pi models.

The DHT22 shares one line for request and response, so GpiodLine keeps a
single line request open and flips its direction with reconfigure_lines()
instead of re-requesting the line between trigger and listen.
"""

import logging
import time

import gpiod
from gpiod.line import Direction, Bias, Value

from sensors.line import LineInterface
from sensors.models import Level

logger = logging.getLogger(__name__)

CONSUMER = "dht22-station"

# Cached chip path - detected once at first use
_chip_path = None


def get_chip_path():
    """Find the main Broadcom GPIO chip (the one with 54 lines)."""
    global _chip_path
    if _chip_path is not None:
        return _chip_path

    # Try common paths; pick the first chip with >= 28 GPIO lines
    for path in ["/dev/gpiochip0", "/dev/gpiochip4"]:
        try:
            with gpiod.Chip(path) as chip:
                if chip.get_info().num_lines >= 28:
                    _chip_path = path
                    return path
        except (OSError, PermissionError):
            continue

    # Fallback
    _chip_path = "/dev/gpiochip0"
    return _chip_path


def input_settings(bias=Bias.PULL_UP):
    return gpiod.LineSettings(direction=Direction.INPUT, bias=bias)


def output_settings(high=True):
    return gpiod.LineSettings(
        direction=Direction.OUTPUT,
        output_value=Value.ACTIVE if high else Value.INACTIVE,
    )


def request_output_line(pin, high=True):
    """Request a single GPIO line configured as output.

    Args:
        pin:  BCM GPIO number
        high: Initial level driven on the line

    Returns:
        gpiod.LineRequest on success, None on failure.
    """
    try:
        return gpiod.request_lines(
            get_chip_path(),
            consumer=CONSUMER,
            config={pin: output_settings(high)},
        )
    except Exception as e:
        logger.warning("GPIO %s: output request failed - %s", pin, e)
        return None


def read_line(request, pin):
    """Read a digital value from a GPIO line.

    Returns True for HIGH / ACTIVE, False for LOW / INACTIVE.
    """
    return request.get_value(pin) == Value.ACTIVE


def write_line(request, pin, value):
    """Set a digital output on a GPIO line.

    Args:
        request: gpiod.LineRequest from request_output_line()
        pin:     BCM GPIO number
        value:   True for HIGH, False for LOW
    """
    request.set_value(pin, Value.ACTIVE if value else Value.INACTIVE)


class GpiodLine(LineInterface):
    """LineInterface over one gpiod line request.

    Raises OSError if the line cannot be requested (busy, no permission,
    no such chip).
    """

    def __init__(self, pin: int):
        self.pin = pin
        self._request = request_output_line(pin, high=True)
        if self._request is None:
            raise OSError(f"GPIO {pin}: line request failed")

    def configure_as_output(self) -> None:
        self._request.reconfigure_lines(config={self.pin: output_settings(True)})

    def configure_as_input(self) -> None:
        self._request.reconfigure_lines(config={self.pin: input_settings()})

    def set_high(self) -> None:
        write_line(self._request, self.pin, True)

    def set_low(self) -> None:
        write_line(self._request, self.pin, False)

    def read_level(self) -> Level:
        return Level.HIGH if read_line(self._request, self.pin) else Level.LOW

    def wait_milliseconds(self, ms: int) -> None:
        time.sleep(ms / 1000.0)

    def wait_microseconds(self, us: int) -> None:
        # time.sleep() can't resolve microseconds; spin on the perf counter
        deadline = time.perf_counter_ns() + us * 1000
        while time.perf_counter_ns() < deadline:
            pass

    def close(self) -> None:
        if self._request:
            self._request.release()
            self._request = None
