"""Single-wire line interface for the DHT22 sampler.

The sampler only needs a handful of primitives: switch direction, drive
the line, read it, and wait. Real hardware goes through gpiod (see
sensors/gpio_utils.py); SimulatedLine replays DHT22 pulse trains so the
whole decode path runs in demo mode and in tests.

DHT22 response as seen on the wire after the host releases the line:

    HIGH ~30 us   pull-up, before the sensor answers
    LOW   80 us   \\  "ready" acknowledgement
    HIGH  80 us   /
    40 x  LOW 50 us, then HIGH 26 us ('0') or 70 us ('1')
    LOW   50 us   end of frame
    HIGH  ...     line released, idles high
"""

import bisect
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from sensors.models import Level

# Simulated pulse widths in microseconds
SIM_PULLUP_US = 30
SIM_ACK_US = 80
SIM_BIT_START_US = 50
SIM_ZERO_US = 26
SIM_ONE_US = 70
SIM_TRAILER_US = 50


class LineInterface(ABC):
    """Digital I/O on one GPIO line, plus blocking delays."""

    @abstractmethod
    def configure_as_output(self) -> None:
        ...

    @abstractmethod
    def configure_as_input(self) -> None:
        ...

    @abstractmethod
    def set_high(self) -> None:
        ...

    @abstractmethod
    def set_low(self) -> None:
        ...

    @abstractmethod
    def read_level(self) -> Level:
        ...

    @abstractmethod
    def wait_milliseconds(self, ms: int) -> None:
        ...

    @abstractmethod
    def wait_microseconds(self, us: int) -> None:
        ...

    def close(self) -> None:
        """Release the line. Override in implementations that hold one."""
        pass


def pulse_train(data: Sequence[int], bits: int = 40) -> List[Tuple[Level, float]]:
    """Build the (level, duration_us) runs a DHT22 sends for ``data``.

    ``bits`` below 40 cuts the transmission short; the line then idles
    HIGH as if the sensor stopped talking.
    """
    if len(data) != 5 or any(not 0 <= b <= 0xFF for b in data):
        raise ValueError(f"expected five bytes, got {list(data)!r}")

    runs = [
        (Level.HIGH, SIM_PULLUP_US),
        (Level.LOW, SIM_ACK_US),
        (Level.HIGH, SIM_ACK_US),
    ]
    for i in range(min(bits, 40)):
        byte = data[i // 8]
        bit = (byte >> (7 - i % 8)) & 1
        runs.append((Level.LOW, SIM_BIT_START_US))
        runs.append((Level.HIGH, SIM_ONE_US if bit else SIM_ZERO_US))
    if bits >= 40:
        runs.append((Level.LOW, SIM_TRAILER_US))
    return runs


class SimulatedLine(LineInterface):
    """In-memory DHT22 stand-in driven by a virtual microsecond clock.

    Time only moves when the caller waits or reads. Each read costs
    ``read_cost_us`` so one sampler tick spans roughly the same time it
    does on a Pi, which is what the 16-tick bit threshold is tuned for.

    Responses are consumed one per trigger (LOW then HIGH while in output
    mode, followed by a switch to input). With nothing queued the line
    just idles HIGH, like a disconnected sensor.
    """

    def __init__(self, read_cost_us: float = 2.0):
        self.read_cost_us = read_cost_us
        self._now = 0.0
        self._output = True
        self._driven = Level.HIGH
        self._triggered = False
        self._responses: Deque[Optional[List[Tuple[Level, float]]]] = deque()
        self._levels: List[Level] = []
        self._ends: List[float] = []
        self._t0 = 0.0
        self.triggers = 0

    # ------------------------------------------------------------------
    # Scripting
    # ------------------------------------------------------------------

    def queue_frame(self, data: Sequence[int], bits: int = 40) -> None:
        """Queue a sensor response carrying ``data`` (five bytes)."""
        self._responses.append(pulse_train(data, bits))

    def queue_silence(self) -> None:
        """Queue a trigger the sensor does not answer."""
        self._responses.append(None)

    @property
    def pending(self) -> int:
        return len(self._responses)

    # ------------------------------------------------------------------
    # LineInterface
    # ------------------------------------------------------------------

    def configure_as_output(self) -> None:
        self._output = True
        self._triggered = False

    def configure_as_input(self) -> None:
        self._output = False
        self._t0 = self._now
        self._levels, self._ends = [], []

        if not self._triggered:
            return
        self._triggered = False
        self.triggers += 1

        runs = self._responses.popleft() if self._responses else None
        if not runs:
            return
        t = 0.0
        for level, duration in runs:
            t += duration
            self._levels.append(level)
            self._ends.append(t)

    def set_high(self) -> None:
        self._driven = Level.HIGH

    def set_low(self) -> None:
        self._driven = Level.LOW
        if self._output:
            self._triggered = True

    def read_level(self) -> Level:
        if self._output:
            level = self._driven
        else:
            idx = bisect.bisect_right(self._ends, self._now - self._t0)
            level = self._levels[idx] if idx < len(self._levels) else Level.HIGH
        self._now += self.read_cost_us
        return level

    def wait_milliseconds(self, ms: int) -> None:
        self._now += ms * 1000.0

    def wait_microseconds(self, us: int) -> None:
        self._now += us
