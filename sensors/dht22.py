"""DHT22 (AM2302) temperature and humidity sensor.

Protocol overview (bit-banged over one GPIO line):
  1. Pi holds DATA HIGH 10 ms, pulls it LOW 18 ms (start signal),
     then HIGH 40 us and switches to input
  2. DHT22 responds LOW 80 us, then HIGH 80 us
  3. DHT22 sends 40 bits:
       16-bit humidity * 10
       16-bit temperature * 10 (bit 15 = sign)
       8-bit checksum
  4. Each bit: LOW 50 us, then HIGH 26-28 us (0) or 70 us (1)

Specs:
  Temperature  -40-80 C,  +/- 0.5 C accuracy
  Humidity     0-100 %,   +/- 2 % accuracy
  Min interval 2 seconds

Reads fail often enough (missed edges, checksum errors) that every
validated reading is cached and a failed read reports the cached one
instead. Until the first good read there is nothing to report.
"""

import logging
import random
import threading
from typing import Any, Dict, Optional

from sensors.base import BaseSensor
from sensors.cache import ReadingCache
from sensors.errors import NoCachedData
from sensors.frame import decode, encode, to_reading, verify
from sensors.line import LineInterface, SimulatedLine
from sensors.metrics import celsius_to_fahrenheit, derive_metrics
from sensors.models import SOURCE_CACHED, SOURCE_FRESH, Reading, ReadingRecord
from sensors.sampler import SignalSampler

logger = logging.getLogger(__name__)


class DHT22Sensor(BaseSensor):
    # The sensor won't answer again within 2 s, so an immediate retry is
    # pointless; a failed read falls back to the cache instead.
    MAX_RETRIES = 1
    SIM_GLITCH_PROB = 0.1    # share of simulated reads sent with a bad checksum

    def __init__(self, pin: int, cfg: Optional[Dict[str, Any]] = None,
                 cache: Optional[ReadingCache] = None,
                 line: Optional[LineInterface] = None):
        self.cache = cache if cache is not None else ReadingCache()
        self._line = line
        self._sampler: Optional[SignalSampler] = None
        self._lock = threading.Lock()

        self._sim_line = SimulatedLine()
        self._sim_sampler = SignalSampler(self._sim_line)
        self._sim_temp = 22.0
        self._sim_hum = 55.0

        super().__init__(pin, cfg)

    def _init_hardware(self) -> None:
        if self._line is not None:
            self._sampler = SignalSampler(
                self._line, elevate_priority=self._cfg.get("elevate_priority", False),
            )
            self._hw_available = True
            return

        if self.pin < 0:
            return

        try:
            from sensors.gpio_utils import GpiodLine
            self._line = GpiodLine(self.pin)
        except ImportError:
            logger.info("DHT22: gpiod library not installed")
            return
        except OSError as exc:
            logger.info("DHT22: GPIO %d unavailable — %s", self.pin, exc)
            return

        self._sampler = SignalSampler(
            self._line, elevate_priority=self._cfg.get("elevate_priority", True),
        )
        self._hw_available = True
        logger.info("DHT22: ready on GPIO %d", self.pin)

    def _read_with(self, sampler: SignalSampler) -> Reading:
        frame = decode(sampler.sample())
        verify(frame)
        return to_reading(frame)

    def _read_hardware(self) -> Optional[Reading]:
        return self._read_with(self._sampler)

    def _simulate(self) -> Optional[Reading]:
        # Random walk with mean reversion toward 22 C / 55 %
        self._sim_temp += random.gauss(0, 0.3)
        self._sim_temp = self._sim_temp * 0.97 + 22.0 * 0.03
        self._sim_temp = max(-40.0, min(80.0, self._sim_temp))

        self._sim_hum += random.gauss(0, 1.0)
        self._sim_hum = self._sim_hum * 0.97 + 55.0 * 0.03
        self._sim_hum = max(1.0, min(99.0, self._sim_hum))

        data = encode(Reading(humidity=round(self._sim_hum, 1),
                              temperature=round(self._sim_temp, 1)))
        if random.random() < self.SIM_GLITCH_PROB:
            data[4] ^= 0x01
        self._sim_line.queue_frame(data)
        return self._read_with(self._sim_sampler)

    def read_record(self, demo: bool = False) -> ReadingRecord:
        """Trigger one read and report it, falling back to the cached reading.

        Always returns exactly one record: "fresh" for a validated read,
        "cached" when the read failed but an earlier one succeeded, and
        "none" before any read has succeeded.
        """
        with self._lock:
            reading = self.read(demo=demo)
            if reading is not None:
                self.cache.put(reading)
                source = SOURCE_FRESH
            else:
                try:
                    reading = self.cache.require()
                except NoCachedData:
                    logger.debug("DHT22: no valid reading yet")
                    return ReadingRecord.none()
                source = SOURCE_CACHED

        metrics = derive_metrics(reading)
        return ReadingRecord(
            source=source,
            temperature_c=reading.temperature,
            temperature_f=celsius_to_fahrenheit(reading.temperature),
            humidity=reading.humidity,
            heat_index_f=metrics.heat_index_f,
            dew_point_f=metrics.dew_point_f,
        )

    def close(self) -> None:
        # Waits for a read in progress; the line must not vanish mid-sample
        with self._lock:
            if self._line:
                self._line.close()
                self._line = None
            self._sampler = None
            self._hw_available = False
