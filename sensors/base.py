"""Base sensor class for the DHT22 Station.

Sensor implementations inherit from BaseSensor and implement the
hardware hooks. The base class owns read bookkeeping: retry, failure
counting and rate-limited failure logging.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import time
import logging

logger = logging.getLogger(__name__)


class BaseSensor(ABC):
    """Abstract base class for sensor modules.

    Subclasses must implement:
        _init_hardware()  — attempt to initialise the physical sensor
        _read_hardware()  — one read from real hardware, or None on failure
        _simulate()       — one read from a simulated device

    Both read hooks may raise instead of returning None; the exception
    counts as a failed attempt.

    The base class provides:
        read(demo)        — unified read with retry logic and error handling
        simulated         — property indicating whether hardware is available
        reliability       — percentage of successful reads
        close()           — release resources (override if needed)
    """

    # Subclasses can override these for sensor-specific tuning
    MAX_RETRIES: int = 2
    RETRY_DELAY: float = 0.1  # seconds between retries

    def __init__(self, pin: int, cfg: Optional[Dict[str, Any]] = None):
        self.pin = pin
        self._cfg = cfg or {}
        self._hw_available = False
        self._consecutive_failures = 0
        self._total_reads = 0
        self._failed_reads = 0
        self.last_error: Optional[Exception] = None

        try:
            self._init_hardware()
        except Exception as exc:
            logger.warning(
                "%s: hardware init failed on pin %s — %s",
                self.__class__.__name__, pin, exc,
            )
            self._hw_available = False

    # ------------------------------------------------------------------
    # Abstract methods — subclasses MUST implement
    # ------------------------------------------------------------------

    @abstractmethod
    def _init_hardware(self) -> None:
        """Attempt to initialise hardware. Set self._hw_available = True on success."""
        ...

    @abstractmethod
    def _read_hardware(self) -> Optional[Any]:
        """Read from real hardware. Return the value read, or None on failure."""
        ...

    @abstractmethod
    def _simulate(self) -> Optional[Any]:
        """Read from a simulated device for demo mode."""
        ...

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def simulated(self) -> bool:
        """True when hardware is not available."""
        return not self._hw_available

    @property
    def total_reads(self) -> int:
        return self._total_reads

    @property
    def failed_reads(self) -> int:
        return self._failed_reads

    @property
    def reliability(self) -> float:
        """Percentage of successful reads (0.0–100.0)."""
        if self._total_reads == 0:
            return 100.0
        return ((self._total_reads - self._failed_reads) / self._total_reads) * 100.0

    def read(self, demo: bool = False) -> Optional[Any]:
        """Read sensor data with retry logic.

        Args:
            demo: If True, read the simulated device regardless of hardware state.

        Returns:
            The value read on success, None on failure.
        """
        if demo:
            attempt_read = self._simulate
        elif self._hw_available:
            attempt_read = self._read_hardware
        else:
            return None

        self._total_reads += 1

        # Retry loop
        last_exc = None
        for attempt in range(1, self.MAX_RETRIES + 1):
            try:
                result = attempt_read()
                if result is not None:
                    self._consecutive_failures = 0
                    self.last_error = None
                    return result
            except Exception as exc:
                last_exc = exc
                logger.debug("%s: attempt %d failed — %s",
                             self.__class__.__name__, attempt, exc)
            if attempt < self.MAX_RETRIES:
                time.sleep(self.RETRY_DELAY)

        # All retries exhausted
        self._failed_reads += 1
        self._consecutive_failures += 1
        self.last_error = last_exc

        if self._consecutive_failures == 1 or self._consecutive_failures % 50 == 0:
            logger.warning(
                "%s: read failed (%d consecutive) — %s",
                self.__class__.__name__,
                self._consecutive_failures,
                last_exc or "returned None",
            )

        return None

    def close(self) -> None:
        """Release hardware resources. Override in subclasses that hold GPIO lines."""
        pass

    def __repr__(self) -> str:
        status = "live" if self._hw_available else "simulated"
        return f"<{self.__class__.__name__} pin={self.pin} {status}>"
