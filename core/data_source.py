"""Data source abstraction for the DHT22 Station web mode.

A DataSource fetches data in a background thread and keeps the latest
result for request handlers to pick up. Handlers never touch the
hardware themselves, so reads stay strictly sequential.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """Base class for all data providers.

    Subclasses implement fetch() which runs in a background thread.
    The most recent non-None result is available through latest().
    """

    def __init__(self, source_id: str, config: Dict):
        self.source_id = source_id
        self.config = config
        self.interval = config.get("interval", 5.0)  # seconds
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._latest: Optional[Dict[str, Any]] = None
        self._updated_at: Optional[float] = None

    def start(self):
        """Start the background polling thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, daemon=True, name=f"src-{self.source_id}"
        )
        self._thread.start()
        logger.info("DataSource %s started (%.1fs interval)", self.source_id, self.interval)

    def stop(self, timeout: float = 5.0):
        """Signal the background thread to stop and wait for it to finish."""
        self._stop.set()
        thread = self._thread
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("DataSource %s still running after %.1fs", self.source_id, timeout)

    def poll_once(self) -> Optional[Dict[str, Any]]:
        """Fetch once and store the result. Errors are logged, not raised."""
        try:
            data = self.fetch()
        except Exception as exc:
            logger.error("DataSource %s fetch error: %s", self.source_id, exc)
            return None
        if data is not None:
            with self._lock:
                self._latest = data
                self._updated_at = time.time()
        return data

    def latest(self) -> Optional[Dict[str, Any]]:
        """Most recent fetch result, or None before the first one."""
        with self._lock:
            if self._latest is None:
                return None
            return {**self._latest, "_ts": self._updated_at}

    def _run(self):
        """Poll loop -- fetch data and store it, sleep in small chunks."""
        while not self._stop.is_set():
            self.poll_once()

            # Sleep in 0.1s chunks so stop() is responsive
            chunks = int(self.interval * 10)
            for _ in range(max(chunks, 1)):
                if self._stop.is_set():
                    break
                time.sleep(0.1)

    @abstractmethod
    def fetch(self) -> Optional[Dict[str, Any]]:
        """Fetch data. Runs in background thread.

        Returns:
            Dict of field->value, or None to skip this cycle.
        """
        ...

    def close(self):
        """Release resources. Override if needed."""
        self.stop()
