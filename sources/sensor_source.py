"""Sensor data source -- polls a DHT22Sensor for the web mode.

Each fetch is one orchestrated read, so the stored record is "fresh",
"cached" or "none" exactly as the console loop would print it.
"""

import logging
from typing import Any, Dict, Optional

from core.data_source import DataSource
from sensors.dht22 import DHT22Sensor

logger = logging.getLogger(__name__)


class SensorSource(DataSource):
    """Wraps a DHT22Sensor and keeps its latest record."""

    def __init__(self, source_id: str, sensor: DHT22Sensor, config: Dict):
        # Convert interval_ms from sensor config to seconds
        config.setdefault("interval", config.get("interval_ms", 10000) / 1000.0)
        super().__init__(source_id, config)
        self.sensor = sensor
        self.demo_mode = config.get("demo", False)

    def fetch(self) -> Optional[Dict[str, Any]]:
        record = self.sensor.read_record(demo=self.demo_mode)
        result = record.to_dict()
        result["_source"] = self.source_id
        result["_simulated"] = self.demo_mode or self.sensor.simulated
        return result

    def status(self) -> Dict[str, Any]:
        """Read statistics for the status endpoint."""
        sensor = self.sensor
        return {
            "source": self.source_id,
            "pin": sensor.pin,
            "demo": self.demo_mode,
            "simulated": self.demo_mode or sensor.simulated,
            "total_reads": sensor.total_reads,
            "failed_reads": sensor.failed_reads,
            "reliability": round(sensor.reliability, 1),
            "cached": sensor.cache.is_set,
            "last_error": str(sensor.last_error) if sensor.last_error else None,
        }

    def close(self):
        super().close()
        self.sensor.close()
