"""Data source implementations for the DHT22 Station."""

from sources.sensor_source import SensorSource

__all__ = ["SensorSource"]
