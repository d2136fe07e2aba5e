"""Core framework for the DHT22 Station web mode.

Architecture:
    DataSource  -- fetches data in a background thread, keeps the latest result
"""

from core.data_source import DataSource

__all__ = [
    "DataSource",
]
