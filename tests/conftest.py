"""Shared fixtures for the DHT22 Station tests."""

import pytest

from sensors.cache import ReadingCache
from sensors.dht22 import DHT22Sensor
from sensors.line import SimulatedLine


@pytest.fixture
def sim_line():
    return SimulatedLine()


@pytest.fixture
def cache():
    return ReadingCache()


@pytest.fixture
def sensor(sim_line, cache):
    """DHT22 wired to a simulated line, sharing the ``cache`` fixture."""
    s = DHT22Sensor(16, cache=cache, line=sim_line)
    yield s
    s.close()
