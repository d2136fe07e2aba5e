"""Sensor modules for the DHT22 Station.

Each sensor class inherits from BaseSensor and implements:
    _init_hardware()  — attempt to initialise the physical sensor
    _read_hardware()  — one read from real hardware
    _simulate()       — one read from a simulated device

The base class (sensors.base.BaseSensor) provides:
    read(demo)        — unified read with retry logic and error handling
    simulated         — property indicating whether hardware is available
    reliability       — percentage of successful reads
    close()           — release hardware resources

GPIO access (sensors.gpio_utils) is imported lazily by the sensors that
need it, so this package imports on machines without libgpiod.
"""

from sensors.dht22 import DHT22Sensor

__all__ = ["DHT22Sensor"]
