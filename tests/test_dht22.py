"""Tests for the DHT22 read orchestration: fresh reads, cache fallback, no data."""

import threading

import pytest

from sensors.cache import ReadingCache
from sensors.dht22 import DHT22Sensor
from sensors.errors import ChecksumMismatch, NoCachedData, SignalTimeout
from sensors.line import SimulatedLine
from sensors.models import UNSET, Reading
from tests.helpers import FRAME_40_20, FRAME_55_22, corrupt


class TestReadingCache:

    def test_starts_unset(self):
        cache = ReadingCache()
        assert cache.get() is UNSET
        assert not cache.is_set
        with pytest.raises(NoCachedData):
            cache.require()

    def test_put_overwrites(self):
        cache = ReadingCache()
        cache.put(Reading(humidity=40.0, temperature=20.0))
        cache.put(Reading(humidity=55.0, temperature=22.0))
        assert cache.get() == Reading(humidity=55.0, temperature=22.0)
        assert cache.require() == Reading(humidity=55.0, temperature=22.0)

    def test_unset_never_equals_a_reading(self):
        assert UNSET != Reading(humidity=999.9, temperature=999.9)
        assert UNSET != Reading(humidity=0.0, temperature=0.0)


class TestReadRecord:

    def test_fresh_read(self, sensor, sim_line, cache):
        sim_line.queue_frame(FRAME_40_20)
        record = sensor.read_record()

        assert record.source == "fresh"
        assert record.humidity == 40.0
        assert record.temperature_c == 20.0
        assert record.temperature_f == pytest.approx(68.0)
        assert record.heat_index_f is not None
        assert record.dew_point_f is not None
        assert cache.get() == Reading(humidity=40.0, temperature=20.0)

    def test_checksum_failure_falls_back_to_cache(self, sensor, sim_line):
        sim_line.queue_frame(FRAME_55_22)
        first = sensor.read_record()
        assert first.source == "fresh"

        sim_line.queue_frame(corrupt(FRAME_55_22))
        second = sensor.read_record()

        assert second.source == "cached"
        assert second.humidity == 55.0
        assert second.temperature_c == 22.0
        assert second.heat_index_f == first.heat_index_f
        assert second.dew_point_f == first.dew_point_f
        assert isinstance(sensor.last_error, ChecksumMismatch)

    def test_cold_start_failure_reports_no_data(self, sensor, sim_line, cache):
        sim_line.queue_frame(corrupt(FRAME_40_20))
        record = sensor.read_record()

        assert record.source == "none"
        assert record.to_dict() == {"source": "none"}
        assert record.heat_index_f is None
        assert record.dew_point_f is None
        assert cache.get() is UNSET

    def test_silent_sensor_falls_back(self, sensor, sim_line):
        sim_line.queue_frame(FRAME_40_20)
        sensor.read_record()
        sim_line.queue_silence()

        record = sensor.read_record()
        assert record.source == "cached"
        assert record.humidity == 40.0
        assert isinstance(sensor.last_error, SignalTimeout)

    def test_new_fresh_read_replaces_cache(self, sensor, sim_line, cache):
        sim_line.queue_frame(FRAME_40_20)
        sim_line.queue_frame(FRAME_55_22)
        sensor.read_record()
        sensor.read_record()
        assert cache.get() == Reading(humidity=55.0, temperature=22.0)

    def test_one_trigger_per_record(self, sensor, sim_line):
        sim_line.queue_frame(corrupt(FRAME_40_20))
        sim_line.queue_frame(FRAME_40_20)
        sensor.read_record()
        assert sim_line.triggers == 1
        assert sim_line.pending == 1

    def test_read_statistics(self, sensor, sim_line):
        sim_line.queue_frame(FRAME_40_20)
        sim_line.queue_frame(corrupt(FRAME_40_20))
        sensor.read_record()
        sensor.read_record()
        assert sensor.total_reads == 2
        assert sensor.failed_reads == 1
        assert sensor.reliability == 50.0

    def test_negative_temperature_record(self, sensor, sim_line):
        sim_line.queue_frame([0x00, 0x00, 0x80, 0x32, 0xB2])
        record = sensor.read_record()
        assert record.source == "fresh"
        assert record.temperature_c == -5.0
        assert record.temperature_f == pytest.approx(23.0)


class TestWithoutHardware:

    def test_negative_pin_is_unavailable(self):
        sensor = DHT22Sensor(-1)
        assert sensor.simulated
        assert sensor.read() is None
        assert sensor.read_record().source == "none"

    def test_unavailable_hardware_still_serves_cache(self):
        cache = ReadingCache()
        cache.put(Reading(humidity=48.0, temperature=19.5))
        sensor = DHT22Sensor(-1, cache=cache)
        record = sensor.read_record()
        assert record.source == "cached"
        assert record.temperature_c == 19.5

    def test_demo_mode_reads_simulated_sensor(self):
        sensor = DHT22Sensor(-1)
        sensor.SIM_GLITCH_PROB = 0.0
        record = sensor.read_record(demo=True)
        assert record.source == "fresh"
        assert 0.0 < record.humidity < 100.0
        assert -40.0 <= record.temperature_c <= 80.0

    def test_demo_glitch_falls_back(self):
        sensor = DHT22Sensor(-1)
        sensor.SIM_GLITCH_PROB = 0.0
        first = sensor.read_record(demo=True)
        sensor.SIM_GLITCH_PROB = 1.0
        second = sensor.read_record(demo=True)
        assert second.source == "cached"
        assert second.humidity == first.humidity

    def test_repr(self, sensor):
        assert repr(sensor) == "<DHT22Sensor pin=16 live>"
        assert repr(DHT22Sensor(-1)) == "<DHT22Sensor pin=-1 simulated>"


class GatedLine(SimulatedLine):
    """SimulatedLine whose reads block until ``gate`` is set."""

    def __init__(self):
        super().__init__()
        self.reading = threading.Event()
        self.gate = threading.Event()
        self.closed = False

    def read_level(self):
        self.reading.set()
        self.gate.wait(5.0)
        return super().read_level()

    def close(self):
        self.closed = True


class TestClose:

    def test_close_waits_for_read_in_progress(self):
        line = GatedLine()
        line.queue_frame(FRAME_40_20)
        sensor = DHT22Sensor(16, line=line)

        records = []
        reader = threading.Thread(target=lambda: records.append(sensor.read_record()))
        reader.start()
        assert line.reading.wait(1.0)

        closer = threading.Thread(target=sensor.close)
        closer.start()
        closer.join(0.1)
        assert closer.is_alive()
        assert not line.closed

        line.gate.set()
        reader.join(2.0)
        closer.join(2.0)
        assert records[0].source == "fresh"
        assert line.closed
        assert sensor.simulated

    def test_read_after_close_has_no_hardware(self, sensor, sim_line):
        sim_line.queue_frame(FRAME_40_20)
        sensor.close()
        assert sensor.read_record().source == "none"
        assert sim_line.triggers == 0
