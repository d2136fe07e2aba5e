"""Tests for console formatting of reading records."""

from output.console import format_record
from sensors.models import ReadingRecord


def _record(source):
    return ReadingRecord(
        source=source,
        temperature_c=22.0,
        temperature_f=71.6,
        humidity=55.0,
        heat_index_f=71.045,
        dew_point_f=51.917,
    )


def test_fresh_line():
    assert format_record(_record("fresh")) == (
        "Temperature: 22.0 *C  (71.6*F)  Humidity: 55.0%  "
        "Feels Like: 71.0*F  Dew Point: 51.9*F"
    )


def test_cached_line():
    assert format_record(_record("cached")).startswith("Cached Temp: 22.0 *C  (71.6*F)")


def test_no_data_line():
    assert format_record(ReadingRecord.none()) == "Data not good, Skipped"


def test_negative_values_keep_sign():
    record = ReadingRecord("fresh", -5.0, 23.0, 40.0, 17.6, 1.2)
    assert format_record(record).startswith("Temperature: -5.0 *C  (23.0*F)")
