"""Console output for DHT22 reading records.

One line per read, in the format the station has always printed:

    Temperature: 22.0 *C  (71.6*F)  Humidity: 55.0%  Feels Like: 71.0*F  Dew Point: 51.9*F
    Cached Temp: 22.0 *C  (71.6*F)  Humidity: 55.0%  Feels Like: 71.0*F  Dew Point: 51.9*F
    Data not good, Skipped
"""

from sensors.models import SOURCE_FRESH, ReadingRecord

NO_DATA_LINE = "Data not good, Skipped"

FRESH_LABEL = "Temperature"
CACHED_LABEL = "Cached Temp"


def format_record(record: ReadingRecord) -> str:
    if not record.has_data:
        return NO_DATA_LINE

    label = FRESH_LABEL if record.source == SOURCE_FRESH else CACHED_LABEL
    return (
        f"{label}: {record.temperature_c:<3.1f} *C  ({record.temperature_f:<3.1f}*F)  "
        f"Humidity: {record.humidity:<3.1f}%  "
        f"Feels Like: {record.heat_index_f:<3.1f}*F  "
        f"Dew Point: {record.dew_point_f:<3.1f}*F"
    )
