"""Last-known-good DHT22 reading.

A single slot, not a history: every validated read overwrites it and a
failed read falls back to it. It lives as long as the sensor object that
owns it and is never cleared.
"""

from typing import Union

from sensors.errors import NoCachedData
from sensors.models import UNSET, Reading, _Unset


class ReadingCache:

    def __init__(self):
        self._reading: Union[Reading, _Unset] = UNSET

    def get(self) -> Union[Reading, _Unset]:
        return self._reading

    def put(self, reading: Reading) -> None:
        self._reading = reading

    def require(self) -> Reading:
        """Return the cached reading, raising NoCachedData if there is none."""
        if self._reading is UNSET:
            raise NoCachedData()
        return self._reading

    @property
    def is_set(self) -> bool:
        return self._reading is not UNSET

    def __repr__(self) -> str:
        return f"<ReadingCache {self._reading!r}>"
