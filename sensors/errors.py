"""DHT22 read failures.

None of these are fatal. They are raised inside a single read attempt and
turned into a cache fallback (or a "no data" record) by the sensor.
"""


class DHTError(Exception):
    """Base class for DHT22 read failures."""


class InsufficientBits(DHTError):
    """Fewer than 40 data bits were assembled."""

    def __init__(self, bits_read: int, expected: int = 40):
        self.bits_read = bits_read
        self.expected = expected
        super().__init__(f"read {bits_read} of {expected} bits")


class SignalTimeout(InsufficientBits):
    """The line stopped changing before the frame was complete."""

    def __init__(self, bits_read: int, expected: int = 40):
        super().__init__(bits_read, expected)
        self.args = (f"line went quiet after {bits_read} of {expected} bits",)


class ChecksumMismatch(DHTError):
    """All 40 bits arrived but the checksum field disagrees."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"checksum 0x{received:02X} != 0x{expected:02X}")


class NoCachedData(DHTError):
    """Fallback requested before any read has succeeded."""

    def __init__(self):
        super().__init__("no reading cached yet")
