"""DHT22 frame decoding and validation.

Frame layout (40 bits, MSB first):

    byte 0  humidity high      \\  humidity * 10
    byte 1  humidity low       /
    byte 2  temperature high   \\  temperature * 10, bit 7 of byte 2 = sign
    byte 3  temperature low    /
    byte 4  checksum           (byte0 + byte1 + byte2 + byte3) & 0xFF

Sample ordinals 0-2 cover the sensor's acknowledgement. After that every
even ordinal is the HIGH run of a data bit and every odd one the LOW
separator in front of the next bit.
"""

import logging
from typing import List, Sequence

from config import BIT_THRESHOLD_TICKS, FRAME_BITS, MAX_TRANSITIONS, PREAMBLE_TRANSITIONS
from sensors.errors import ChecksumMismatch, InsufficientBits, SignalTimeout
from sensors.models import RawFrame, Reading, TransitionSample

logger = logging.getLogger(__name__)

SIGN_BIT = 0x80


def checksum(data: Sequence[int]) -> int:
    return (data[0] + data[1] + data[2] + data[3]) & 0xFF


def decode(samples: Sequence[TransitionSample]) -> RawFrame:
    """Fold sampled run lengths into five bytes.

    Bits past the 40th (the idle run after the trailer) are dropped.
    """
    data: List[int] = [0, 0, 0, 0, 0]
    bits_read = 0

    for ordinal, sample in enumerate(samples):
        if ordinal <= PREAMBLE_TRANSITIONS or ordinal % 2:
            continue
        if bits_read >= FRAME_BITS:
            break
        field = bits_read // 8
        data[field] <<= 1
        if sample.duration_ticks > BIT_THRESHOLD_TICKS:
            data[field] |= 1
        bits_read += 1

    timed_out = (
        bool(samples)
        and samples[-1].saturated
        and len(samples) < MAX_TRANSITIONS
    )
    return RawFrame(tuple(data), bits_read, timed_out)


def validate(data: Sequence[int], bits_read: int) -> bool:
    """True iff all 40 bits arrived and the checksum matches."""
    return bits_read >= FRAME_BITS and data[4] == checksum(data)


def verify(frame: RawFrame) -> None:
    """Raise the specific reason ``frame`` is unusable, if any."""
    if validate(frame.data, frame.bits_read):
        return
    if frame.bits_read < FRAME_BITS:
        if frame.timed_out:
            raise SignalTimeout(frame.bits_read, FRAME_BITS)
        raise InsufficientBits(frame.bits_read, FRAME_BITS)
    raise ChecksumMismatch(checksum(frame.data), frame[4])


def to_reading(frame: RawFrame) -> Reading:
    """Convert a validated frame to humidity (%) and temperature (C)."""
    humidity = ((frame[0] << 8) | frame[1]) / 10.0
    temperature = (((frame[2] & ~SIGN_BIT & 0xFF) << 8) | frame[3]) / 10.0
    if frame[2] & SIGN_BIT:
        temperature = -temperature
    return Reading(humidity=humidity, temperature=temperature)


def encode(reading: Reading) -> List[int]:
    """Inverse of to_reading(): the five bytes a sensor would send."""
    humidity = int(round(reading.humidity * 10))
    temperature = int(round(abs(reading.temperature) * 10))
    data = [
        (humidity >> 8) & 0xFF,
        humidity & 0xFF,
        (temperature >> 8) & 0x7F,
        temperature & 0xFF,
    ]
    if reading.temperature < 0:
        data[2] |= SIGN_BIT
    data.append(checksum(data))
    return data
