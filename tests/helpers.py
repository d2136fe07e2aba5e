"""Frame builders for the DHT22 Station tests."""

from typing import List, Sequence

from sensors.models import Level, TransitionSample

# Run lengths (in ticks) as a Pi typically measures them
ONE_TICKS = 24
ZERO_TICKS = 8
SEPARATOR_TICKS = 16

# humidity 40.0 %, temperature 20.0 C
FRAME_40_20 = [0x01, 0x90, 0x00, 0xC8, (0x01 + 0x90 + 0x00 + 0xC8) & 0xFF]
# humidity 55.0 %, temperature 22.0 C
FRAME_55_22 = [0x02, 0x26, 0x00, 0xDC, 0x04]


def samples_for(data: Sequence[int], bits: int = 40) -> List[TransitionSample]:
    """Transition samples a clean read of ``data`` would produce."""
    samples = [
        TransitionSample(Level.LOW, 10),
        TransitionSample(Level.HIGH, 26),
        TransitionSample(Level.LOW, 27),
    ]
    for i in range(bits):
        bit = (data[i // 8] >> (7 - i % 8)) & 1
        samples.append(TransitionSample(Level.HIGH, SEPARATOR_TICKS))
        samples.append(TransitionSample(Level.LOW, ONE_TICKS if bit else ZERO_TICKS))
    samples.append(TransitionSample(Level.HIGH, SEPARATOR_TICKS))
    samples.append(TransitionSample(Level.HIGH, 255, saturated=True))
    return samples


def corrupt(data: Sequence[int]) -> List[int]:
    """Same frame with a checksum that no longer matches."""
    bad = list(data)
    bad[4] ^= 0x01
    return bad
