"""DHT22 signal sampler.

Wakes the sensor, then measures how long the line stays in each state.
Bits are encoded in run lengths, so everything downstream depends on this
loop running without being preempted: a delay longer than a few ticks
turns a '0' into a '1'. On real hardware the process is reniced to the
highest priority for the duration of the read when permissions allow.
"""

import logging
import os
from contextlib import contextmanager
from typing import List

from config import (
    MAX_TRANSITIONS,
    RELEASE_HIGH_US,
    STATE_TIMEOUT_TICKS,
    TICK_US,
    TRIGGER_LOW_MS,
    WAKE_HOLD_MS,
)
from sensors.line import LineInterface
from sensors.models import Level, TransitionSample

logger = logging.getLogger(__name__)

_PRIORITY_BOOST = 20
_priority_warned = False


@contextmanager
def elevated_priority():
    """Renice to the top priority for the block, restoring it afterwards.

    Needs root (or CAP_SYS_NICE). Without it the read still runs, just
    more exposed to scheduling jitter; the warning is logged once.
    """
    global _priority_warned
    try:
        original = os.nice(0)
        boosted_to = os.nice(-_PRIORITY_BOOST)
        boosted = True
    except (PermissionError, AttributeError) as exc:
        boosted = False
        if not _priority_warned:
            _priority_warned = True
            logger.warning("Could not raise scheduler priority (%s); run as root "
                           "for more reliable reads", exc)
    try:
        yield boosted
    finally:
        # nice() clamps at -20, so undo the step actually taken
        if boosted:
            os.nice(original - boosted_to)


class SignalSampler:
    """Triggers a DHT22 on ``line`` and records every state run."""

    def __init__(self, line: LineInterface, elevate_priority: bool = False):
        self.line = line
        self.elevate_priority = elevate_priority

    def wake(self) -> None:
        """Send the start signal and hand the line over to the sensor."""
        line = self.line
        line.configure_as_output()
        line.set_high()
        line.wait_milliseconds(WAKE_HOLD_MS)
        line.set_low()
        line.wait_milliseconds(TRIGGER_LOW_MS)
        line.set_high()
        line.wait_microseconds(RELEASE_HIGH_US)
        line.configure_as_input()

    def sample(self) -> List[TransitionSample]:
        """Trigger the sensor and return up to MAX_TRANSITIONS samples.

        Each sample holds the level the line moved to and how many ticks
        the previous level lasted. Sampling stops early right after a run
        reaches STATE_TIMEOUT_TICKS: the line has gone quiet.
        """
        if self.elevate_priority:
            with elevated_priority():
                return self._sample()
        return self._sample()

    def _sample(self) -> List[TransitionSample]:
        line = self.line
        self.wake()

        samples: List[TransitionSample] = []
        last_state = Level.HIGH
        while len(samples) < MAX_TRANSITIONS:
            ticks = 0
            while line.read_level() == last_state and ticks < STATE_TIMEOUT_TICKS:
                ticks += 1
                line.wait_microseconds(TICK_US)

            last_state = line.read_level()
            saturated = ticks >= STATE_TIMEOUT_TICKS
            samples.append(TransitionSample(last_state, ticks, saturated))
            if saturated:
                break

        if len(samples) < MAX_TRANSITIONS:
            logger.debug("Line quiet after %d of %d transitions",
                         len(samples), MAX_TRANSITIONS)
        return samples
