"""Tests for the simulated DHT22 line."""

import pytest

from sensors.line import SimulatedLine, pulse_train
from sensors.models import Level
from tests.helpers import FRAME_40_20


def test_pulse_train_shape():
    runs = pulse_train(FRAME_40_20)
    assert len(runs) == 3 + 2 * 40 + 1
    assert [level for level, _ in runs[:3]] == [Level.HIGH, Level.LOW, Level.HIGH]
    assert runs[-1][0] == Level.LOW
    # first data byte 0x01: seven zeros then a one
    bit_highs = [runs[4 + 2 * i][1] for i in range(8)]
    assert bit_highs == [26] * 7 + [70]


def test_pulse_train_truncated():
    runs = pulse_train(FRAME_40_20, bits=5)
    assert len(runs) == 3 + 2 * 5
    assert runs[-1][0] == Level.HIGH


@pytest.mark.parametrize("data", [[1, 2, 3, 4], [0, 0, 0, 0, 256], [0, 0, 0, 0, -1]])
def test_pulse_train_rejects_bad_frames(data):
    with pytest.raises(ValueError):
        pulse_train(data)


def test_output_mode_reads_back_driven_level():
    line = SimulatedLine()
    line.configure_as_output()
    line.set_low()
    assert line.read_level() == Level.LOW
    line.set_high()
    assert line.read_level() == Level.HIGH


def test_idles_high_without_trigger():
    line = SimulatedLine()
    line.queue_frame(FRAME_40_20)
    line.configure_as_input()
    assert line.read_level() == Level.HIGH
    assert line.triggers == 0
    assert line.pending == 1


def test_trigger_consumes_one_response():
    line = SimulatedLine()
    line.queue_frame(FRAME_40_20)
    line.configure_as_output()
    line.set_low()
    line.set_high()
    line.configure_as_input()

    assert line.triggers == 1
    assert line.pending == 0
    assert line.read_level() == Level.HIGH
    line.wait_microseconds(40)
    assert line.read_level() == Level.LOW
    line.wait_microseconds(80)
    assert line.read_level() == Level.HIGH


def test_silence_keeps_line_high():
    line = SimulatedLine()
    line.queue_silence()
    line.configure_as_output()
    line.set_low()
    line.configure_as_input()
    line.wait_milliseconds(5)
    assert line.read_level() == Level.HIGH
    assert line.pending == 0
