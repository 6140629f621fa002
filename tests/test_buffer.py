import pytest

from touchgroove.buffer import LoopBuffer, RampBuffer


# ---- RampBuffer -------------------------------------------------------------


def test_ramp_empty_buffer():
    buf = RampBuffer(8, env_slope=4)
    assert buf.length() == 0
    assert not buf.is_recording()
    with pytest.raises(ValueError):
        buf.read(0)


def test_ramp_invalid_arguments():
    with pytest.raises(ValueError):
        RampBuffer(0)
    with pytest.raises(ValueError):
        RampBuffer(8, env_slope=1)


def test_ramp_fade_in_rises_to_full_level():
    buf = RampBuffer(16, env_slope=4)
    buf.set_recording(True)
    for _ in range(6):
        buf.write(1.0, -1.0)
    assert buf.is_recording()
    assert buf.length() == 6
    lefts = [buf.read(i)[0] for i in range(6)]
    assert lefts[0] == 0.0
    assert lefts == sorted(lefts)
    assert lefts[-1] == pytest.approx(1.0)
    assert buf.read(5)[1] == pytest.approx(-1.0)


def test_ramp_fade_out_stops_recording():
    buf = RampBuffer(16, env_slope=3)
    buf.set_recording(True)
    for _ in range(5):
        buf.write(1.0, 1.0)
    buf.set_recording(False)
    for _ in range(3):
        buf.write(1.0, 1.0)
    assert not buf.is_recording()
    recorded = buf.length()
    buf.write(1.0, 1.0)
    assert buf.length() == recorded


def test_ramp_level_scales_recording():
    buf = RampBuffer(16, env_slope=2)
    buf.level = 0.5
    buf.set_recording(True)
    for _ in range(3):
        buf.write(1.0, 1.0)
    assert buf.read(2)[0] == pytest.approx(0.5)


def test_ramp_wraps_and_becomes_full():
    buf = RampBuffer(4, env_slope=2)
    buf.set_recording(True)
    for _ in range(6):
        buf.write(1.0, 1.0)
    assert buf.length() == 4
    assert buf.read(5) == buf.read(1)


def test_ramp_restart_resets_head():
    buf = RampBuffer(16, env_slope=2)
    buf.set_recording(True)
    for _ in range(5):
        buf.write(1.0, 1.0)
    buf.set_recording(False)
    for _ in range(3):
        buf.write(0.0, 0.0)
    buf.set_recording(True)
    buf.write(0.0, 0.0)
    buf.write(0.0, 0.0)
    assert buf.length() == 2


# ---- LoopBuffer -------------------------------------------------------------


def test_loop_empty_buffer():
    buf = LoopBuffer(8, envelope_slope=4)
    assert buf.length() == 0
    assert not buf.is_recording()
    with pytest.raises(ValueError):
        buf.read(0)


def test_loop_write_ignored_when_idle():
    buf = LoopBuffer(8, envelope_slope=4)
    buf.write(1.0, 1.0)
    assert buf.length() == 0


def test_loop_fade_in_then_sustain():
    buf = LoopBuffer(16, envelope_slope=4)
    buf.set_recording(True)
    for _ in range(6):
        buf.write(1.0, 2.0)
    lefts = [buf.read(i)[0] for i in range(6)]
    assert lefts[0] == pytest.approx(0.25)
    assert lefts == sorted(lefts)
    assert lefts[3:] == [pytest.approx(1.0)] * 3
    assert buf.read(5)[1] == pytest.approx(2.0)


def test_loop_fade_out_returns_to_idle():
    buf = LoopBuffer(32, envelope_slope=4)
    buf.set_recording(True)
    for _ in range(5):
        buf.write(1.0, 1.0)
    buf.set_recording(False)
    assert buf.is_recording()
    for _ in range(4):
        buf.write(1.0, 1.0)
    assert not buf.is_recording()
    tail = [buf.read(i)[0] for i in range(5, 9)]
    assert tail == sorted(tail, reverse=True)
    assert tail[-1] == 0.0
    assert buf.length() == 9


def test_loop_overdub_mixes_with_existing():
    buf = LoopBuffer(2, envelope_slope=1)
    buf.set_recording(True)
    buf.write(1.0, 1.0)
    buf.write(1.0, 1.0)
    assert buf.length() == 2
    buf.write(0.0, 0.0)
    assert buf.read(0) == (0.0, 0.0)
    assert buf.length() == 2


def test_loop_invalid_arguments():
    with pytest.raises(ValueError):
        LoopBuffer(0)
    with pytest.raises(ValueError):
        LoopBuffer(4, envelope_slope=0)