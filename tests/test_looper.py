import pytest

from touchgroove.buffer import LoopBuffer
from touchgroove.looper import Looper, Window, fmap_exp, slope


def _constant_buffer(frames=500, left=1.0, right=-1.0):
    buf = LoopBuffer(1000, envelope_slope=1)
    buf.set_recording(True)
    for _ in range(frames):
        buf.write(left, right)
    return buf


def test_fmap_exp_endpoints_and_curve():
    assert fmap_exp(0.0, 0.0, 1.0) == 0.0
    assert fmap_exp(1.0, 2.0, 4.0) == 4.0
    assert fmap_exp(0.5, 0.0, 1.0) == pytest.approx(0.25)


def test_fmap_exp_clamps():
    assert fmap_exp(2.0, 0.0, 1.0) == 1.0


def test_slope_is_increasing_ramp():
    s = slope(7)
    assert len(s) == 7
    assert s[0] == 0.0
    assert s[-1] == 1.0
    assert all(a < b for a, b in zip(s, s[1:]))


def test_slope_rejects_single_point():
    with pytest.raises(ValueError):
        slope(1)


def test_window_envelope_and_lifetime():
    buf = _constant_buffer()
    w = Window(win_slope=4)
    w.activate(0.0, 1.0, 0)
    outs = []
    for i in range(8):
        assert w.is_active()
        assert w.is_half() == (i == 4)
        outs.append(w.process(buf))
    assert not w.is_active()
    expected = slope(4) + slope(4)[::-1]
    assert [o[0] for o in outs] == pytest.approx(expected)
    assert [o[1] for o in outs] == pytest.approx([-e for e in expected])
    assert w.play_head() == pytest.approx(8.0)


def test_window_reverse_wraps_play_head():
    buf = _constant_buffer()
    w = Window(win_slope=4)
    w.activate(0.0, -1.0, 0)
    w.process(buf)
    assert w.play_head() == pytest.approx(buf.length() - 1)


def test_window_deactivate():
    w = Window(win_slope=4)
    w.activate(0.0, 1.0, 0)
    w.deactivate()
    assert not w.is_active()


def _looper(speed=0.75, length=1.0, release=None):
    looper = Looper(_constant_buffer(), win_slope=4)
    looper.set_speed(speed)
    looper.set_loop(0.0, length)
    if release is not None:
        looper.set_release(release)
    return looper


def test_idle_looper_is_silent():
    looper = _looper()
    assert not looper.is_playing()
    assert looper.process() == (0.0, 0.0)


@pytest.mark.parametrize("speed", [0.75, 0.25])
def test_overlapping_windows_sum_to_unity(speed):
    looper = _looper(speed=speed)
    looper.set_gate_open(True)
    assert looper.is_playing()
    outs = [looper.process() for _ in range(1500)]
    assert [o[0] for o in outs[3:]] == pytest.approx([1.0] * (len(outs) - 3))
    assert [o[1] for o in outs[3:]] == pytest.approx([-1.0] * (len(outs) - 3))


def test_zero_speed_is_silent():
    looper = _looper(speed=0.5)
    looper.set_gate_open(True)
    outs = [looper.process() for _ in range(100)]
    assert looper.is_playing()
    assert all(o == (0.0, 0.0) for o in outs)


def test_one_shot_stops_at_loop_end():
    looper = _looper(length=0.1, release=0.0)
    looper.set_gate_open(True)
    outs = [looper.process() for _ in range(200)]
    assert not looper.is_playing()
    assert outs[-1] == (0.0, 0.0)


def test_loop_mode_keeps_playing_after_gate_closes():
    looper = _looper(release=1.0)
    looper.set_gate_open(True)
    looper.set_gate_open(False)
    outs = [looper.process() for _ in range(2000)]
    assert looper.is_playing()
    assert outs[-1][0] == pytest.approx(1.0)


def test_release_mode_fades_out_and_stops():
    looper = _looper(release=0.01)
    looper.set_gate_open(True)
    looper.set_gate_open(False)
    lefts = []
    for _ in range(50000):
        if not looper.is_playing():
            break
        lefts.append(looper.process()[0])
    assert not looper.is_playing()
    body = lefts[3:-1]
    assert all(a >= b for a, b in zip(body, body[1:]))
    assert lefts[-1] == 0.0


def test_retrigger_keeps_playing_with_full_volume():
    looper = _looper(release=0.5)
    looper.set_gate_open(True)
    for _ in range(50):
        looper.process()
    looper.set_gate_open(False)
    looper.set_gate_open(True)
    outs = [looper.process() for _ in range(400)]
    assert looper.is_playing()
    assert all(abs(left) <= 1.0 + 1e-9 for left, _ in outs)