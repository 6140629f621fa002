import pytest

from touchgroove.clock import Clock, fcomp


class _Counter:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1


def _make_clock(ppqn=24):
    counter = _Counter()
    clock = Clock(ppqn, counter)
    clock.configure(48000, 4)
    return clock, counter


def _ticks(clock, n):
    for _ in range(n):
        clock.tick()


def test_fcomp_equal_values():
    assert fcomp(0.5, 0.5, 2) is True


def test_fcomp_close_values_collapse():
    assert fcomp(0.5, 0.51, 2) is True


def test_fcomp_distinct_values():
    assert fcomp(0.5, 0.6, 2) is False


def test_default_tempo_is_120():
    clock, _ = _make_clock()
    assert clock.tempo() == pytest.approx(120.0)


def test_not_running_emits_nothing():
    clock, counter = _make_clock()
    _ticks(clock, 5000)
    assert counter.count == 0
    assert clock.is_running() is False


def test_run_emits_ticks_and_stop_halts():
    clock, counter = _make_clock()
    clock.run()
    assert clock.is_running() is True
    _ticks(clock, 5000)
    emitted = counter.count
    assert emitted > 0
    clock.stop()
    assert clock.is_running() is False
    _ticks(clock, 5000)
    assert counter.count == emitted


def test_tick_count_grows_with_calls():
    clock, counter = _make_clock()
    clock.run()
    _ticks(clock, 2000)
    first = counter.count
    _ticks(clock, 2000)
    assert counter.count >= 2 * first - 1
    assert counter.count <= 2 * first + 1


def test_higher_tempo_emits_more_ticks():
    slow, slow_count = _make_clock()
    slow.set_tempo(0.2)
    fast, fast_count = _make_clock()
    fast.set_tempo(0.9)
    slow.run()
    fast.run()
    _ticks(slow, 10000)
    _ticks(fast, 10000)
    assert fast.tempo() > slow.tempo()
    assert fast_count.count > slow_count.count


def test_set_tempo_same_value_is_ignored():
    clock, _ = _make_clock()
    clock.set_tempo(0.5)
    tempo = clock.tempo()
    clock.set_tempo(0.51)
    assert clock.tempo() == tempo


def test_tempo_increases_with_control():
    clock, _ = _make_clock()
    values = []
    for norm in (0.1, 0.3, 0.6, 1.0):
        clock.set_tempo(norm)
        values.append(clock.tempo())
    assert values == sorted(values)


def test_internal_mode_ignores_external_edges():
    clock, counter = _make_clock()
    clock.process(False)
    clock.process(True)
    assert clock.is_running() is False
    assert counter.count == 0


def test_external_run_waits_for_rising_edge():
    clock, _ = _make_clock()
    clock.set_tempo(0.0)
    clock.run()
    assert clock.is_running() is False
    # initial level is high, so a high level is not an edge
    clock.process(True)
    assert clock.is_running() is False
    clock.process(False)
    clock.process(True)
    assert clock.is_running() is True


def test_external_sync_emits_whole_sixteenths_per_edge():
    ppqn = 24
    clock, counter = _make_clock(ppqn)
    clock.set_tempo(0.0)
    clock.run()
    clock.process(False)
    clock.process(True)
    per_clock = ppqn // 4
    for edge in range(1, 4):
        _ticks(clock, 20000)
        assert counter.count < edge * per_clock
        clock.process(False)
        clock.process(True)
        assert counter.count == edge * per_clock


def test_external_sync_edge_without_internal_ticks_fills_gap():
    ppqn = 24
    clock, counter = _make_clock(ppqn)
    clock.set_tempo(0.0)
    clock.run()
    clock.process(False)
    clock.process(True)
    clock.process(False)
    clock.process(True)
    assert counter.count == ppqn // 4


def test_stop_in_external_mode_ignores_edges():
    clock, counter = _make_clock()
    clock.set_tempo(0.0)
    clock.stop()
    clock.process(False)
    clock.process(True)
    assert clock.is_running() is False
    assert counter.count == 0


def test_without_callback_ticks_run_silently():
    clock = Clock(24)
    clock.configure(48000, 4)
    clock.run()
    _ticks(clock, 1000)
    assert clock.is_running() is True