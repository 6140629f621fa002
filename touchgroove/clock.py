"""Tempo clock that emits PPQN ticks and can follow an external clock."""

from __future__ import annotations

import math
from typing import Callable, Optional

BPM_MIN = 40.0
BPM_RANGE = 200.0
_CLOCK_OFF_OFFSET = 10

_U32 = 0xFFFFFFFF


def _u32(value: int) -> int:
    return value & _U32


def _i32(value: int) -> int:
    value &= _U32
    return value - 0x100000000 if value & 0x80000000 else value


def _div_trunc(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def fcomp(lhs: float, rhs: float, precision: int = 2) -> bool:
    """Compare two floats after quantising them to ``precision * 10`` steps per unit."""
    digits = precision * 10
    return _round_half_away(lhs * digits) == _round_half_away(rhs * digits)


class Clock:
    """Internal tempo clock with optional synchronisation to external pulses.

    ``tick`` is called once per audio block; ``on_tick`` is invoked once for
    every internal pulse (``ppqn`` pulses per quarter note).  When the tempo
    control is turned below the minimum BPM the clock follows rising edges
    passed to ``process`` instead, expecting one edge per sixteenth note.
    """

    def __init__(self, ppqn: int = 24, on_tick: Optional[Callable[[], None]] = None) -> None:
        self.ppqn = ppqn
        self.on_tick = on_tick
        self._is_running = False
        self._is_about_to_run = False
        self._tr_time = 0
        self._ticks_per_clock = ppqn // 4
        self._ticks = 0
        self._fticks = 0
        self._ticks_at_last_clock = 0
        self._tempo_ticks = 0
        self._hold = False
        self._resync = False
        self._manual_tempo = 120.0
        self._raw_manual_tempo = 120.0
        self._tempo_mks = 500000
        self._last_state = True

    def configure(self, sample_rate: float, buffer_size: float) -> None:
        """Set the interval between calls to ``tick`` from the audio settings."""
        interval = 1e6 * buffer_size / sample_rate
        self._tr_time = _u32(int(self.ppqn * interval))

    def tick(self) -> None:
        """Advance the internal timeline by one audio block."""
        if not self._is_running:
            return
        self._emit_ticks()

    def process(self, state: bool) -> None:
        """Feed the current level of the external clock input."""
        if state and not self._last_state:
            self._external_clock_tick()
        self._last_state = bool(state)

    def tempo(self) -> float:
        """Current tempo in beats per minute."""
        return 60000000.0 / self._tempo_mks

    def set_tempo(self, norm_value: float) -> None:
        """Set the tempo from a normalised control value in 0..1."""
        if fcomp(norm_value, self._raw_manual_tempo):
            return
        self._raw_manual_tempo = norm_value
        self._manual_tempo = (
            (BPM_RANGE - _CLOCK_OFF_OFFSET) * norm_value + BPM_MIN - _CLOCK_OFF_OFFSET
        )
        self._tempo_mks = _u32(int(60.0 * 1e6 / self._manual_tempo))
        if self._external_clock():
            if self._is_running:
                self._is_running = False
                self._is_about_to_run = True
            elif self._is_about_to_run:
                self._is_running = True
                self._is_about_to_run = False
            self._reset()

    def run(self) -> None:
        """Start playback, or schedule it for the next external edge."""
        if self._external_clock():
            self._is_about_to_run = True
        else:
            self._is_running = True

    def stop(self) -> None:
        self._is_running = False
        self._reset()

    def is_running(self) -> bool:
        return self._is_running

    def _external_clock(self) -> bool:
        return self._manual_tempo < BPM_MIN

    def _external_clock_tick(self) -> None:
        if not self._external_clock():
            return
        if not self._is_running and not self._is_about_to_run:
            return
        if self._is_about_to_run:
            self._is_about_to_run = False
            self._is_running = True
        else:
            self._resync = True
            self._hold = False
            self._emit_ticks()

    def _emit_ticks(self) -> None:
        if self._hold:
            nticks = (self._fticks + self._tr_time) // self._tempo_mks
            self._fticks = _u32(self._fticks + self._tr_time - nticks * self._tempo_mks)
            self._tempo_ticks = _u32(self._tempo_ticks + nticks)
            return

        if self._resync:
            self._fticks = 0
            nticks = _u32(self._ticks_per_clock - (self._ticks - self._ticks_at_last_clock))
            self._ticks_at_last_clock = _u32(self._ticks + nticks)
            product = _i32(
                _i32(self._ticks_per_clock - self._tempo_ticks) * _i32(self._tempo_mks)
            )
            correction = _div_trunc(product, self.ppqn)
            self._tempo_mks = _u32(self._tempo_mks - correction)
            self._tempo_ticks = 0
            self._resync = False
        else:
            nticks = (self._fticks + self._tr_time) // self._tempo_mks
            self._fticks = _u32(self._fticks + self._tr_time - nticks * self._tempo_mks)
            if self._external_clock():
                self._tempo_ticks = _u32(self._tempo_ticks + nticks)
                since_clock = _u32(self._ticks - self._ticks_at_last_clock)
                if since_clock + nticks >= self._ticks_per_clock:
                    nticks = _u32(self._ticks_per_clock - 1 - since_clock)
                    self._hold = True

        self._ticks = _u32(self._ticks + nticks)

        if self.on_tick is not None:
            for _ in range(nticks):
                self.on_tick()

    def _reset(self) -> None:
        self._fticks = 0
        self._ticks = 0
        self._ticks_at_last_clock = 0
        self._tempo_ticks = 0
        self._hold = False
        self._resync = False