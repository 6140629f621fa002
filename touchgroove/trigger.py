"""Sixteenth-note trigger with swing, driven by clock pulses."""

from __future__ import annotations

import math


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


class Trigger:
    """Fires on every sixteenth note, delaying the odd ones by the swing amount."""

    def __init__(self, ppqn: int = 24) -> None:
        self.ppqn = ppqn
        self._pulses_per_whole = ppqn * 4
        self._pulses_per_16th = ppqn // 4
        self._swing = 0
        self._iterator = 0
        self._next_tick = 0
        self._tick_count = 0
        self._is_odd = False

    def set_swing(self, frac_swing: float) -> None:
        """Set swing from 0..1, mapped onto 0..5 pulses (50%..70%)."""
        self._swing = _round_half_away(frac_swing * 5)

    def tick(self) -> bool:
        """Consume one clock pulse; return whether a trigger fires on it."""
        fired = False
        if self._iterator == self._next_tick:
            fired = True
            self._tick_count = (self._tick_count + 1) % 16
            self._is_odd = not self._is_odd
            self._next_tick = self._tick_count * self._pulses_per_16th
            if self._is_odd:
                self._next_tick += self._swing
        self._iterator = (self._iterator + 1) % self._pulses_per_whole
        return fired

    def reset(self) -> None:
        self._iterator = 0
        self._tick_count = 0
        self._next_tick = 0
        self._is_odd = False