"""Smoothed analogue knob reading and three-position switch decoding."""

from __future__ import annotations

import math


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


class AKnob:
    """Normalises raw ADC readings, smooths them and quantises the result."""

    def __init__(
        self,
        bits: int = 10,
        coeff: float = 0.2,
        quant: float = 200.0,
        flip: bool = False,
        invert: bool = False,
    ) -> None:
        self.coeff = coeff
        self.quant = quant
        self.flip = flip
        self.invert = invert
        self._frac = 1.0 / (2.0**bits - 1.0)
        self._val = 0.0

    def process(self, raw: int) -> float:
        """Feed a raw reading and return the smoothed, quantised value."""
        t = raw * self._frac
        if self.flip:
            t = 1.0 - t
        if self.invert:
            t = -t
        self._val += self.coeff * (t - self._val)
        return _round_half_away(self._val * self.quant) / self.quant


def on_off_on(level_a: bool, level_b: bool) -> int:
    """Decode an on-off-on switch wired with pull-ups into a position 0, 1 or 2."""
    return int(bool(level_a)) + int(not level_b)