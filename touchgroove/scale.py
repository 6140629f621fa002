"""Note scales mapping pad indices to frequencies."""

from __future__ import annotations

import random as _random
from typing import Optional

_ARP_SCALES = (
    (146.83, 164.81, 185.00, 196.00, 246.94, 293.66, 329.63, 369.99),  # D Pygmy
    (164.81, 220.00, 233.08, 277.18, 293.66, 329.63, 349.23, 392.00),  # E Hijaz
    (146.83, 164.81, 174.61, 220.00, 246.94, 293.66, 329.63, 349.23),  # D dorian pentatonic
)

_HANDPAN_SCALES = (
    (130.81, 196.00, 233.08, 261.63, 293.66, 311.13, 349.23, 392.00),  # Amara
    (130.81, 164.81, 174.61, 196.00, 220.00, 261.63, 329.63, 349.23),  # Oxalis
    (130.81, 146.83, 155.56, 196.00, 233.08, 261.63, 293.66, 311.13),  # Pygmy
)

_TRANSPOSITIONS = (
    0.5,
    0.52973154717962,
    0.56123102415466,
    0.594603557501335,
    0.629960524947413,
    0.667419927084995,
    0.707106781186527,
    0.749153538438323,
    0.793700525984085,
    0.840896415253703,
    0.890898718140331,
    0.943874312681689,
    1.0,
    1.0594630943593,
    1.12246204830938,
    1.18920711500273,
    1.25992104989489,
    1.33483985417006,
    1.41421356237313,
    1.49830707687673,
    1.58740105196826,
    1.6817928305075,
    1.78179743628076,
    1.88774862536348,
    2.0,
)

_DEFAULT_TRANSPOSITION = 12


class Scale:
    """Three eight-note scales; ``scale_index`` selects the active one."""

    def __init__(self) -> None:
        self.scale_index = 0

    def freq_at(self, idx: int) -> float:
        return _ARP_SCALES[self.scale_index][idx]


class TransposingScale:
    """Handpan-style scales played an octave down, with semitone transposition factors."""

    def __init__(self, rng: Optional[_random.Random] = None) -> None:
        self._rng = rng if rng is not None else _random.Random()
        self._scale_index = 0
        self._trans_index = _DEFAULT_TRANSPOSITION
        self._scale: list[float] = []
        self._prepare_scale()

    def scales_count(self) -> int:
        return len(_HANDPAN_SCALES)

    def set_scale_index(self, index: int) -> None:
        if not 0 <= index < len(_HANDPAN_SCALES):
            raise IndexError(f"scale index {index} out of range")
        if index != self._scale_index:
            self._scale_index = index
            self._prepare_scale()

    def trans_mult(self, value: float) -> float:
        """Frequency multiplier for a 0..1 control spanning two octaves."""
        return _TRANSPOSITIONS[int(value * (len(_TRANSPOSITIONS) - 1))]

    def freq_at(self, idx: int) -> float:
        return self._scale[idx] * 0.5

    def random(self) -> float:
        """Frequency of a randomly chosen note of the current scale."""
        return self.freq_at(self._rng.randint(0, len(self._scale) - 1))

    def _prepare_scale(self) -> None:
        transposition = _TRANSPOSITIONS[self._trans_index]
        self._scale = [f * transposition for f in _HANDPAN_SCALES[self._scale_index]]