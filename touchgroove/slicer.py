"""Slice player that plays enveloped grains from a recorded buffer."""

from __future__ import annotations

import enum

from touchgroove.buffer import RampBuffer

MAX_LENGTH = 72000  # 1.5 s at 48 kHz
MIN_LENGTH = 960  # 20 ms at 48 kHz
LENGTH_RANGE = MAX_LENGTH - MIN_LENGTH
FADE_IN = MIN_LENGTH // 2
ASD_FADE_OUT = MIN_LENGTH // 2


class SliceShape(enum.Enum):
    """Envelope of a slice."""

    ASD = "asd"  # short attack, long sustain, short decay
    AD = "ad"  # short attack, long decay


class _Stage(enum.Enum):
    ATTACK = "attack"
    SUSTAIN = "sustain"
    DECAY = "decay"


class Slice:
    """One enveloped playback voice reading from a buffer."""

    def __init__(self, buffer: RampBuffer) -> None:
        self.buffer = buffer
        self._active = False
        self._play_head = 0.0
        self._speed = 0.0
        self._decay_kof = 0.0
        self._decay_start = 0
        self._position = 0
        self._length = 0
        self._iterator = 0
        self._stage = _Stage.ATTACK

    def is_active(self) -> bool:
        return self._active

    def activate(self, position: int, length: int, shape: SliceShape, speed: float) -> None:
        """Start playing ``length`` frames from ``position`` at ``speed``."""
        if shape is SliceShape.ASD:
            decay_start = length - ASD_FADE_OUT
        else:
            decay_start = FADE_IN + 1
        if decay_start < 0 or length <= decay_start:
            raise ValueError(f"slice length {length} too short for shape {shape.name}")
        self._play_head = 0.0 if speed > 0 else float(length - 1)
        self._iterator = 0
        self._speed = speed
        self._position = position
        self._length = length
        self._decay_start = decay_start
        self._decay_kof = 1.0 / (length - decay_start)
        self._stage = _Stage.ATTACK
        self._active = True

    def process(self) -> tuple[float, float]:
        """Return the next stereo frame; the slice deactivates once it is done."""
        if self._iterator == self._length:
            self._active = False
            return 0.0, 0.0

        int_ph = int(self._play_head)
        frac_ph = self._play_head - int_ph
        next_ph = int_ph - 1 if self._speed < 0 else int_ph + 1

        int_ph += self._position
        next_ph += self._position
        if int_ph < 0:
            int_ph += self.buffer.length()
        if next_ph < 0:
            next_ph += self.buffer.length()

        a0, a1 = self.buffer.read(int_ph)
        b0, b1 = self.buffer.read(next_ph)

        att = self._attenuation()
        out0 = (a0 + frac_ph * (b0 - a0)) * att
        out1 = (a1 + frac_ph * (b1 - a1)) * att

        self._iterator += 1
        self._play_head += self._speed
        return out0, out1

    def _attenuation(self) -> float:
        if self._stage is _Stage.ATTACK:
            if self._iterator == FADE_IN:
                self._stage = _Stage.SUSTAIN
            return self._iterator / FADE_IN
        if self._stage is _Stage.SUSTAIN:
            if self._iterator == self._decay_start:
                self._stage = _Stage.DECAY
            return 1.0
        return (self._length - self._iterator - 1) * self._decay_kof


class Generator:
    """Plays slices from ``positions`` start points, two voices per position."""

    def __init__(self, positions: int, buffer: RampBuffer) -> None:
        if positions < 1:
            raise ValueError("at least one position is required")
        self.buffer = buffer
        self._positions = [0] * positions
        self._slices = [Slice(buffer) for _ in range(2 * positions)]
        self._slice_length = MAX_LENGTH // 2
        self._speed = 1.0
        self._shape = SliceShape.ASD
        self._reverse = False

    def set_position(self, i: int, value: float) -> None:
        """Set start point ``i`` from a 0..1 control."""
        self._positions[i] = int(LENGTH_RANGE * value + MIN_LENGTH)

    def set_speed(self, speed: float) -> None:
        """Set playback speed from a 0..1 control (0.5 is normal speed)."""
        self._speed = 2.0 * speed

    def set_reverse(self, reverse: bool) -> None:
        self._reverse = reverse

    def set_shape(self, shape: float) -> None:
        """Choose slice length and envelope from a 0..1 control."""
        if shape > 0.5:
            self._slice_length = int(MIN_LENGTH + 2.0 * shape * LENGTH_RANGE - LENGTH_RANGE)
            self._shape = SliceShape.ASD
        else:
            self._slice_length = int(MAX_LENGTH - 2.0 * shape * LENGTH_RANGE)
            self._shape = SliceShape.AD

    def make_slices(self) -> list[int]:
        """Spread the start points evenly over the recorded region."""
        step = self.buffer.length() // len(self._positions)
        self._positions = [i * step for i in range(len(self._positions))]
        return list(self._positions)

    def activate(self, position_index: int) -> None:
        """Start a slice at the given start point on the first free voice."""
        for s in self._slices:
            if not s.is_active():
                speed = -self._speed if self._reverse else self._speed
                s.activate(self._positions[position_index], self._slice_length, self._shape, speed)
                return

    def process(self) -> tuple[float, float]:
        """Sum the next frame of every active slice."""
        out0 = 0.0
        out1 = 0.0
        for s in self._slices:
            if s.is_active():
                s0, s1 = s.process()
                out0 += s0
                out1 += s1
        return out0, out1