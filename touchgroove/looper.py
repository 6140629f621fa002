"""Windowed loop player with crossfading grains over a shared buffer."""

from __future__ import annotations

import enum

from touchgroove.buffer import LoopBuffer


def fmap_exp(value: float, low: float, high: float) -> float:
    """Map a 0..1 value onto ``low..high`` along a square curve, clamped."""
    mapped = low + value * value * (high - low)
    return min(max(mapped, low), high)


def slope(length: int) -> list[float]:
    """Linear ramp of ``length`` points from 0 to 1."""
    if length < 2:
        raise ValueError("slope needs at least two points")
    return [i / (length - 1) for i in range(length)]


class Window:
    """A crossfade window of ``2 * win_slope`` frames reading from a buffer."""

    def __init__(self, win_slope: int = 192) -> None:
        self._half = win_slope
        self._size = 2 * win_slope
        self._slope = slope(win_slope)
        self._play_head = 0.0
        self._delta = 0.0
        self._loop_start = 0
        self._iterator = 0
        self._is_active = False

    def activate(self, start: float, delta: float, loop_start: int) -> None:
        self._play_head = start
        self._delta = delta
        self._loop_start = loop_start
        self._iterator = 0
        self._is_active = True

    def is_active(self) -> bool:
        return self._is_active

    def deactivate(self) -> None:
        self._is_active = False

    def is_half(self) -> bool:
        return self._iterator == self._half

    def play_head(self) -> float:
        return self._play_head

    def process(self, buffer: LoopBuffer) -> tuple[float, float]:
        """Return the next enveloped, interpolated frame."""
        int_ph = int(self._play_head)
        frac_ph = self._play_head - int_ph
        next_ph = int_ph + 1 if self._delta > 0 else int_ph - 1

        a0, a1 = buffer.read(int_ph + self._loop_start)
        b0, b1 = buffer.read(next_ph + self._loop_start)

        att = self._attenuation()
        out0 = (a0 + frac_ph * (b0 - a0)) * att
        out1 = (a1 + frac_ph * (b1 - a1)) * att

        self._play_head += self._delta
        if self._play_head < 0:
            self._play_head += buffer.length()
        self._iterator += 1
        if self._iterator == self._size:
            self._is_active = False
        return out0, out1

    def _attenuation(self) -> float:
        idx = self._iterator if self._iterator < self._half else self._size - self._iterator - 1
        return self._slope[idx]


class _Mode(enum.Enum):
    ONE_SHOT = "one_shot"
    LOOP = "loop"
    RELEASE = "release"


class _Direction(enum.Enum):
    NONE = "none"
    FWD = "fwd"
    REV = "rev"


class Looper:
    """Plays a region of a buffer as a loop of overlapping windows.

    Playback starts when the gate opens.  Release sets what happens when it
    closes: stop at the loop end (one shot), keep looping, or fade out.
    """

    def __init__(self, buffer: LoopBuffer, win_slope: int = 192) -> None:
        self.buffer = buffer
        self.win_slope = win_slope
        self._slope_kof = 1.0 / win_slope
        self._wins = [Window(win_slope) for _ in range(3)]
        self._delta = 1.0
        self._volume = 1.0
        self._release_kof = 0.0
        self._loop_start = 0
        self._loop_start_offset = 0
        self._win_per_loop = 0
        self._win_current = 0
        self._is_playing = False
        self._is_gate_open = False
        self._direction = _Direction.NONE
        self._is_retriggering = False
        self._mode = _Mode.LOOP

    def set_gate_open(self, gate_open: bool) -> None:
        """Open or close the gate; opening starts or retriggers playback."""
        if gate_open and not self._is_gate_open:
            if not self._is_playing:
                self._activate(0.0)
                self._win_current = 0
                self._is_playing = True
            else:
                self._is_retriggering = True
            self._volume = 1.0
        self._is_gate_open = gate_open

    def is_playing(self) -> bool:
        return self._is_playing

    def set_release(self, value: float) -> None:
        """0 is one shot, 1 loops forever, anything between fades out on release."""
        if value <= 0.002:
            self._mode = _Mode.ONE_SHOT
        elif value >= 0.998:
            self._mode = _Mode.LOOP
        else:
            self._mode = _Mode.RELEASE
            v = fmap_exp(value, 0.0, 1.0)
            self._release_kof = (1.0 - v) * 0.000139 * (1 - 0.9 * value)

    def set_speed(self, value: float) -> None:
        """Set speed and direction from a 0..1 control centred on a stop."""
        if 0.23 < value < 0.27:
            self._delta = 1.0
            self._direction = _Direction.REV
        elif 0.48 < value < 0.52:
            self._delta = 0.0
            self._direction = _Direction.NONE
        elif 0.73 < value < 0.77:
            self._delta = 1.0
            self._direction = _Direction.FWD
        elif value < 0.5:
            self._delta = (0.5 - value) * 4.0
            self._direction = _Direction.REV
        else:
            self._delta = (value - 0.5) * 4.0
            self._direction = _Direction.FWD

    def set_loop(self, loop_start: float, loop_length: float) -> None:
        """Set loop start and length as fractions of the recorded region.

        The length is quantised to half windows and shortened by speed; at
        zero speed the length is left unchanged.
        """
        length = self.buffer.length()
        self._loop_start = int(loop_start * length)
        if self._delta == 0:
            return
        new_length = int(loop_length * length / self._delta)
        self._win_per_loop = max(int(new_length * self._slope_kof), 2)

    def process(self) -> tuple[float, float]:
        """Return the next stereo frame."""
        if not self._is_playing or self._direction is _Direction.NONE:
            return 0.0, 0.0

        wrap = False
        for w in self._wins:
            if not w.is_half():
                continue
            if self._win_per_loop >= 2 and self._win_current >= self._win_per_loop - 2:
                if self._mode is _Mode.ONE_SHOT:
                    self._stop()
                    continue
                wrap = True

            start = w.play_head()
            if wrap or self._is_retriggering:
                if self._direction is _Direction.REV:
                    start = float(self._win_per_loop * self.win_slope - 1)
                else:
                    start = 0.0
            if self._activate(start):
                restart = wrap or self._is_retriggering
                self._win_current = 0 if restart else self._win_current + 1
                self._is_retriggering = False
                break

        if not self._is_gate_open:
            if self._mode is _Mode.RELEASE:
                self._volume -= self._release_kof * self._volume
            if self._volume <= 0.02:
                self._stop()
                return 0.0, 0.0

        out0 = 0.0
        out1 = 0.0
        for w in self._wins:
            if not w.is_active():
                continue
            w0, w1 = w.process(self.buffer)
            out0 += w0 * self._volume
            out1 += w1 * self._volume
        return out0, out1

    def _activate(self, play_head: float) -> bool:
        for w in self._wins:
            if not w.is_active():
                delta = -self._delta if self._direction is _Direction.REV else self._delta
                w.activate(play_head, delta, self._loop_start + self._loop_start_offset)
                return True
        return False

    def _stop(self) -> None:
        self._is_playing = False
        for w in self._wins:
            w.deactivate()