"""Stereo recording buffers with fade-in and fade-out of the recorded region."""

from __future__ import annotations

import enum


class RampBuffer:
    """Stereo buffer recorded through a linear level ramp.

    Switching recording on or off moves the ramp up or down, giving a fade
    over ``env_slope`` frames at both ends of the recorded region.
    ``level`` scales the recording level.
    """

    def __init__(self, length: int, env_slope: int = 192) -> None:
        if length <= 0:
            raise ValueError("buffer length must be positive")
        if env_slope < 2:
            raise ValueError("envelope slope must be at least 2")
        self._channels = ([0.0] * length, [0.0] * length)
        self._buffer_length = length
        self._env_slope = env_slope
        self.level = 1.0
        self._max_loop_length = 0
        self._rec_head = 0
        self._rec_env_pos = 0
        self._rec_env_pos_inc = 0
        self._is_full = False

    def length(self) -> int:
        """Length of the recorded region in frames."""
        return self._max_loop_length

    def set_recording(self, is_rec_on: bool) -> None:
        if self._rec_env_pos_inc <= 0 and is_rec_on:
            self._rec_head = 0
        self._rec_env_pos_inc = 1 if is_rec_on else -1

    def is_recording(self) -> bool:
        return self._rec_env_pos > 0

    def read(self, frame: int) -> tuple[float, float]:
        """Frame at ``frame`` modulo the recorded length."""
        if self._max_loop_length == 0:
            raise ValueError("nothing has been recorded")
        frame %= self._max_loop_length
        return self._channels[0][frame], self._channels[1][frame]

    def write(self, in0: float, in1: float) -> None:
        """Offer one input frame; it is mixed in while the ramp is above zero."""
        inc = self._rec_env_pos_inc
        if (inc > 0 and self._rec_env_pos < self._env_slope) or (
            inc < 0 and self._rec_env_pos > 0
        ):
            self._rec_env_pos += inc
        if not self.is_recording():
            return
        att = (self._rec_env_pos - 1) / (self._env_slope - 1) * self.level
        head = self._rec_head
        left, right = self._channels
        left[head] = in0 * att + left[head] * (1.0 - att)
        right[head] = in1 * att + right[head] * (1.0 - att)
        self._rec_head += 1
        if self._rec_head == self._buffer_length:
            self._is_full = True
            self._rec_head = 0
        else:
            self._max_loop_length = self._buffer_length if self._is_full else self._rec_head


class _State(enum.Enum):
    IDLE = "idle"
    FADEIN = "fadein"
    FADEOUT = "fadeout"
    SUSTAIN = "sustain"


class LoopBuffer:
    """Stereo loop buffer that overdubs with a fade at each end of a take."""

    def __init__(self, length: int, envelope_slope: int = 192) -> None:
        if length <= 0:
            raise ValueError("buffer length must be positive")
        if envelope_slope < 1:
            raise ValueError("envelope slope must be positive")
        self._channels = ([0.0] * length, [0.0] * length)
        self._buffer_length = length
        self._envelope_slope = envelope_slope
        self._max_loop_length = 0
        self._rec_head = 0
        self._envelope_position = 0
        self._state = _State.IDLE
        self._is_full = False

    def length(self) -> int:
        """Length of the recorded region in frames."""
        return self._max_loop_length

    def set_recording(self, is_rec_on: bool) -> None:
        if self._state is _State.IDLE:
            if is_rec_on:
                self._state = _State.FADEIN
        elif not is_rec_on:
            self._state = _State.FADEOUT

    def is_recording(self) -> bool:
        return self._state is not _State.IDLE

    def read(self, frame: int) -> tuple[float, float]:
        """Frame at ``frame`` modulo the recorded length."""
        if self._max_loop_length == 0:
            raise ValueError("nothing has been recorded")
        frame %= self._max_loop_length
        return self._channels[0][frame], self._channels[1][frame]

    def write(self, in0: float, in1: float) -> None:
        """Mix one input frame in at the record head while recording."""
        if self._state is _State.IDLE:
            return
        if self._state is _State.FADEIN:
            self._envelope_position += 1
            if self._envelope_position >= self._envelope_slope:
                self._state = _State.SUSTAIN
        elif self._state is _State.FADEOUT:
            if self._envelope_position > 0:
                self._envelope_position -= 1
            if self._envelope_position == 0:
                self._state = _State.IDLE

        att = self._envelope_position / self._envelope_slope
        inv = 1.0 - att
        head = self._rec_head
        left, right = self._channels
        left[head] = in0 * att + left[head] * inv
        right[head] = in1 * att + right[head] * inv

        self._rec_head += 1
        if self._rec_head == self._buffer_length:
            self._is_full = True
            self._rec_head = 0
        self._max_loop_length = self._buffer_length if self._is_full else self._rec_head