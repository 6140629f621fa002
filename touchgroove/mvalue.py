"""Value that only follows a shared control after it has been moved."""

from __future__ import annotations

THRESHOLD = 0.02


class MValue:
    """A stored parameter picked up by a shared knob.

    When the value becomes active the current knob position is remembered;
    the stored value only starts following the knob once the knob has moved
    at least ``THRESHOLD`` away from that position.  With ``require_active``
    an inactive value ignores the knob entirely.
    """

    def __init__(self, value: float = 0.0, require_active: bool = False) -> None:
        self.require_active = require_active
        self._is_active = False
        self._is_changing = False
        self._init_value = 0.0
        self._value = value

    def set_active(self, active: bool, value: float) -> None:
        """Attach or detach the knob, given its current position."""
        if active and not self._is_active:
            self._init_value = value
        elif self._is_active and not active:
            self._is_changing = False
        self._is_active = active

    def process(self, value: float) -> float:
        """Feed the knob position and return the stored value."""
        if self.require_active and not self._is_active:
            return self._value
        if not self._is_changing and abs(value - self._init_value) < THRESHOLD:
            return self._value
        self._is_changing = True
        self._value = value
        return self._value

    def is_changing(self) -> bool:
        return self._is_changing

    def value(self) -> float:
        return self._value