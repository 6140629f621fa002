"""Square-law crossfade between two stereo signals."""

from __future__ import annotations


class XFade:
    """Crossfade with a square-law gain curve; stage 0 is all left, 1 is all right."""

    def __init__(self) -> None:
        self._lhs = 1.0
        self._rhs = 0.0

    def set_stage(self, value: float) -> None:
        sq = value * value
        self._lhs = 1.0 - sq
        self._rhs = 2.0 * value - sq

    def process(self, lhs0: float, lhs1: float, rhs0: float, rhs1: float) -> tuple[float, float]:
        """Mix two stereo frames and return the resulting frame."""
        return (
            lhs0 * self._lhs + rhs0 * self._rhs,
            lhs1 * self._lhs + rhs1 * self._rhs,
        )