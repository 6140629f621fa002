"""Arpeggiated trigger that steps through held triggers on every tick."""

from __future__ import annotations

from typing import Callable, Optional

from touchgroove.arp import ArpDirection, _check_note, _NoteChain


class TrigArp:
    """Cycles through held triggers, one per ``tick``, by pitch or as played.

    When more than ``trigger_count`` triggers are held the oldest is dropped.
    ``direction`` and ``as_played`` may be set directly.
    """

    def __init__(
        self,
        trigger_count: int = 8,
        on_trigger: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.on_trigger = on_trigger
        self.direction = ArpDirection.FWD
        self.as_played = False
        self._chain = _NoteChain(trigger_count)

    def set_trigger(self, num: int, vel: int) -> None:
        """Hold a trigger; the oldest is dropped when all slots are taken."""
        _check_note(num)
        slot = self._chain.free_slot()
        if slot is None:
            slot = self._chain.order[0]
            self._chain.unlink(slot, self.as_played)
        self._chain.insert(slot, num, vel)

    def remove_trigger(self, num: int) -> None:
        """Drop the first held trigger numbered ``num``, if any."""
        _check_note(num)
        slot = self._chain.find(num)
        if slot is not None:
            self._chain.unlink(slot, self.as_played)

    def tick(self) -> None:
        """Fire the next held trigger."""
        chain = self._chain
        if not chain:
            return
        idx = chain.step(self.direction, self.as_played)
        chain.current = idx
        if self.on_trigger is not None:
            self.on_trigger(chain.nums[idx], chain.vels[idx])

    def reset(self) -> None:
        self._chain.clear()