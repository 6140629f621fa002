"""Arpeggiator that cycles through held notes on clock pulses."""

from __future__ import annotations

import enum
import random as _random
from typing import Callable, Optional

SENTINEL = 0xFF
EMPTY = 0xFE
UNLINKED = 0xFD


class ArpDirection(enum.Enum):
    FWD = "fwd"
    REV = "rev"


class _NoteChain:
    """Fixed set of note slots kept as a pitch-sorted ring plus input order.

    Slot 0 holds a sentinel that closes the ring; ``order`` lists the
    occupied slots in the order their notes arrived.
    """

    def __init__(self, capacity: int) -> None:
        if not 1 <= capacity < UNLINKED - 1:
            raise ValueError(f"capacity {capacity} outside 1..{UNLINKED - 2}")
        self.capacity = capacity
        self.clear()

    def clear(self) -> None:
        self.nums = [SENTINEL] + [EMPTY] * self.capacity
        self.vels = [0] * (self.capacity + 1)
        self.next = [0] + [UNLINKED] * self.capacity
        self.prev = [0] + [UNLINKED] * self.capacity
        self.order: list[int] = []
        self.bottom = 0
        self.current = 0
        self.played = 0

    def __len__(self) -> int:
        return len(self.order)

    def free_slot(self) -> Optional[int]:
        return next(
            (slot for slot in range(1, self.capacity + 1) if self.nums[slot] == EMPTY),
            None,
        )

    def find(self, num: int) -> Optional[int]:
        """Slot of the first note with pitch ``num``, or None."""
        for slot, slot_num in enumerate(self.nums):
            if slot_num == num:
                return slot or None
        return None

    def insert(self, slot: int, num: int, vel: int) -> None:
        idx = self.bottom
        while self.nums[idx] < num:
            idx = self.next[idx]
        if idx == self.bottom:
            self.bottom = slot
        self.nums[slot] = num
        self.vels[slot] = vel
        self.next[slot] = idx
        self.prev[slot] = self.prev[idx]
        self.next[self.prev[idx]] = slot
        self.prev[idx] = slot
        self.order.append(slot)

    def unlink(self, slot: int, as_played: bool) -> None:
        if slot == self.current:
            self.current = self.step_back(as_played)
        self.next[self.prev[slot]] = self.next[slot]
        self.prev[self.next[slot]] = self.prev[slot]
        if slot == self.bottom:
            self.bottom = self.next[slot]
        self.nums[slot] = EMPTY
        self.next[slot] = UNLINKED
        self.prev[slot] = UNLINKED
        self.order.remove(slot)
        if not self.order:
            self.played = 0
            self.current = 0

    def step_forward(self, as_played: bool) -> int:
        if as_played:
            self.played += 1
            if self.played >= len(self.order):
                self.played = 0
            return self.order[self.played]
        idx = self.next[self.current]
        return self.next[idx] if idx == 0 else idx

    def step_back(self, as_played: bool) -> int:
        if as_played:
            self.played = len(self.order) - 1 if self.played == 0 else self.played - 1
            return self.order[self.played]
        idx = self.prev[self.current]
        return self.prev[idx] if idx == 0 else idx

    def step(self, direction: ArpDirection, as_played: bool) -> int:
        if direction is ArpDirection.FWD:
            return self.step_forward(as_played)
        return self.step_back(as_played)


def _check_note(num: int) -> None:
    if not 0 <= num < EMPTY:
        raise ValueError(f"note number {num} outside 0..{EMPTY - 1}")


class Arp:
    """Plays held notes one per sixteenth note, sorted by pitch or as played.

    ``trigger`` is called on every clock pulse (``ppqn`` per quarter note).
    When more than ``note_count`` notes are held the oldest one is dropped.
    ``direction``, ``rand_chance`` and ``as_played`` may be set directly.
    """

    def __init__(
        self,
        note_count: int = 8,
        ppqn: int = 24,
        on_note_on: Optional[Callable[[int, int], None]] = None,
        on_note_off: Optional[Callable[[int], None]] = None,
        rng: Optional[_random.Random] = None,
    ) -> None:
        self.ppqn = ppqn
        self.on_note_on = on_note_on
        self.on_note_off = on_note_off
        self.direction = ArpDirection.FWD
        self.rand_chance = 0.0
        self.as_played = False
        self._rng = rng if rng is not None else _random.Random()
        self._pulses_per_step = ppqn // 4
        self._max_note_length = self._pulses_per_step
        self._note_length = ppqn // 12
        self._chain = _NoteChain(note_count)
        self._pulse_counter = self._pulses_per_step

    def note_on(self, num: int, vel: int) -> None:
        """Add a held note; the oldest is released when all slots are taken."""
        _check_note(num)
        slot = self._chain.free_slot()
        if slot is None:
            slot = self._chain.order[0]
            self._remove(slot)
        self._chain.insert(slot, num, vel)

    def note_off(self, num: int) -> None:
        """Release the first held note with pitch ``num``, if any."""
        _check_note(num)
        slot = self._chain.find(num)
        if slot is not None:
            self._remove(slot)

    def set_note_length(self, length: float) -> None:
        """Set the gate length as a fraction 0..1 of a sixteenth note."""
        self._note_length = int(self._max_note_length * length)

    def trigger(self) -> None:
        """Consume one clock pulse, releasing and starting notes as due."""
        if not self.has_note():
            return
        chain = self._chain
        if (
            self._note_length < self._pulses_per_step
            and self._pulse_counter == self._note_length
            and chain.current > 0
        ):
            self._emit_off(chain.nums[chain.current])

        self._pulse_counter += 1
        if self._pulse_counter < self._pulses_per_step:
            return
        self._pulse_counter = 0

        note_idx = chain.step(self.direction, self.as_played)

        if 0.05 < self.rand_chance < 0.95:
            rnd = self._rng.randint(0, 100) / 100.0
            if rnd <= self.rand_chance:
                note_idx = chain.order[self._rng.randint(0, len(chain) - 1)]

        chain.current = note_idx
        if self.on_note_on is not None:
            self.on_note_on(chain.nums[note_idx], chain.vels[note_idx])

    def has_note(self) -> bool:
        return len(self._chain) > 0

    def clear(self) -> None:
        """Forget all held notes without emitting note-offs."""
        self._chain.clear()
        self._pulse_counter = self._pulses_per_step

    def _remove(self, slot: int) -> None:
        self._emit_off(self._chain.nums[slot])
        self._chain.unlink(slot, self.as_played)

    def _emit_off(self, num: int) -> None:
        if self.on_note_off is not None:
            self.on_note_off(num)