"""
GloveSense Motion Records.
An ordered sequence of positions, plus the progress made through it.
"""
from typing import Optional, Sequence

from glovesense.motions.sequence import SequenceItem
from glovesense.positions.record import PositionRecord

IDLE = -1


class MotionRecord:
    """
    A gesture: a named sequence of steps with a state machine.

    `current_index` is the last matched step, IDLE (-1) when nothing has
    been matched. Matching the final step completes the motion and returns
    the machine to IDLE, so it can start over immediately.
    """

    def __init__(self, name: str, sequence: Sequence[SequenceItem]):
        name = (name or "").strip().upper()
        if not name:
            raise ValueError("A motion needs a name.")
        if not sequence:
            raise ValueError(f"Motion {name} needs at least one step.")
        if sequence[-1].has_transition:
            raise ValueError("The last item of a sequence cannot have the transition modifier (~).")

        self.name = name
        self.sequence = tuple(sequence)
        self.current_index = IDLE

    def __len__(self):
        return len(self.sequence)

    @property
    def current_item(self) -> Optional[SequenceItem]:
        return None if self.current_index == IDLE else self.sequence[self.current_index]

    @property
    def next_item(self) -> SequenceItem:
        return self.sequence[self.current_index + 1]

    @property
    def is_idle(self) -> bool:
        return self.current_index == IDLE

    def reset(self):
        self.current_index = IDLE

    def on_position(self, observed: Optional[PositionRecord]) -> bool:
        """
        Advances the state machine on a change of recognized position.
        Returns True only when this call completes the motion.
        """
        if observed is None:
            return False

        if self.next_item.matches_item(observed):
            self.current_index += 1
            return self._check_end()

        if self.current_index == IDLE:
            return False

        if self.current_item.cancels_sequence(observed):
            self.current_index = IDLE
        return False

    def _check_end(self) -> bool:
        if self.current_index == len(self.sequence) - 1:
            self.current_index = IDLE
            return True
        return False

    def __repr__(self):
        steps = " ".join(item.token for item in self.sequence)
        return f"MotionRecord({self.name}= {steps}, current_index={self.current_index})"
