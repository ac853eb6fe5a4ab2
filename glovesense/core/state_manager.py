"""
GloveSense State Management.
Keeps the recognized-position history that drives motion classification.
"""
from typing import Optional


class StateManager:
    def __init__(self):
        # --- POSITION HISTORY ---
        # current: result of the latest sample (None when nothing matched)
        # last: latest non-None position that was reported
        self.curr_position = None
        self.last_position = None

        # --- COUNTERS ---
        self.samples_seen = 0
        self.changes_seen = 0

    def is_new_position(self, position) -> bool:
        """Whether `position` is a recognized position that has not just been reported."""
        return (
            position is not None
            and position is not self.curr_position
            and position is not self.last_position
        )

    def update_position(self, position) -> bool:
        """
        Records the result of one sample. Returns True when it counts as a
        change of recognized position.
        """
        self.samples_seen += 1
        changed = self.is_new_position(position)
        if changed:
            self.last_position = position
            self.changes_seen += 1
        self.curr_position = position
        return changed

    def reset(self):
        self.curr_position = None
        self.last_position = None

    @property
    def current_name(self) -> Optional[str]:
        return self.curr_position.name if self.curr_position is not None else None
