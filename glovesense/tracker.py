"""
GloveSense Tracker (The Classifier Loop Body).
==============================================

This module maps raw pose samples to recognized positions and motions.
The host owns the timer/polling loop and the device; for every sample it
calls `HandTracker.update()` (or `poll()` with a PoseSource), which:

1. Validates the sample (exactly 22 values).
2. Finds the matching PositionRecord, if any.
3. On a *change* of recognized position, notifies position listeners
   (standalone positions only) and advances every motion.
4. Notifies motion listeners for each completed motion.

Classification is synchronous. A lock keeps a sample from being classified
while a new position is being recorded.
"""
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from glovesense.core.interfaces import PoseSource
from glovesense.core.state_manager import StateManager
from glovesense.core.types import HandData
from glovesense.motions.catalog import MotionCatalog
from glovesense.motions.record import MotionRecord
from glovesense.positions.catalog import PositionCatalog
from glovesense.positions.record import PositionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerResult:
    position: Optional[PositionRecord]
    changed: bool = False
    motions: List[MotionRecord] = field(default_factory=list)


class HandTracker:
    """
    Attributes:
        positions (PositionCatalog): Known positions.
        motions (MotionCatalog): Known motions, loaded against `positions`.
        state (StateManager): Current / last recognized position.
        pose (HandData): The latest sample.
    """

    def __init__(self, positions: PositionCatalog, motions: Optional[MotionCatalog] = None):
        self.positions = positions
        self.motions = motions if motions is not None else MotionCatalog(positions)
        self.state = StateManager()
        self.pose = HandData()
        self.lock = threading.Lock()

        self._position_listeners: List[Callable] = []
        self._motion_listeners: List[Callable] = []
        self._data_listeners: List[Callable] = []

    # --- LISTENERS ---
    def on_position(self, callback: Callable[["HandTracker", PositionRecord], None]):
        self._position_listeners.append(callback)
        return callback

    def on_motion(self, callback: Callable[["HandTracker", MotionRecord], None]):
        self._motion_listeners.append(callback)
        return callback

    def on_data(self, callback: Callable[["HandTracker"], None]):
        self._data_listeners.append(callback)
        return callback

    @property
    def current_position(self) -> Optional[PositionRecord]:
        return self.state.curr_position

    # --- PIPELINE ---
    def update(self, sample: Sequence[float]) -> TrackerResult:
        """Classifies one raw sample. Raises InvalidSampleError on a bad length."""
        pose = HandData(sample)
        with self.lock:
            self.pose = pose
            position = self.positions.best_match(pose)
            changed = self.state.update_position(position)
            completed = []
            if changed:
                logger.debug("Position changed to %s", position.name)
                completed = self.motions.classify(position)

        if changed and position.standalone:
            for callback in self._position_listeners:
                callback(self, position)
        for motion in completed:
            logger.info("Motion detected: %s", motion.name)
            for callback in self._motion_listeners:
                callback(self, motion)
        for callback in self._data_listeners:
            callback(self)
        return TrackerResult(position, changed, completed)

    def poll(self, source: PoseSource) -> TrackerResult:
        return self.update(source.read_sample())

    def record_position(self, name: str, standalone: bool = True) -> PositionRecord:
        """
        Stores the latest sample as a new position and appends it to the
        position file. Raises ValueError for a name already in use.
        """
        with self.lock:
            if self.positions.name_exists(name):
                raise ValueError(f"Duplicate position name: {name.strip().upper()}")
            record = PositionRecord.from_pose(name, self.pose, standalone)
            if self.positions.path is not None:
                self.positions.save(record)
            else:
                self.positions.add(record)
        return record

    def reset(self):
        with self.lock:
            self.state.reset()
            self.motions.reset()
