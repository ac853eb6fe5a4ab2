"""
GloveSense Position Records.
A named reference pose plus the joints it does not care about.
"""
from typing import Iterable

import numpy as np

from glovesense.config import CONFIG, JOINT_PRECISION
from glovesense.core.interfaces import MatchingStrategy
from glovesense.core.matching import get_strategy
from glovesense.core.types import HandData, Joint, NR_JOINTS, as_radians
from glovesense.pose_utils import format_value_line


class PositionRecord(HandData):
    """
    A reference pose used for classification.

    Attributes:
        name (str): Upper-cased identifier, unique within a catalog.
        ignored (np.ndarray): bool[22]; True excludes the joint from matching.
        standalone (bool): Whether recognizing it alone is a notable event,
            as opposed to a position that only exists as a motion step.
        matcher (MatchingStrategy): Decides is_similar() against live poses.

    Records compare and hash by identity; motions refer to them by object.
    """

    def __init__(self, name: str, values: Iterable[float] = None, ignored: Iterable[bool] = None,
                 standalone: bool = True, matcher: MatchingStrategy = None):
        super().__init__(values, JOINT_PRECISION)
        self.name = name
        self.ignored = np.zeros(NR_JOINTS, dtype=bool) if ignored is None else self._mask(ignored)
        self.standalone = standalone
        self.matcher = matcher or get_strategy()

    @classmethod
    def from_pose(cls, name: str, pose: HandData, standalone: bool = True) -> "PositionRecord":
        rv = cls(name, standalone=standalone)
        rv.clone_data(pose)
        return rv

    @staticmethod
    def _mask(ignored) -> np.ndarray:
        mask = np.asarray(list(ignored), dtype=bool)
        if mask.shape != (NR_JOINTS,):
            raise ValueError(f"The ignore mask needs exactly {NR_JOINTS} entries.")
        return mask

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str):
        value = (value or "").strip().upper()
        if not value:
            raise ValueError("A position needs a name.")
        self._name = value

    # --- MATCHING ---
    def is_similar(self, candidate, tolerance: float = 0) -> bool:
        """
        Live pose: delegates to the matching strategy (tolerance <= 0 means default).
        Another PositionRecord: joint-wise Angle comparison with `tolerance`
        as the precision factor, skipping joints either side ignores.
        """
        if isinstance(candidate, PositionRecord):
            return self.is_similar_record(candidate, tolerance if tolerance > 0 else 1.0)
        return self.matcher.similar(self, candidate, tolerance)

    def is_similar_record(self, other: "PositionRecord", precision: float = 1.0) -> bool:
        for joint in Joint:
            if self.ignored[joint] or other.ignored[joint]:
                continue
            if not self[joint].similar(other[joint], precision):
                return False
        return True

    # --- IGNORE MASK HELPERS ---
    def ignore(self, *joints: int):
        for joint in joints:
            self.ignored[Joint(joint)] = True

    def ignore_wrist(self):
        self.ignore(Joint.PALM_ARCH, Joint.WRIST_PITCH, Joint.WRIST_YAW)

    def ignore_abductions(self):
        self.ignore(Joint.THUMB_ABD, Joint.MIDDLE_INDEX_ABD, Joint.RING_MIDDLE_ABD, Joint.PINKIE_RING_ABD)

    def ignore_thumb(self):
        self.ignore(Joint.THUMB_INNER, Joint.THUMB_MIDDLE, Joint.THUMB_OUTER, Joint.THUMB_ABD)

    def clone_data(self, data):
        """Copies joint values (not precision, not the ignore mask) from a pose."""
        self.radians = data.radians.copy() if isinstance(data, HandData) else as_radians(data)

    # --- SERIALIZATION ---
    @property
    def header(self) -> str:
        """First line of the definition record: NAME, or NAME- when not standalone."""
        return self.name + ("" if self.standalone else CONFIG["DEPENDENT_SUFFIX"])

    def to_csv(self, sep: str = None) -> str:
        return format_value_line(self.radians, self.ignored, sep)

    def to_lines(self):
        return [self.header, self.to_csv()]

    def __repr__(self):
        return f"PositionRecord({self.name!r}, standalone={self.standalone})"
