"""
GloveSense Types.
Central definition of the pose data contracts to prevent circular imports.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, List, Sequence, Union
import math

import numpy as np

from glovesense.config import CONFIG
from glovesense.core.errors import InvalidSampleError


# --- JOINT LAYOUT ---
class Joint(IntEnum):
    """
    Sensor slots of a pose sample. The numbering is a file format invariant:
    every stored definition depends on it.
    """
    THUMB_INNER = 0
    THUMB_MIDDLE = 1
    THUMB_OUTER = 2
    THUMB_ABD = 3
    INDEX_INNER = 4
    INDEX_MIDDLE = 5
    INDEX_OUTER = 6
    MIDDLE_INNER = 7
    MIDDLE_MIDDLE = 8
    MIDDLE_OUTER = 9
    MIDDLE_INDEX_ABD = 10
    RING_INNER = 11
    RING_MIDDLE = 12
    RING_OUTER = 13
    RING_MIDDLE_ABD = 14
    PINKIE_INNER = 15
    PINKIE_MIDDLE = 16
    PINKIE_OUTER = 17
    PINKIE_RING_ABD = 18
    PALM_ARCH = 19
    WRIST_PITCH = 20
    WRIST_YAW = 21


NR_JOINTS = len(Joint)

# Joints grouped per finger, used for debug output.
FINGER_JOINTS = {
    "Thumb": (Joint.THUMB_INNER, Joint.THUMB_MIDDLE, Joint.THUMB_OUTER, Joint.THUMB_ABD),
    "Index": (Joint.INDEX_INNER, Joint.INDEX_MIDDLE, Joint.INDEX_OUTER, Joint.MIDDLE_INDEX_ABD),
    "Middle": (Joint.MIDDLE_INNER, Joint.MIDDLE_MIDDLE, Joint.MIDDLE_OUTER, Joint.RING_MIDDLE_ABD),
    "Ring": (Joint.RING_INNER, Joint.RING_MIDDLE, Joint.RING_OUTER, Joint.PINKIE_RING_ABD),
    "Pinkie": (Joint.PINKIE_INNER, Joint.PINKIE_MIDDLE, Joint.PINKIE_OUTER),
    "Wrist": (Joint.WRIST_PITCH, Joint.WRIST_YAW, Joint.PALM_ARCH),
}


class AngleUnit(Enum):
    RADIANS = "radians"
    DEGREES = "degrees"

    @classmethod
    def from_label(cls, raw_label: str) -> "AngleUnit":
        clean = (raw_label or "").strip().lower()
        for member in cls:
            if member.value == clean:
                return member
        raise ValueError(f"Unknown angle unit: {raw_label!r}")


# --- ANGLES ---
@dataclass(frozen=True)
class Angle:
    """
    A single joint reading. Storage is always in radians; max_diff is the
    deviation (radians) tolerated by similar() when this angle is the reference.
    """
    radians: float = 0.0
    max_diff: float = None

    def __post_init__(self):
        if self.max_diff is None:
            object.__setattr__(self, "max_diff", float(CONFIG["ANGLE_MAX_DIFF"]))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    @property
    def value(self) -> float:
        """The angle in the configured display unit."""
        if AngleUnit.from_label(CONFIG["ANGLE_UNIT"]) is AngleUnit.DEGREES:
            return self.degrees
        return self.radians

    def similar(self, other: "Angle", precision: float = 1.0) -> bool:
        """
        Whether `other` lies within precision * max_diff of this angle.
        Not symmetric: the bound always comes from this angle.
        """
        diff = other.radians - self.radians
        bound = precision * self.max_diff
        return -bound <= diff <= bound


# --- POSES ---
PoseLike = Union["HandData", Sequence[float], np.ndarray]


def as_radians(values: Iterable[float]) -> np.ndarray:
    """Converts a 22-value sample to a float vector, rejecting any other length."""
    arr = np.asarray(list(values) if not isinstance(values, np.ndarray) else values, dtype=np.float64)
    if arr.ndim != 1 or arr.shape[0] != NR_JOINTS:
        raise InvalidSampleError(f"A pose sample needs exactly {NR_JOINTS} values, got {arr.size}.")
    return arr.copy()


class HandData:
    """
    A pose: one snapshot of all 22 joint angles.

    Values live in a float vector so that whole-pose math (interpolation,
    deviation) stays vectorized; indexing returns Angle objects.
    """

    def __init__(self, values: Iterable[float] = None, max_diff: Iterable[float] = None):
        self.radians = np.zeros(NR_JOINTS) if values is None else as_radians(values)
        if max_diff is None:
            self.max_diff = np.full(NR_JOINTS, float(CONFIG["ANGLE_MAX_DIFF"]))
        else:
            self.max_diff = as_radians(max_diff)

    @classmethod
    def from_csv(cls, line: str, sep: str = None) -> "HandData":
        """Builds a pose from a separated line of exactly 22 radian values."""
        sep = sep or CONFIG["VALUE_SEPARATOR"]
        tokens = line.strip().split(sep)
        if len(tokens) != NR_JOINTS:
            raise InvalidSampleError(f"The line did not contain exactly {NR_JOINTS} values.")
        return cls([float(t.strip()) for t in tokens])

    @property
    def degrees(self) -> np.ndarray:
        return np.degrees(self.radians)

    def __len__(self) -> int:
        return NR_JOINTS

    def __getitem__(self, joint: int) -> Angle:
        i = Joint(joint)
        return Angle(float(self.radians[i]), float(self.max_diff[i]))

    def __setitem__(self, joint: int, radians: float):
        self.radians[Joint(joint)] = float(radians)

    def __iter__(self):
        return (self[j] for j in Joint)

    def add(self, adder: PoseLike) -> "HandData":
        """Adds another pose (or 22 raw values) to this one, joint by joint."""
        delta = adder.radians if isinstance(adder, HandData) else as_radians(adder)
        self.radians = self.radians + delta
        return self

    def populate(self, data: PoseLike) -> "HandData":
        """Copies the joint values of `data` into this pose."""
        self.radians = data.radians.copy() if isinstance(data, HandData) else as_radians(data)
        return self

    def copy(self) -> "HandData":
        return HandData(self.radians, self.max_diff)

    def to_list(self) -> List[float]:
        return self.radians.tolist()

    def to_csv(self, sep: str = None) -> str:
        sep = sep or CONFIG["VALUE_SEPARATOR"]
        return f" {sep} ".join(repr(float(v)) for v in self.radians)

    def debug_string(self) -> str:
        lines = []
        for finger, joints in FINGER_JOINTS.items():
            vals = ", ".join(f"{self[j].value:.3f}" for j in joints)
            lines.append(f"{finger}:\n    [{vals}]")
        return "\n".join(lines)

    def __repr__(self):
        return f"HandData({self.to_list()!r})"
