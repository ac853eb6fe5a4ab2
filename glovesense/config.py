"""
GloveSense Configuration Management.
====================================

This module defines the tunables for the position and motion recognizer.
Values are read at call time, so hosts (and tests) may override entries in
`CONFIG` after import.

! WARNING !
Changing `JOINT_PRECISION` changes which stored positions match a pose.
The definition files were recorded against these exact values.
"""

from pathlib import Path
import os

# --- SYSTEM PATHS ---
FILE_PATH = Path(__file__).resolve()
PROJECT_ROOT = FILE_PATH.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

PATHS = {
    "POSITIONS": DATA_DIR / "positions.txt",
    "MOTIONS": DATA_DIR / "motions.txt",
}

# --- PER-JOINT PRECISION (CRITICAL) ---
# Default max_diff (radians) of every joint of a PositionRecord, indexed by Joint.
JOINT_PRECISION = [
    0.4,     # 0  - thumb inner
    0.3,     # 1  - thumb middle
    0.4,     # 2  - thumb outer
    0.15,    # 3  - thumb abduction
    0.5,     # 4  - index inner
    0.5,     # 5  - index middle
    0.5,     # 6  - index outer
    0.5,     # 7  - middle inner
    0.5,     # 8  - middle middle
    0.5,     # 9  - middle outer
    0.0005,  # 10 - middle/index abduction, absolute reading is unreliable; relative use only
    0.5,     # 11 - ring inner
    0.5,     # 12 - ring middle
    0.5,     # 13 - ring outer
    0.15,    # 14 - ring/middle abduction
    0.5,     # 15 - pinkie inner
    0.5,     # 16 - pinkie middle
    0.5,     # 17 - pinkie outer
    0.15,    # 18 - pinkie/ring abduction
    0.5,     # 19 - palm arch
    0.5,     # 20 - wrist pitch
    0.3,     # 21 - wrist yaw
]

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: ANGLES
    # =========================================================
    "ANGLE_MAX_DIFF": 0.5,          # Default allowed deviation of a bare Angle (radians)
    "ANGLE_UNIT": "radians",        # Display unit of Angle.value ("radians" / "degrees")

    # =========================================================
    # LAYER 2: POSITION MATCHING
    # =========================================================
    "MATCHING_STRATEGY": "rmsd",    # Strategy owned by new PositionRecords ("rmsd" / "independent")
    "INDEPENDENT_TOLERANCE": 1.0,   # Factor applied to every joint's max_diff
    "RMSD_TOLERANCE": 22.5,         # Allowed root mean square deviation (degrees)

    # =========================================================
    # LAYER 3: MOTION MODIFIERS
    # =========================================================
    "LENIENCY_PRECISION": 1.0,      # Precision factor for "*" (equivalent positions)
    "TRANSITION_STEPS": 10,         # Interpolation samples between two steps for "~"
    "TRANSITION_TOLERANCE": 1.5,    # Widened tolerance factor while probing transitions

    # =========================================================
    # LAYER 4: FILE FORMAT
    # =========================================================
    "VALUE_SEPARATOR": ":",         # Separator of the 22 values on a position's second line
    "IGNORE_TOKEN": "*",            # Value token that excludes a joint from matching
    "DEPENDENT_SUFFIX": "-",        # Name suffix of positions that are only used inside motions
}


def init_environment():
    """
    Creates the data directory safely at runtime.
    """
    os.makedirs(DATA_DIR, exist_ok=True)
