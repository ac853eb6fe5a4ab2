"""
GloveSense Pose Processing Utilities.
====================================

Handles the value line of a position definition and whole-pose arithmetic.
A value line is 22 tokens separated by ":"; each token is a radian value or
"*" (joint ignored during matching).
"""

import numpy as np
from typing import List, Sequence, Tuple

from glovesense.config import CONFIG
from glovesense.core.types import NR_JOINTS


def parse_value_line(line: str, sep: str = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Splits a value line into (radians, ignored).

    Ignored joints get the value 0.0. Raises ValueError on a wrong token
    count or an unparsable number.
    """
    sep = sep or CONFIG["VALUE_SEPARATOR"]
    ignore_token = CONFIG["IGNORE_TOKEN"]
    tokens = [t.strip() for t in line.strip().split(sep)]
    if len(tokens) != NR_JOINTS:
        raise ValueError(f"The value line needs to contain exactly {NR_JOINTS} values, found {len(tokens)}.")

    radians = np.zeros(NR_JOINTS)
    ignored = np.zeros(NR_JOINTS, dtype=bool)
    for i, token in enumerate(tokens):
        if token == ignore_token:
            ignored[i] = True
            continue
        try:
            radians[i] = float(token)
        except ValueError:
            raise ValueError(f"Value {i} is not a number: {token!r}") from None
    return radians, ignored


def format_value_line(radians: Sequence[float], ignored: Sequence[bool], sep: str = None) -> str:
    """Inverse of parse_value_line. Uses repr() so values survive a round trip exactly."""
    sep = sep or CONFIG["VALUE_SEPARATOR"]
    ignore_token = CONFIG["IGNORE_TOKEN"]
    parts = [ignore_token if skip else repr(float(v)) for v, skip in zip(radians, ignored)]
    return f" {sep} ".join(parts)


def interpolate(start: np.ndarray, end: np.ndarray, steps: int) -> List[np.ndarray]:
    """
    Linear samples from `start` towards `end`, excluding `start` and
    including `end`: start + k * (end - start) / steps for k = 1..steps.
    """
    if steps < 1:
        raise ValueError("Interpolation needs at least one step.")
    start = np.asarray(start, dtype=np.float64)
    end = np.asarray(end, dtype=np.float64)
    delta = (end - start) / steps
    return [start + k * delta for k in range(1, steps + 1)]
