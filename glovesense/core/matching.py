"""
GloveSense Matching Strategies.
===============================

Two ways of deciding whether a live pose matches a stored position:

1. **Independent:** every non-ignored joint must fall within its own
   max_diff (scaled by the tolerance factor). One bad joint rejects the pose.
2. **RMSD:** the mean squared deviation in degrees over the non-ignored
   joints must stay below tolerance². A single noisy joint is tolerated if
   the rest of the hand is close.

Both are plain functions; the strategy classes only bind the static default.
"""

import numpy as np

from glovesense.config import CONFIG
from glovesense.core.interfaces import MatchingStrategy
from glovesense.core.types import HandData, as_radians


def _candidate_radians(candidate) -> np.ndarray:
    if isinstance(candidate, HandData):
        return candidate.radians
    return as_radians(candidate)


def independent_similar(reference, candidate, tolerance: float) -> bool:
    """
    Per-joint thresholding, inclusive on both ends:
    -(tolerance * max_diff) <= candidate - reference <= tolerance * max_diff
    """
    used = ~reference.ignored
    diff = _candidate_radians(candidate)[used] - reference.radians[used]
    bound = tolerance * reference.max_diff[used]
    return bool(np.all((-bound <= diff) & (diff <= bound)))


def rmsd_similar(reference, candidate, tolerance: float) -> bool:
    """
    Aggregate thresholding: mean((deg_ref - deg_cand)^2) < tolerance^2 (strict).
    A reference with every joint ignored matches anything.
    """
    used = ~reference.ignored
    nr = int(np.count_nonzero(used))
    if nr == 0:
        return True
    frac = np.degrees(reference.radians[used]) - np.degrees(_candidate_radians(candidate)[used])
    total = float(np.sum(frac * frac))
    return total / nr < tolerance ** 2


class IndependentMatching(MatchingStrategy):
    """Compares by matching all angles separately."""

    name = "independent"

    @property
    def default_tolerance(self) -> float:
        return float(CONFIG["INDEPENDENT_TOLERANCE"])

    def similar(self, reference, candidate, tolerance: float = 0) -> bool:
        tolerance = tolerance if tolerance > 0 else self.default_tolerance
        return independent_similar(reference, candidate, tolerance)


class RmsdMatching(MatchingStrategy):
    """Compares by root mean square deviation (degrees)."""

    name = "rmsd"

    @property
    def default_tolerance(self) -> float:
        return float(CONFIG["RMSD_TOLERANCE"])

    def similar(self, reference, candidate, tolerance: float = 0) -> bool:
        tolerance = tolerance if tolerance > 0 else self.default_tolerance
        return rmsd_similar(reference, candidate, tolerance)


STRATEGIES = {
    IndependentMatching.name: IndependentMatching,
    RmsdMatching.name: RmsdMatching,
}


def get_strategy(name: str = None) -> MatchingStrategy:
    """Instantiates a strategy by name; defaults to CONFIG["MATCHING_STRATEGY"]."""
    key = (name or CONFIG["MATCHING_STRATEGY"]).strip().lower()
    if key not in STRATEGIES:
        raise ValueError(f"Unknown matching strategy: {name!r}")
    return STRATEGIES[key]()
