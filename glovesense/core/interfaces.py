"""
GloveSense Core Interfaces.
Defines the abstract contracts between the recognizer and its collaborators.
"""

from abc import ABC, abstractmethod
from typing import Sequence


class MatchingStrategy(ABC):
    """
    Decides whether a candidate pose matches a reference position.
    A tolerance <= 0 means "use the strategy's static default".
    """

    @abstractmethod
    def similar(self, reference, candidate, tolerance: float = 0) -> bool: pass

    @property
    @abstractmethod
    def default_tolerance(self) -> float: pass


class PoseSource(ABC):
    """
    Anything that produces raw pose samples (glove driver, recorded sequence player).
    """

    @abstractmethod
    def read_sample(self) -> Sequence[float]: pass
