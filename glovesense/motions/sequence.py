"""
GloveSense Sequence Items.
==========================

One step of a motion. A step is written as a position name followed by
optional modifiers, in any order:

    *   leniency:   positions equivalent to this one also count as this step
    ~   transition: positions passed through on the way to the next step do
                    not break the sequence

Loading happens in two phases. parse_token() turns text into a
SequenceToken; SequenceItem.resolve() looks the position up and derives the
modifier sets, producing an immutable item.
"""
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from glovesense.config import CONFIG
from glovesense.pose_utils import interpolate
from glovesense.positions.catalog import PositionCatalog
from glovesense.positions.record import PositionRecord

logger = logging.getLogger(__name__)

LENIENCY = "*"
TRANSITION = "~"
MODIFIERS = (LENIENCY, TRANSITION)


@dataclass(frozen=True)
class SequenceToken:
    name: str
    lenient: bool = False
    transition: bool = False


def parse_token(token: str) -> SequenceToken:
    """Splits trailing modifiers off a step token. Raises ValueError on bad syntax."""
    token = token.strip()
    lenient = transition = False
    while token and token[-1] in MODIFIERS:
        if token[-1] == LENIENCY:
            lenient = True
        else:
            transition = True
        token = token[:-1]

    if not token:
        raise ValueError("A step needs a position name before its modifiers.")
    if not token[-1].isalnum():
        raise ValueError(f"The modifier {token[-1]!r} is invalid")
    if not token.isalnum():
        raise ValueError(
            f"Name must be alphanumeric, and all modifiers should appear at the end of the name. "
            f"This token is invalid: {token}")
    return SequenceToken(token.upper(), lenient, transition)


def leniency_set(position: PositionRecord, positions: PositionCatalog) -> FrozenSet[PositionRecord]:
    """Registered positions whose reference pose matches `position`'s."""
    return frozenset(positions.all_matches(position, CONFIG["LENIENCY_PRECISION"]))


def transition_set(position: PositionRecord, next_position: PositionRecord,
                   positions: PositionCatalog) -> FrozenSet[PositionRecord]:
    """
    Positions hit while sweeping linearly from `position` to `next_position`,
    probed with a widened tolerance.
    """
    found = set()
    for sample in interpolate(position.radians, next_position.radians, CONFIG["TRANSITION_STEPS"]):
        for record in positions.all_matches(sample, CONFIG["TRANSITION_TOLERANCE"]):
            if record not in found:
                logger.debug("Found a transitional position: %s", record.name)
                found.add(record)
    return frozenset(found)


@dataclass(frozen=True)
class SequenceItem:
    position: PositionRecord
    has_leniency: bool = False
    has_transition: bool = False
    leniency: FrozenSet[PositionRecord] = field(default_factory=frozenset)
    transition: FrozenSet[PositionRecord] = field(default_factory=frozenset)

    @classmethod
    def resolve(cls, token: SequenceToken, positions: PositionCatalog,
                next_position: Optional[PositionRecord] = None) -> "SequenceItem":
        """
        Looks up the token's position and derives its modifier sets.
        Raises KeyError for unknown names and ValueError for a transition
        without a following step.
        """
        if not positions.name_exists(token.name):
            raise KeyError(token.name)
        position = positions.get(token.name)

        leniency = leniency_set(position, positions) if token.lenient else frozenset()
        transition = frozenset()
        if token.transition:
            if next_position is None:
                raise ValueError("The last item of a sequence cannot have the transition modifier (~).")
            transition = transition_set(position, next_position, positions)
        return cls(position, token.lenient, token.transition, leniency, transition)

    def matches_item(self, observed: Optional[PositionRecord]) -> bool:
        """Whether `observed` counts as this step (the position itself or an equivalent)."""
        if observed is None:
            return False
        return observed is self.position or observed in self.leniency

    def cancels_sequence(self, observed: PositionRecord) -> bool:
        """Whether `observed`, seen while this is the current step, breaks the sequence."""
        return not (self.matches_item(observed) or observed in self.transition)

    @property
    def token(self) -> str:
        return (self.position.name
                + (LENIENCY if self.has_leniency else "")
                + (TRANSITION if self.has_transition else ""))
