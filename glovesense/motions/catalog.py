"""
GloveSense Motion Catalog.
==========================

Parses the motion definition format and runs every registered motion's
state machine against each newly recognized position.

File format (one motion per line, "#" starts a comment line):

    # rock, paper, rock
    WAVE= ROCK~ PAPER* ROCK

Every step must name a position that already exists in the PositionCatalog
the motions are loaded against.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from glovesense.core.errors import MalformedDefinitionError
from glovesense.motions.record import MotionRecord
from glovesense.motions.sequence import SequenceItem, parse_token
from glovesense.positions.catalog import PositionCatalog
from glovesense.positions.record import PositionRecord

logger = logging.getLogger(__name__)

NAME_OPERATOR = "="
COMMENT = "#"


class MotionCatalog:
    def __init__(self, positions: PositionCatalog, path=None):
        self.positions = positions
        self.path = Path(path) if path is not None else None
        self._records: Dict[str, MotionRecord] = {}

    # --- LOADING ---
    @classmethod
    def from_file(cls, path, positions: PositionCatalog) -> "MotionCatalog":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Motion file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_lines(f, positions, path=path)

    @classmethod
    def from_lines(cls, lines: Iterable[str], positions: PositionCatalog, path=None) -> "MotionCatalog":
        """Parses a line sequence. Either every motion loads or nothing is returned."""
        catalog = cls(positions, path)
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith(COMMENT):
                continue
            try:
                catalog.add(catalog._make_record(line))
            except KeyError as e:
                raise MalformedDefinitionError(f"Unknown position: {e.args[0]}", path, line_number) from e
            except ValueError as e:
                raise MalformedDefinitionError(str(e), path, line_number) from e

        logger.info("Loaded %d motions from %s", len(catalog), path or "<lines>")
        return catalog

    def _make_record(self, line: str) -> MotionRecord:
        tokens = line.split()
        # There must be room for a name and at least two steps.
        if len(tokens) < 3:
            raise ValueError("Need at least three tokens per line.")
        if not tokens[0].endswith(NAME_OPERATOR):
            raise ValueError("Name was not specified with = operator.")
        name = tokens[0].rstrip(NAME_OPERATOR)

        parsed = [parse_token(t) for t in tokens[1:]]
        items = []
        for i, token in enumerate(parsed):
            next_position = None
            if token.transition and i + 1 < len(parsed):
                next_position = self.positions.get(parsed[i + 1].name)
            items.append(SequenceItem.resolve(token, self.positions, next_position))

        for item in items:
            if item.has_leniency:
                logger.debug("%s: %s lenient towards %s", name, item.position.name,
                             sorted(p.name for p in item.leniency))
            if item.has_transition:
                logger.debug("%s: %s tolerates %s", name, item.position.name,
                             sorted(p.name for p in item.transition))
        return MotionRecord(name, items)

    # --- REGISTRY ---
    def add(self, record: MotionRecord):
        if record.name in self._records:
            raise ValueError(f"Duplicate motion name: {record.name}")
        self._records[record.name] = record

    def get(self, name: str) -> MotionRecord:
        return self._records[name.strip().upper()]

    def names(self) -> List[str]:
        return list(self._records)

    def __iter__(self) -> Iterator[MotionRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def reset(self):
        for record in self._records.values():
            record.reset()

    # --- CLASSIFICATION ---
    def classify(self, observed: Optional[PositionRecord]) -> List[MotionRecord]:
        """
        Feeds one change of recognized position to every motion.
        Returns the motions completed by it; several may complete at once.
        """
        return [record for record in self._records.values() if record.on_position(observed)]
