"""
GloveSense Position Catalog.
============================

Parses the position definition format into a name-keyed registry and answers
"which known position matches this pose" queries.

File format (repeating two-line records):

    ROCK
    1.5 : 1.5 : * : ...          (22 values, radians or "*")
    HALFOPEN-                    (trailing "-": only used inside motions)
    0.75 : 0.75 : ...

Blank lines between records are skipped. Line numbers in errors are 1-based.
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from glovesense.config import CONFIG
from glovesense.core.errors import MalformedDefinitionError
from glovesense.pose_utils import parse_value_line
from glovesense.positions.record import PositionRecord

logger = logging.getLogger(__name__)


class PositionCatalog:
    """
    Registry of PositionRecords in registration (file) order.

    Attributes:
        path (Path): Backing definition file, used by save(). May be None.
    """

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else None
        self._records: Dict[str, PositionRecord] = {}

    # --- LOADING ---
    @classmethod
    def from_file(cls, path, create_missing: bool = False) -> "PositionCatalog":
        """
        Loads a definition file. A missing file is an error unless
        `create_missing` is set, in which case an empty file is created.
        """
        path = Path(path)
        if not path.exists():
            if not create_missing:
                raise FileNotFoundError(f"Position file not found: {path}")
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
            logger.info("Created empty position file %s", path)
            return cls(path)

        with open(path, "r", encoding="utf-8") as f:
            catalog = cls.from_lines(f, path=path)
        catalog.path = path
        return catalog

    @classmethod
    def from_lines(cls, lines: Iterable[str], path=None) -> "PositionCatalog":
        """Parses a line sequence. Either every record loads or nothing is returned."""
        catalog = cls(path)
        for line_number, header, values in cls._records_of(lines, path):
            try:
                catalog.add(cls._make_record(header, values))
            except ValueError as e:
                raise MalformedDefinitionError(str(e), path, line_number) from e

        logger.info("Loaded %d positions from %s", len(catalog), path or "<lines>")
        for name, others in catalog.overlaps().items():
            logger.warning("Position %s also matches %s; keep definitions mutually exclusive",
                           name, ", ".join(others))
        return catalog

    @staticmethod
    def _records_of(lines: Iterable[str], path) -> Iterator[Tuple[int, str, str]]:
        """Yields (header line number, header, value line) pairs."""
        header, header_no = None, -1
        for line_number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line:
                continue
            if header is None:
                header, header_no = line, line_number
            else:
                yield header_no, header, line
                header = None
        if header is not None:
            raise MalformedDefinitionError(f"Position {header!r} has no value line.", path, header_no)

    @staticmethod
    def _make_record(header: str, values: str) -> PositionRecord:
        suffix = CONFIG["DEPENDENT_SUFFIX"]
        standalone = not header.endswith(suffix)
        name = header if standalone else header[:-len(suffix)]
        radians, ignored = parse_value_line(values)
        return PositionRecord(name, radians, ignored, standalone=standalone)

    # --- REGISTRY ---
    def add(self, record: PositionRecord):
        if record.name in self._records:
            raise ValueError(f"Duplicate position name: {record.name}")
        self._records[record.name] = record

    def save(self, record: PositionRecord):
        """Appends the record to the backing file, then registers it."""
        if self.path is None:
            raise ValueError("This catalog has no backing file.")
        if record.name in self._records:
            raise ValueError(f"Duplicate position name: {record.name}")
        text = "\n".join(record.to_lines()) + "\n"
        if self.path.exists() and self.path.stat().st_size > 0:
            with open(self.path, "rb") as f:
                f.seek(-1, 2)
                if f.read(1) != b"\n":
                    text = "\n" + text
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(text)
        self.add(record)
        logger.info("Saved position %s to %s", record.name, self.path)

    def get(self, name: str) -> PositionRecord:
        """Raises KeyError for unknown names."""
        return self._records[name.strip().upper()]

    def name_exists(self, name: str) -> bool:
        return name.strip().upper() in self._records

    def names(self) -> List[str]:
        return list(self._records)

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and self.name_exists(name)

    def __iter__(self) -> Iterator[PositionRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    # --- QUERIES ---
    def best_match(self, pose) -> Optional[PositionRecord]:
        """
        First registered position similar to `pose` at default tolerance.
        Overlapping definitions have no defined winner; see overlaps().
        """
        for record in self._records.values():
            if record.is_similar(pose):
                return record
        return None

    def all_matches(self, pose, tolerance: float = 1.0) -> List[PositionRecord]:
        """
        Every position matching `pose` with the tolerance scaled by `tolerance`.

        For a live pose the factor multiplies each record's strategy default;
        for another PositionRecord it is the Angle precision factor.
        """
        rv = []
        for record in self._records.values():
            if isinstance(pose, PositionRecord):
                hit = record.is_similar_record(pose, tolerance)
            else:
                hit = record.is_similar(pose, record.matcher.default_tolerance * tolerance)
            if hit:
                rv.append(record)
        return rv

    def _live_matches(self, record: PositionRecord) -> List[PositionRecord]:
        """Positions that would accept `record`'s values as a live sample."""
        return [m for m in self._records.values() if m.is_similar(record.radians)]

    def overlaps(self) -> Dict[str, List[str]]:
        """
        For every position, the *other* positions its reference pose matches
        under their own strategy, the same test best_match() applies.
        """
        rv = {}
        for record in self._records.values():
            others = [m.name for m in self._live_matches(record) if m is not record]
            if others:
                rv[record.name] = others
        return rv

    def describe(self) -> str:
        rv = f"Parsed {self.path or '<lines>'}\n"
        if not self._records:
            return rv + "    No records."
        for record in self._records.values():
            matches = [m.name for m in self._live_matches(record)]
            rv += f"{record.name} matches {', '.join(matches) if matches else 'nothing'}\n"
        return rv
