"""
GloveSense - Main Entry Point.
==============================

Loads the position and motion definitions and runs the classification loop
over a recorded sample file (one pose per line, 22 values separated by ":").
A live glove driver plugs in the same way by implementing PoseSource.

Usage:
    $ python -m glovesense.main recording.txt
    $ python -m glovesense.main --describe
"""
import argparse
import logging
import sys
import time
from typing import Sequence

from glovesense.config import CONFIG, PATHS, init_environment
from glovesense.core.interfaces import PoseSource
from glovesense.core.types import HandData
from glovesense.motions.catalog import MotionCatalog
from glovesense.positions.catalog import PositionCatalog
from glovesense.tracker import HandTracker

logger = logging.getLogger(__name__)


class RecordedSource(PoseSource):
    """Reads poses from a text file, one line per sample. Blank lines are skipped."""

    def __init__(self, path):
        with open(path, "r", encoding="utf-8") as f:
            self.lines = [line for line in f if line.strip()]
        self.index = 0

    def __len__(self):
        return len(self.lines)

    def read_sample(self) -> Sequence[float]:
        line = self.lines[self.index]
        self.index += 1
        return HandData.from_csv(line, CONFIG["VALUE_SEPARATOR"]).to_list()


def build_tracker(positions_path=None, motions_path=None) -> HandTracker:
    """Loads both catalogs. A missing position file is created empty."""
    positions = PositionCatalog.from_file(positions_path or PATHS["POSITIONS"], create_missing=True)
    motions_path = motions_path or PATHS["MOTIONS"]
    try:
        motions = MotionCatalog.from_file(motions_path, positions)
    except FileNotFoundError:
        logger.warning("No motion file at %s; only positions will be reported", motions_path)
        motions = MotionCatalog(positions)
    return HandTracker(positions, motions)


def main():
    parser = argparse.ArgumentParser(description="Replay recorded glove samples through the recognizer.")
    parser.add_argument("samples", nargs="?", help="Recorded sample file.")
    parser.add_argument("--positions", help="Position definition file.")
    parser.add_argument("--motions", help="Motion definition file.")
    parser.add_argument("--strategy", choices=["rmsd", "independent"], help="Matching strategy.")
    parser.add_argument("--interval", type=float, default=0.0, help="Seconds between samples.")
    parser.add_argument("--describe", action="store_true", help="Print the position overlap report.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format='%(levelname)s:%(name)s:%(message)s')
    if args.strategy:
        CONFIG["MATCHING_STRATEGY"] = args.strategy

    # 1. Boot Sequence
    init_environment()
    tracker = build_tracker(args.positions, args.motions)
    if args.describe:
        print(tracker.positions.describe())
    if not args.samples:
        return

    # 2. Listeners
    tracker.on_position(lambda t, p: print(f"POSITION {p.name}"))
    tracker.on_motion(lambda t, m: print(f"MOTION   {m.name}"))

    # 3. Loop
    source = RecordedSource(args.samples)
    try:
        for _ in range(len(source)):
            tracker.poll(source)
            if args.interval > 0:
                time.sleep(args.interval)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    except ValueError as e:
        logger.error("Sample %d rejected: %s", source.index, e)
        sys.exit(1)


if __name__ == "__main__":
    main()
