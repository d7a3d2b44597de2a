"""
Waypoint Exporter - joins marker poses with reach radii and writes the CSV

One line per waypoint, no header:

    x, y, 0.0, qx, qy, qz, qw, is_search_area(0|1), reach_diameter

Waypoints are ordered by the numeric value of their marker name. Radii carry
no id, so they are paired with the sorted waypoints by position.
"""

import csv
import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Sequence

from waypoint_recorder.geometry import Pose
from waypoint_recorder.reach_radius import ReachRadiusCache


class MalformedWaypointIdError(ValueError):
    """A marker name that is not a decimal waypoint id."""


class ExportState(Enum):
    AWAITING_RADII = "awaiting_radii"
    READY = "ready"
    EXPORTED = "exported"


@dataclass
class MarkerSnapshot:
    name: str
    pose: Pose
    is_search_area: bool = False


class ExportRecord(NamedTuple):
    x: float
    y: float
    z: float
    qx: float
    qy: float
    qz: float
    qw: float
    is_search_area: int
    reach_diameter: float


def waypoint_id(name: str) -> int:
    try:
        return int(name)
    except (TypeError, ValueError) as e:
        raise MalformedWaypointIdError(f'Invalid waypoint id: {name!r}') from e


def sort_by_numeric_id(snapshots: Sequence) -> list:
    """Sort by int(name) so that "2" comes before "10"."""
    return sorted(snapshots, key=lambda s: waypoint_id(s.name))


def build_records(sorted_snapshots: Sequence, radii: Sequence[float]) -> List[ExportRecord]:
    """Pair the i-th waypoint with the i-th radius; extra entries on either side are dropped."""
    records = []
    for snapshot, radius in zip(sorted_snapshots, radii):
        pose = snapshot.pose
        records.append(ExportRecord(
            x=pose.x,
            y=pose.y,
            z=0.0,  # waypoints live on the 2D ground plane
            qx=pose.qx,
            qy=pose.qy,
            qz=pose.qz,
            qw=pose.qw,
            is_search_area=1 if snapshot.is_search_area else 0,
            reach_diameter=2.0 * radius,
        ))
    return records


def write_records(path: str, records: Sequence[ExportRecord]):
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f, lineterminator='\n')
        for record in records:
            writer.writerow(record)


def timestamped_filename(now: Optional[datetime] = None, directory: str = '') -> str:
    """e.g. 2024-05-01-13-45-09.csv"""
    now = now or datetime.now()
    return os.path.join(directory, now.strftime('%Y-%m-%d-%H-%M-%S') + '.csv')


class WaypointExporter:
    """
    One-shot export gated on the reach radii.

    AWAITING_RADII -> READY once the cache has received radii,
    READY -> EXPORTED after the first snapshot is written. EXPORTED is final.
    """

    def __init__(self, cache: ReachRadiusCache, output_path: str, logger,
                 on_complete: Optional[Callable[[str], None]] = None):
        self.cache = cache
        self.output_path = output_path
        self.logger = logger
        self.on_complete = on_complete
        self._exported = False

    @property
    def state(self) -> ExportState:
        if self._exported:
            return ExportState.EXPORTED
        if self.cache.ready:
            return ExportState.READY
        return ExportState.AWAITING_RADII

    def handle_snapshot(self, snapshots: Sequence) -> Optional[str]:
        """Export the snapshot if radii are in. Returns the written path, or None."""
        state = self.state
        if state == ExportState.EXPORTED:
            return None
        if state == ExportState.AWAITING_RADII:
            self.logger.info('Waiting for reach markers')
            return None

        self.logger.info(f'Received markers : {len(snapshots)}')
        self.export_all(snapshots, self.cache.radii())
        self._exported = True

        if self.on_complete is not None:
            self.on_complete(self.output_path)
        return self.output_path

    def export_all(self, snapshots: Sequence, radii: Sequence[float]) -> List[ExportRecord]:
        """Sort, join and write. Raises MalformedWaypointIdError before touching the file."""
        ordered = sort_by_numeric_id(snapshots)

        if len(ordered) != len(radii):
            self.logger.error(
                f'markers size is mismatch!!! '
                f'({len(ordered)} waypoints, {len(radii)} reach markers)')

        records = build_records(ordered, radii)
        write_records(self.output_path, records)
        self.logger.info(f'Saved to : {self.output_path}')
        return records
