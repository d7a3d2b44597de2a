"""
Pose delta gate - decides when the robot has moved far enough (or turned
far enough) since the last accepted pose to drop a new waypoint.
"""

import math
from typing import Optional

import numpy as np

from waypoint_recorder.geometry import Pose


DEFAULT_DIST_THRESHOLD = 2.0             # [m]
DEFAULT_YAW_THRESHOLD = math.radians(30.0)  # [rad]


def planar_distance(a: Pose, b: Pose) -> float:
    """Euclidean distance in the XY plane, z is ignored."""
    return float(np.hypot(b.x - a.x, b.y - a.y))


def yaw_difference(a: Pose, b: Pose) -> float:
    # Raw difference, not wrapped into [-pi, pi]
    return abs(b.yaw - a.yaw)


def should_emit(last_accepted: Pose, candidate: Pose,
                dist_threshold=DEFAULT_DIST_THRESHOLD,
                yaw_threshold=DEFAULT_YAW_THRESHOLD) -> bool:
    """True if candidate is far enough from last_accepted to become a waypoint."""
    diff_dist = planar_distance(last_accepted, candidate)
    diff_yaw = yaw_difference(last_accepted, candidate)
    return diff_dist > dist_threshold or diff_yaw > yaw_threshold


class PoseDeltaGate:
    def __init__(self, dist_threshold=DEFAULT_DIST_THRESHOLD,
                 yaw_threshold=DEFAULT_YAW_THRESHOLD):
        self.dist_threshold = dist_threshold
        self.yaw_threshold = yaw_threshold
        self.last_accepted: Optional[Pose] = None

    def offer(self, candidate: Pose) -> bool:
        """
        Feed a new pose through the gate.

        The first pose is always accepted. After that a pose is accepted only
        when should_emit() holds against the last accepted pose. Accepted
        poses become the new reference.
        """
        if self.last_accepted is not None and not should_emit(
                self.last_accepted, candidate,
                self.dist_threshold, self.yaw_threshold):
            return False

        self.last_accepted = candidate
        return True
