"""
Plain pose type shared by the waypoint recorder core.

The core never touches ROS messages directly; markers.py converts
geometry_msgs/Pose to and from this dataclass.
"""

import math
from dataclasses import dataclass


@dataclass
class Pose:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    qx: float = 0.0
    qy: float = 0.0
    qz: float = 0.0
    qw: float = 1.0

    @property
    def yaw(self) -> float:
        return quaternion_to_yaw(self.qx, self.qy, self.qz, self.qw)


def quaternion_to_yaw(x, y, z, w):
    """Yaw of the roll-pitch-yaw (ZYX) decomposition of a quaternion."""
    siny_cosp = 2.0 * (w * z + x * y)
    cosy_cosp = 1.0 - 2.0 * (y * y + z * z)
    return math.atan2(siny_cosp, cosy_cosp)


def pose_from_xy_yaw(x, y, yaw, z=0.0):
    """Build a Pose with a pure-yaw orientation."""
    return Pose(x=x, y=y, z=z,
                qx=0.0, qy=0.0,
                qz=math.sin(yaw / 2.0), qw=math.cos(yaw / 2.0))
