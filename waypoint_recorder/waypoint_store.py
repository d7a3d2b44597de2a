"""
Waypoint Store - editable waypoints backed by an interactive marker server

Every waypoint is shown in RViz as a draggable cube. The marker name is the
waypoint id as a decimal string, so "0", "1", "2", ... and int(name) always
gives the id back.

Operator edits come back through MarkerFeedbackSink, which is the only thing
that changes a waypoint after it is created.
"""

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Callable, Dict, List

from waypoint_recorder.geometry import Pose


class FeedbackEvent(IntEnum):
    # Same values as visualization_msgs/InteractiveMarkerFeedback
    KEEP_ALIVE = 0
    POSE_UPDATE = 1
    MENU_SELECT = 2
    BUTTON_CLICK = 3
    MOUSE_DOWN = 4
    MOUSE_UP = 5


@dataclass
class Waypoint:
    id: int
    pose: Pose = field(default_factory=Pose)
    is_search_area: bool = False

    @property
    def name(self) -> str:
        return str(self.id)


class WaypointStore:
    """
    Append-only collection of waypoints keyed by sequential ids.

    server is an interactive marker server (insert / applyChanges), and
    make_marker(name, pose) builds the marker message that gets inserted.
    """

    def __init__(self, server, make_marker: Callable, logger):
        self.server = server
        self.make_marker = make_marker
        self.logger = logger
        self.next_id = 0
        self._waypoints: Dict[str, Waypoint] = {}

    def __len__(self):
        return len(self._waypoints)

    def create_waypoint(self, pose: Pose, feedback_callback=None) -> int:
        """Store a new waypoint at pose and publish its marker. Returns the id."""
        waypoint = Waypoint(id=self.next_id, pose=replace(pose))
        self.next_id += 1
        self._waypoints[waypoint.name] = waypoint

        int_marker = self.make_marker(waypoint.name, waypoint.pose)
        self.server.insert(int_marker, feedback_callback=feedback_callback)
        self.server.applyChanges()

        self.logger.info(
            f'Added waypoint {waypoint.name} at '
            f'({pose.x:.2f}, {pose.y:.2f}), yaw={pose.yaw:.2f} rad')
        return waypoint.id

    def get(self, name: str) -> Waypoint:
        return self._waypoints[name]

    def waypoints(self) -> List[Waypoint]:
        """All waypoints in id order."""
        return sorted(self._waypoints.values(), key=lambda wp: wp.id)


class MarkerFeedbackSink:
    """Applies operator edits reported by the marker server to the store."""

    def __init__(self, store: WaypointStore, server, logger):
        self.store = store
        self.server = server
        self.logger = logger

    def on_feedback(self, name: str, event: FeedbackEvent, pose: Pose):
        """
        Handle one feedback event for marker `name`.

        The marker server only reports names it was given, so `name` must
        refer to a stored waypoint; an unknown name raises KeyError.
        """
        if event == FeedbackEvent.POSE_UPDATE:
            waypoint = self.store.get(name)
            waypoint.pose = replace(pose)
            self.logger.info(
                f"Feedback from marker '{name}': pose changed\n"
                f'position = {pose.x}, {pose.y}, {pose.z}\n'
                f'orientation = {pose.qx}, {pose.qy}, {pose.qz}, {pose.qw}')
        else:
            self.logger.debug(f"Feedback from marker '{name}': {FeedbackEvent(event).name}")

        self.server.applyChanges()
