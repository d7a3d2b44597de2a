"""
Conversions between ROS messages and the waypoint recorder core types.
"""

from geometry_msgs.msg import Pose as PoseMsg
from visualization_msgs.msg import InteractiveMarker, InteractiveMarkerControl, Marker

from waypoint_recorder.exporter import MarkerSnapshot
from waypoint_recorder.geometry import Pose


WAYPOINT_COLOR = (0.05, 0.80, 0.02, 1.0)
WAYPOINT_SCALE = 1.0

# Index of the control whose first marker carries the search-area colour
SEARCH_AREA_CONTROL = 2


def pose_from_msg(msg: PoseMsg) -> Pose:
    return Pose(
        x=msg.position.x,
        y=msg.position.y,
        z=msg.position.z,
        qx=msg.orientation.x,
        qy=msg.orientation.y,
        qz=msg.orientation.z,
        qw=msg.orientation.w,
    )


def pose_to_msg(pose: Pose) -> PoseMsg:
    msg = PoseMsg()
    msg.position.x = float(pose.x)
    msg.position.y = float(pose.y)
    msg.position.z = float(pose.z)
    msg.orientation.x = float(pose.qx)
    msg.orientation.y = float(pose.qy)
    msg.orientation.z = float(pose.qz)
    msg.orientation.w = float(pose.qw)
    return msg


def make_waypoint_marker(name: str, pose: Pose, frame_id='map') -> InteractiveMarker:
    """Cube marker that can be dragged and rotated in RViz."""
    int_marker = InteractiveMarker()
    int_marker.header.frame_id = frame_id
    int_marker.name = name
    int_marker.pose = pose_to_msg(pose)
    int_marker.scale = WAYPOINT_SCALE

    cube = Marker()
    cube.type = Marker.CUBE
    cube.scale.x = int_marker.scale
    cube.scale.y = int_marker.scale
    cube.scale.z = int_marker.scale
    cube.color.r, cube.color.g, cube.color.b, cube.color.a = WAYPOINT_COLOR

    control = InteractiveMarkerControl()
    control.always_visible = True
    control.orientation_mode = InteractiveMarkerControl.VIEW_FACING
    control.interaction_mode = InteractiveMarkerControl.MOVE_ROTATE
    control.independent_marker_orientation = True
    control.markers.append(cube)
    int_marker.controls.append(control)

    return int_marker


def is_search_area(int_marker: InteractiveMarker) -> bool:
    """
    Search areas are flagged upstream by pushing the red channel of the third
    control's marker above 1.0. Markers without that control are normal
    waypoints.
    """
    if len(int_marker.controls) <= SEARCH_AREA_CONTROL:
        return False
    markers = int_marker.controls[SEARCH_AREA_CONTROL].markers
    if not markers:
        return False
    return markers[0].color.r > 1.0


def snapshot_from_marker(int_marker: InteractiveMarker) -> MarkerSnapshot:
    return MarkerSnapshot(
        name=int_marker.name,
        pose=pose_from_msg(int_marker.pose),
        is_search_area=is_search_area(int_marker),
    )
