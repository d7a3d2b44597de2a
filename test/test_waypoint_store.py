import pytest

from waypoint_recorder.geometry import Pose, pose_from_xy_yaw
from waypoint_recorder.pose_gate import PoseDeltaGate
from waypoint_recorder.waypoint_store import (
    FeedbackEvent,
    MarkerFeedbackSink,
    Waypoint,
    WaypointStore,
)


@pytest.fixture
def store(server, make_marker, logger):
    return WaypointStore(server, make_marker, logger)


@pytest.fixture
def sink(store, server, logger):
    return MarkerFeedbackSink(store, server, logger)


def test_ids_are_sequential_from_zero(store):
    ids = [store.create_waypoint(pose_from_xy_yaw(float(i), 0.0, 0.0)) for i in range(12)]
    assert ids == list(range(12))
    assert store.next_id == 12
    assert len(store) == 12


def test_name_round_trips_to_id(store):
    for i in range(11):
        store.create_waypoint(Pose(x=float(i)))
    for waypoint in store.waypoints():
        assert int(waypoint.name) == waypoint.id
        assert store.get(waypoint.name) is waypoint


def test_create_publishes_marker_and_applies(store, server):
    callback = object()
    pose = pose_from_xy_yaw(1.5, -2.0, 0.3)
    store.create_waypoint(pose, feedback_callback=callback)

    assert list(server.markers) == ['0']
    assert server.markers['0']['pose'] == pose
    assert server.callbacks['0'] is callback
    assert server.apply_count == 1


def test_new_waypoint_defaults(store):
    store.create_waypoint(Pose(x=1.0))
    waypoint = store.get('0')
    assert waypoint == Waypoint(id=0, pose=Pose(x=1.0), is_search_area=False)


def test_store_keeps_its_own_copy_of_the_pose(store):
    pose = Pose(x=1.0)
    store.create_waypoint(pose)
    pose.x = 99.0
    assert store.get('0').pose.x == 1.0


def test_waypoints_in_id_order(store):
    for i in range(15):
        store.create_waypoint(Pose(x=float(i)))
    assert [wp.id for wp in store.waypoints()] == list(range(15))


def test_pose_update_overwrites(store, sink):
    store.create_waypoint(Pose())
    first = pose_from_xy_yaw(1.0, 2.0, 0.5)
    second = pose_from_xy_yaw(-3.0, 4.0, -1.0)

    sink.on_feedback('0', FeedbackEvent.POSE_UPDATE, first)
    sink.on_feedback('0', FeedbackEvent.POSE_UPDATE, second)

    assert store.get('0').pose == second


def test_repeated_pose_update_is_idempotent(store, sink):
    store.create_waypoint(Pose())
    update = pose_from_xy_yaw(1.0, 2.0, 0.5)
    for _ in range(3):
        sink.on_feedback('0', FeedbackEvent.POSE_UPDATE, update)
    assert store.get('0').pose == update


def test_pose_update_only_touches_named_waypoint(store, sink):
    store.create_waypoint(Pose(x=0.0))
    store.create_waypoint(Pose(x=5.0))
    sink.on_feedback('1', FeedbackEvent.POSE_UPDATE, Pose(x=7.0))
    assert store.get('0').pose == Pose(x=0.0)
    assert store.get('1').pose == Pose(x=7.0)


@pytest.mark.parametrize('event', [
    FeedbackEvent.KEEP_ALIVE,
    FeedbackEvent.MENU_SELECT,
    FeedbackEvent.BUTTON_CLICK,
    FeedbackEvent.MOUSE_DOWN,
    FeedbackEvent.MOUSE_UP,
])
def test_other_events_do_not_mutate(store, sink, event):
    store.create_waypoint(Pose(x=1.0))
    sink.on_feedback('0', event, Pose(x=9.0))
    assert store.get('0').pose == Pose(x=1.0)


def test_feedback_always_applies_changes(store, sink, server):
    store.create_waypoint(Pose())
    before = server.apply_count
    sink.on_feedback('0', FeedbackEvent.POSE_UPDATE, Pose(x=1.0))
    sink.on_feedback('0', FeedbackEvent.MOUSE_UP, Pose(x=1.0))
    assert server.apply_count == before + 2


def test_feedback_event_accepts_raw_message_values():
    assert FeedbackEvent(1) is FeedbackEvent.POSE_UPDATE


def test_feedback_logs_pose_change(store, sink, caplog):
    store.create_waypoint(Pose())
    sink.on_feedback('0', FeedbackEvent.POSE_UPDATE, Pose(x=1.25))
    assert "Feedback from marker '0': pose changed" in caplog.text
    assert 'position = 1.25' in caplog.text


def test_gate_driven_creation(store):
    gate = PoseDeltaGate()
    poses = [pose_from_xy_yaw(x, 0.0, 0.0) for x in (0.0, 1.0, 3.0, 4.0, 5.5)]
    for pose in poses:
        if gate.offer(pose):
            store.create_waypoint(pose)
    assert [wp.pose.x for wp in store.waypoints()] == [0.0, 3.0, 5.5]
    assert [wp.name for wp in store.waypoints()] == ['0', '1', '2']
