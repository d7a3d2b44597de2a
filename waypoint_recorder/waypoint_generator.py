#!/usr/bin/env python3
"""
Waypoint Generator - drops editable waypoints along the robot's path

Usage:
  1. Start localization (AMCL) so /amcl_pose is published
  2. Run this node and drive the robot around
  3. Every time the robot moves more than dist_th or turns more than yaw_th,
     a green cube appears in RViz (InteractiveMarkers display, namespace /cube)
  4. Drag / rotate the cubes to fine-tune them, then run waypoint_saver

Parameters:
  dist_th           distance threshold [m]        (default 2.0)
  yaw_th            yaw threshold [rad]           (default 30 deg)
  frame_id          frame of the markers          (default map)
  server_namespace  interactive marker namespace  (default cube)
  pose_topic        localization pose topic       (default /amcl_pose)
"""

import math

import rclpy
from rclpy.node import Node
from geometry_msgs.msg import PoseWithCovarianceStamped
from interactive_markers import InteractiveMarkerServer
from visualization_msgs.msg import InteractiveMarkerFeedback

from waypoint_recorder.markers import make_waypoint_marker, pose_from_msg
from waypoint_recorder.pose_gate import PoseDeltaGate
from waypoint_recorder.waypoint_store import FeedbackEvent, MarkerFeedbackSink, WaypointStore


class WaypointGenerator(Node):
    def __init__(self):
        super().__init__('waypoint_generator')

        # Parameters
        self.declare_parameter('dist_th', 2.0)
        self.declare_parameter('yaw_th', math.radians(30.0))
        self.declare_parameter('frame_id', 'map')
        self.declare_parameter('server_namespace', 'cube')
        self.declare_parameter('pose_topic', '/amcl_pose')

        dist_th = self.get_parameter('dist_th').value
        yaw_th = self.get_parameter('yaw_th').value
        self.frame_id = self.get_parameter('frame_id').value
        server_namespace = self.get_parameter('server_namespace').value
        pose_topic = self.get_parameter('pose_topic').value

        # One marker server for the whole node, shared by store and feedback sink
        self.server = InteractiveMarkerServer(self, server_namespace)

        self.gate = PoseDeltaGate(dist_th, yaw_th)
        self.store = WaypointStore(
            self.server,
            lambda name, pose: make_waypoint_marker(name, pose, self.frame_id),
            self.get_logger())
        self.feedback_sink = MarkerFeedbackSink(self.store, self.server, self.get_logger())

        self.pose_sub = self.create_subscription(
            PoseWithCovarianceStamped,
            pose_topic,
            self.pose_callback,
            1
        )

        self.get_logger().info('Waypoint generator started')
        self.get_logger().info(f'  Pose topic: {pose_topic}')
        self.get_logger().info(f'  Distance threshold: {dist_th:.2f} m')
        self.get_logger().info(f'  Yaw threshold: {yaw_th:.4f} rad ({math.degrees(yaw_th):.1f}°)')
        self.get_logger().info(f'  Marker namespace: {server_namespace} (frame: {self.frame_id})')

    def pose_callback(self, msg: PoseWithCovarianceStamped):
        """Add a waypoint when the new pose passes the gate."""
        pose = pose_from_msg(msg.pose.pose)
        if self.gate.offer(pose):
            self.store.create_waypoint(pose, feedback_callback=self.process_feedback)

    def process_feedback(self, feedback: InteractiveMarkerFeedback):
        self.get_logger().debug(
            f"Feedback from marker '{feedback.marker_name}' / control '{feedback.control_name}' "
            f'frame: {feedback.header.frame_id} '
            f'time: {feedback.header.stamp.sec}sec, {feedback.header.stamp.nanosec} nsec')
        self.feedback_sink.on_feedback(
            feedback.marker_name,
            FeedbackEvent(feedback.event_type),
            pose_from_msg(feedback.pose))

    def destroy_node(self):
        self.server.shutdown()
        super().destroy_node()


def main(args=None):
    rclpy.init(args=args)
    node = WaypointGenerator()

    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
