#!/usr/bin/env python3
"""
Waypoint Saver - writes the edited waypoints to a timestamped CSV and exits

Waits until the reach threshold markers have been received at least once,
then fetches the full set of interactive markers from the waypoint
generator's marker server and saves them.

Subscribes:
  /reach_threshold_markers  (visualization_msgs/MarkerArray, scale.x = radius)
Calls:
  /cube/get_interactive_markers  (visualization_msgs/srv/GetInteractiveMarkers)

Output line format (no header):
  x, y, 0.0, qx, qy, qz, qw, is_search_area, reach_diameter
"""

import rclpy
from rclpy.node import Node
from rclpy.task import Future
from visualization_msgs.msg import MarkerArray
from visualization_msgs.srv import GetInteractiveMarkers

from waypoint_recorder.exporter import ExportState, WaypointExporter, timestamped_filename
from waypoint_recorder.markers import snapshot_from_marker
from waypoint_recorder.reach_radius import ReachRadiusCache


class WaypointSaver(Node):
    def __init__(self):
        super().__init__('waypoint_saver')

        # Parameters
        self.declare_parameter('server_namespace', 'cube')
        self.declare_parameter('reach_topic', '/reach_threshold_markers')
        self.declare_parameter('output_dir', '')
        self.declare_parameter('poll_period', 1.0)

        server_namespace = self.get_parameter('server_namespace').value
        reach_topic = self.get_parameter('reach_topic').value
        output_dir = self.get_parameter('output_dir').value
        poll_period = self.get_parameter('poll_period').value

        self.output_file = timestamped_filename(directory=output_dir)

        # Completed once the CSV has been written (or failed)
        self.export_done = Future()

        self.cache = ReachRadiusCache(self.get_logger())
        self.exporter = WaypointExporter(
            self.cache,
            self.output_file,
            self.get_logger(),
            on_complete=self.export_done.set_result)

        self.reach_sub = self.create_subscription(
            MarkerArray,
            reach_topic,
            self.reach_markers_callback,
            1
        )

        self.markers_client = self.create_client(
            GetInteractiveMarkers, f'{server_namespace}/get_interactive_markers')
        self.snapshot_future = None

        self.create_timer(poll_period, self.request_snapshot)

        self.get_logger().info('Waypoint saver started')
        self.get_logger().info(f'  Reach markers: {reach_topic}')
        self.get_logger().info(f'  Marker namespace: {server_namespace}')
        self.get_logger().info(f'  Output file: {self.output_file}')

    def reach_markers_callback(self, msg: MarkerArray):
        self.cache.replace([marker.scale.x for marker in msg.markers], len(msg.markers))

    def request_snapshot(self):
        """Ask the marker server for all waypoints once the radii are in."""
        if self.export_done.done() or self.snapshot_future is not None:
            return

        if self.exporter.state == ExportState.AWAITING_RADII:
            self.get_logger().info('Waiting for reach_markers')
            return

        if not self.markers_client.service_is_ready():
            self.get_logger().info('Waiting for interactive marker server...')
            return

        self.snapshot_future = self.markers_client.call_async(GetInteractiveMarkers.Request())
        self.snapshot_future.add_done_callback(self.snapshot_callback)

    def snapshot_callback(self, future):
        self.snapshot_future = None
        try:
            response = future.result()
            snapshots = [snapshot_from_marker(m) for m in response.markers]
            self.exporter.handle_snapshot(snapshots)
        except Exception as e:
            self.get_logger().error(f'Failed to save waypoints: {e}')
            self.export_done.set_exception(e)


def main(args=None):
    rclpy.init(args=args)
    node = WaypointSaver()

    try:
        rclpy.spin_until_future_complete(node, node.export_done)
        if node.export_done.done():
            # Re-raises a failed export
            node.export_done.result()
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
