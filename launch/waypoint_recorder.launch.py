"""
Waypoint Recorder Launch File

Starts the waypoint generator (drops cubes along the robot path) and,
optionally, the waypoint saver (writes them to CSV once the reach
threshold markers arrive, then exits).

Usage:
  # Record waypoints while driving, save later
  ros2 launch waypoint_recorder waypoint_recorder.launch.py use_saver:=false

  # Save into a specific directory
  ros2 launch waypoint_recorder waypoint_recorder.launch.py output_dir:=/home/robot/waypoints
"""

import os
from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.conditions import IfCondition
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node
from launch_ros.parameter_descriptions import ParameterValue


def generate_launch_description():

    pkg_share = get_package_share_directory('waypoint_recorder')

    # ========== Launch Arguments ==========

    params_file_arg = DeclareLaunchArgument(
        'params_file',
        default_value=os.path.join(pkg_share, 'config', 'waypoint_recorder.yaml'),
        description='Parameter file for the generator and saver'
    )
    params_file = LaunchConfiguration('params_file')

    output_dir_arg = DeclareLaunchArgument(
        'output_dir',
        default_value='',
        description='Directory for the saved CSV (empty = working directory)'
    )
    output_dir = LaunchConfiguration('output_dir')

    use_saver_arg = DeclareLaunchArgument(
        'use_saver',
        default_value='true',
        description='Launch the waypoint saver alongside the generator'
    )
    use_saver = LaunchConfiguration('use_saver')

    # ========== Nodes ==========

    waypoint_generator = Node(
        package='waypoint_recorder',
        executable='waypoint_generator',
        name='waypoint_generator',
        output='screen',
        parameters=[params_file],
    )

    waypoint_saver = Node(
        package='waypoint_recorder',
        executable='waypoint_saver',
        name='waypoint_saver',
        output='screen',
        parameters=[params_file, {'output_dir': ParameterValue(output_dir, value_type=str)}],
        condition=IfCondition(use_saver),
    )

    return LaunchDescription([
        params_file_arg,
        output_dir_arg,
        use_saver_arg,

        waypoint_generator,
        waypoint_saver,
    ])
