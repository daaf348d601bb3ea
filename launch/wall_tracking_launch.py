"""
Launch file for the wall tracking node (ROS2 Jazzy).

Starts the wall_tracking action server with the shipped parameters.
Tracking begins only when a goal is sent:

    ros2 action send_goal /wall_tracking wall_tracking_msgs/action/WallTracking {} --feedback

Usage:
    ros2 launch wall_tracking wall_tracking_launch.py
    ros2 launch wall_tracking wall_tracking_launch.py params_file:=/path/to/params.yaml
    ros2 launch wall_tracking wall_tracking_launch.py scan_topic:=/lidar/scan
"""

import os

from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    default_params = os.path.join(
        get_package_share_directory('wall_tracking'),
        'config', 'wall_tracking.yaml')

    # ── Launch Arguments ────────────────────────────────────────────
    params_file_arg = DeclareLaunchArgument(
        'params_file', default_value=default_params,
        description='Parameter file for the wall tracking node')
    scan_topic_arg = DeclareLaunchArgument(
        'scan_topic', default_value='/scan',
        description='LaserScan input topic')
    gnss_topic_arg = DeclareLaunchArgument(
        'gnss_topic', default_value='/gnss/fix',
        description='NavSatFix input topic')

    wall_tracking = Node(
        package='wall_tracking',
        executable='wall_tracking_node',
        name='wall_tracking_node',
        output='screen',
        parameters=[LaunchConfiguration('params_file')],
        remappings=[
            ('scan', LaunchConfiguration('scan_topic')),
            ('gnss/fix', LaunchConfiguration('gnss_topic')),
        ]
    )

    return LaunchDescription([
        params_file_arg,
        scan_topic_arg,
        gnss_topic_arg,
        wall_tracking,
    ])
