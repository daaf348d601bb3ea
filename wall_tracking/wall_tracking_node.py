"""
Wall Tracking Node for ROS2 Jazzy.

Reactive left-wall following with an outdoor open-place mode, exposed as
the ``wall_tracking`` action. The behaviour runs only while a goal is
active; cancel the goal to stop the robot.

Indoors (no GNSS quality) the robot follows the wall on its left with a
PID on the lateral distance, drives straight across doorway-like gaps and
backs off to the right when something blocks the front. Outdoors it heads
for the most open 30 deg sector ahead, falling back to wall following
when nothing ahead is open.

The open_place_detection label is "Indoor" for every indoor cycle and
for front avoidance (indoor or outdoor), "Front" / "Left" / "Right" for
the open sector chosen outdoors, and "Not open place" when no sector ahead
is open enough.

Subscribes:
    /scan      (sensor_msgs/LaserScan)
    /gnss/fix  (sensor_msgs/NavSatFix)

Publishes:
    <cmd_vel_topic_name>   (geometry_msgs/Twist)
    /open_place_arrived    (std_msgs/Bool)    every scan
    /open_place_detection  (std_msgs/String)  every control cycle

Action:
    wall_tracking  (wall_tracking_msgs/action/WallTracking)
"""

import rclpy
from rclpy.action import ActionServer, CancelResponse, GoalResponse
from rclpy.callback_groups import ReentrantCallbackGroup
from rclpy.executors import MultiThreadedExecutor
from rclpy.node import Node
from geometry_msgs.msg import Twist
from sensor_msgs.msg import LaserScan, NavSatFix
from std_msgs.msg import Bool, String
from wall_tracking_msgs.action import WallTracking

from .config import WallTrackingConfig
from .decider import clamp_command, decide
from .environment import EnvironmentClassifier
from .pid import LateralController
from .scan_analyzer import open_area_score
from .scan_data import InvalidScanData, RangeScan, ScanBuffer
from .task_runner import TaskRunner


class WallTrackingNode(Node):
    """Wall tracking action server."""

    def __init__(self):
        super().__init__('wall_tracking_node')

        self.config = self._load_config()

        # State
        self.scans = ScanBuffer()
        self.environment = EnvironmentClassifier()
        self.controller = LateralController(
            self.config.kp, self.config.ki, self.config.kd,
            self.config.distance_from_wall, self.config.sampling_period,
            integral_limit=self.config.integral_limit)
        self.scan_initialized = False

        # Publishers
        self.cmd_vel_pub = self.create_publisher(
            Twist, self.config.cmd_vel_topic_name, 10)
        self.open_place_arrived_pub = self.create_publisher(
            Bool, 'open_place_arrived', 10)
        self.open_place_detection_pub = self.create_publisher(
            String, 'open_place_detection', 10)

        # Subscribers
        self.create_subscription(LaserScan, 'scan', self._scan_callback, 10)
        self.create_subscription(
            NavSatFix, 'gnss/fix', self._gnss_callback, 10)

        # Action server, in its own group so the loop runs beside callbacks
        self.runner = TaskRunner(
            self.scans, self._control_cycle, self._publish_decision,
            self._stop, lambda: self.environment.open_place,
            WallTracking.Feedback, WallTracking.Result, self.get_logger(),
            is_alive=rclpy.ok, poll_interval=self.config.poll_interval)
        self.action_server = ActionServer(
            self, WallTracking, 'wall_tracking',
            execute_callback=self.runner.execute,
            goal_callback=self._goal_callback,
            cancel_callback=self._cancel_callback,
            callback_group=ReentrantCallbackGroup())

        self.get_logger().info(
            f'Wall tracking ready: distance_from_wall='
            f'{self.config.distance_from_wall}m, '
            f'max_linear_vel={self.config.max_linear_vel}m/s, '
            f'front_stop={self.config.front_stop_deg:.1f}deg, '
            f'front_left_wall={self.config.front_left_wall_deg:.1f}deg')

    def _load_config(self):
        """Declare the node parameters and collect them into a config."""
        defaults = WallTrackingConfig()

        self.declare_parameter('max_linear_vel', defaults.max_linear_vel)
        self.declare_parameter('max_angular_vel', defaults.max_angular_vel)
        self.declare_parameter('min_angular_vel', defaults.min_angular_vel)
        self.declare_parameter('distance_from_wall', defaults.distance_from_wall)
        self.declare_parameter('distance_to_stop', defaults.distance_to_stop)
        self.declare_parameter('distance_to_skip', defaults.distance_to_skip)
        self.declare_parameter('open_place_distance', defaults.open_place_distance)
        self.declare_parameter('wheel_separation', defaults.wheel_separation)
        self.declare_parameter('sampling_period', defaults.sampling_period)
        self.declare_parameter('kp', defaults.kp)
        self.declare_parameter('ki', defaults.ki)
        self.declare_parameter('kd', defaults.kd)
        self.declare_parameter('integral_limit', defaults.integral_limit)
        self.declare_parameter('start_deg_lateral', defaults.start_deg_lateral)
        self.declare_parameter('end_deg_lateral', defaults.end_deg_lateral)
        self.declare_parameter('stop_ray_th', defaults.stop_ray_th)
        self.declare_parameter('cmd_vel_topic_name', defaults.cmd_vel_topic_name)
        self.declare_parameter('poll_interval', defaults.poll_interval)

        def double(name):
            return self.get_parameter(name).get_parameter_value().double_value

        def integer(name):
            return self.get_parameter(name).get_parameter_value().integer_value

        return WallTrackingConfig(
            max_linear_vel=double('max_linear_vel'),
            max_angular_vel=double('max_angular_vel'),
            min_angular_vel=double('min_angular_vel'),
            distance_from_wall=double('distance_from_wall'),
            distance_to_stop=double('distance_to_stop'),
            distance_to_skip=double('distance_to_skip'),
            open_place_distance=double('open_place_distance'),
            wheel_separation=double('wheel_separation'),
            sampling_period=double('sampling_period'),
            kp=double('kp'),
            ki=double('ki'),
            kd=double('kd'),
            integral_limit=double('integral_limit'),
            start_deg_lateral=integer('start_deg_lateral'),
            end_deg_lateral=integer('end_deg_lateral'),
            stop_ray_th=double('stop_ray_th'),
            cmd_vel_topic_name=self.get_parameter(
                'cmd_vel_topic_name').get_parameter_value().string_value,
            poll_interval=double('poll_interval'),
        )

    # ── Subscriptions ───────────────────────────────────────────────

    def _scan_callback(self, msg):
        """Publish a new scan snapshot and update the open-place flag."""
        try:
            scan = RangeScan.from_msg(msg)
        except InvalidScanData as e:
            self.get_logger().warn(f'Dropping scan: {e}')
            return
        self.scans.publish(scan)

        if not self.scan_initialized:
            self.scan_initialized = True
            self.get_logger().info(
                f'Scan data initialized: {scan.size} rays, '
                f'{scan.increment_deg:.2f}deg resolution')

        score = open_area_score(
            scan, -90.0, 90.0, self.config.open_place_distance)
        open_place = self.environment.update_open_place(score)

        arrived = Bool()
        arrived.data = open_place
        self.open_place_arrived_pub.publish(arrived)

    def _gnss_callback(self, msg):
        """Outdoor whenever the fix reports a known covariance type."""
        was_outdoor = self.environment.outdoor
        outdoor = self.environment.update_outdoor(
            msg.position_covariance_type == NavSatFix.COVARIANCE_TYPE_UNKNOWN)
        if outdoor != was_outdoor:
            self.get_logger().info(
                'Environment: ' + ('outdoor' if outdoor else 'indoor'))

    # ── Control cycle ───────────────────────────────────────────────

    def _control_cycle(self, scan):
        return decide(scan, self.environment.outdoor, self.config,
                      self.controller)

    def _publish_decision(self, decision):
        self.pub_cmd_vel(decision.linear, decision.angular)

        detection = String()
        detection.data = decision.label
        self.open_place_detection_pub.publish(detection)

        self.get_logger().debug(
            f'{decision.mode.name}: lin={decision.linear:.2f} '
            f'ang={decision.angular:.2f}')

    def _stop(self):
        self.pub_cmd_vel(0.0, 0.0)

    def pub_cmd_vel(self, linear_x, angular_z):
        """Publish a command clamped to the velocity limits."""
        twist = Twist()
        twist.linear.x, twist.angular.z = clamp_command(
            linear_x, angular_z, self.config)
        self.cmd_vel_pub.publish(twist)

    # ── Action callbacks ────────────────────────────────────────────

    def _goal_callback(self, goal_request):
        return GoalResponse.ACCEPT

    def _cancel_callback(self, goal_handle):
        self.get_logger().info('Received request to cancel goal')
        return CancelResponse.ACCEPT

    def destroy_node(self):
        """Stop the robot on shutdown."""
        self.cmd_vel_pub.publish(Twist())
        self.action_server.destroy()
        super().destroy_node()


def main(args=None):
    rclpy.init(args=args)
    node = WallTrackingNode()
    executor = MultiThreadedExecutor()
    executor.add_node(node)
    try:
        executor.spin()
    except KeyboardInterrupt:
        pass
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
