"""
Static configuration for the wall tracking controller.

Values come from ROS2 parameters (see config/wall_tracking.yaml). The
angular geometry used by the decider is derived here once, at startup.
"""

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class WallTrackingConfig:
    """Controller parameters plus geometry derived from them."""

    # Velocity limits
    max_linear_vel: float = 0.5            # m/s
    max_angular_vel: float = 1.0           # rad/s (turn left)
    min_angular_vel: float = -1.0          # rad/s (turn right)

    # Distances (m)
    distance_from_wall: float = 1.0        # target standoff, left wall
    distance_to_stop: float = 0.6
    distance_to_skip: float = 0.5
    open_place_distance: float = 5.0
    wheel_separation: float = 0.4

    # Lateral PID
    sampling_period: float = 0.1           # s
    kp: float = 0.8
    ki: float = 0.0
    kd: float = 0.005
    integral_limit: float = 0.0            # <= 0: unbounded

    # Lateral measurement window (deg, left side)
    start_deg_lateral: int = 30
    end_deg_lateral: int = 90

    # Rays inside the stopping cone needed to trigger front avoidance
    stop_ray_th: float = 5.0

    cmd_vel_topic_name: str = 'cmd_vel'
    # Cancellation polling granularity of the action loop (s)
    poll_interval: float = 0.05

    front_stop_deg: float = field(init=False)
    front_left_wall_deg: float = field(init=False)

    def __post_init__(self):
        if self.sampling_period <= 0.0:
            raise ValueError('sampling_period must be positive')
        if self.poll_interval <= 0.0:
            raise ValueError('poll_interval must be positive')
        if self.max_linear_vel < 0.0:
            raise ValueError('max_linear_vel must not be negative')
        if self.min_angular_vel > self.max_angular_vel:
            raise ValueError(
                f'min_angular_vel ({self.min_angular_vel}) exceeds '
                f'max_angular_vel ({self.max_angular_vel})')
        if self.start_deg_lateral % 180 == 0:
            raise ValueError('start_deg_lateral must not be a multiple of 180')

        # Half angle of the stopping cone, measured to the right wheel edge
        front_stop = math.degrees(math.atan2(
            -self.wheel_separation / 2.0, self.distance_to_stop))

        # Bearing of the point on the left wall just past the skip distance
        y = self.distance_from_wall
        x = self.distance_to_skip + y / math.tan(
            math.radians(self.start_deg_lateral))
        front_left_wall = math.degrees(math.atan2(y, x))

        object.__setattr__(self, 'front_stop_deg', front_stop)
        object.__setattr__(self, 'front_left_wall_deg', front_left_wall)
