"""
Lateral PID controller.

Turns the measured distance to the tracked wall into an angular velocity
correction. The derivative term uses the raw error over the sampling
period, not the change in error, to stay compatible with the tuned gains
the robot has been running with.
"""


class LateralController:
    """Single-axis PID on the wall distance."""

    def __init__(self, kp, ki, kd, target, sampling_period,
                 integral_limit=None):
        if sampling_period <= 0.0:
            raise ValueError(
                f'sampling_period must be positive, got {sampling_period}')
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.target = target
        self.sampling_period = sampling_period
        # None or <= 0 leaves the integral unbounded
        self.integral_limit = integral_limit
        self.integral = 0.0

    def reset(self):
        self.integral = 0.0

    def correct(self, measured):
        """Angular velocity correction for a measured wall distance."""
        error = measured - self.target

        self.integral += error * self.sampling_period
        if self.integral_limit is not None and self.integral_limit > 0.0:
            self.integral = max(-self.integral_limit,
                                min(self.integral_limit, self.integral))

        derivative = error / self.sampling_period

        return error * self.kp + self.integral * self.ki + derivative * self.kd
