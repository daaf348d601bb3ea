"""
Range scan snapshots for the wall tracking controller.

A RangeScan is built once per LaserScan message and never modified
afterwards. The ScanBuffer hands the latest snapshot from the scan
subscription to the action loop by swapping a single reference under a
condition variable, so readers never see a half-written scan.

Bearings are in degrees, 0 = robot front, positive = left (CCW),
wrapped to [-180, 180).
"""

import math
import threading

import numpy as np


class InvalidScanData(ValueError):
    """Raised when a scan (or a requested part of it) holds no usable samples."""


def wrap_degrees(angle):
    """Wrap an angle in degrees to [-180, 180)."""
    return (angle + 180.0) % 360.0 - 180.0


class RangeScan:
    """Immutable snapshot of one laser scan."""

    # Tolerance for float noise in bearings computed from angle_increment
    _EPS = 1e-6

    def __init__(self, ranges, angle_min, angle_increment,
                 range_min=0.0, range_max=float('inf'), stamp=None):
        raw = np.asarray(ranges, dtype=float)
        if raw.ndim != 1 or raw.size == 0:
            raise InvalidScanData('scan has no range samples')
        if not math.isfinite(angle_min):
            raise InvalidScanData(f'invalid angle_min: {angle_min}')
        if not math.isfinite(angle_increment) or angle_increment <= 0.0:
            raise InvalidScanData(
                f'invalid angle_increment: {angle_increment}')

        self.size = raw.size
        self.range_min = float(range_min)
        self.range_max = float(range_max)
        self.stamp = stamp
        self.angle_min_deg = math.degrees(angle_min)
        self.increment_deg = math.degrees(angle_increment)
        self.full_revolution = (
            self.size * self.increment_deg >= 360.0 - self.increment_deg / 2.0)

        bearings = wrap_degrees(
            self.angle_min_deg + np.arange(self.size) * self.increment_deg)

        with np.errstate(invalid='ignore'):
            valid = (np.isfinite(raw)
                     & (raw >= self.range_min)
                     & (raw <= self.range_max))
        # No return reads as open space for threshold queries
        cleaned = np.where(valid, raw, self.range_max)

        for array in (bearings, valid, cleaned):
            array.setflags(write=False)
        self.bearings = bearings
        self.valid = valid
        self.ranges = cleaned

    @classmethod
    def from_msg(cls, msg):
        """Build a snapshot from a sensor_msgs/LaserScan message."""
        return cls(
            msg.ranges, msg.angle_min, msg.angle_increment,
            range_min=msg.range_min, range_max=msg.range_max,
            stamp=msg.header.stamp)

    def index_of(self, bearing):
        """Index of the sample nearest to ``bearing`` (degrees)."""
        offset = (bearing - self.angle_min_deg) % 360.0
        index = int(round(offset / self.increment_deg))
        if self.full_revolution:
            return index % self.size
        if index >= self.size:
            # Outside a partial scan: snap to the nearer edge
            before_start = 360.0 - offset
            past_end = offset - (self.size - 1) * self.increment_deg
            return 0 if before_start < past_end else self.size - 1
        return index

    def range_at(self, bearing):
        """Cleaned range of the sample nearest to ``bearing``."""
        return float(self.ranges[self.index_of(bearing)])

    def sector(self, start, end):
        """Indices of samples on the CCW arc from ``start`` to ``end``."""
        span = (end - start) % 360.0
        if span == 0.0 and end != start:
            span = 360.0
        offsets = (self.bearings - start + self._EPS) % 360.0
        return np.flatnonzero(offsets <= span + 2 * self._EPS)

    def neighbourhood(self, bearing, half_width_deg):
        """Indices around ``bearing``, at least one sample on each side."""
        steps = max(1, int(round(half_width_deg / self.increment_deg)))
        centre = self.index_of(bearing)
        indices = np.arange(centre - steps, centre + steps + 1)
        if self.full_revolution:
            return indices % self.size
        return np.unique(np.clip(indices, 0, self.size - 1))


class ScanBuffer:
    """Latest-scan handoff between the scan callback and the action loop."""

    def __init__(self):
        self._cond = threading.Condition()
        self._scan = None
        self._seq = 0

    def publish(self, scan):
        with self._cond:
            self._scan = scan
            self._seq += 1
            self._cond.notify_all()

    def latest(self):
        with self._cond:
            return self._scan

    def wait_newer(self, seq, timeout):
        """Wait for a scan newer than ``seq``; None on timeout."""
        with self._cond:
            if not self._cond.wait_for(lambda: self._seq > seq, timeout):
                return None
            return self._scan, self._seq
