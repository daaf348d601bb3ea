"""
Geometric queries over a RangeScan.

All bearings are in degrees (0 = front, positive = left). None of these
functions modify the scan.
"""

import numpy as np

from .scan_data import InvalidScanData

# Half width of the neighbourhood inspected around a single bearing
NEIGHBOUR_DEG = 3.0
# Max spread (m) of neighbouring ranges for a bearing to count as stable
NOISE_TOLERANCE = 0.2


def wall_distance(scan, start, end):
    """Mean valid range over the sector [start, end]."""
    indices = scan.sector(start, end)
    if indices.size == 0:
        raise InvalidScanData(
            f'no samples between {start:.1f} and {end:.1f} deg')
    valid = indices[scan.valid[indices]]
    if valid.size == 0:
        return scan.range_max
    return float(np.mean(scan.ranges[valid]))


def front_obstacle_score(scan, bearing, reference_distance):
    """Count rays in the cone [-|bearing|, |bearing|] at or inside the reference."""
    half = abs(bearing)
    indices = scan.sector(-half, half)
    return float(np.count_nonzero(scan.ranges[indices] <= reference_distance))


def conflict_detected(scan, bearing, threshold):
    """True if any sample around ``bearing`` is closer than ``threshold``."""
    ranges = scan.ranges[scan.neighbourhood(bearing, NEIGHBOUR_DEG)]
    return bool(np.any(ranges < threshold))


def threshold_crossed(scan, bearing, threshold):
    return scan.range_at(bearing) > threshold


def is_stable_bearing(scan, bearing, tolerance=NOISE_TOLERANCE):
    """Reject single-sample spikes: neighbours must agree within tolerance."""
    ranges = scan.ranges[scan.neighbourhood(bearing, NEIGHBOUR_DEG)]
    spread = float(np.max(ranges) - np.min(ranges))
    return spread <= tolerance


def open_area_score(scan, start, end, reference_distance):
    """Fraction of samples in [start, end] farther than the reference."""
    indices = scan.sector(start, end)
    if indices.size == 0:
        return 0.0
    return float(np.count_nonzero(scan.ranges[indices] > reference_distance)
                 / indices.size)
