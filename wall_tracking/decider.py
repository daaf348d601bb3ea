"""
One control cycle of the wall tracking behaviour.

Every cycle is decided from scratch: the only memory carried between
cycles is the PID integral and the open-place flag, both owned elsewhere.

Modes:
    FRONT_AVOID  obstacle inside the stopping cone, slow right turn
    SKIP         wall within the gap threshold beside us, nothing at the
                 front-left, drive straight on
    WALL_FOLLOW  PID on the left wall distance
    OPEN_FRONT / OPEN_LEFT / OPEN_RIGHT
                 outdoor only, head for the most open sector
"""

import math
from dataclasses import dataclass
from enum import Enum, auto

from . import scan_analyzer as sa

# Front-left wall presence threshold (m)
FRONT_LEFT_WALL_RANGE = 1.87
# Open sectors scoring below this are disqualified
OPEN_SECTOR_MIN_SCORE = 0.7
# Front avoidance command and settle time
AVOID_TURN_RATE = math.radians(-45.0)
AVOID_SETTLE_SEC = 2.0

# (name, start deg, end deg), in priority order for ties
OPEN_SECTORS = (
    ('Front', -15.0, 15.0),
    ('Left', 15.0, 45.0),
    ('Right', -45.0, -15.0),
)

LABEL_INDOOR = 'Indoor'
LABEL_NOT_OPEN = 'Not open place'


class Mode(Enum):
    FRONT_AVOID = auto()
    SKIP = auto()
    WALL_FOLLOW = auto()
    OPEN_FRONT = auto()
    OPEN_LEFT = auto()
    OPEN_RIGHT = auto()


@dataclass(frozen=True)
class Decision:
    """Velocity command chosen for one cycle."""
    mode: Mode
    linear: float
    angular: float
    label: str
    settle: float = 0.0   # seconds to hold off the next cycle


def clamp_command(linear, angular, config):
    """Clamp a command to the configured velocity limits."""
    linear = max(0.0, min(linear, config.max_linear_vel))
    angular = max(config.min_angular_vel,
                  min(angular, config.max_angular_vel))
    return linear, angular


def select_open_sector(scores, min_score=OPEN_SECTOR_MIN_SCORE):
    """Index of the winning sector, or None if no sector is open enough.

    Scores below ``min_score`` are floored to -1, and a virtual
    "none of them" option scoring 0 competes with the rest, so it only
    wins when every sector is disqualified. Ties go to the earlier sector.
    """
    evals = [score if score >= min_score else -1.0 for score in scores]
    evals.append(0.0)
    best = max(range(len(evals)), key=lambda i: evals[i])
    if best == len(scores):
        return None
    return best


def sector_scores(scan, config):
    return [sa.open_area_score(scan, start, end, config.open_place_distance)
            for _, start, end in OPEN_SECTORS]


def decide(scan, outdoor, config, controller):
    """Run one decision cycle and return the command to publish."""
    gap_th = config.distance_from_wall * 2.0
    gap_start = sa.conflict_detected(scan, config.start_deg_lateral, gap_th)
    gap_end = sa.conflict_detected(scan, 90.0, gap_th)
    front_left_wall = sa.threshold_crossed(
        scan, config.front_left_wall_deg, FRONT_LEFT_WALL_RANGE)
    front_block = sa.front_obstacle_score(
        scan, config.front_stop_deg, config.distance_to_stop)

    if front_block >= config.stop_ray_th:
        return Decision(
            Mode.FRONT_AVOID, config.max_linear_vel / 4, AVOID_TURN_RATE,
            LABEL_INDOOR, settle=AVOID_SETTLE_SEC)

    if not outdoor:
        return _follow_or_skip(
            scan, config, controller, gap_start or gap_end,
            front_left_wall, LABEL_INDOOR)

    winner = select_open_sector(sector_scores(scan, config))
    if winner is None:
        return _follow_or_skip(
            scan, config, controller, gap_start or gap_end,
            front_left_wall, LABEL_NOT_OPEN)

    label = OPEN_SECTORS[winner][0]
    if label == 'Front':
        return Decision(Mode.OPEN_FRONT, config.max_linear_vel, 0.0, label)
    if label == 'Left':
        return Decision(Mode.OPEN_LEFT, config.max_linear_vel,
                        config.max_angular_vel, label)
    return Decision(Mode.OPEN_RIGHT, config.max_linear_vel,
                    config.min_angular_vel, label)


def _follow_or_skip(scan, config, controller, gap, front_left_wall, label):
    if (gap and not front_left_wall
            and sa.is_stable_bearing(scan, config.front_left_wall_deg)):
        return Decision(Mode.SKIP, config.max_linear_vel, 0.0, label)

    lateral_mean = sa.wall_distance(
        scan, config.start_deg_lateral, config.end_deg_lateral)
    angular = controller.correct(lateral_mean)
    return Decision(Mode.WALL_FOLLOW, config.max_linear_vel, angular, label)
