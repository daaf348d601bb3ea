"""
Indoor/outdoor and open-place classification.

The outdoor flag follows the GNSS fix: a fix whose covariance type is
unknown means no usable satellite solution, which we take as indoor.
The open-place flag is hysteretic so it does not flap at the boundary.
"""

import threading

OPEN_PLACE_ENTER = 0.7
OPEN_PLACE_STAY = 0.4


class EnvironmentClassifier:
    """Thread-safe holder of the outdoor and open-place flags."""

    def __init__(self):
        self._lock = threading.Lock()
        self._outdoor = False
        self._open_place = False

    @property
    def outdoor(self):
        with self._lock:
            return self._outdoor

    @property
    def open_place(self):
        with self._lock:
            return self._open_place

    def update_outdoor(self, quality_unknown):
        with self._lock:
            self._outdoor = not quality_unknown
            return self._outdoor

    def update_open_place(self, score):
        """Update the open-place flag from the open-area score ahead."""
        with self._lock:
            if not self._outdoor:
                self._open_place = False
            elif self._open_place:
                self._open_place = score >= OPEN_PLACE_STAY
            else:
                self._open_place = score >= OPEN_PLACE_ENTER
            return self._open_place
