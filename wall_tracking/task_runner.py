"""
Action execution loop for wall tracking.

Runs one decision cycle per new scan until the goal is canceled or the
process stops. Kept free of rclpy so it can be driven by any goal handle
exposing ``is_cancel_requested``, ``publish_feedback``, ``canceled`` and
``succeed``.

After a front avoidance command the loop holds off further cycles for the
settle time, but keeps checking for cancellation every ``poll_interval``.
"""

import time

from .scan_data import InvalidScanData


class TaskRunner:
    """Cancelable wall tracking loop."""

    def __init__(self, scans, cycle, publish, stop, open_place,
                 feedback_type, result_type, logger,
                 is_alive=lambda: True, poll_interval=0.05,
                 clock=time.monotonic, sleep=time.sleep):
        self.scans = scans
        self.cycle = cycle
        self.publish = publish
        self.stop = stop
        self.open_place = open_place
        self.feedback_type = feedback_type
        self.result_type = result_type
        self.logger = logger
        self.is_alive = is_alive
        self.poll_interval = poll_interval
        self.clock = clock
        self.sleep = sleep

    def execute(self, goal_handle):
        """Drive the control cycle for one goal and return its result."""
        self.logger.info('Wall tracking goal executing')
        feedback = self.feedback_type()
        feedback.end = False
        result = self.result_type()

        seq = 0
        hold_until = 0.0
        waiting_logged = False
        scan_error = None

        while self.is_alive():
            if goal_handle.is_cancel_requested:
                self.stop()
                goal_handle.canceled()
                result.get = False
                self.logger.info('Goal canceled')
                return result

            feedback.end = self.open_place()
            goal_handle.publish_feedback(feedback)

            remaining = hold_until - self.clock()
            if remaining > 0.0:
                self.sleep(min(self.poll_interval, remaining))
                continue

            update = self.scans.wait_newer(seq, self.poll_interval)
            if update is None:
                if seq == 0 and not waiting_logged:
                    self.logger.info('Waiting for scan data...')
                    waiting_logged = True
                continue
            scan, seq = update

            try:
                decision = self.cycle(scan)
            except InvalidScanData as e:
                if str(e) != scan_error:
                    self.logger.warning(f'Skipping cycle: {e}')
                    scan_error = str(e)
                continue
            scan_error = None

            self.publish(decision)
            if decision.settle > 0.0:
                hold_until = self.clock() + decision.settle

        # The process is shutting down; the goal handle may already be gone
        result.get = True
        try:
            goal_handle.succeed()
        except Exception as e:
            self.logger.warning(f'Could not report goal success: {e}')
            return result
        self.logger.info('Goal succeeded')
        return result
