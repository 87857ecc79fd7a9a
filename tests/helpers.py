"""Test doubles and builders shared by the test modules."""

import threading
import time

from loadtrace.loadtest import DurationMetrics
from .test_const import HTTP_SUCCESS


def make_clock(*ticks):
    """Clock returning the given timestamps (seconds) in order."""
    values = iter(ticks)
    return lambda: next(values)


def make_record(status_code=HTTP_SUCCESS, **phases):
    """Synthetic DurationMetrics with the given phase durations."""
    return DurationMetrics(status_code=status_code, **phases)


class InstrumentedExecutor:
    """Request executor stand-in that counts workers holding a token."""

    def __init__(self, delay: float = 0.005, status_code: int = HTTP_SUCCESS, fail_on=None):
        self.delay = delay
        self.status_code = status_code
        self.fail_on = fail_on
        self.active = 0
        self.max_active = 0
        self.tokens = []
        self._lock = threading.Lock()

    def send_request(self, client, token):
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.tokens.append(token)
        try:
            time.sleep(self.delay)
            if self.fail_on is not None and token == self.fail_on:
                raise RuntimeError("executor exploded")
            return DurationMetrics(status_code=self.status_code, token=token, server_processing=self.delay * 1000)
        finally:
            with self._lock:
                self.active -= 1
