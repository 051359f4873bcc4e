"""Pytest configuration and fixtures"""
import threading
from collections import deque

import pytest
import serial


class FakeSerial:
    """
    Stand-in for serial.Serial driven by a script of poll results.

    Each script item is consumed by one poll (a read with nothing buffered):
    bytes are the data that arrived (b"" means the timeout elapsed), an
    exception is raised, a callable is called and its result used.
    When the script runs out, *cancel* is set and polls return b"";
    without a *cancel* event, reading past the end fails the test.
    """

    def __init__(self, script=(), cancel=None):
        self.script = deque(script)
        self.cancel = cancel
        self.pending = b""
        self.polls = 0
        self.is_open = True

    @property
    def in_waiting(self):
        return len(self.pending)

    def read(self, size=1):
        if not self.pending:
            self.polls += 1
            if not self.script:
                if self.cancel is None:
                    raise AssertionError("read past the end of the script")
                self.cancel.set()
                return b""
            item = self.script.popleft()
            if callable(item):
                item = item()
            if isinstance(item, BaseException):
                raise item
            self.pending = item
        data, self.pending = self.pending[:size], self.pending[size:]
        return data

    def close(self):
        self.is_open = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


@pytest.fixture
def cancel():
    return threading.Event()


@pytest.fixture
def fake_port(cancel):
    def make(*script):
        return FakeSerial(script, cancel)
    return make


@pytest.fixture
def disconnected():
    return serial.SerialException("device disconnected")
