"""Shared test helpers."""

import pytest


class FakeScheduler:
    """Stands in for urwid.MainLoop's alarm API."""

    def __init__(self):
        self.now = 0.0
        self.alarms = {}
        self._next = 0

    def set_alarm_in(self, sec, callback, user_data=None):
        self._next += 1
        self.alarms[self._next] = (self.now + sec, callback, user_data)
        return self._next

    def remove_alarm(self, handle):
        return self.alarms.pop(handle, None) is not None

    def advance(self, sec):
        self.now += sec
        due = sorted(
            (when, handle) for handle, (when, _, _) in self.alarms.items() if when <= self.now
        )
        for _, handle in due:
            _, callback, user_data = self.alarms.pop(handle)
            callback(self, user_data)


@pytest.fixture
def scheduler():
    return FakeScheduler()
