"""Debounce timer built on main loop alarms."""

from typing import Callable, Optional


class Debouncer:
    """Delay a callback until input has been quiet for ``delay`` seconds.

    ``scheduler`` is anything with urwid's alarm interface:
    ``set_alarm_in(seconds, callback, user_data)`` returning a handle and
    ``remove_alarm(handle)``. Each ``trigger`` cancels the pending alarm, so
    only the newest value is ever delivered.
    """

    def __init__(self, callback: Callable[[str], None], delay: float = 0.3, scheduler=None):
        self.callback = callback
        self.delay = delay
        self.scheduler = scheduler
        self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, value: str):
        """Restart the countdown with a new value."""
        if self.scheduler is None:
            raise RuntimeError("Debouncer has no scheduler attached")
        self.cancel()
        self._handle = self.scheduler.set_alarm_in(self.delay, self._fire, value)

    def cancel(self):
        """Drop the pending alarm, if any."""
        handle: Optional[object] = self._handle
        self._handle = None
        if handle is not None and self.scheduler is not None:
            self.scheduler.remove_alarm(handle)

    def _fire(self, loop, value: str):
        self._handle = None
        self.callback(value)
