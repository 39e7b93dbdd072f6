import asyncio

from config.config_loader import DEFAULT_CONFIG


def interval_for_speed(speed, config=None):
    """
    Convert a speed slider value into seconds between steps.
    Higher speed means a shorter delay, never below min_interval_ms.
    """
    config = config or DEFAULT_CONFIG
    delay_ms = max(config["min_interval_ms"], config["max_interval_ms"] - speed)
    return delay_ms / 1000


class Ticker:
    """
    Repeating timer on an asyncio event loop with a single owner handle.

    Starting the ticker cancels whatever was scheduled before, so at most one
    repetition is ever outstanding. Cancellation is synchronous: once cancel()
    returns no further callback fires.
    """

    def __init__(self, loop=None):
        self._loop = loop
        self._active_loop = None
        self._handle = None
        self._interval = None
        self._callback = None

    @property
    def active(self):
        return self._handle is not None

    @property
    def interval(self):
        return self._interval

    def start(self, interval, callback):
        self.cancel()
        if interval < 0:
            raise ValueError(f"Ticker interval cannot be negative, got {interval}.")
        self._active_loop = self._loop or asyncio.get_running_loop()
        self._interval = interval
        self._callback = callback
        self._handle = self._active_loop.call_later(interval, self._fire)

    def _fire(self):
        # Re-arm before the callback so the callback is free to cancel
        self._handle = self._active_loop.call_later(self._interval, self._fire)
        try:
            self._callback()
        except Exception:
            # A failing tick ends the repetition; the loop reports the error
            self.cancel()
            raise

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
