"""Debounced trigger: coalesce bursts of calls into one trailing action.

Each call cancels the pending deadline and arms a new one ``delay_ms`` in
the future. The action runs once the calls have been quiet for that long.
There is no queue; only the most recent call matters.
"""

import threading
from collections.abc import Callable

from .log import get_logger

logger = get_logger(__name__)


class Debouncer:
    """Callable trigger around a zero-argument *action*.

    At most one timer is armed at a time. A timer that fires after it was
    superseded (it lost the race with a newer call) does nothing.
    """

    def __init__(self, delay_ms: int, action: Callable[[], object]) -> None:
        self.delay_ms = delay_ms
        self._action = action
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0

    def __call__(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = threading.Timer(
                self.delay_ms / 1000, self._fire, args=(self._generation,)
            )
            timer.daemon = True  # a pending action may be lost at exit
            self._timer = timer
            timer.start()

    @property
    def pending(self) -> bool:
        """True while a deadline is armed and has not fired yet."""
        return self._timer is not None

    def cancel(self) -> None:
        """Drop the pending deadline, if any, without running the action."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        logger.debug("Debounce deadline reached after %sms", self.delay_ms)
        try:
            self._action()
        except Exception:
            logger.exception("Debounced action failed")


def make_trigger(delay_ms: int, action: Callable[[], object]) -> Debouncer:
    """Return a trigger that runs *action* ``delay_ms`` after the last call."""
    return Debouncer(delay_ms, action)
