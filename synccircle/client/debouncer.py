# synccircle/client/debouncer.py

from functools import partial
import threading

class Debouncer:
    """Run ``callback`` once, ``delay`` seconds after the last ``schedule()``.

    Every ``schedule()`` restarts the countdown. ``timer_factory`` follows the
    ``threading.Timer(interval, function)`` signature.
    """

    def __init__(self, delay: float, callback, timer_factory=threading.Timer):
        self.delay = delay
        self.callback = callback
        self._timer_factory = timer_factory
        self._timer = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def schedule(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(self.delay, partial(self._fire, self._generation))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> bool:
        """Drop the pending call; True if there was one."""
        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
            return True

    def flush(self) -> bool:
        """Run the pending call now instead of waiting."""
        if not self.cancel():
            return False
        self.callback()
        return True

    def _fire(self, generation):
        with self._lock:
            # A timer cancelled after it started counting down can still fire
            if generation != self._generation or self._timer is None:
                return
            self._timer = None
        self.callback()
