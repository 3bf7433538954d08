"""Timer scheduling for the debounced autosave."""

import threading
from collections.abc import Callable


class ThreadingScheduler:
    """Run callbacks after a delay on daemon ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
