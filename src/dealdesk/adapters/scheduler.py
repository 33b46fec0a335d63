# src/dealdesk/adapters/scheduler.py
import threading
from typing import Callable


class ThreadingScheduler:
    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
