import time
from typing import Optional


class Timer:
    """Wall-clock stopwatch reporting milliseconds."""

    def __init__(self):
        self._started: Optional[float] = None
        self.elapsed_ms = 0.0

    def start(self) -> None:
        self._started = time.perf_counter()

    def stop(self) -> float:
        if self._started is None:
            raise RuntimeError("timer stopped before it was started")
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000.0
        self._started = None
        return self.elapsed_ms

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
