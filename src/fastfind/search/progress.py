"""
Progress reporting for running searches.

Counters are telemetry only: they are never read to decide which entries
match, so results do not depend on thread scheduling.
"""

import sys
import time
import threading
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TextIO, Union

from .cancellation import CancellationToken


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressSnapshot:
    """
    Point-in-time copy of the progress counters.

    Attributes:
        files_processed: Files examined so far
        dirs_processed: Directories examined so far
        files_matched: Files that produced a result
        dirs_matched: Directories that produced a result
        total: Number of candidates, when known in advance
    """
    files_processed: int = 0
    dirs_processed: int = 0
    files_matched: int = 0
    dirs_matched: int = 0
    total: Optional[int] = None

    @property
    def processed(self) -> int:
        return self.files_processed + self.dirs_processed

    @property
    def matched(self) -> int:
        return self.files_matched + self.dirs_matched


class ProgressCounters:
    """Monotonic counters that may be incremented from any thread."""

    def __init__(self, total: Optional[int] = None):
        self.total = total
        self._lock = threading.Lock()
        self._files_processed = 0
        self._dirs_processed = 0
        self._files_matched = 0
        self._dirs_matched = 0

    def record_processed(self, is_dir: bool) -> None:
        with self._lock:
            if is_dir:
                self._dirs_processed += 1
            else:
                self._files_processed += 1

    def record_matched(self, is_dir: bool) -> None:
        with self._lock:
            if is_dir:
                self._dirs_matched += 1
            else:
                self._files_matched += 1

    def snapshot(self) -> ProgressSnapshot:
        with self._lock:
            return ProgressSnapshot(
                files_processed=self._files_processed,
                dirs_processed=self._dirs_processed,
                files_matched=self._files_matched,
                dirs_matched=self._dirs_matched,
                total=self.total,
            )


class ProgressSink:
    """Receives progress snapshots. ``close`` is called once the search ends."""

    def update(self, snapshot: ProgressSnapshot) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class CallbackProgress(ProgressSink):
    """Adapts a plain callable to the ProgressSink interface."""

    def __init__(self, callback: Callable[[ProgressSnapshot], None]):
        self.callback = callback

    def update(self, snapshot: ProgressSnapshot) -> None:
        self.callback(snapshot)


class ConsoleProgress(ProgressSink):
    """Rewrites a single status line on a terminal stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None, width: int = 80):
        self.stream = stream or sys.stderr
        self.width = width
        self._written = False

    def update(self, snapshot: ProgressSnapshot) -> None:
        if snapshot.total is not None:
            line = (f"Processed {snapshot.processed}/{snapshot.total} paths, "
                    f"{snapshot.files_matched} files, {snapshot.dirs_matched} dirs matched...")
        else:
            line = f"Scanned {snapshot.files_processed} files, {snapshot.dirs_processed} dirs..."
        self.stream.write(f"\r{line[:self.width]}")
        self.stream.flush()
        self._written = True

    def close(self) -> None:
        if self._written:
            self.stream.write("\r" + " " * self.width + "\r")
            self.stream.flush()
            self._written = False


def as_progress_sink(progress: Union[ProgressSink, Callable[[ProgressSnapshot], None], None]) -> ProgressSink:
    """Normalize the ``progress`` argument of the executors."""
    if progress is None:
        return ConsoleProgress()
    if isinstance(progress, ProgressSink):
        return progress
    return CallbackProgress(progress)


class ProgressThrottle:
    """Lets an update through at most once per ``min_interval`` seconds."""

    def __init__(self, min_interval: float = 1.0):
        self.min_interval = min_interval
        self._last = time.monotonic()

    def ready(self) -> bool:
        now = time.monotonic()
        if now - self._last >= self.min_interval:
            self._last = now
            return True
        return False


class ProgressReporter:
    """
    Background thread that polls counters and forwards snapshots to a sink.

    Polls every ``poll_interval`` seconds and emits at most once per
    ``min_interval``. Stops when ``stop`` is called or the token is
    cancelled; ``stop`` always joins the thread.
    """

    def __init__(self, counters: ProgressCounters, sink: ProgressSink,
                 cancel_token: Optional[CancellationToken] = None,
                 poll_interval: float = 0.5, min_interval: float = 1.0):
        self.counters = counters
        self.sink = sink
        self.cancel_token = cancel_token
        self.poll_interval = poll_interval
        self.min_interval = min_interval
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._run, name="fastfind-progress", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        """Signal completion, wait for the thread and close the sink."""
        self._done.set()
        if self._thread.is_alive():
            self._thread.join()
        self.sink.close()

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        throttle = ProgressThrottle(self.min_interval)
        while not self._done.wait(self.poll_interval):
            if self.cancel_token is not None and self.cancel_token.is_cancelled:
                break
            if throttle.ready():
                try:
                    self.sink.update(self.counters.snapshot())
                except Exception as e:
                    logger.warning(f"Progress reporting failed: {e}")
                    break
