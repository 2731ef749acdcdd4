"""
Unit tests for cancellation and progress reporting.
"""

import io
import signal
import threading
import time
from unittest.mock import patch

from fastfind.search.cancellation import CancellationToken, install_interrupt_handler
from fastfind.search.progress import (
    ProgressCounters,
    ProgressSnapshot,
    ProgressReporter,
    ProgressSink,
    CallbackProgress,
    ConsoleProgress,
    ProgressThrottle,
    as_progress_sink,
)


class RecordingSink(ProgressSink):
    """Sink that keeps every snapshot it receives."""

    def __init__(self):
        self.snapshots = []
        self.closed = False

    def update(self, snapshot):
        self.snapshots.append(snapshot)

    def close(self):
        self.closed = True


class TestCancellationToken:
    """Test cases for CancellationToken."""

    def test_initial_state(self):
        """Test that a new token is not cancelled."""
        token = CancellationToken()
        assert token.is_cancelled is False
        assert token.wait(0) is False

    def test_cancel_is_idempotent(self):
        """Test that cancelling twice is harmless."""
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.is_cancelled is True
        assert token.wait(0) is True
        assert "cancelled=True" in repr(token)

    def test_cancel_from_other_thread(self):
        """Test that a cancel from another thread is observed."""
        token = CancellationToken()
        timer = threading.Timer(0.05, token.cancel)
        timer.start()
        assert token.wait(5) is True
        timer.join()

    def test_interrupt_handler(self):
        """Test that the installed SIGINT handler sets the token."""
        token = CancellationToken()
        with patch('fastfind.search.cancellation.signal.signal') as mock_signal:
            install_interrupt_handler(token)

        signum, handler = mock_signal.call_args[0]
        assert signum == signal.SIGINT

        handler(signal.SIGINT, None)
        assert token.is_cancelled


class TestProgressCounters:
    """Test cases for ProgressCounters."""

    def test_counts(self):
        """Test files and directories are counted separately."""
        counters = ProgressCounters(total=10)
        counters.record_processed(is_dir=False)
        counters.record_processed(is_dir=False)
        counters.record_processed(is_dir=True)
        counters.record_matched(is_dir=False)

        snapshot = counters.snapshot()
        assert snapshot == ProgressSnapshot(files_processed=2, dirs_processed=1,
                                            files_matched=1, dirs_matched=0, total=10)
        assert snapshot.processed == 3
        assert snapshot.matched == 1

    def test_concurrent_increments(self):
        """Test that no increment is lost across threads."""
        counters = ProgressCounters()

        def work():
            for _ in range(1000):
                counters.record_processed(is_dir=False)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counters.snapshot().files_processed == 8000


class TestProgressSinks:
    """Test cases for the progress sinks."""

    def test_callback_sink(self):
        """Test that callables are adapted."""
        received = []
        sink = as_progress_sink(received.append)
        assert isinstance(sink, CallbackProgress)

        sink.update(ProgressSnapshot(files_processed=1))
        assert received == [ProgressSnapshot(files_processed=1)]

    def test_default_sink_is_console(self):
        """Test the default sink."""
        assert isinstance(as_progress_sink(None), ConsoleProgress)

    def test_sink_passed_through(self):
        """Test that sinks are used as is."""
        sink = RecordingSink()
        assert as_progress_sink(sink) is sink

    def test_console_output(self):
        """Test the status line and its clearing."""
        stream = io.StringIO()
        sink = ConsoleProgress(stream=stream)

        sink.update(ProgressSnapshot(files_processed=3, dirs_processed=2))
        assert "Scanned 3 files, 2 dirs" in stream.getvalue()

        sink.update(ProgressSnapshot(files_processed=3, dirs_processed=2, files_matched=1, total=9))
        assert "Processed 5/9 paths" in stream.getvalue()

        sink.close()
        assert stream.getvalue().endswith("\r")

    def test_console_close_without_output(self):
        """Test that closing an unused sink writes nothing."""
        stream = io.StringIO()
        ConsoleProgress(stream=stream).close()
        assert stream.getvalue() == ""


class TestProgressThrottle:
    """Test cases for ProgressThrottle."""

    def test_throttle(self):
        """Test that updates are limited by the interval."""
        throttle = ProgressThrottle(min_interval=0.05)
        assert throttle.ready() is False
        time.sleep(0.06)
        assert throttle.ready() is True
        assert throttle.ready() is False


class TestProgressReporter:
    """Test cases for ProgressReporter."""

    def test_reports_and_stops(self):
        """Test periodic reporting and a clean shutdown."""
        counters = ProgressCounters(total=5)
        counters.record_processed(is_dir=False)
        sink = RecordingSink()

        reporter = ProgressReporter(counters, sink, poll_interval=0.01, min_interval=0.02)
        reporter.start()
        time.sleep(0.2)
        reporter.stop()

        assert not reporter.is_alive()
        assert sink.closed
        assert len(sink.snapshots) >= 1
        assert sink.snapshots[-1].files_processed == 1

    def test_stops_on_cancellation(self):
        """Test that the reporter exits when the token is cancelled."""
        token = CancellationToken()
        token.cancel()
        sink = RecordingSink()

        reporter = ProgressReporter(ProgressCounters(), sink, cancel_token=token, poll_interval=0.01)
        reporter.start()
        reporter._thread.join(timeout=5)

        assert not reporter.is_alive()
        assert sink.snapshots == []
        reporter.stop()

    def test_failing_sink(self):
        """Test that a failing sink ends reporting without raising."""
        def broken(snapshot):
            raise RuntimeError("closed terminal")

        reporter = ProgressReporter(ProgressCounters(), CallbackProgress(broken),
                                    poll_interval=0.01, min_interval=0.0)
        reporter.start()
        reporter._thread.join(timeout=5)

        assert not reporter.is_alive()
        reporter.stop()
