"""
Cooperative cancellation for running searches.

The search core only polls the token. Setting it is the job of whoever owns
the process, typically a SIGINT handler installed at the application edge.
"""

import signal
import threading
import logging
from typing import Optional


logger = logging.getLogger(__name__)


class CancellationToken:
    """
    A shared, set-once cancellation flag.

    Executors check ``is_cancelled`` at safe points: before every traversal
    entry and at the start of every parallel task. Work already in flight is
    allowed to finish.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Calling it again has no effect."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or until ``timeout`` seconds elapse."""
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"


def install_interrupt_handler(token: CancellationToken):
    """
    Route SIGINT (Ctrl+C) to ``token``.

    Must be called from the main thread. Returns the previous handler so the
    caller can restore it once the search is over.
    """
    def _handler(signum, frame):
        logger.warning("Search cancelled by user")
        token.cancel()

    return signal.signal(signal.SIGINT, _handler)
