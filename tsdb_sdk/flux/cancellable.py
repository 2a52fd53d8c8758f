"""
Handle returned by the streaming query methods.
"""

import logging
import threading
from typing import Callable, Optional

import requests

from tsdb_sdk.arguments import check_not_negative_number

logger = logging.getLogger(__name__)


class Cancellable:
    """
    Lets a consumer stop a streaming query.

    Once ``cancel()`` returns no further callback is invoked: records and lines
    stop, ``on_complete`` is skipped and errors are only logged. A callback
    already running when another thread calls ``cancel()`` is allowed to finish
    first, so ``cancel()`` must not be called from a thread the running callback
    is waiting on. The
    response is closed, but a network read already in progress may still take
    a moment to return.
    """

    def __init__(self):
        self._cancelled = threading.Event()
        # Held for the whole duration of every callback
        self._callback_lock = threading.RLock()
        self._response_lock = threading.Lock()
        self._response: Optional[requests.Response] = None
        self._thread: Optional[threading.Thread] = None

    def cancel(self) -> None:
        """Cancel the query, waiting for a callback running on another thread to return."""
        self._cancelled.set()

        with self._callback_lock:
            pass

        with self._response_lock:
            response = self._response

        if response is not None:
            logger.debug("Closing response of cancelled query")
            response.close()

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def run_if_active(self, callback: Callable, *args) -> bool:
        """
        Invoke ``callback(*args)`` unless the query is cancelled.

        Returns:
            False if the query was cancelled and the callback skipped
        """
        with self._callback_lock:
            if self._cancelled.is_set():
                return False
            callback(*args)
            return True

    def attach(self, response: requests.Response) -> None:
        """Bind the HTTP response so that ``cancel()`` can close it."""
        with self._response_lock:
            self._response = response

        if self._cancelled.is_set():
            response.close()

    def start(self, thread: threading.Thread) -> None:
        self._thread = thread
        thread.start()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the worker thread to finish.

        Returns:
            True if the query finished (completed, failed or cancelled)
        """
        if timeout is not None:
            check_not_negative_number(timeout, "timeout")
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def done(self) -> bool:
        return self._thread is None or not self._thread.is_alive()
