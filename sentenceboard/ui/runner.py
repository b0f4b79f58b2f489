"""Run blocking API calls without blocking the UI.

Calls run on a worker thread; their outcome is handed back to the urwid main
loop through a watched pipe, so callbacks (and every state change they make)
always run on the UI thread.
"""

import logging
import os
import queue
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from sentenceboard.api.errors import BoardError, NetworkFailure

logger = logging.getLogger(__name__)


def _as_board_error(error: Exception) -> BoardError:
    if isinstance(error, BoardError):
        return error
    logger.error(f"Unexpected error in background call: {error!r}", exc_info=error)
    return NetworkFailure(f"Unexpected error: {error}")


def _deliver(result, error, on_success, on_error, on_finally):
    try:
        if error is None:
            on_success(result)
        else:
            on_error(_as_board_error(error))
    finally:
        if on_finally:
            on_finally()


class InlineRunner:
    """Runs calls synchronously. Used by tests and the non-interactive paths."""

    def run(
        self,
        fn: Callable,
        on_success: Callable,
        on_error: Callable[[BoardError], None],
        on_finally: Optional[Callable[[], None]] = None,
    ):
        try:
            result = fn()
        except Exception as e:
            _deliver(None, e, on_success, on_error, on_finally)
        else:
            _deliver(result, None, on_success, on_error, on_finally)

    def shutdown(self):
        pass


class ThreadedRunner:
    """Runs calls on a thread pool and completes them on the main loop."""

    def __init__(self, loop, max_workers: int = 4):
        self._loop = loop
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="board-api")
        self._done: queue.Queue = queue.Queue()
        self._pipe_fd = loop.watch_pipe(self._drain)

    def run(
        self,
        fn: Callable,
        on_success: Callable,
        on_error: Callable[[BoardError], None],
        on_finally: Optional[Callable[[], None]] = None,
    ):
        def work():
            try:
                result, error = fn(), None
            except Exception as e:
                result, error = None, e
            self._done.put((result, error, on_success, on_error, on_finally))
            fd = self._pipe_fd
            if fd is None:
                logger.debug("Runner shut down, dropping result")
                return
            try:
                os.write(fd, b"!")
            except OSError as e:
                logger.debug(f"Runner pipe closed, dropping result: {e}")

        self._executor.submit(work)

    def _drain(self, data: bytes) -> bool:
        """Main loop side: finish every completed call."""
        while True:
            try:
                item = self._done.get_nowait()
            except queue.Empty:
                break
            _deliver(*item)
        return True

    def shutdown(self):
        self._executor.shutdown(wait=False, cancel_futures=True)
        if self._pipe_fd is None:
            return
        # Closes the read end; the write end is ours.
        self._loop.remove_watch_pipe(self._pipe_fd)
        os.close(self._pipe_fd)
        self._pipe_fd = None
