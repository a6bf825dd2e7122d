"""
Event loop thread backing both the blocking and the async client methods.

Each client owns one loop running in a daemon thread. Every network
coroutine is scheduled on that loop, so the connection object is only ever
used from one loop no matter which thread or event loop the caller is on.
Blocking methods wait on the scheduled future; async methods await it.
"""

import asyncio
import concurrent.futures
import logging
import threading
from typing import Any, Awaitable, Callable, Coroutine, Optional

from .exceptions import ClientClosedError

logger = logging.getLogger(__name__)


class EventLoopThread:
    """A private asyncio loop running in a background thread."""

    def __init__(self, name: str = "compare-api-client"):
        self._loop = asyncio.new_event_loop()
        self._closed = False
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def _run(self):
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def in_loop_thread(self) -> bool:
        """Whether the caller is running on this loop's thread."""
        return threading.current_thread() is self._thread

    def submit(self, coro: Coroutine) -> concurrent.futures.Future:
        """
        Schedule a coroutine on the loop.

        Raises:
            ClientClosedError: If the loop has been shut down
        """
        with self._lock:
            if self._closed:
                coro.close()
                raise ClientClosedError("The client has been closed.")
            return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def run(self, coro: Coroutine) -> Any:
        """Run a coroutine on the loop and block until it completes."""
        if self.in_loop_thread():
            coro.close()
            raise RuntimeError(
                "Blocking client methods cannot be called from the client's own event loop; "
                "use the *_async variants instead."
            )
        return self.submit(coro).result()

    async def run_async(self, coro: Coroutine) -> Any:
        """Run a coroutine on the loop and await its result from any other loop."""
        return await asyncio.wrap_future(self.submit(coro))

    def close(self, cleanup: Optional[Callable[[], Awaitable[None]]] = None) -> None:
        """
        Cancel in-flight operations, run cleanup on the loop, and stop it.

        Safe to call more than once and from several threads; only the first
        call does anything.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            future = asyncio.run_coroutine_threadsafe(self._shutdown(cleanup), self._loop)

        if self.in_loop_thread():
            # Called from a coroutine on our own loop: let shutdown finish asynchronously.
            future.add_done_callback(lambda _: self._loop.call_soon_threadsafe(self._loop.stop))
            return

        try:
            future.result()
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join()

    async def _shutdown(self, cleanup):
        current = asyncio.current_task()
        pending = [task for task in asyncio.all_tasks() if task is not current]
        if pending:
            logger.debug("Cancelling %d in-flight operation(s)", len(pending))
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if cleanup is not None:
            await cleanup()
