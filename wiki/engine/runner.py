"""Background asyncio loop that fetch tasks are scheduled on."""

import asyncio
import concurrent.futures
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

from structlog.typing import FilteringBoundLogger

from wiki.core.logging import get_logger

T = TypeVar("T")


class BackgroundLoop:
    """An event loop running forever in a daemon thread.

    Callers on any thread hand coroutines to ``submit`` and get a
    ``concurrent.futures.Future`` back, so they never block on rendering I/O.
    Cancelling that future cancels the task inside the loop.
    """

    def __init__(
        self, name: str = "wiki-render", logger: FilteringBoundLogger | None = None
    ):
        self.name = name
        self.logger = logger or get_logger()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> asyncio.AbstractEventLoop:
        """Start the loop thread if needed and return the loop."""
        with self._lock:
            if self._loop is not None and self.running:
                return self._loop
            loop = asyncio.new_event_loop()
            ready = threading.Event()

            def run() -> None:
                asyncio.set_event_loop(loop)
                loop.call_soon(ready.set)
                loop.run_forever()

            thread = threading.Thread(target=run, name=self.name, daemon=True)
            thread.start()
            ready.wait()
            self._loop = loop
            self._thread = thread
            self.logger.debug("loop_started", thread=self.name)
            return loop

    def submit(
        self, coro: Coroutine[Any, Any, T]
    ) -> concurrent.futures.Future[T]:
        loop = self.start()
        return asyncio.run_coroutine_threadsafe(coro, loop)

    def stop(self, timeout: float = 5.0) -> None:
        """Cancel outstanding tasks, stop the loop and join its thread."""
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None or thread is None:
            return

        async def cancel_pending() -> None:
            current = asyncio.current_task()
            tasks = [t for t in asyncio.all_tasks() if t is not current]
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        try:
            asyncio.run_coroutine_threadsafe(cancel_pending(), loop).result(timeout)
        except concurrent.futures.TimeoutError:
            self.logger.warning("loop_shutdown_timeout", timeout_seconds=timeout)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)
        if not thread.is_alive():
            loop.close()
        self.logger.debug("loop_stopped", thread=self.name)
