"""Per-fetch lifecycle state and the handle returned to callers."""

import concurrent.futures
import threading
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FetchState(str, Enum):
    """Lifecycle of one fetch.

    PENDING -> CACHED on a cache hit, otherwise
    PENDING -> NAVIGATING -> SETTLING -> EXTRACTING -> DONE.
    FAILED and CANCELLED can be reached from any non-terminal state.
    """

    PENDING = "pending"
    CACHED = "cached"
    NAVIGATING = "navigating"
    SETTLING = "settling"
    EXTRACTING = "extracting"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset(
    {FetchState.CACHED, FetchState.DONE, FetchState.FAILED, FetchState.CANCELLED}
)


class FetchHandle(Generic[T]):
    """Caller-side view of a fetch: its state, its outcome and a way to cancel it.

    The result callback passed to ``RenderFetchEngine.fetch`` is never invoked
    once ``cancel()`` has returned True.
    """

    def __init__(
        self,
        address: str,
        bypass_cache: bool = False,
        future: concurrent.futures.Future[T] | None = None,
    ):
        self.address = address
        self.bypass_cache = bypass_cache
        self._future = future
        self._state = FetchState.PENDING
        self._lock = threading.Lock()
        self._cancel_requested = False
        self._delivered = False

    def __repr__(self) -> str:
        return f"FetchHandle(address={self.address!r}, state={self.state.value})"

    @property
    def state(self) -> FetchState:
        if self._future is not None and self._future.cancelled():
            return FetchState.CANCELLED
        return self._state

    def _advance(self, state: FetchState) -> None:
        self._state = state

    def _attach(self, future: concurrent.futures.Future[T]) -> None:
        self._future = future

    def _claim_delivery(self) -> bool:
        """Reserve the right to invoke the result callback, unless cancelled."""
        with self._lock:
            if self._cancel_requested:
                return False
            self._delivered = True
            return True

    def cancel(self) -> bool:
        """Request cancellation; True if the result will never be delivered."""
        with self._lock:
            if self._delivered or self._future is None:
                return False
            self._cancel_requested = True
        return self._future.cancel()

    def cancelled(self) -> bool:
        return self.state is FetchState.CANCELLED

    def done(self) -> bool:
        return self._future is None or self._future.done()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the fetch finishes; True if it finished within timeout."""
        if self._future is None:
            return True
        concurrent.futures.wait([self._future], timeout=timeout)
        return self._future.done()

    def result(self, timeout: float | None = None) -> T:
        """
        Block for the fetched value.

        Raises:
            FetchError: The failure that terminated the fetch
            concurrent.futures.CancelledError: If the fetch was cancelled
            concurrent.futures.TimeoutError: If it did not finish in time
        """
        if self._future is None:
            raise RuntimeError("Handle is not attached to a scheduled fetch")
        return self._future.result(timeout)
