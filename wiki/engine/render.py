"""Render-fetch-cache engine built on a pluggable rendering surface."""

import asyncio
import concurrent.futures
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from structlog.typing import FilteringBoundLogger

from wiki.core.logging import get_logger
from wiki.engine.cache import CacheSnapshot, FetchCache
from wiki.engine.errors import (
    ExtractionFailure,
    FetchError,
    NavigationTimeout,
    SerializationFailure,
    check_address,
)
from wiki.engine.handle import FetchHandle, FetchState
from wiki.engine.runner import BackgroundLoop
from wiki.engine.strategy import ExtractionStrategy, parse_document
from wiki.fetchers.base import RenderingSurface, SurfaceFactory

T = TypeVar("T")

DEFAULT_SETTLE_DELAY = 3.0
DEFAULT_NAVIGATION_TIMEOUT = 30.0
DEFAULT_STABILITY_INTERVAL = 0.5
DEFAULT_SETTLE_TIMEOUT = 10.0


class RenderFetchEngine(Generic[T]):
    """Fetch a page through a rendering surface, extract a result and cache it.

    One fetch runs: cache lookup (unless bypassed) -> navigate -> settle ->
    serialize -> parse -> extract -> cache put -> deliver. Each fetch gets its
    own surface from ``surface_factory`` and releases it on every exit path,
    so overlapping fetches on one engine never share surface state.
    """

    def __init__(
        self,
        strategy: ExtractionStrategy[T],
        surface_factory: SurfaceFactory,
        *,
        name: str = "engine",
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        navigation_timeout: float | None = DEFAULT_NAVIGATION_TIMEOUT,
        stability_interval: float = DEFAULT_STABILITY_INTERVAL,
        settle_timeout: float = DEFAULT_SETTLE_TIMEOUT,
        cache: FetchCache[T] | None = None,
        runner: BackgroundLoop | None = None,
        logger: FilteringBoundLogger | None = None,
    ):
        """
        Initialize the engine.

        Args:
            strategy: Turns a rendered Document into the result type
            surface_factory: Returns an async context manager yielding a fresh surface
            name: Engine name bound to every log line
            settle_delay: Seconds to wait after navigation before serializing
            navigation_timeout: Upper bound in seconds for navigation and for
                each serialization; None waits forever
            stability_interval: Seconds between markup polls while settling;
                0 disables polling
            settle_timeout: Upper bound in seconds for stability polling
            cache: Cache to use (a private one by default)
            runner: Loop that callback-style fetches run on (a private one by default)
            logger: Optional structlog logger
        """
        self.strategy = strategy
        self.surface_factory = surface_factory
        self.name = name
        self.settle_delay = settle_delay
        self.navigation_timeout = navigation_timeout
        self.stability_interval = stability_interval
        self.settle_timeout = settle_timeout
        self.logger = (logger or get_logger()).bind(engine=name)
        self.cache: FetchCache[T] = cache if cache is not None else FetchCache(
            logger=self.logger
        )
        self._runner = runner
        self._owns_runner = False
        self._runner_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch(
        self,
        address: str,
        bypass_cache: bool = False,
        on_result: Callable[[T], object] | None = None,
    ) -> FetchHandle[T]:
        """
        Start a fetch without blocking the caller.

        On a cache hit ``on_result`` runs on the calling thread before this
        returns. Otherwise the fetch runs on the background loop and
        ``on_result`` runs there exactly once on success. On failure or
        cancellation ``on_result`` is never invoked; the handle carries
        the outcome.

        Args:
            address: URL to fetch
            bypass_cache: If True, skip the cache lookup (the result is still cached)
            on_result: Callback receiving the extracted value

        Returns:
            A handle for waiting on, inspecting or cancelling the fetch

        Raises:
            InvalidAddress: If the address is not a well-formed http(s) URL
        """
        check_address(address)

        if not bypass_cache:
            entry = self.cache.get(address)
            if entry is not None:
                self.logger.info("cache_hit", address=address)
                future: concurrent.futures.Future[T] = concurrent.futures.Future()
                future.set_result(entry.value)
                handle = FetchHandle(address, bypass_cache, future)
                handle._advance(FetchState.CACHED)
                if on_result is not None and handle._claim_delivery():
                    on_result(entry.value)
                return handle

        handle = FetchHandle(address, bypass_cache)
        handle._attach(self._get_runner().submit(self._run(handle, on_result)))
        return handle

    async def load(self, address: str, bypass_cache: bool = False) -> T:
        """
        Fetch a value from within a running event loop.

        Raises:
            InvalidAddress: If the address is not a well-formed http(s) URL
            FetchError: If navigation, serialization or extraction fails
        """
        check_address(address)
        if not bypass_cache:
            entry = self.cache.get(address)
            if entry is not None:
                self.logger.info("cache_hit", address=address)
                return entry.value
        return await self._execute(FetchHandle(address, bypass_cache))

    def clear_cache(self, address: str | None = None) -> None:
        """Drop one cached address, or everything when no address is given."""
        if address is None:
            self.cache.clear_all()
        else:
            self.cache.clear_one(address)

    def cache_snapshot(self) -> CacheSnapshot:
        return self.cache.snapshot()

    def close(self) -> None:
        """Stop the background loop if this engine created it."""
        with self._runner_lock:
            runner, owned = self._runner, self._owns_runner
            if owned:
                self._runner = None
                self._owns_runner = False
        if owned and runner is not None:
            runner.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _get_runner(self) -> BackgroundLoop:
        with self._runner_lock:
            if self._runner is None:
                self._runner = BackgroundLoop(
                    name=f"wiki-{self.name}", logger=self.logger
                )
                self._owns_runner = True
            return self._runner

    async def _run(
        self, handle: FetchHandle[T], on_result: Callable[[T], object] | None
    ) -> T:
        value = await self._execute(handle)
        if on_result is not None:
            if handle._claim_delivery():
                on_result(value)
            else:
                self.logger.debug("result_dropped", address=handle.address)
        return value

    async def _execute(self, handle: FetchHandle[T]) -> T:
        log = self.logger.bind(address=handle.address)
        log.info("fetch_started", bypass_cache=handle.bypass_cache)
        try:
            async with self.surface_factory() as surface:
                handle._advance(FetchState.NAVIGATING)
                await self._navigate(surface, handle.address)
                handle._advance(FetchState.SETTLING)
                markup = await self._settle(surface, handle.address)
            handle._advance(FetchState.EXTRACTING)
            # Parsing is CPU-bound; keep it off the loop thread
            value = await asyncio.to_thread(self._extract, markup, handle.address)
        except asyncio.CancelledError:
            handle._advance(FetchState.CANCELLED)
            log.info("fetch_cancelled")
            raise
        except FetchError as e:
            handle._advance(FetchState.FAILED)
            if e.address is None:
                e.address = handle.address
            log.error("fetch_failed", kind=e.kind, error=e.message)
            raise
        except Exception:
            handle._advance(FetchState.FAILED)
            log.exception("fetch_crashed")
            raise

        self.cache.put(handle.address, value)
        handle._advance(FetchState.DONE)
        log.info("fetch_complete")
        return value

    async def _navigate(self, surface: RenderingSurface, address: str) -> None:
        try:
            await asyncio.wait_for(surface.navigate(address), self.navigation_timeout)
        except asyncio.TimeoutError as e:
            raise NavigationTimeout(
                f"Navigation did not settle within {self.navigation_timeout}s",
                address,
            ) from e

    async def _settle(self, surface: RenderingSurface, address: str) -> str:
        """Wait for script-driven content, then return the settled markup.

        After the fixed settle delay the markup is polled until two
        consecutive reads match or ``settle_timeout`` runs out; either way
        the last read is returned.
        """
        self.logger.debug(
            "waiting_for_render", address=address, settle_delay=self.settle_delay
        )
        await asyncio.sleep(self.settle_delay)
        markup = await self._serialize(surface, address)
        if self.stability_interval <= 0:
            return markup

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.settle_timeout
        polls = 0
        while loop.time() < deadline:
            await asyncio.sleep(self.stability_interval)
            current = await self._serialize(surface, address)
            polls += 1
            if current == markup:
                self.logger.debug("markup_stable", address=address, polls=polls)
                return current
            markup = current

        self.logger.warning(
            "settle_timeout",
            address=address,
            polls=polls,
            settle_timeout=self.settle_timeout,
        )
        return markup

    async def _serialize(self, surface: RenderingSurface, address: str) -> str:
        try:
            markup = await asyncio.wait_for(
                surface.serialize(), self.navigation_timeout
            )
        except asyncio.TimeoutError as e:
            raise SerializationFailure(
                f"Serialization did not finish within {self.navigation_timeout}s",
                address,
            ) from e
        if not isinstance(markup, str) or not markup.strip():
            raise SerializationFailure("Surface returned no usable markup", address)
        return markup

    def _extract(self, markup: str, address: str) -> T:
        self.logger.debug("parsing_markup", address=address, chars=len(markup))
        try:
            return self.strategy(parse_document(markup))
        except ExtractionFailure:
            raise
        except Exception as e:
            raise ExtractionFailure(f"Extraction failed: {e}", address) from e
