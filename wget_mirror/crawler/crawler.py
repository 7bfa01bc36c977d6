# === FILE: wget_mirror/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import signal
import time
from contextlib import nullcontext
from pathlib import Path
from typing import AsyncContextManager, List, Optional, Sequence
from urllib.parse import urlsplit

from aiohttp import ClientSession, ClientTimeout

from wget_mirror.crawler.fetcher import Fetcher
from wget_mirror.crawler.link_extractor import extract_links
from wget_mirror.crawler.models import CrawlStats
from wget_mirror.crawler.visited import VisitedRegistry
from wget_mirror.errors import CrawlError
from wget_mirror.logger import get_logger
from wget_mirror.utils import normalize_filename

__all__ = ("MirrorCrawler",)

_STOP_SIGNALS: Sequence[signal.Signals] = (signal.SIGINT, signal.SIGTERM)


class MirrorCrawler:
    """Recursive same-origin mirror.

    Every page spawns one task per in-scope anchor and waits for all of them.
    A URL is fetched at most once per crawl: the visited registry's ``claim``
    decides which task gets it. SIGINT/SIGTERM stop new tasks from fetching;
    downloads already in flight complete.
    """

    def __init__(
        self,
        config,
        visited: Optional[VisitedRegistry] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.start_url: str = config.start_url
        self._start_parts = urlsplit(self.start_url)
        self.destination = Path(config.destination)
        self.visited = visited if visited is not None else VisitedRegistry()
        self.stats = CrawlStats()
        self.logger = get_logger("crawler")
        self.session = session
        self._owns_session = session is None
        self._fetcher: Optional[Fetcher] = None
        self._cancelled = asyncio.Event()
        max_concurrency = getattr(config, "max_concurrency", None)
        self._limit: Optional[asyncio.Semaphore] = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def __aenter__(self) -> MirrorCrawler:
        if self.session is None:
            timeout = getattr(self.config, "timeout", None)
            self.session = ClientSession(timeout=ClientTimeout(total=timeout))
        self._fetcher = Fetcher(self.session, self.destination)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Stop descending: tasks started after this return without fetching."""
        if not self._cancelled.is_set():
            self.logger.info("Cancellation requested")
        self._cancelled.set()

    async def crawl(self) -> CrawlStats:
        """Mirror everything reachable from the start URL and return the counters."""
        if self._fetcher is None:
            raise RuntimeError("Session not initialized")
        self.logger.info("Mirroring %s into %s", self.start_url, self.destination)
        started = time.monotonic()
        installed = self._install_signal_handlers()
        try:
            await self.download(self.start_url)
        finally:
            self._remove_signal_handlers(installed)
            self.stats.elapsed = time.monotonic() - started
            self.logger.info(
                "Finished: %d pages in %.2f s (%.2f p/s), %d already visited, %d already on disk",
                self.stats.fetched,
                self.stats.elapsed,
                self.stats.pages_per_second,
                self.stats.skipped_visited,
                self.stats.skipped_on_disk,
            )
        return self.stats

    async def download(self, url: str) -> None:
        """Fetch *url* unless already claimed, then recurse into its in-scope links."""
        if self._fetcher is None:
            raise RuntimeError("Session not initialized")
        if self.visited.claim(normalize_filename(url)):
            self.stats.skipped_visited += 1
            return

        try:
            async with self._slot():
                page = await self._fetcher.fetch(url)
        except Exception:
            self.stats.failed += 1
            raise
        if page is None:
            self.stats.skipped_on_disk += 1
            return
        self.stats.fetched += 1
        self.stats.files.append(page.path)

        children = extract_links(page, self._start_parts)
        if not children:
            return
        tasks = [asyncio.create_task(self._descend(child)) for child in children]
        results = await asyncio.gather(*tasks, return_exceptions=True)
        errors: List[BaseException] = [r for r in results if isinstance(r, BaseException)]
        if errors:
            first = errors[0]
            raise CrawlError(f"could not download link: {first}", url, errors) from first

    async def _descend(self, url: str) -> None:
        if self._cancelled.is_set():
            self.logger.info("Exiting...")
            self.stats.skipped_cancelled += 1
            return
        await self.download(url)

    def _slot(self) -> AsyncContextManager:
        return self._limit if self._limit is not None else nullcontext()

    def _install_signal_handlers(self) -> List[signal.Signals]:
        loop = asyncio.get_running_loop()
        installed: List[signal.Signals] = []
        for sig in _STOP_SIGNALS:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except (NotImplementedError, RuntimeError, ValueError) as exc:
                # Windows loops and non-main threads have no signal support
                self.logger.debug("Cannot watch %s: %s", sig.name, exc)
                continue
            installed.append(sig)
        return installed

    def _remove_signal_handlers(self, installed: Sequence[signal.Signals]) -> None:
        loop = asyncio.get_running_loop()
        for sig in installed:
            loop.remove_signal_handler(sig)

    def _on_signal(self, sig: signal.Signals) -> None:
        self.logger.info("Received %s", sig.name)
        self.cancel()
