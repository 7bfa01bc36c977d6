# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import pytest
import pytest_asyncio
from aiohttp import web

from wget_mirror.config import MirrorConfig
from wget_mirror.crawler.models import CrawlStats
from wget_mirror.engine import start_mirror

#: a page body, or a callable computing one from the request
PageT = Union[str, Callable[[web.Request], Union[str, Awaitable[str]]]]


@dataclass
class Site:
    """A running test site: base URL plus GET counters per path."""

    base: str
    hits: Counter = field(default_factory=Counter)
    in_flight: int = 0
    max_in_flight: int = 0

    def url(self, path: str) -> str:
        return f"{self.base}{path}"

    @property
    def total_hits(self) -> int:
        return sum(self.hits.values())


@pytest_asyncio.fixture
async def serve_site(unused_tcp_port_factory) -> AsyncIterator[Callable[..., Awaitable[Site]]]:
    """Factory fixture: ``site = await serve_site({"/a": "<a href='b'>"})``.

    Unknown paths answer 404. Every request is counted in ``site.hits`` by path.
    """
    runners: list[web.AppRunner] = []

    async def _serve(pages: Mapping[str, PageT], delay: float = 0.0) -> Site:
        port = unused_tcp_port_factory()
        site = Site(base=f"http://127.0.0.1:{port}")

        async def handler(request: web.Request) -> web.StreamResponse:
            site.hits[request.path] += 1
            site.in_flight += 1
            site.max_in_flight = max(site.max_in_flight, site.in_flight)
            try:
                if delay:
                    await asyncio.sleep(delay)
                page = pages.get(request.path)
                if page is None:
                    return web.Response(status=404, text="not found")
                body = page(request) if callable(page) else page
                if asyncio.iscoroutine(body):
                    body = await body
                return web.Response(text=body, content_type="text/html")
            finally:
                site.in_flight -= 1

        app = web.Application()
        app.router.add_get("/{tail:.*}", handler)
        runner = web.AppRunner(app)
        await runner.setup()
        await web.TCPSite(runner, "127.0.0.1", port).start()
        runners.append(runner)
        return site

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()


@pytest.fixture()
def destination(tmp_path: Path) -> Path:
    dest = tmp_path / "mirror"
    dest.mkdir()
    return dest


async def run_mirror(start_url: str, destination: Path, **settings) -> CrawlStats:
    """Run a full crawl (with resume loading) under a generous timeout."""
    cfg = MirrorConfig(start_url=start_url, destination=destination, **settings)
    return await asyncio.wait_for(start_mirror(cfg), timeout=15.0)


def files_in(destination: Path) -> set[str]:
    return {p.name for p in destination.iterdir()}
