# File: wget_mirror/engine.py
"""wget_mirror.engine: orchestration layer used by the CLI and tests."""

from __future__ import annotations

from typing import Optional

from wget_mirror.config import MirrorConfig
from wget_mirror.crawler.crawler import MirrorCrawler
from wget_mirror.crawler.models import CrawlStats
from wget_mirror.crawler.resume import load_visited
from wget_mirror.crawler.visited import VisitedRegistry
from wget_mirror.logger import logger

__all__ = ["start_mirror"]


async def start_mirror(cfg: MirrorConfig, visited: Optional[VisitedRegistry] = None) -> CrawlStats:
    """
    Run one crawl in its own session and return the collected counters.

    Parameters
    ----------
    cfg : MirrorConfig
        Run settings; ``cfg.destination`` must already exist.
    visited : VisitedRegistry, optional
        Resume set. Loaded from ``cfg.destination`` when omitted.
    """
    if visited is None:
        visited = load_visited(cfg.destination)
    logger.debug("Resume set holds %d entries", len(visited))
    async with MirrorCrawler(cfg, visited) as crawler:
        return await crawler.crawl()
