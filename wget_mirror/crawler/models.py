# wget_mirror/crawler/models.py
"""
Data models for the wget_mirror crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class PageData:
    """A page stored on disk: its URL, raw body and the file it was written to."""

    url: str
    content: bytes
    path: Path


@dataclass(slots=True)
class CrawlStats:
    """Counters collected over one crawl."""

    fetched: int = 0
    skipped_visited: int = 0
    skipped_on_disk: int = 0
    skipped_cancelled: int = 0
    failed: int = 0
    elapsed: float = 0.0
    files: list[Path] = field(default_factory=list)

    @property
    def pages_per_second(self) -> float:
        return self.fetched / self.elapsed if self.elapsed else 0.0
