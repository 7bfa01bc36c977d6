# wget_mirror/crawler/__init__.py
"""Crawl core: visited registry, resume loader, fetcher, link extractor and crawler."""
from wget_mirror.crawler.crawler import MirrorCrawler
from wget_mirror.crawler.models import CrawlStats, PageData
from wget_mirror.crawler.resume import load_visited
from wget_mirror.crawler.visited import VisitedRegistry

__all__ = ("MirrorCrawler", "CrawlStats", "PageData", "load_visited", "VisitedRegistry")
