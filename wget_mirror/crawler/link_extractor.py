# wget_mirror/crawler/link_extractor.py
"""
Link extraction for wget_mirror: anchors only, resolved and scoped to the start URL.
"""
from __future__ import annotations

from typing import List, Union
from urllib.parse import SplitResult, urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag
from wget_mirror.crawler.models import PageData
from wget_mirror.errors import PageParseError
from wget_mirror.utils import is_child_url


def extract_links(page: PageData, start: Union[str, SplitResult]) -> List[str]:
    """
    Return absolute in-scope URLs for every <a href> of *page*, in document order.

    Hrefs that fail to parse, resolve to another scheme, host or path
    outside *start*, or contain a fragment are dropped.
    Duplicates are kept; the visited registry deduplicates them.
    """
    start_parts = urlsplit(start) if isinstance(start, str) else start
    try:
        soup = BeautifulSoup(page.content, "html.parser")
    except Exception as exc:
        raise PageParseError(f"could not read html body of {page.url}: {exc}", page.url) from exc

    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        try:
            absolute = urljoin(page.url, href_val.strip())
            parsed = urlsplit(absolute)
            # netloc is only validated lazily
            parsed.port
        except ValueError:
            continue
        if "#" in absolute or not is_child_url(parsed, start_parts):
            continue
        links.append(absolute)
    return links
