# File: wget_mirror/utils.py
"""wget_mirror.utils: URL naming, scope checks and destination handling."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union
from urllib.parse import SplitResult, urlsplit, urlunsplit

from wget_mirror.errors import DestinationError
from wget_mirror.logger import logger

__all__: Sequence[str] = (
    "INDEX_FILENAME",
    "normalize_filename",
    "filename_for",
    "parse_start_url",
    "is_child_url",
    "prepare_destination",
)

#: filename used when a URL normalizes to the empty string
INDEX_FILENAME = "index.html"

_ALLOWED_SCHEMES = ("http", "https")


def normalize_filename(url: str) -> str:
    """Map a URL to the flat name used both on disk and as visited key.

    Drops ``:``, then turns ``.`` and ``/`` into ``_``. Lossy: ``http://h/a.b``
    and ``http://h/a/b`` share a name and are treated as the same page.
    """
    return url.replace(":", "").replace(".", "_").replace("/", "_")


def filename_for(url: str) -> str:
    """Filename for *url* inside the destination directory."""
    return normalize_filename(url) or INDEX_FILENAME


def parse_start_url(url: str) -> str:
    """Validate the user-supplied start URL and return its canonical string form.

    Raises ``ValueError`` unless *url* is an absolute http(s) URL with a host.
    """
    try:
        parts = urlsplit(url.strip())
        # accessing .port validates the netloc
        parts.port
    except ValueError as exc:
        raise ValueError(f"invalid start URL {url!r}: {exc}") from exc
    if parts.scheme not in _ALLOWED_SCHEMES:
        raise ValueError(f"invalid start URL {url!r}: scheme must be http or https")
    if not parts.hostname:
        raise ValueError(f"invalid start URL {url!r}: missing host")
    return urlunsplit(parts)


def _host(parts: SplitResult) -> str:
    """Host and port, without userinfo."""
    return parts.netloc.rpartition("@")[2]


def is_child_url(url: Union[str, SplitResult], start: Union[str, SplitResult]) -> bool:
    """True if *url* shares scheme and host with *start* and lies at or under its path.

    The query string is not considered.
    """
    u = urlsplit(url) if isinstance(url, str) else url
    s = urlsplit(start) if isinstance(start, str) else start
    if u.scheme != s.scheme or _host(u) != _host(s):
        return False
    if u.path == s.path:
        return True
    prefix = s.path if s.path.endswith("/") else s.path + "/"
    return u.path.startswith(prefix)


def prepare_destination(path: Union[str, Path]) -> Path:
    """Create the destination directory (mode 0755) if absent and return it.

    An existing destination must be a directory.
    """
    p = Path(path).expanduser()
    if not p.exists() and not p.is_symlink():
        try:
            p.mkdir(mode=0o755, parents=True)
        except OSError as exc:
            logger.error("Cannot create destination %s: %s", p, exc)
            raise DestinationError(f"cannot create destination directory {p}: {exc}") from exc
        logger.debug("Created destination %s", p)
        return p
    if not p.is_dir():
        raise DestinationError(f"destination {p} is not a directory")
    return p
