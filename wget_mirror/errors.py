"""wget_mirror.errors: exception hierarchy raised by the mirror."""

from __future__ import annotations

from typing import Optional, Sequence

__all__ = (
    "MirrorError",
    "DestinationError",
    "ResumeLoadError",
    "FetchError",
    "PageWriteError",
    "PageParseError",
    "CrawlError",
)


class MirrorError(Exception):
    """Base class for every error raised by wget_mirror."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class DestinationError(MirrorError):
    """Destination directory cannot be created or is not a directory."""


class ResumeLoadError(MirrorError):
    """Destination directory could not be listed to seed the visited set."""


class FetchError(MirrorError):
    """HTTP GET failed at the transport level."""


class PageWriteError(MirrorError):
    """The page file could not be created or written."""


class PageParseError(MirrorError):
    """The downloaded body could not be parsed as HTML."""


class CrawlError(MirrorError):
    """One or more child downloads failed.

    ``errors`` keeps every failure reported by the children, in the order the
    children were spawned; the message and ``__cause__`` refer to the first one.
    """

    def __init__(self, message: str, url: Optional[str] = None, errors: Sequence[BaseException] = ()) -> None:
        super().__init__(message, url)
        self.errors = list(errors)
