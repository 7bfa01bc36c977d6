# wget_mirror/crawler/fetcher.py
"""
Fetcher module: issues one HTTP GET per page and writes the body to disk.
"""
from __future__ import annotations

import asyncio
import contextlib
import io
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os
from aiohttp import ClientError, ClientSession
from wget_mirror.crawler.models import PageData
from wget_mirror.errors import FetchError, PageWriteError
from wget_mirror.logger import get_logger
from wget_mirror.utils import filename_for

logger = get_logger("fetcher")

#: bytes read from the response per iteration
CHUNK_SIZE = 64 * 1024


class Fetcher:
    """Downloads pages into a flat destination directory."""

    def __init__(self, session: ClientSession, destination: Path, chunk_size: int = CHUNK_SIZE) -> None:
        self.session = session
        self.destination = Path(destination)
        self.chunk_size = chunk_size

    def path_for(self, url: str) -> Path:
        return self.destination / filename_for(url)

    async def fetch(self, url: str) -> Optional[PageData]:
        """
        GET *url* and store the body under its normalized filename.

        Returns PageData with the buffered body, or None when the file
        already exists (the page is neither re-downloaded nor parsed).
        Raises FetchError on transport failure and PageWriteError on local I/O failure;
        in both cases no file is left behind.
        """
        try:
            async with self.session.get(url) as resp:
                dest = self.path_for(url)
                try:
                    if await aiofiles.os.path.exists(dest):
                        logger.debug("Already on disk, skipping %s -> %s", url, dest.name)
                        return None
                    fh = await aiofiles.open(dest, "xb")
                except FileExistsError:
                    logger.debug("Created concurrently, skipping %s -> %s", url, dest.name)
                    return None
                except OSError as exc:
                    raise PageWriteError(f"could not create {dest}: {exc}", url) from exc

                buffer = io.BytesIO()
                try:
                    try:
                        async for chunk in resp.content.iter_chunked(self.chunk_size):
                            await fh.write(chunk)
                            buffer.write(chunk)
                    finally:
                        await fh.close()
                except (ClientError, asyncio.TimeoutError):
                    await _discard(dest)
                    raise
                except OSError as exc:
                    await _discard(dest)
                    raise PageWriteError(f"could not write {dest}: {exc}", url) from exc
                except BaseException:
                    await _discard(dest)
                    raise
                logger.info("Saved %s (HTTP %s, %d bytes) -> %s", url, resp.status, buffer.tell(), dest.name)
                return PageData(url, buffer.getvalue(), dest)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(f"could not download {url}: {str(exc) or type(exc).__name__}", url) from exc


async def _discard(path: Path) -> None:
    """Remove a partially written page so a later run fetches it again."""
    with contextlib.suppress(FileNotFoundError):
        await aiofiles.os.remove(path)
