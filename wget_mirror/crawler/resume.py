# wget_mirror/crawler/resume.py
"""
Resume support: seed the visited registry from files left by earlier runs.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

from wget_mirror.crawler.visited import VisitedRegistry
from wget_mirror.errors import ResumeLoadError
from wget_mirror.logger import logger


def _strip_extension(name: str) -> str:
    dot = name.rfind(".")
    return name[:dot] if dot != -1 else name


def load_visited(destination: Union[str, Path]) -> VisitedRegistry:
    """
    Build a VisitedRegistry from the immediate entries of *destination*.

    Each entry contributes its name with everything from the last ``.`` removed
    (``foo.html`` -> ``foo``, ``.hidden`` -> ``""``). Files written by the mirror
    carry no ``.``, so their names are used as-is.
    """
    dest = Path(destination)
    try:
        entries = list(dest.iterdir())
    except OSError as exc:
        logger.error("Cannot list destination %s: %s", dest, exc)
        raise ResumeLoadError(f"could not load already visited files from {dest}: {exc}") from exc

    registry = VisitedRegistry()
    for entry in entries:
        registry.add(_strip_extension(entry.name))
    logger.debug("Loaded %d visited entries from %s", len(registry), dest)
    return registry
