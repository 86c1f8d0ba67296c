"""Filesystem page discovery.

Walks each pages directory for files with a page extension and infers
their routes.  Directories are scanned concurrently in worker threads;
results are combined in directory order so output is deterministic.

Files matching an ``ignore`` glob are not routed.  Their inferred path
is reported back so the caller can add it to the exclude rules, which
keeps the page out of the sitemap even when another source lists it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from fnmatch import fnmatch
from pathlib import Path

import anyio

from simple_sitemap.errors import ParseError
from simple_sitemap.pages.tree import build_routes, normalise_pages_for_sitemap
from simple_sitemap.pages.types import PageRoute, RouteNode

logger = logging.getLogger("simple_sitemap.pages")


@dataclass(frozen=True, slots=True)
class DiscoveredPages:
    """Result of scanning the pages directories.

    Attributes:
        routes: Sitemap-eligible static routes.
        excludes: Inferred paths of ignored page files.
    """

    routes: tuple[PageRoute, ...]
    excludes: tuple[str, ...] = ()


def _is_ignored(relative: str, ignore: Sequence[str]) -> bool:
    return any(fnmatch(relative, pattern) for pattern in ignore)


def list_page_files(pages_dir: str | Path, extensions: Sequence[str]) -> list[str]:
    """Sorted POSIX paths of every page file under *pages_dir*.

    Hidden files and directories are skipped.
    """
    root = Path(pages_dir)
    if not root.is_dir():
        return []
    files = [
        item.as_posix()
        for item in root.rglob("*")
        if item.is_file()
        and item.suffix in extensions
        and not any(part.startswith(".") for part in item.relative_to(root).parts)
    ]
    files.sort()
    return files


def _scan_directory(
    pages_dir: str | Path,
    extensions: Sequence[str],
    ignore: Sequence[str],
) -> tuple[list[RouteNode], list[str]]:
    """Blocking scan of one directory. Runs in a worker thread."""
    base = Path(pages_dir).as_posix()
    files: list[str] = []
    excludes: list[str] = []
    for file in list_page_files(pages_dir, extensions):
        relative = Path(file).relative_to(base).as_posix()
        if ignore and _is_ignored(relative, ignore):
            excludes.append(build_routes([file], base)[0].path)
            continue
        files.append(file)
    logger.debug("Found %d page files in %s", len(files), base)
    return build_routes(files, base), excludes


async def resolve_pages_routes(
    pages_dirs: Sequence[str | Path],
    extensions: Sequence[str],
    ignore: Sequence[str] = (),
) -> DiscoveredPages:
    """Infer static routes from every pages directory.

    Args:
        pages_dirs: Directories to scan.  Missing directories yield no routes.
        extensions: Page file suffixes, including the dot.
        ignore: Glob patterns matched against paths relative to their
            pages directory.

    Returns:
        Eligible routes from all directories plus excludes for ignored files.

    Raises:
        ParseError: If a file name contains a malformed segment.
    """
    results: list[tuple[list[RouteNode], list[str]]] = [([], [])] * len(pages_dirs)
    errors: list[ParseError] = []

    async def _scan(index: int, directory: str | Path) -> None:
        try:
            results[index] = await anyio.to_thread.run_sync(_scan_directory, directory, extensions, ignore)
        except ParseError as exc:
            errors.append(exc)

    async with anyio.create_task_group() as tg:
        for index, directory in enumerate(pages_dirs):
            tg.start_soon(_scan, index, directory)

    # Surface the parse error itself rather than the task group's wrapper
    if errors:
        raise errors[0]

    trees = [node for nodes, _ in results for node in nodes]
    excludes = tuple(path for _, paths in results for path in paths)
    return DiscoveredPages(routes=tuple(normalise_pages_for_sitemap(trees)), excludes=excludes)


def pages_to_entries(routes: Sequence[PageRoute], *, auto_lastmod: bool = True) -> list[dict[str, object]]:
    """Turn page routes into entries, stamping file mtimes as ``lastmod``."""
    entries: list[dict[str, object]] = []
    for page in routes:
        entry: dict[str, object] = {"loc": page.path}
        if auto_lastmod and page.file:
            try:
                mtime = Path(page.file).stat().st_mtime
            except OSError:
                logger.warning("Cannot stat page file %s", page.file)
            else:
                entry["lastmod"] = datetime.fromtimestamp(mtime, UTC)
        entries.append(entry)
    return entries
