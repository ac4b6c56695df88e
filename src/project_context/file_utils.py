"""Filesystem helpers for context storage, run off the event loop."""

from __future__ import annotations

import asyncio
import shutil
from datetime import datetime, timezone
from pathlib import Path


def utc_timestamp(now: datetime | None = None) -> str:
    """Return a filesystem-safe UTC timestamp such as ``2024-01-15T10-30-00-123Z``.

    Timestamps sort lexicographically in chronological order.
    """
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Return the text of a stored document.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Replace the text of a stored document; the parent directory must exist."""
    await asyncio.to_thread(path.write_text, content, encoding=encoding)


async def create_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write a new document; the parent directory must exist.

    Raises:
        FileExistsError: If ``path`` already exists.
    """

    def _create() -> None:
        with path.open("x", encoding=encoding) as handle:
            handle.write(content)

    await asyncio.to_thread(_create)


async def ensure_dir_async(path: Path) -> None:
    """Create ``path`` and any missing parents; an existing directory is kept."""
    await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)


async def create_dir_async(path: Path) -> None:
    """Create ``path`` and any missing parents.

    Raises:
        FileExistsError: If ``path`` already exists.
    """
    await asyncio.to_thread(path.mkdir, parents=True, exist_ok=False)


async def move_async(source: Path, destination: Path) -> None:
    """Move a file, across filesystems if needed."""
    await asyncio.to_thread(shutil.move, str(source), str(destination))


async def list_files_async(directory: Path, suffix: str) -> list[Path]:
    """Return files under ``directory`` (recursively) ending in ``suffix``, sorted.

    A missing directory has no files.
    """

    def _list() -> list[Path]:
        if not directory.is_dir():
            return []
        return sorted(path for path in directory.rglob(f"*{suffix}") if path.is_file())

    return await asyncio.to_thread(_list)
