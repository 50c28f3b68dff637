"""Idempotent artifact writer.

Several assemblers share one build directory and may try to create it at the
same moment. Losing that race is fine: "already exists" counts as success.
"""

from __future__ import annotations

import os

import anyio


async def ensure_directory(directory: str | os.PathLike[str]) -> None:
    try:
        await anyio.Path(directory).mkdir(parents=True)
    except FileExistsError:
        pass


async def write_file(path: str | os.PathLike[str], contents: str | bytes) -> anyio.Path:
    """Create *path*'s directory if needed and write *contents*, replacing any file."""
    target = anyio.Path(path)
    await ensure_directory(target.parent)
    if isinstance(contents, bytes):
        await target.write_bytes(contents)
    else:
        await target.write_text(contents, encoding="utf-8")
    return target
