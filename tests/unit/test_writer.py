from __future__ import annotations

from pathlib import Path

import anyio
import pytest

from component_build.writer import ensure_directory, write_file

pytestmark = pytest.mark.anyio


async def test_write_file_creates_missing_directory(tmp_path: Path) -> None:
    target = tmp_path / "build" / "build.js"
    await write_file(target, "console.log(1)")
    assert target.read_text(encoding="utf-8") == "console.log(1)"


async def test_concurrent_writes_share_one_new_directory(tmp_path: Path) -> None:
    """Both writers race to create build/; the loser must not fail."""
    build_dir = tmp_path / "build"
    async with anyio.create_task_group() as tg:
        tg.start_soon(write_file, build_dir / "build.js", "js")
        tg.start_soon(write_file, build_dir / "build.css", "css")

    assert (build_dir / "build.js").read_text(encoding="utf-8") == "js"
    assert (build_dir / "build.css").read_text(encoding="utf-8") == "css"


async def test_concurrent_writes_to_same_path_last_write_wins(tmp_path: Path) -> None:
    target = tmp_path / "build" / "out.txt"
    async with anyio.create_task_group() as tg:
        tg.start_soon(write_file, target, "first")
        tg.start_soon(write_file, target, "second")
    assert target.read_text(encoding="utf-8") in {"first", "second"}


async def test_existing_directory_is_not_an_error(tmp_path: Path) -> None:
    await ensure_directory(tmp_path)
    await write_file(tmp_path / "a.txt", "one")
    await write_file(tmp_path / "a.txt", "two")
    assert (tmp_path / "a.txt").read_text(encoding="utf-8") == "two"


async def test_bytes_are_written_verbatim(tmp_path: Path) -> None:
    await write_file(tmp_path / "logo.png", b"\x89PNG")
    assert (tmp_path / "logo.png").read_bytes() == b"\x89PNG"


async def test_other_directory_errors_propagate(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(OSError):
        await write_file(blocker / "build" / "build.js", "x")
