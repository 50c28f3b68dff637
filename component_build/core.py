"""Build orchestration: read → validate → resolve → assemble (concurrently).

Every enabled assembler runs to completion inside one task group; failures
are collected, never cancelling siblings. Exactly one :class:`BuildOutcome`
is produced per call.
"""

from __future__ import annotations

import functools
import json
import os
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

import anyio

from component_build.assemblers.files import build_files
from component_build.assemblers.scripts import build_scripts
from component_build.assemblers.styles import build_styles
from component_build.context import BuildContext, Toolchain
from component_build.errors import (
    AssemblerError,
    BuildError,
    ManifestParseError,
    ManifestReadError,
    ResolutionError,
)
from component_build.logging import get_logger
from component_build.types import BuildOptions, BuildOutcome, DependencyTree
from component_build.validator import check_manifest

log = get_logger("component_build.core")

Assembler = Callable[[DependencyTree, BuildContext], Awaitable[Path | None]]

ASSEMBLERS: dict[str, Assembler] = {
    "scripts": build_scripts,
    "styles": build_styles,
    "files": build_files,
}


async def read_manifest(ctx: BuildContext) -> Any:
    try:
        data = await anyio.Path(ctx.manifest_path).read_bytes()
    except OSError as err:
        raise ManifestReadError.wrap(err) from err
    try:
        return json.loads(data)
    except ValueError as err:  # includes UnicodeDecodeError
        raise ManifestParseError(f"{ctx.manifest_path}: {err}", cause=err) from err


async def _run_assembler(
    kind: str, tree: DependencyTree, ctx: BuildContext, outcome: BuildOutcome
) -> None:
    try:
        artifact = await ASSEMBLERS[kind](tree, ctx)
    except Exception as err:
        log.error("%s failed: %s", kind, err, extra={"component": tree.canonical})
        outcome.errors.append(AssemblerError.wrap(err, assembler=kind))
        return
    if artifact is not None:
        outcome.artifacts.append(artifact)


async def build_component(
    directory: str | os.PathLike[str],
    options: BuildOptions | dict[str, Any] | None = None,
    toolchain: Toolchain | None = None,
) -> BuildOutcome:
    """Build the component in *directory* and return the aggregated outcome."""
    ctx = BuildContext(Path(directory), BuildOptions.coerce(options), toolchain or Toolchain())
    outcome = BuildOutcome()

    kinds = ctx.options.enabled_assemblers()
    if not kinds:
        log.info("nothing to build: scripts, styles and files are all disabled")
        return outcome

    try:
        manifest = await read_manifest(ctx)
    except BuildError as err:
        log.error("cannot load manifest: %s", err)
        outcome.errors.append(err)
        return outcome

    invalid = check_manifest(ctx.toolchain.validate, manifest, ctx.validate_options())
    if invalid is not None:
        log.error("invalid manifest: %s", invalid)
        outcome.errors.append(invalid)
        return outcome

    try:
        tree = await ctx.toolchain.resolve(manifest, ctx.resolve_options())
    except Exception as err:
        log.error("resolution failed: %s", err)
        outcome.errors.append(ResolutionError.wrap(err))
        return outcome

    log.info("building %s", ", ".join(kinds), extra={"component": tree.canonical})
    async with anyio.create_task_group() as tg:
        for kind in kinds:
            tg.start_soon(_run_assembler, kind, tree, ctx, outcome)

    log.info(
        "build finished with %d error(s)",
        len(outcome.errors),
        extra={"component": tree.canonical},
    )
    return outcome


def build(
    directory: str | os.PathLike[str],
    options: BuildOptions | dict[str, Any] | None = None,
    callback: Callable[[Sequence[BuildError]], Any] | None = None,
    toolchain: Toolchain | None = None,
) -> BuildOutcome:
    """Blocking entry point; calls ``callback(errors)`` once when the build is done."""
    outcome = anyio.run(
        functools.partial(build_component, directory, options, toolchain=toolchain)
    )
    if callback is not None:
        callback(outcome.errors)
    return outcome
