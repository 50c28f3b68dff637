"""File assembler: copy images, fonts and other files into the build directory."""

from __future__ import annotations

from pathlib import Path

from component_build.context import BuildContext
from component_build.types import DependencyTree


async def build_files(tree: DependencyTree, ctx: BuildContext) -> Path | None:
    tools = ctx.toolchain
    options = ctx.assembler_options().model_copy(update={"destination": ctx.build_dir})
    await (
        tools.files(tree, options)
        .use("images", tools.plugins.copy())
        .use("fonts", tools.plugins.copy())
        .use("files", tools.plugins.copy())
        .end()
    )
    return None
