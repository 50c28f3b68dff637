"""Style assembler: stylesheets with rewritten asset URLs into one artifact."""

from __future__ import annotations

from pathlib import Path

from component_build.context import BuildContext
from component_build.logging import get_logger
from component_build.types import DependencyTree
from component_build.writer import write_file

log = get_logger("component_build.assemblers.styles")


async def build_styles(tree: DependencyTree, ctx: BuildContext) -> Path | None:
    tools = ctx.toolchain
    output = await (
        tools.styles(tree, ctx.assembler_options())
        .use("styles", tools.plugins.css())
        .use("styles", tools.plugins.url_rewriter())
        .end()
    )

    if not isinstance(output, str):
        return None

    await write_file(ctx.style_path, output)
    log.debug("wrote %s", ctx.style_path, extra={"component": tree.canonical})
    return ctx.style_path
