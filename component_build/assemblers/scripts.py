"""Script assembler: modules, templates and JSON into one script artifact.

The concatenated output is optionally prefixed with the bootstrap loader and
suffixed with a ``require()`` of the root component.
"""

from __future__ import annotations

from pathlib import Path

from component_build.context import BuildContext
from component_build.logging import get_logger
from component_build.require import REQUIRE_SHIM, autorequire_statement
from component_build.types import DependencyTree
from component_build.writer import write_file

log = get_logger("component_build.assemblers.scripts")


async def build_scripts(tree: DependencyTree, ctx: BuildContext) -> Path | None:
    tools = ctx.toolchain
    output = await (
        tools.scripts(tree, ctx.assembler_options())
        .use("scripts", tools.plugins.js())
        .use("templates", tools.plugins.string())
        .use("json", tools.plugins.json())
        .end()
    )

    if not isinstance(output, str):
        return None

    if ctx.options.require:
        output = REQUIRE_SHIM + output

    if ctx.options.autorequire:
        output += autorequire_statement(tools.canonical(tree).canonical)

    await write_file(ctx.script_path, output)
    log.debug("wrote %s", ctx.script_path, extra={"component": tree.canonical})
    return ctx.script_path
