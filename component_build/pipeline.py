"""Asset pipelines: walk a dependency tree and run tagged plugins over its files.

A pipeline is configured with ``use(tag, plugin)``; *tag* names the manifest
field whose files the plugin receives (``scripts``, ``styles``, ``images``...).
Plugins registered on the same tag run in registration order on each file and
edit ``BuildFile.contents`` in place. ``end()`` concatenates what is left.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import anyio

from component_build.types import AssemblerOptions, DependencyTree


@dataclass
class BuildFile:
    component: DependencyTree
    tag: str
    path: str  # relative to component.path, as listed in the manifest
    contents: str | None = None
    main: bool = False

    @property
    def filename(self) -> Path:
        return self.component.path / self.path

    @property
    def module_id(self) -> str:
        return f"{self.component.canonical}/{self.path}"


Plugin = Callable[[BuildFile, "Pipeline"], Awaitable[None]]


def walk(tree: DependencyTree) -> Iterator[DependencyTree]:
    """Yield components dependencies-first, each canonical name once."""
    seen: set[str] = set()

    def visit(node: DependencyTree) -> Iterator[DependencyTree]:
        if node.canonical in seen:
            return
        seen.add(node.canonical)
        for child in [*node.dependencies, *node.locals]:
            yield from visit(child)
        yield node

    yield from visit(tree)


def main_script(component: DependencyTree) -> str | None:
    scripts = component.manifest.get("scripts") or []
    main = component.manifest.get("main")
    if main:
        return main
    if "index.js" in scripts:
        return "index.js"
    return scripts[0] if len(scripts) == 1 else None


@dataclass
class Pipeline:
    tree: DependencyTree
    options: AssemblerOptions = field(default_factory=AssemblerOptions)
    read_contents: bool = True
    plugins: dict[str, list[Plugin]] = field(default_factory=dict)

    def use(self, tag: str, plugin: Plugin) -> Pipeline:
        self.plugins.setdefault(tag, []).append(plugin)
        return self

    async def _load(self, component: DependencyTree, tag: str, rel: str) -> BuildFile:
        file = BuildFile(component=component, tag=tag, path=rel)
        file.main = tag == "scripts" and rel == main_script(component)
        if self.read_contents:
            file.contents = await anyio.Path(file.filename).read_text(encoding="utf-8")
        return file

    async def end(self) -> str | None:
        chunks: list[str] = []
        for component in walk(self.tree):
            for tag, plugins in self.plugins.items():
                for rel in component.manifest.get(tag) or []:
                    file = await self._load(component, tag, rel)
                    for plugin in plugins:
                        await plugin(file, self)
                    if file.contents is not None:
                        chunks.append(file.contents)
        if not chunks:
            return None
        return "".join(chunks)


def scripts(tree: DependencyTree, options: AssemblerOptions | None = None) -> Pipeline:
    return Pipeline(tree, options or AssemblerOptions())


def styles(tree: DependencyTree, options: AssemblerOptions | None = None) -> Pipeline:
    return Pipeline(tree, options or AssemblerOptions())


def files(tree: DependencyTree, options: AssemblerOptions | None = None) -> Pipeline:
    return Pipeline(tree, options or AssemblerOptions(), read_contents=False)
