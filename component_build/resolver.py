"""Dependency resolution (and optional install) for components.

Layout under the install directory follows the flat component convention:
``user/repo`` lives in ``<out>/user-repo/`` with canonical name ``user-repo``.
Missing remote dependencies are fetched from GitHub raw URLs when ``install``
is set; local components are looked up through the declaring component's
``paths``.
"""

from __future__ import annotations

import json
from pathlib import Path

import anyio
import httpx

from component_build.logging import get_logger
from component_build.types import DependencyTree, ResolveOptions
from component_build.validator import ASSET_FIELDS
from component_build.writer import write_file

log = get_logger("component_build.resolver")

RAW_BASE_URL = "https://raw.githubusercontent.com"
MANIFEST = "component.json"


def install_name(slug: str) -> str:
    return slug.replace("/", "-")


def _ref(version: str) -> str:
    return "master" if version in {"", "*"} else version


async def _read_manifest(directory: Path) -> dict:
    text = await anyio.Path(directory / MANIFEST).read_text(encoding="utf-8")
    return json.loads(text)


async def install_component(
    client: httpx.AsyncClient, slug: str, version: str, out: Path
) -> Path:
    """Download *slug*'s manifest and every asset it lists into ``out``."""
    base = f"{RAW_BASE_URL}/{slug}/{_ref(version)}"
    target = out / install_name(slug)

    resp = await client.get(f"{base}/{MANIFEST}")
    resp.raise_for_status()
    manifest = resp.json()

    for field in ASSET_FIELDS:
        for rel in manifest.get(field) or []:
            if Path(rel).is_absolute() or ".." in Path(rel).parts:
                raise RuntimeError(f"{slug}: unsafe asset path {rel!r}")
            asset = await client.get(f"{base}/{rel}")
            asset.raise_for_status()
            await write_file(target / rel, asset.content)

    await write_file(target / MANIFEST, resp.content)
    return target


class Resolver:
    """Builds a :class:`DependencyTree` for one root manifest."""

    def __init__(self, options: ResolveOptions, client: httpx.AsyncClient | None = None) -> None:
        self.options = options
        self.client = client
        self._resolved: dict[str, DependencyTree] = {}

    async def _remote(self, slug: str, version: str) -> DependencyTree:
        canonical = install_name(slug)
        if canonical in self._resolved:
            return self._resolved[canonical]

        directory = self.options.out / canonical
        if not await anyio.Path(directory / MANIFEST).exists():
            if not self.options.install:
                raise LookupError(f"dependency {slug!r} is not installed in {self.options.out}")
            if self.client is None:
                raise LookupError(f"dependency {slug!r} needs installing but no client is set")
            if self.options.verbose:
                log.info("installing %s@%s", slug, version, extra={"component": slug})
            directory = await install_component(self.client, slug, version, self.options.out)

        manifest = await _read_manifest(directory)
        return await self._node(manifest, directory, canonical)

    async def _local(self, name: str, parent: DependencyTree) -> DependencyTree:
        for search in parent.manifest.get("paths") or []:
            directory = parent.path / search / name
            if await anyio.Path(directory / MANIFEST).exists():
                manifest = await _read_manifest(directory)
                canonical = manifest.get("name") or name
                if canonical in self._resolved:
                    return self._resolved[canonical]
                return await self._node(manifest, directory, canonical)
        raise LookupError(f"local component {name!r} of {parent.canonical!r} not found")

    async def _node(self, manifest: dict, directory: Path, canonical: str) -> DependencyTree:
        node = DependencyTree(
            name=manifest.get("name") or canonical,
            canonical=canonical,
            path=directory,
            manifest=manifest,
        )
        # registered before children so cycles terminate
        self._resolved[canonical] = node

        deps = dict(manifest.get("dependencies") or {})
        if self.options.development and directory == self.options.root:
            deps.update(manifest.get("development") or {})
        for slug, version in deps.items():
            node.dependencies.append(await self._remote(slug, version))
        for name in manifest.get("local") or []:
            node.locals.append(await self._local(name, node))

        if self.options.verbose:
            log.info("resolved %s at %s", canonical, directory, extra={"component": canonical})
        return node

    async def resolve(self, manifest: dict) -> DependencyTree:
        return await self._node(manifest, self.options.root, manifest.get("name") or "")


async def resolve_tree(
    manifest: dict, options: ResolveOptions, client: httpx.AsyncClient | None = None
) -> DependencyTree:
    """Resolve *manifest* rooted at ``options.root`` into a dependency tree."""
    if client is not None:
        return await Resolver(options, client).resolve(manifest)
    async with httpx.AsyncClient(follow_redirects=True, timeout=30.0) as owned:
        return await Resolver(options, owned).resolve(manifest)
