"""Per-build paths and the collaborators a build calls out to."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from component_build import pipeline, plugins
from component_build.require import canonical
from component_build.resolver import resolve_tree
from component_build.types import (
    AssemblerOptions,
    BuildOptions,
    Canonical,
    DependencyTree,
    ResolveOptions,
    ValidateOptions,
)
from component_build.validator import validate_component

PipelineFactory = Callable[[DependencyTree, AssemblerOptions], pipeline.Pipeline]


@dataclass
class Toolchain:
    validate: Callable[[dict, ValidateOptions], None] = validate_component
    resolve: Callable[[dict, ResolveOptions], Awaitable[DependencyTree]] = resolve_tree
    scripts: PipelineFactory = pipeline.scripts
    styles: PipelineFactory = pipeline.styles
    files: PipelineFactory = pipeline.files
    canonical: Callable[[DependencyTree], Canonical] = canonical
    plugins: Any = plugins


@dataclass
class BuildContext:
    root: Path
    options: BuildOptions
    toolchain: Toolchain = field(default_factory=Toolchain)

    @property
    def manifest_path(self) -> Path:
        return self.root / "component.json"

    @property
    def install_dir(self) -> Path:
        return self.options.install_dir or self.root / "components"

    @property
    def build_dir(self) -> Path:
        return self.options.build_dir or self.root / "build"

    @property
    def script_path(self) -> Path:
        return self.build_dir / self.options.script_build_file

    @property
    def style_path(self) -> Path:
        return self.build_dir / self.options.style_build_file

    def validate_options(self) -> ValidateOptions:
        return ValidateOptions(filename=self.root, verbose=self.options.verbose)

    def resolve_options(self) -> ResolveOptions:
        return ResolveOptions(
            root=self.root,
            out=self.install_dir,
            install=self.options.install,
            development=self.options.development,
            verbose=self.options.verbose,
        )

    def assembler_options(self) -> AssemblerOptions:
        return AssemblerOptions(development=self.options.development)
