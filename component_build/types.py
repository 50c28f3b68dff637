"""Shared Pydantic models for build options, dependency trees and outcomes."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from component_build.errors import BuildError


class BuildOptions(BaseModel):
    """Options for one build.

    camelCase names (``installDir``, ``scriptBuildFile``...) are accepted as
    aliases so option dicts written for the JavaScript tool keep working.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    install: bool = True
    require: bool = True
    autorequire: bool = True
    development: bool = False
    verbose: bool = False
    scripts: bool = True
    styles: bool = True
    files: bool = True
    install_dir: Path | None = Field(default=None, alias="installDir")
    build_dir: Path | None = Field(default=None, alias="buildDir")
    script_build_file: str = Field(default="build.js", alias="scriptBuildFile")
    style_build_file: str = Field(default="build.css", alias="styleBuildFile")

    @classmethod
    def coerce(cls, options: BuildOptions | dict[str, Any] | None) -> BuildOptions:
        if isinstance(options, cls):
            return options
        # None and "" mean "use the default", as an unset JS option would
        return cls.model_validate(
            {k: v for k, v in (options or {}).items() if v is not None and v != ""}
        )

    def enabled_assemblers(self) -> list[str]:
        return [kind for kind in ("scripts", "styles", "files") if getattr(self, kind)]


class ValidateOptions(BaseModel):
    filename: Path
    verbose: bool = False


class ResolveOptions(BaseModel):
    root: Path
    out: Path
    install: bool = True
    development: bool = False
    verbose: bool = False


class AssemblerOptions(BaseModel):
    development: bool = False
    destination: Path | None = None


class DependencyTree(BaseModel):
    """A resolved component and its transitive dependencies.

    Attributes
    ----------
    name: str
        Manifest name, used for short aliases (``require("emitter")``).
    canonical: str
        Unique module prefix inside a build (``component-emitter``).
    path: Path
        Directory holding the component's ``component.json``.
    manifest: dict
        Parsed manifest.
    dependencies: list[DependencyTree]
        Remote dependencies (and development dependencies when requested).
    locals: list[DependencyTree]
        Local components found through ``paths``.
    """

    name: str
    canonical: str
    path: Path
    manifest: dict = Field(default_factory=dict)
    dependencies: list[DependencyTree] = Field(default_factory=list)
    locals: list[DependencyTree] = Field(default_factory=list)


class Canonical(BaseModel):
    canonical: str
    main: str | None = None


class BuildOutcome(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    errors: list[BuildError] = Field(default_factory=list)
    artifacts: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
