"""Manifest validation: JSON Schema first, then the files the manifest lists."""

from __future__ import annotations

import json
from collections.abc import Callable
from importlib import resources
from pathlib import Path

from jsonschema import Draft202012Validator

from component_build.errors import BuildError, ManifestValidationError
from component_build.logging import get_logger
from component_build.types import ValidateOptions

log = get_logger("component_build.validator")

ASSET_FIELDS = ("scripts", "styles", "templates", "json", "images", "fonts", "files")
RECOMMENDED_FIELDS = ("version", "license", "repo")

# --- Schema loaders ---------------------------------------------------------


def _load_schema(package: str, resource_name: str) -> dict:
    with resources.files(package).joinpath(resource_name).open("r", encoding="utf-8") as f:
        return json.load(f)


def _component_schema() -> dict:
    return _load_schema("component_build.schema", "component.schema.json")


# --- Checks -----------------------------------------------------------------


def _check_assets(manifest: dict, root: Path) -> None:
    base = root.resolve()
    for field in ASSET_FIELDS:
        for rel in manifest.get(field) or []:
            target = (base / rel).resolve()
            if not target.is_relative_to(base):
                raise ValueError(f"{field}: {rel!r} points outside the component")
            if not target.is_file():
                raise ValueError(f"{field}: {rel!r} does not exist in {root}")
    main = manifest.get("main")
    if main and main not in (manifest.get("scripts") or []):
        raise ValueError(f"main: {main!r} is not listed in scripts")


def validate_component(manifest: dict, options: ValidateOptions) -> None:
    """Raise if *manifest* is not a valid component manifest.

    Raises ``jsonschema.ValidationError`` for shape problems and ``ValueError``
    for missing or escaping asset files.
    """
    Draft202012Validator(_component_schema()).validate(manifest)
    _check_assets(manifest, options.filename)

    if options.verbose:
        for field in RECOMMENDED_FIELDS:
            if field not in manifest:
                log.warning(
                    "component.json has no %r field",
                    field,
                    extra={"component": manifest.get("name")},
                )


def check_manifest(
    validate: Callable[[dict, ValidateOptions], None],
    manifest: object,
    options: ValidateOptions,
) -> BuildError | None:
    """Run *validate* and return its failure as a build error instead of raising."""
    try:
        validate(manifest, options)
    except Exception as err:
        return ManifestValidationError.wrap(err)
    return None
