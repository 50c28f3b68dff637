from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from component_build.cli import app
from component_build.core import build
from component_build.errors import AssemblerError, ManifestReadError
from component_build.require import REQUIRE_SHIM


@pytest.mark.timeout(20)
def test_build_writes_script_style_and_assets(component: Path) -> None:
    received = []
    outcome = build(component, {"install": False}, received.append)

    assert received == [[]]
    assert outcome.ok

    script = (component / "build" / "build.js").read_text(encoding="utf-8")
    assert script.startswith(REQUIRE_SHIM)
    assert 'require.register("app/index.js"' in script
    assert 'require.register("app/template.html"' in script
    assert script.rstrip().endswith('require("app");')

    style = (component / "build" / "build.css").read_text(encoding="utf-8")
    assert 'url("app/img/logo.png")' in style
    assert (component / "build" / "app" / "img" / "logo.png").read_text(encoding="utf-8") == "PNG"


@pytest.mark.timeout(20)
def test_installed_dependency_is_bundled(tmp_path: Path, make_component) -> None:
    root = make_component(
        tmp_path / "app",
        {"name": "app", "scripts": ["index.js"], "dependencies": {"component/emitter": "*"}},
        {"index.js": "var Emitter = require('emitter');"},
    )
    make_component(
        root / "components" / "component-emitter",
        {"name": "emitter", "scripts": ["index.js"], "styles": ["emitter.css"]},
        {"index.js": "module.exports = Emitter;", "emitter.css": ".e { background: url(e.png) }"},
    )

    outcome = build(root, {"install": False, "files": False})

    assert outcome.ok
    script = (root / "build" / "build.js").read_text(encoding="utf-8")
    assert script.index("component-emitter/index.js") < script.index('"app/index.js"')
    assert 'require.alias("component-emitter/index.js", "emitter");' in script
    style = (root / "build" / "build.css").read_text(encoding="utf-8")
    assert 'url("component-emitter/e.png")' in style


@pytest.mark.timeout(20)
def test_failing_script_leaves_sibling_artifacts(tmp_path: Path, make_component) -> None:
    root = make_component(
        tmp_path / "app",
        {"name": "app", "json": ["broken.json"], "styles": ["a.css"], "files": ["notes.txt"]},
        {"broken.json": "{", "a.css": "a {}", "notes.txt": "n"},
    )

    outcome = build(root, {"install": False})

    assert len(outcome.errors) == 1
    err = outcome.errors[0]
    assert isinstance(err, AssemblerError) and err.assembler == "scripts"
    assert (root / "build" / "build.css").exists()
    assert (root / "build" / "app" / "notes.txt").exists()
    assert not (root / "build" / "build.js").exists()


def test_absent_manifest_creates_nothing(tmp_path: Path) -> None:
    outcome = build(tmp_path / "app", {})
    assert len(outcome.errors) == 1
    assert isinstance(outcome.errors[0], ManifestReadError)
    assert not (tmp_path / "app").exists()


def test_no_require_no_autorequire(component: Path) -> None:
    outcome = build(component, {"install": False, "require": False, "autorequire": False})
    assert outcome.ok
    script = (component / "build" / "build.js").read_text(encoding="utf-8")
    assert script.startswith('require.register("app/index.js"')
    assert 'require("app");' not in script


def test_cli_build_and_validate(component: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["validate", str(component)])
    assert result.exit_code == 0, result.output

    result = runner.invoke(
        app, ["build", str(component), "--no-install", "--no-styles", "--script-file", "app.js"]
    )
    assert result.exit_code == 0, result.output
    assert (component / "build" / "app.js").exists()
    assert not (component / "build" / "build.css").exists()


def test_cli_reports_failures(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["build", str(tmp_path)])
    assert result.exit_code == 1

    result = runner.invoke(app, ["validate", str(tmp_path)])
    assert result.exit_code == 1


def test_cli_validate_rejects_undecodable_manifest(tmp_path: Path) -> None:
    (tmp_path / "component.json").write_bytes(b'{"name": "\xff\xfe"}')
    result = CliRunner().invoke(app, ["validate", str(tmp_path)])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
