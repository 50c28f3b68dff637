from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def _write_component(root: Path, manifest: dict, files: dict[str, str] | None = None) -> Path:
    """Write ``component.json`` plus the given relative files under *root*."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "component.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    for rel, text in (files or {}).items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def make_component():
    return _write_component


@pytest.fixture
def component(tmp_path: Path) -> Path:
    """A small component with one script, one template, one stylesheet and an image."""
    return _write_component(
        tmp_path / "app",
        {
            "name": "app",
            "version": "1.0.0",
            "license": "MIT",
            "repo": "acme/app",
            "main": "index.js",
            "scripts": ["index.js"],
            "templates": ["template.html"],
            "styles": ["app.css"],
            "images": ["img/logo.png"],
        },
        {
            "index.js": "module.exports = 'app';",
            "template.html": "<p>hi</p>",
            "app.css": ".logo { background: url(img/logo.png); }",
            "img/logo.png": "PNG",
        },
    )
