"""Built-in pipeline plugins.

Each factory returns an async callable ``plugin(file, pipeline)`` that edits
``file.contents``. Script-side plugins wrap files as modules for the
bootstrap loader in :mod:`component_build.require`.
"""

from __future__ import annotations

import json as _json
import posixpath
import re

import anyio

from component_build.pipeline import BuildFile, Pipeline
from component_build.writer import ensure_directory

_URL_RE = re.compile(r"""url\(\s*(['"]?)([^'")]+)\1\s*\)""")
_ABSOLUTE_URL_RE = re.compile(r"^([a-z][a-z0-9+.-]*:|/|#)", re.IGNORECASE)


def _register(file: BuildFile, body: str, pipeline: Pipeline) -> str:
    out = (
        f"require.register({_json.dumps(file.module_id)}, "
        f"function(exports, require, module){{\n{body}\n}});\n"
    )
    if pipeline.options.development:
        out += f"//# sourceURL={file.module_id}\n"
    return out


def _aliases(file: BuildFile) -> str:
    component = file.component
    names = [component.canonical]
    if component.name != component.canonical:
        names.append(component.name)
    return "".join(
        f"require.alias({_json.dumps(file.module_id)}, {_json.dumps(name)});\n"
        for name in names
    )


def js():
    async def plugin(file: BuildFile, pipeline: Pipeline) -> None:
        out = _register(file, file.contents or "", pipeline)
        if file.main:
            out += _aliases(file)
        file.contents = out

    return plugin


def string():
    async def plugin(file: BuildFile, pipeline: Pipeline) -> None:
        body = f"module.exports = {_json.dumps(file.contents or '')};"
        file.contents = _register(file, body, pipeline)

    return plugin


def json():
    async def plugin(file: BuildFile, pipeline: Pipeline) -> None:
        try:
            value = _json.loads(file.contents or "")
        except ValueError as err:
            raise ValueError(f"{file.module_id}: invalid JSON ({err})") from err
        body = f"module.exports = {_json.dumps(value)};"
        file.contents = _register(file, body, pipeline)

    return plugin


def css():
    async def plugin(file: BuildFile, pipeline: Pipeline) -> None:
        text = file.contents or ""
        file.contents = text if text.endswith("\n") else text + "\n"

    return plugin


def rewrite_url(file: BuildFile, url: str) -> str:
    if _ABSOLUTE_URL_RE.match(url):
        return url
    base = posixpath.dirname(file.path)
    return posixpath.normpath(posixpath.join(file.component.canonical, base, url))


def url_rewriter():
    async def plugin(file: BuildFile, pipeline: Pipeline) -> None:
        if not file.contents:
            return
        file.contents = _URL_RE.sub(
            lambda m: f'url("{rewrite_url(file, m.group(2).strip())}")', file.contents
        )

    return plugin


def copy():
    async def plugin(file: BuildFile, pipeline: Pipeline) -> None:
        destination = pipeline.options.destination
        if destination is None:
            raise ValueError("copy plugin needs a destination directory")
        target = anyio.Path(destination) / file.component.canonical / file.path
        await ensure_directory(target.parent)
        await target.write_bytes(await anyio.Path(file.filename).read_bytes())
        file.contents = None

    return plugin
