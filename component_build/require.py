"""The bootstrap module loader prepended to script builds, and canonical lookup."""

from __future__ import annotations

import json

from component_build.pipeline import main_script
from component_build.types import Canonical, DependencyTree

REQUIRE_SHIM = r"""
/**
 * Require the module at `name`.
 */

function require(name) {
  var resolved = require.resolve(name);
  var module = require.modules[resolved];
  if (!module) throw new Error('failed to require "' + name + '"');

  if (!module.exports) {
    module.exports = {};
    module.call(module.exports, module.exports, require.relative(resolved), module);
  }

  return module.exports;
}

require.modules = {};
require.aliases = {};

require.resolve = function(name) {
  if (name.charAt(0) === '/') name = name.slice(1);
  var paths = [name, name + '.js', name + '.json', name + '/index.js', name + '/index.json'];
  for (var i = 0; i < paths.length; i++) {
    var path = paths[i];
    if (require.modules.hasOwnProperty(path)) return path;
    if (require.aliases.hasOwnProperty(path)) return require.aliases[path];
  }
};

require.normalize = function(curr, path) {
  var segs = [];
  if ('.' !== path.charAt(0)) return path;
  curr = curr.split('/');
  path = path.split('/');
  for (var i = 0; i < path.length; ++i) {
    if ('..' === path[i]) curr.pop();
    else if ('.' !== path[i] && '' !== path[i]) segs.push(path[i]);
  }
  return curr.concat(segs).join('/');
};

require.register = function(path, definition) {
  require.modules[path] = definition;
};

require.alias = function(from, to) {
  require.aliases[to] = from;
};

require.relative = function(parent) {
  var dir = require.normalize(parent, '..');

  function localRequire(path) {
    return require(localRequire.resolve(path));
  }

  localRequire.resolve = function(path) {
    if ('.' !== path.charAt(0)) return path;
    return require.normalize(dir, path);
  };

  localRequire.exists = function(path) {
    return require.modules.hasOwnProperty(localRequire.resolve(path));
  };

  return localRequire;
};
""".lstrip()


def canonical(tree: DependencyTree) -> Canonical:
    """Return the module id that requires the root component of *tree*."""
    if not tree.canonical:
        raise LookupError(f"component at {tree.path} has no canonical name")
    return Canonical(canonical=tree.canonical, main=main_script(tree))


def autorequire_statement(module_id: str) -> str:
    return f"\nrequire({json.dumps(module_id)});\n"
