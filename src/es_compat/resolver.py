"""Locate installed packages and their entry scripts, Node-style.

Lookup walks up from the search root checking ``node_modules/<name>`` in
each ancestor, the way ``require.resolve(name, {paths: [root]})`` does.
"""

from __future__ import annotations

import logging
from pathlib import Path

from es_compat.errors import ManifestUnreadable, ResolutionFailed
from es_compat.manifest import read_manifest

log = logging.getLogger(__name__)

# Extensions tried when a require target has none, in Node's order.
_EXTENSIONS = (".js", ".json", ".node")

_INDEX_FILES = tuple(f"index{ext}" for ext in _EXTENSIONS)


def _candidate_dirs(name: str, search_root: Path) -> list[Path]:
    root = search_root.resolve()
    dirs: list[Path] = []
    for base in (root, *root.parents):
        if base.name == "node_modules":
            continue
        dirs.append(base / "node_modules" / name)
    return dirs


def find_package_dir(name: str, search_root: Path) -> Path:
    """Return the installed directory for ``name``.

    Falls back to ``<search_root>/node_modules/<name>`` when nothing is
    installed, so callers always get a path to inspect.
    """
    for candidate in _candidate_dirs(name, search_root):
        if candidate.is_dir():
            return candidate
    return search_root.resolve() / "node_modules" / name


def _export_target(exports: str | dict | list | None) -> str | None:
    """Pick the CommonJS entry out of an ``exports`` field."""
    if isinstance(exports, str):
        return exports
    if isinstance(exports, list):
        for item in exports:
            target = _export_target(item)
            if target:
                return target
        return None
    if isinstance(exports, dict):
        if "." in exports:
            return _export_target(exports["."])
        for condition in ("require", "node", "default"):
            if condition in exports:
                return _export_target(exports[condition])
    return None


def _as_file(path: Path) -> Path | None:
    if path.is_file():
        return path
    for ext in _EXTENSIONS:
        candidate = path.with_name(path.name + ext)
        if candidate.is_file():
            return candidate
    return None


def _as_directory(path: Path) -> Path | None:
    if not path.is_dir():
        return None
    for index in _INDEX_FILES:
        candidate = path / index
        if candidate.is_file():
            return candidate
    return None


def entry_for_directory(package_dir: Path) -> Path | None:
    """Resolve the entry script of the package installed at ``package_dir``."""
    targets: list[str] = []
    try:
        manifest = read_manifest(package_dir)
    except ManifestUnreadable:
        manifest = None
    if manifest is not None:
        exported = _export_target(manifest.exports)
        if exported:
            targets.append(exported)
        if manifest.main:
            targets.append(manifest.main)

    for target in targets:
        path = (package_dir / target).resolve()
        found = _as_file(path) or _as_directory(path)
        if found:
            return found

    return _as_directory(package_dir)


def resolve_entry(name: str, search_root: Path) -> Path:
    """Return the absolute entry-script path of dependency ``name``.

    Raises ResolutionFailed if no installed copy with a usable entry exists.
    """
    for candidate in _candidate_dirs(name, search_root):
        if not candidate.is_dir():
            continue
        entry = entry_for_directory(candidate)
        if entry is not None:
            log.debug("Resolved %s -> %s", name, entry)
            return entry
    raise ResolutionFailed(name, search_root)
