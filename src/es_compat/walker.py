"""Memoized, cycle-safe traversal of a package dependency graph."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator

from es_compat.classifier import ScriptClassifier
from es_compat.errors import ManifestUnreadable, ResolutionFailed
from es_compat.manifest import read_manifest
from es_compat.models import ClassificationState, PackageManifest
from es_compat.resolver import find_package_dir, resolve_entry

log = logging.getLogger(__name__)

ManifestReader = Callable[[Path], PackageManifest]
EntryResolver = Callable[[str, Path], Path]
DirectoryFinder = Callable[[str, Path], Path]


class DependencyWalker:
    """Visit declared dependencies depth-first, classifying each name once.

    A dependency whose entry script is compatible or non-source is trusted
    to reflect its own build and is not descended into. Only unreadable
    dependencies (no usable entry script) have their manifests inspected.

    Traversal keeps an explicit stack of per-package iterators, so long
    dependency chains do not hit the interpreter's recursion limit. Already
    classified names are skipped before any I/O, which bounds work to one
    manifest read and one parse per distinct name and breaks cycles.
    """

    def __init__(
        self,
        classifier: ScriptClassifier,
        *,
        manifest_reader: ManifestReader = read_manifest,
        resolver: EntryResolver = resolve_entry,
        package_dir_finder: DirectoryFinder = find_package_dir,
    ) -> None:
        self.classifier = classifier
        self.store = classifier.store
        self.options = classifier.options
        self._read_manifest = manifest_reader
        self._resolve = resolver
        self._find_dir = package_dir_finder

    def walk(self, name: str, directory: Path, depth: int = 0) -> None:
        """Classify every dependency reachable from the package at ``directory``."""
        search_root = self.options.resolve_path
        root_frame = self._open(name, directory, depth)
        if root_frame is None:
            return
        stack: list[tuple[Iterator[str], int]] = [root_frame]

        while stack:
            names, level = stack[-1]
            dep = next(names, None)
            if dep is None:
                stack.pop()
                continue

            cached = self.store.get(dep)
            if cached is not None:
                self.classifier.announce(dep, cached, level)
                continue

            try:
                entry: Path | None = self._resolve(dep, search_root)
            except ResolutionFailed as e:
                log.debug("%s", e)
                entry = None

            state = self.classifier.classify(dep, entry, level)
            if state.needs_descent:
                frame = self._open(dep, self._find_dir(dep, search_root), level + 1)
                if frame is not None:
                    stack.append(frame)

    def _open(self, name: str, directory: Path, depth: int) -> tuple[Iterator[str], int] | None:
        try:
            manifest = self._read_manifest(directory)
        except ManifestUnreadable as e:
            log.debug("%s", e)
            self.store.record(name, ClassificationState.UNREADABLE)
            return None
        deps = manifest.dependency_names(self.options.include_peer)
        return iter(deps), depth
