"""Run a compatibility check: root package, dependency walk, report.

Usage:
    from pathlib import Path
    from es_compat.checker import check_package
    from es_compat.config import CheckOptions

    result = check_package(CheckOptions(es_version=5, resolve_path=Path(".")))
    result.report.passed     # True when no package is incompatible
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from es_compat.classifier import Echo, Reader, ScriptClassifier, Validator
from es_compat.config import CheckOptions
from es_compat.errors import ManifestUnreadable
from es_compat.manifest import MANIFEST_NAME, read_manifest
from es_compat.models import CheckReport
from es_compat.render import build_report
from es_compat.resolver import entry_for_directory, find_package_dir
from es_compat.store import ClassificationStore
from es_compat.syntax import read_script, validate_syntax
from es_compat.utils import discover_scripts
from es_compat.walker import DependencyWalker

log = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Outcome of one run."""
    report: CheckReport
    store: ClassificationStore
    root_name: str

    @property
    def passed(self) -> bool:
        return self.report.passed


def locate_root(options: CheckOptions) -> tuple[str | None, Path]:
    """Return (explicit name or None, package directory) for the root package.

    ``.`` means the package at the resolve path; a directory holding a
    package.json is taken as a path; anything else is an installed name.
    """
    name = options.package_name
    if name == ".":
        return None, options.resolve_path.resolve()
    as_path = Path(name)
    if (as_path / MANIFEST_NAME).is_file():
        return None, as_path.resolve()
    return name, find_package_dir(name, options.resolve_path)


def check_package(
    options: CheckOptions,
    *,
    echo: Echo | None = None,
    reader: Reader = read_script,
    validator: Validator = validate_syntax,
) -> CheckResult:
    """Classify the root package's entry script, then walk its dependencies."""
    store = ClassificationStore()
    classifier = ScriptClassifier(
        options, store, reader=reader, validator=validator, echo=echo
    )
    walker = DependencyWalker(classifier)

    name, directory = locate_root(options)
    log.info("Checking %s against %s", directory, options.label)

    try:
        manifest = read_manifest(directory)
    except ManifestUnreadable as e:
        log.warning("%s", e)
        manifest = None

    if name is None:
        name = (manifest.name if manifest and manifest.name else None) or directory.name

    classifier.classify(name, entry_for_directory(directory), 0)
    walker.walk(name, directory, 1)

    report = build_report(store, options.es_version)
    log.info("Check complete: %d packages, %d incompatible",
             report.total, len(report.incompatible))
    return CheckResult(report=report, store=store, root_name=name)


def check_targets(
    target: Path,
    options: CheckOptions,
    *,
    echo: Echo | None = None,
    reader: Reader = read_script,
    validator: Validator = validate_syntax,
) -> CheckResult:
    """Classify one file, or every script under a directory, with no traversal."""
    store = ClassificationStore()
    classifier = ScriptClassifier(
        options, store, reader=reader, validator=validator, echo=echo
    )

    if target.is_dir():
        scripts = discover_scripts(target)
        log.info("Checking %d scripts under %s against %s",
                 len(scripts), target, options.label)
        for script in scripts:
            classifier.classify(script.relative_to(target).as_posix(), script, 0)
    else:
        classifier.classify(str(target), target, 0)

    return CheckResult(
        report=build_report(store, options.es_version),
        store=store,
        root_name=str(target),
    )
