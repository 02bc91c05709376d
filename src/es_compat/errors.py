"""Errors raised by the collaborators of a compatibility check.

None of these abort a run. Each one is caught at the package it concerns
and turned into a classification state.
"""

from __future__ import annotations

from pathlib import Path

from es_compat.models import Diagnostic


class CompatError(Exception):
    """Base exception for all es-compat errors."""


class ManifestUnreadable(CompatError):
    """Raised when a directory has no package.json or it is malformed."""

    def __init__(self, directory: Path, reason: str):
        self.directory = directory
        self.reason = reason
        super().__init__(f"Cannot read manifest in {directory}: {reason}")


class ResolutionFailed(CompatError):
    """Raised when a dependency's entry script cannot be located."""

    def __init__(self, name: str, search_root: Path):
        self.name = name
        self.search_root = search_root
        super().__init__(f"Cannot resolve '{name}' from {search_root}")


class ReadFailed(CompatError):
    """Raised when a script file cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class SyntaxIncompatible(CompatError):
    """Raised when source does not parse under the target ECMAScript version."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.describe())


class ParseAborted(CompatError):
    """Raised when the parser gives up on a script without reaching a verdict."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Parse aborted: {reason}")
