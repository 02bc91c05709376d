"""Classify a single package from its resolved entry script."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from es_compat.config import CheckOptions
from es_compat.errors import ParseAborted, ReadFailed, SyntaxIncompatible
from es_compat.models import ClassificationState, Diagnostic
from es_compat.store import ClassificationStore
from es_compat.syntax import read_script, validate_syntax

log = logging.getLogger(__name__)

# Resolved entries that are not JavaScript source; never read or parsed.
NON_SOURCE_SUFFIXES = frozenset({
    ".css", ".scss", ".sass", ".less", ".styl", ".json", ".node",
})

_INDENT = "    "

Reader = Callable[[Path], str]
Validator = Callable[[str, int], None]
Echo = Callable[[str], None]


def is_non_source(path: Path) -> bool:
    return path.suffix.lower() in NON_SOURCE_SUFFIXES


class ScriptClassifier:
    """Assign a ClassificationState to a named package, at most once per run."""

    def __init__(
        self,
        options: CheckOptions,
        store: ClassificationStore,
        *,
        reader: Reader = read_script,
        validator: Validator = validate_syntax,
        echo: Echo | None = None,
    ) -> None:
        self.options = options
        self.store = store
        self._reader = reader
        self._validator = validator
        self._echo = echo

    def classify(self, name: str, path: Path | None, depth: int = 0) -> ClassificationState:
        cached = self.store.get(name)
        if cached is not None:
            self.announce(name, cached, depth)
            return cached

        state, diagnostic = self._evaluate(path)
        state = self.store.record(name, state, diagnostic)
        log.debug("Classified %s as %s (%s)", name, state.value, path)
        self.announce(name, state, depth)
        return state

    def _evaluate(self, path: Path | None) -> tuple[ClassificationState, Diagnostic | None]:
        if path is not None and is_non_source(path):
            return ClassificationState.NON_SOURCE, None
        if path is None:
            return ClassificationState.UNREADABLE, None

        try:
            source = self._reader(path)
        except ReadFailed as e:
            log.debug("%s", e)
            return ClassificationState.UNREADABLE, None

        try:
            self._validator(source, self.options.es_version)
        except SyntaxIncompatible as e:
            return ClassificationState.INCOMPATIBLE, e.diagnostic
        except ParseAborted as e:
            log.warning("%s: %s", path, e)
            return ClassificationState.UNREADABLE, None
        return ClassificationState.COMPATIBLE, None

    def announce(self, name: str, state: ClassificationState, depth: int) -> None:
        """Print one progress line for ``name`` when the tree display is on."""
        if self._echo is None or not self.options.show_tree:
            return
        self._echo(_INDENT * depth + self.describe(name, state))

    def describe(self, name: str, state: ClassificationState) -> str:
        label = self.options.label
        if state is ClassificationState.COMPATIBLE:
            text = f"{name} is {label} compatible."
        elif state is ClassificationState.INCOMPATIBLE:
            text = f"{name} is not {label} compatible."
            diagnostic = self.store.diagnostic_for(name)
            if self.options.show_error and diagnostic is not None:
                text = f"{name} is not {label} compatible: {diagnostic.describe()}"
        elif state is ClassificationState.NON_SOURCE:
            text = f"{name} is not a script library, skipped."
        else:
            text = (f"{name} has no main script file. "
                    "Maybe it is not a script library or it has not been compiled.")
        return f"{state.symbol} {text}"
