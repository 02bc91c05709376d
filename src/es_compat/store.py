"""Per-run record of package classifications."""

from __future__ import annotations

from es_compat.models import ClassificationState, Diagnostic


class ClassificationStore:
    """Monotonic mapping of package name to classification state.

    A store belongs to exactly one run. Entries are only ever added: once a
    name has a state, later ``record`` calls for it return the existing state
    and leave the store untouched. Insertion order is preserved, so listings
    follow traversal order.
    """

    def __init__(self) -> None:
        self._states: dict[str, ClassificationState] = {}
        self._diagnostics: dict[str, Diagnostic] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)

    def get(self, name: str) -> ClassificationState | None:
        return self._states.get(name)

    def record(
        self,
        name: str,
        state: ClassificationState,
        diagnostic: Diagnostic | None = None,
    ) -> ClassificationState:
        existing = self._states.get(name)
        if existing is not None:
            return existing
        self._states[name] = state
        if state is ClassificationState.INCOMPATIBLE and diagnostic is not None:
            self._diagnostics[name] = diagnostic
        return state

    def names_in(self, state: ClassificationState) -> list[str]:
        return [name for name, s in self._states.items() if s is state]

    def diagnostic_for(self, name: str) -> Diagnostic | None:
        return self._diagnostics.get(name)

    def items(self) -> list[tuple[str, ClassificationState]]:
        return list(self._states.items())
