"""Pydantic models for manifests, classifications and reports."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ── Classification ──────────────────────────────────────────────────────────

class ClassificationState(str, Enum):
    """Terminal state of a package within a single run."""

    COMPATIBLE = "compatible"
    INCOMPATIBLE = "incompatible"
    NON_SOURCE = "non_source"
    UNREADABLE = "unreadable"

    @property
    def acceptable(self) -> bool:
        """Whether this state leaves the aggregate result passing."""
        return _ACCEPTABLE[self]

    @property
    def needs_descent(self) -> bool:
        """Whether the walker should inspect this package's own dependencies."""
        return _NEEDS_DESCENT[self]

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_ACCEPTABLE = {
    ClassificationState.COMPATIBLE: True,
    ClassificationState.INCOMPATIBLE: False,
    ClassificationState.NON_SOURCE: True,
    ClassificationState.UNREADABLE: True,
}

_NEEDS_DESCENT = {
    ClassificationState.COMPATIBLE: False,
    ClassificationState.INCOMPATIBLE: False,
    ClassificationState.NON_SOURCE: False,
    ClassificationState.UNREADABLE: True,
}

_SYMBOLS = {
    ClassificationState.COMPATIBLE: "✅",
    ClassificationState.INCOMPATIBLE: "❌",
    ClassificationState.NON_SOURCE: "➖",
    ClassificationState.UNREADABLE: "❓",
}


class Diagnostic(BaseModel):
    message: str
    line: int | None = None
    column: int | None = None

    def describe(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} (line {self.line})"
        return f"{self.message} (line {self.line}, column {self.column})"


# ── package.json ───────────────────────────────────────────────────────────

class PackageManifest(BaseModel):
    """The subset of package.json the checker reads."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    version: str | None = None
    main: str | None = None
    exports: str | dict | list | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    peer_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="peerDependencies"
    )

    def dependency_names(self, include_peer: bool) -> list[str]:
        """Declared runtime dependency names, sorted."""
        names = set(self.dependencies)
        if include_peer:
            names |= set(self.peer_dependencies)
        return sorted(names)


# ── Report ────────────────────────────────────────────────────────────────

class NodeResult(BaseModel):
    name: str
    state: ClassificationState
    diagnostic: Diagnostic | None = None


class CheckReport(BaseModel):
    es_version: int
    compatible: list[str] = Field(default_factory=list)
    non_source: list[str] = Field(default_factory=list)
    incompatible: list[NodeResult] = Field(default_factory=list)
    unreadable: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def passed(self) -> bool:
        return not self.incompatible

    @property
    def total(self) -> int:
        return (
            len(self.compatible) + len(self.non_source)
            + len(self.incompatible) + len(self.unreadable)
        )
