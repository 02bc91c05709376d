"""Run configuration and ECMAScript version handling."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

# Editions the syntax validator can judge, keyed by every accepted spelling.
_VERSION_ALIASES: dict[int, int] = {
    3: 3,
    5: 5,
    6: 6,
    7: 7,
    8: 8,
    2015: 6,
    2016: 7,
    2017: 8,
}

SUPPORTED_VERSIONS = tuple(sorted(_VERSION_ALIASES))


def normalize_es_version(value: int) -> int:
    """Map an edition number or year (e.g. 2015) to its edition number (6)."""
    try:
        return _VERSION_ALIASES[int(value)]
    except (KeyError, ValueError, TypeError):
        supported = ", ".join(str(v) for v in SUPPORTED_VERSIONS)
        raise ValueError(
            f"unsupported ECMAScript version {value!r} (supported: {supported})"
        ) from None


def es_label(edition: int) -> str:
    """Human-readable name for an edition: ES5, ES2015, ..."""
    if edition >= 6:
        return f"ES{2009 + edition}"
    return f"ES{edition}"


class CheckOptions(BaseModel):
    es_version: int = 5
    package_name: str = "."
    resolve_path: Path = Path(".")
    show_tree: bool = True
    show_error: bool = False
    include_peer: bool = True

    @field_validator("es_version")
    @classmethod
    def _normalize_version(cls, v: int) -> int:
        return normalize_es_version(v)

    @property
    def label(self) -> str:
        return es_label(self.es_version)
