"""Shared helpers for render backends (text, markdown)."""

from __future__ import annotations

from es_compat.config import es_label
from es_compat.models import CheckReport


def headline(report: CheckReport) -> str:
    """One-sentence verdict for the top of a report."""
    label = es_label(report.es_version)
    if report.passed:
        return f"All {report.total} checked packages are {label} compatible or were skipped."
    n = len(report.incompatible)
    noun = "package is" if n == 1 else "packages are"
    return f"{n} {noun} not {label} compatible."
