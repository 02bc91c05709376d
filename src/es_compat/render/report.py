"""Turn a finished ClassificationStore into a CheckReport and render it."""

from __future__ import annotations

import json

import yaml

from es_compat.models import CheckReport, ClassificationState, NodeResult
from es_compat.store import ClassificationStore

FORMATS = ("text", "md", "json", "yaml")


def build_report(store: ClassificationStore, es_version: int) -> CheckReport:
    """Group the store's names by state, keeping traversal order."""
    return CheckReport(
        es_version=es_version,
        compatible=store.names_in(ClassificationState.COMPATIBLE),
        non_source=store.names_in(ClassificationState.NON_SOURCE),
        incompatible=[
            NodeResult(
                name=name,
                state=ClassificationState.INCOMPATIBLE,
                diagnostic=store.diagnostic_for(name),
            )
            for name in store.names_in(ClassificationState.INCOMPATIBLE)
        ],
        unreadable=store.names_in(ClassificationState.UNREADABLE),
    )


def _dump(report: CheckReport, show_error: bool) -> dict:
    # Diagnostics only with --show-error.
    exclude = None if show_error else {"incompatible": {"__all__": {"diagnostic"}}}
    return report.model_dump(mode="json", exclude=exclude)


def render(report: CheckReport, fmt: str = "text", *, show_error: bool = False) -> str:
    if fmt == "json":
        return json.dumps(_dump(report, show_error), indent=2, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(
            _dump(report, show_error), sort_keys=False, allow_unicode=True
        )
    if fmt == "md":
        from es_compat.render.markdown import render_markdown
        return render_markdown(report, show_error=show_error)
    from es_compat.render.text import render_text
    return render_text(report, show_error=show_error)
