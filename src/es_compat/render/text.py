"""Render a CheckReport as the plain console listing."""

from __future__ import annotations

from es_compat.models import CheckReport, ClassificationState

_C = ClassificationState


def render_text(report: CheckReport, *, show_error: bool = False) -> str:
    lines: list[str] = ["All compatible packages are: "]
    lines.extend(f"  {_C.COMPATIBLE.symbol} {name}" for name in report.compatible)

    if report.non_source:
        lines.append("All non-script packages are: ")
        lines.extend(f"  {_C.NON_SOURCE.symbol} {name}" for name in report.non_source)

    if not report.incompatible:
        lines.append("No incompatible packages.")
    else:
        lines.append("All incompatible packages are: ")
        for node in report.incompatible:
            line = f"  {_C.INCOMPATIBLE.symbol} {node.name}"
            if show_error and node.diagnostic is not None:
                line += f": {node.diagnostic.describe()}"
            lines.append(line)

    if report.unreadable:
        lines.append("Packages that could not be checked: ")
        lines.extend(f"  {_C.UNREADABLE.symbol} {name}" for name in report.unreadable)

    return "\n".join(lines)
