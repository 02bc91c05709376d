"""Render a CheckReport as a Markdown report."""

from __future__ import annotations

from es_compat.config import es_label
from es_compat.models import CheckReport
from es_compat.render._helpers import headline


def _listing(title: str, names: list[str]) -> str:
    return f"## {title}\n\n" + "\n".join(f"- `{name}`" for name in names) + "\n"


def render_markdown(report: CheckReport, *, show_error: bool = False) -> str:
    """Produce a full Markdown report from a CheckReport.

    The Incompatible section is a table of diagnostics when ``show_error`` is
    set, and a plain listing otherwise.
    """
    sections: list[str] = []
    label = es_label(report.es_version)

    # ── Title ────────────────────────────────────────────────────────────
    sections.append(f"# {label} Compatibility Report\n")

    # ── Summary box ──────────────────────────────────────────────────────
    gate = "PASS" if report.passed else "FAIL"
    sections.append("\n".join([
        f"- **Result**: {gate}. {headline(report)}",
        f"- **Compatible**: {len(report.compatible)}",
        f"- **Non-script**: {len(report.non_source)}",
        f"- **Incompatible**: {len(report.incompatible)}",
        f"- **Unreadable**: {len(report.unreadable)}",
    ]) + "\n")

    # ── Listings, in fixed order ─────────────────────────────────────────
    if report.compatible:
        sections.append(_listing("Compatible Packages", report.compatible))
    if report.non_source:
        sections.append(_listing("Non-script Packages", report.non_source))

    if report.incompatible and not show_error:
        sections.append(_listing("Incompatible Packages", [n.name for n in report.incompatible]))
    elif report.incompatible:
        sections.append("## Incompatible Packages\n")
        sections.append("| Package | Problem | Location |")
        sections.append("|---|---|---|")
        for node in report.incompatible:
            d = node.diagnostic
            problem = d.message if d else "-"
            loc = "-"
            if d and d.line is not None:
                loc = f"{d.line}:{d.column}" if d.column is not None else str(d.line)
            sections.append(f"| `{node.name}` | {problem} | {loc} |")
        sections.append("")
    else:
        sections.append("No incompatible packages.\n")

    if report.unreadable:
        sections.append(_listing("Unreadable Packages", report.unreadable))

    return "\n".join(sections)
