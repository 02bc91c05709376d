"""Report building and rendering backends."""

from es_compat.render.report import build_report, render

__all__ = ["build_report", "render"]
