"""Shared utilities for es-compat."""

from __future__ import annotations

from pathlib import Path

# Directories to skip during script discovery
SKIP_DIRS = {
    ".git", ".hg", ".svn", "node_modules", ".cache", ".nyc_output", "coverage",
}

# File suffixes treated as CommonJS scripts in directory mode
SCRIPT_SUFFIXES = {".js", ".cjs"}


def discover_scripts(directory: Path) -> list[Path]:
    """Walk ``directory`` for script files, skipping ignored dirs. Sorted."""
    scripts: list[Path] = []
    for item in directory.rglob("*"):
        if item.is_dir() or item.suffix.lower() not in SCRIPT_SUFFIXES:
            continue
        if any(part in SKIP_DIRS for part in item.relative_to(directory).parts):
            continue
        scripts.append(item)
    return sorted(scripts)
