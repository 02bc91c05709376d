"""CLI entry point for es-compat."""

from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from es_compat import __version__
from es_compat.checker import CheckResult, check_package, check_targets
from es_compat.config import CheckOptions, normalize_es_version
from es_compat.render import render
from es_compat.render.report import FORMATS


def _validate_version(ctx, param, value: int) -> int:
    try:
        normalize_es_version(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e
    return value


@click.command()
@click.option(
    "-e", "--es-version",
    type=int, default=5, show_default=True,
    envvar="ES_COMPAT_VERSION",
    callback=_validate_version,
    help="ECMAScript version to check against (edition or year, e.g. 5 or 2015).",
)
@click.option(
    "-p", "--package-name",
    default=".", show_default=True,
    help='Package to check: an installed name, a directory, or "." for the package at the resolve path.',
)
@click.option(
    "-r", "--require-resolve-path",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."), show_default=True,
    help="Directory dependencies are resolved from (its node_modules and those above it).",
)
@click.option(
    "--show-tree/--no-show-tree",
    default=True, show_default=True,
    help="Print each package as it is classified, indented by depth.",
)
@click.option(
    "-s", "--show-error", is_flag=True, default=False,
    help="Show the parser diagnostic for incompatible packages.",
)
@click.option(
    "--peer/--no-peer", "include_peer",
    default=True, show_default=True,
    help="Include peerDependencies in the traversal.",
)
@click.option(
    "-f", "--target",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Check this file, or every .js/.cjs file under this directory, instead of a package.",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(FORMATS, case_sensitive=False),
    default="text", show_default=True,
    help="Report format.",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the report to this file instead of stdout.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    es_version: int,
    package_name: str,
    require_resolve_path: Path,
    show_tree: bool,
    show_error: bool,
    include_peer: bool,
    target: Path | None,
    fmt: str,
    output: Path | None,
    verbose: bool,
) -> None:
    """Recursively check the ECMAScript compatibility of a package and its dependencies.

    Exits 0 when no package is incompatible, 1 otherwise.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        options = CheckOptions(
            es_version=es_version,
            package_name=package_name,
            resolve_path=require_resolve_path,
            show_tree=show_tree,
            show_error=show_error,
            include_peer=include_peer,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    fmt = fmt.lower()
    # Keep stdout parseable when it carries a machine-readable report.
    echo = click.echo
    if fmt != "text" and output is None:
        echo = functools.partial(click.echo, err=True)

    if target is not None:
        result = check_targets(target, options, echo=echo)
    else:
        result = check_package(options, echo=echo)

    _output(result, fmt, output, show_error)
    sys.exit(0 if result.passed else 1)


def _output(result: CheckResult, fmt: str, output: Path | None, show_error: bool) -> None:
    text = render(result.report, fmt, show_error=show_error)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        click.echo(f"Report written to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
