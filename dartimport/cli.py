"""
Command‑line interface for the dartimport package.

This module exposes two top‑level commands using :mod:`click`:

* ``fix`` – rewrite the package imports of a single Dart file.
* ``fix‑all`` – rewrite the package imports of every Dart file under the
  project's ``lib`` folder.

The package name is read from the ``pubspec.yaml`` above each file.  For
example, in a project named ``myapp`` the file ``lib/screens/home.dart``
gets ``import 'package:myapp/models/user.dart';`` rewritten to
``import '../models/user.dart';``.
"""

from __future__ import annotations

import logging
import pathlib
import sys

import click

from .fixer import ConfigurationError, fix_all, fix_file
from .pubspec import DescriptorResolutionError, fetch_package_info


def resolve_project_root(project_root: str | None) -> pathlib.Path:
    """Return ``project_root`` as an absolute path, defaulting to the cwd."""
    root = pathlib.Path(project_root) if project_root else pathlib.Path.cwd()
    if not root.is_dir():
        raise click.UsageError(f"Project root {root!s} does not exist or is not a directory")
    return root.resolve()


def fix_message(count: int, sort: bool = False) -> str:
    """Return the user-facing summary for ``count`` rewritten imports.

    ``sort`` appends a note that the import block was sorted as well.
    """
    message = "No lines changed." if count == 0 else f"{count} imports fixed."
    if sort:
        message += " All imports sorted."
    return message


sort_option = click.option(
    "--sort", "sort", is_flag=True, default=False,
    help="Also sort the import block: dart:, then package:, then relative imports.",
)


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log every rewritten line.")
def cli(verbose: bool) -> None:
    """Convert package: imports of Dart files into relative imports.

    Use one of the subcommands to rewrite a single file or every file
    under the project's lib folder.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("fix", help="Rewrite the package imports of a single Dart file.")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--project-root", "project_root", type=click.Path(), default=None,
    help="Only look for pubspec.yaml up to this directory.",
)
@sort_option
def fix_cmd(file: str, project_root: str | None, sort: bool) -> None:
    """Rewrite the imports of ``FILE``.

    The nearest ``pubspec.yaml`` above ``FILE`` provides the package name.
    ``FILE`` must live under that package's ``lib`` folder.
    """
    path = pathlib.Path(file).resolve()
    search_root = resolve_project_root(project_root) if project_root else None
    try:
        package_info = fetch_package_info(path, search_root=search_root)
        count = fix_file(path, package_info, sort=sort)
    except (DescriptorResolutionError, ConfigurationError, OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"{path}: {exc}") from exc
    click.echo(fix_message(count, sort))


@cli.command("fix-all", help="Rewrite the package imports of every Dart file under lib/.")
@click.option(
    "--project-root", "project_root", type=click.Path(), default=None,
    help="Root directory of the Dart project (defaults to current working directory).",
)
@sort_option
def fix_all_cmd(project_root: str | None, sort: bool) -> None:
    """Rewrite the imports of every ``lib/**/*.dart`` file of the project.

    Files are processed independently; a file that cannot be fixed is
    reported and the others are still rewritten.
    """
    root = resolve_project_root(project_root)
    report = fix_all(root, sort=sort)
    for path, count in report.changed.items():
        click.echo(f"{path.relative_to(root)}: {fix_message(count)}")
    for path, message in report.failed.items():
        click.echo(f"{path.relative_to(root)}: {message}", err=True)
    click.echo(
        f"{report.total} imports fixed in {len(report.changed)} of {report.scanned} files."
        + (" All imports sorted." if sort else "")
    )
    if report.failed:
        raise click.ClickException(f"{len(report.failed)} files could not be fixed.")


def main(argv: list[str] | None = None) -> None:
    """Entrypoint for console_scripts."""
    cli.main(args=argv, prog_name="dartimport")


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
