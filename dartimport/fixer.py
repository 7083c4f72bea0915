"""
Core routines for turning ``package:`` imports into relative imports.

This module implements the functionality behind the CLI exposed in
``dartimport.cli``.  A Dart file under ``<project>/lib`` may import other
files of the same package either absolutely::

    import 'package:myapp/models/user.dart';

or relative to its own location::

    import '../models/user.dart';

:func:`fix_imports` rewrites the first form into the second for every
matching import at the top of a document.  Only imports of the file's own
package are touched; imports of other packages, ``dart:`` imports and
imports that are already relative are left as they are.

The scan is line based and stops at the first line that is neither blank
nor an ``import`` statement, so imports are expected to be grouped at the
top of the file.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Pattern

from .document import DocumentAccess, TextFileDocument
from .pubspec import DescriptorResolutionError, PackageInfo, fetch_package_info

__all__ = [
    "DART_SEP",
    "LIB_FOLDER",
    "ConfigurationError",
    "FixAllReport",
    "fix_all",
    "fix_file",
    "fix_imports",
    "relativize",
    "sort_imports",
]

logger = logging.getLogger(__name__)

# Dart uses this separator for imports no matter the platform
DART_SEP = "/"
LIB_FOLDER = "lib"

_FILE_NAME = re.compile(r"[/\\][^/\\]*$")
_IMPORT_URI = re.compile(r"^import\s+(['\"])(.*?)\1")


class ConfigurationError(ValueError):
    """Raised when a file does not live under its package's ``lib`` folder."""


def _split(path: str, sep: str) -> List[str]:
    return path.split(sep) if path else []


def relativize(file_dir: str, import_path: str, path_sep: str) -> str:
    """Return ``import_path`` expressed relative to ``file_dir``.

    Both arguments are relative to the package's ``lib`` folder.
    ``file_dir`` uses the host separator ``path_sep`` while ``import_path``
    always uses ``/``.  For example::

        relativize('screens', 'models/user.dart', '/')
        # -> '../models/user.dart'

    Parameters
    ----------
    file_dir: str
        Directory of the importing file.  The empty string is ``lib`` itself.
    import_path: str
        Target of the import as written after ``package:<name>/``.
    path_sep: str
        Separator used in ``file_dir``.

    Returns
    -------
    str
        The relative import path, joined with ``/``.
    """
    file_bits = _split(file_dir, path_sep)
    import_bits = _split(import_path, DART_SEP)
    common = 0
    for file_bit, import_bit in zip(file_bits, import_bits):
        if file_bit != import_bit:
            break
        common += 1
    relative_bits = [".."] * (len(file_bits) - common) + import_bits[common:]
    return DART_SEP.join(relative_bits)


def _import_pattern(project_name: str) -> Pattern[str]:
    return re.compile(
        r"^\s*import\s+(['\"])package:"
        + re.escape(project_name)
        + r"/([^'\"]*)\1([^;]*);\s*$"
    )


def _source_location(file_name: str, package_info: PackageInfo, path_sep: str) -> str:
    current_path = _FILE_NAME.sub("", file_name)
    lib_folder = f"{package_info.project_root}{path_sep}{LIB_FOLDER}"
    if current_path != lib_folder and not current_path.startswith(lib_folder + path_sep):
        raise ConfigurationError(
            "Current file is not on project root or not on lib folder? File must be on $root/lib.\n"
            f"Your current file path is: '{current_path}' and the lib folder according to "
            f"the pubspec.yaml file is '{lib_folder}'."
        )
    return current_path[len(lib_folder) + 1:]


def fix_imports(
    document: DocumentAccess,
    package_info: PackageInfo,
    path_sep: str = os.sep,
    log: Optional[logging.Logger] = None,
) -> int:
    """Rewrite the package imports at the top of ``document`` as relative imports.

    Lines are replaced in place, one at a time and in ascending order, via
    ``document.replace_line_at``.  Blank lines are skipped; the first line
    that is not an ``import`` ends the scan.  Import lines that do not
    reference ``package:<project_name>/`` are left untouched.

    Parameters
    ----------
    document: DocumentAccess
        The document to edit.  ``get_file_name`` must return the full path
        of the file, using ``path_sep``.
    package_info: PackageInfo
        The package the document belongs to.
    path_sep: str
        Host path separator.  Defaults to :data:`os.sep`.
    log: logging.Logger, optional
        Logger for diagnostics.  Defaults to this module's logger.

    Returns
    -------
    int
        The number of lines changed.

    Raises
    ------
    ConfigurationError
        If the document is not inside ``<project_root>/lib``.  Nothing is
        edited in that case.
    """
    log = log or logger
    relative_path = _source_location(document.get_file_name(), package_info, path_sep)
    log.debug("Source location of %s: %r", document.get_file_name(), relative_path)
    pattern = _import_pattern(package_info.project_name)
    count = 0
    for idx in range(document.get_line_count()):
        content = document.get_line_at(idx).strip()
        if not content:
            continue
        if not content.startswith("import "):
            break
        match = pattern.match(content)
        if not match:
            continue
        quote, import_path, ending = match.groups()
        relative_import = relativize(relative_path, import_path, path_sep)
        new_line = f"import {quote}{relative_import}{quote}{ending};"
        if not document.replace_line_at(idx, new_line):
            log.warning("Could not replace line %d of %s", idx + 1, document.get_file_name())
            continue
        log.debug("line %d: %r -> %r", idx + 1, content, new_line)
        count += 1
    return count


def _import_sort_key(line: str):
    match = _IMPORT_URI.match(line.strip())
    if not match:
        return (3, line.strip())
    uri = match.group(2)
    if uri.startswith("dart:"):
        return (0, uri)
    if uri.startswith("package:"):
        return (1, uri)
    return (2, uri)


def sort_imports(document: DocumentAccess, log: Optional[logging.Logger] = None) -> int:
    """Sort the import block at the top of ``document``.

    ``dart:`` imports come first, then ``package:`` imports, then relative
    ones, each group ordered by URI.  Import lines are permuted among their
    own indices, so blank lines keep their positions.  The block is left
    alone if any import in it does not end on its own line with ``;``.

    Returns the number of lines that moved.
    """
    log = log or logger
    indices: List[int] = []
    for idx in range(document.get_line_count()):
        content = document.get_line_at(idx).strip()
        if not content:
            continue
        if not content.startswith("import "):
            break
        if not content.endswith(";"):
            log.warning("Not sorting imports of %s: line %d spans several lines",
                        document.get_file_name(), idx + 1)
            return 0
        indices.append(idx)
    current = [document.get_line_at(idx) for idx in indices]
    moved = 0
    for idx, old_line, new_line in zip(indices, current, sorted(current, key=_import_sort_key)):
        if new_line == old_line:
            continue
        if not document.replace_line_at(idx, new_line):
            log.warning("Could not replace line %d of %s", idx + 1, document.get_file_name())
            continue
        moved += 1
    return moved


def fix_file(
    file_path: Path,
    package_info: Optional[PackageInfo] = None,
    log: Optional[logging.Logger] = None,
    sort: bool = False,
) -> int:
    """Fix the imports of a single Dart file on disk.

    The package info is looked up from the nearest ``pubspec.yaml`` unless
    given.  With ``sort`` the import block is also ordered by
    :func:`sort_imports`.  The file is only written when at least one line
    changed.

    Returns the number of imports rewritten; lines moved by sorting are not
    counted.

    Raises
    ------
    DescriptorResolutionError
        If no single package name can be found for the file.
    ConfigurationError
        If the file is not under the package's ``lib`` folder.
    """
    log = log or logger
    file_path = Path(file_path).resolve()
    if package_info is None:
        package_info = fetch_package_info(file_path)
    document = TextFileDocument(file_path)
    count = fix_imports(document, package_info, os.sep, log=log)
    if sort:
        sort_imports(document, log=log)
    if document.save():
        log.info("Fixed %d import(s) in %s", count, file_path)
    return count


@dataclass
class FixAllReport:
    """Outcome of :func:`fix_all`: per‑file counts and per‑file errors."""

    changed: Dict[Path, int] = field(default_factory=dict)
    failed: Dict[Path, str] = field(default_factory=dict)
    scanned: int = 0

    @property
    def total(self) -> int:
        return sum(self.changed.values())


def fix_all(
    project_root: Path,
    log: Optional[logging.Logger] = None,
    sort: bool = False,
) -> FixAllReport:
    """Fix every ``lib/**/*.dart`` file below ``project_root``.

    Each file is handled independently by :func:`fix_file`; its package is
    resolved from its own ancestry, bounded by ``project_root``.  A failure
    in one file is logged and recorded in the report, and the remaining
    files are still processed.  ``sort`` is passed on to :func:`fix_file`.
    """
    log = log or logger
    root = Path(project_root).resolve()
    report = FixAllReport()
    for dart_file in sorted((root / LIB_FOLDER).glob("**/*.dart")):
        report.scanned += 1
        try:
            package_info = fetch_package_info(dart_file, search_root=root)
            count = fix_file(dart_file, package_info, log=log, sort=sort)
        except (DescriptorResolutionError, ConfigurationError, OSError, UnicodeDecodeError) as exc:
            log.error("Skipping %s: %s", dart_file, exc)
            report.failed[dart_file] = str(exc)
            continue
        if count:
            report.changed[dart_file] = count
    return report
