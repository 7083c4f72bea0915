"""
Locate a Dart project's ``pubspec.yaml`` and read the package name from it.

Only the ``name:`` line is of interest; the file is scanned as plain text
rather than parsed as YAML so that the rest of the manifest can be in any
state.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

__all__ = [
    "PUBSPEC_FILE",
    "DescriptorResolutionError",
    "PackageInfo",
    "fetch_package_info",
    "find_pubspecs",
    "read_package_info",
]

logger = logging.getLogger(__name__)

PUBSPEC_FILE = "pubspec.yaml"

_NAME_LINE = re.compile(r"^name:")
_NAME_VALUE = re.compile(r"^name:\s*(.*)$")


class DescriptorResolutionError(ValueError):
    """Raised when a single package name cannot be determined for a file."""


@dataclass(frozen=True)
class PackageInfo:
    """Root directory and declared name of a Dart package."""

    project_root: str
    project_name: str


def find_pubspecs(file_path: Path, search_root: Optional[Path] = None) -> List[Path]:
    """Return every ``pubspec.yaml`` sitting above ``file_path``.

    The search starts in the directory containing ``file_path`` and walks up
    the ancestry.  When ``search_root`` is given the walk stops after
    visiting it, so manifests outside the workspace are ignored.

    Parameters
    ----------
    file_path: Path
        The Dart file (or any path) whose ancestry should be searched.
    search_root: Path, optional
        Outermost directory to consider.

    Returns
    -------
    list[Path]
        Matching manifests, nearest first.
    """
    file_path = Path(file_path).resolve()
    stop = Path(search_root).resolve() if search_root is not None else None
    found: List[Path] = []
    for directory in file_path.parents:
        candidate = directory / PUBSPEC_FILE
        if candidate.is_file():
            found.append(candidate)
        if stop is not None and directory == stop:
            break
    return found


def read_package_info(pubspec_path: Path) -> PackageInfo:
    """Read the package name declared in ``pubspec_path``.

    Raises
    ------
    DescriptorResolutionError
        If the manifest does not contain exactly one ``name:`` line.
    """
    pubspec_path = Path(pubspec_path)
    text = pubspec_path.read_text(encoding="utf-8")
    name_lines = [line for line in text.splitlines() if _NAME_LINE.match(line)]
    if len(name_lines) != 1:
        raise DescriptorResolutionError(
            f"Expected to find a single line starting with 'name:' on {PUBSPEC_FILE} file, "
            f"{len(name_lines)} found."
        )
    match = _NAME_VALUE.match(name_lines[0])
    if not match or not match.group(1).strip():
        raise DescriptorResolutionError(
            f"Expected line 'name:' on {PUBSPEC_FILE} to match regex, but it didn't "
            f"(line: {name_lines[0]})."
        )
    info = PackageInfo(
        project_root=str(pubspec_path.parent),
        project_name=match.group(1).strip(),
    )
    logger.debug("Read package %r rooted at %s", info.project_name, info.project_root)
    return info


def fetch_package_info(file_path: Path, search_root: Optional[Path] = None) -> PackageInfo:
    """Find the single manifest above ``file_path`` and return its package info."""
    pubspecs = find_pubspecs(file_path, search_root)
    if len(pubspecs) != 1:
        raise DescriptorResolutionError(
            f"Expected to find a single {PUBSPEC_FILE} file above {file_path}, "
            f"{len(pubspecs)} found."
        )
    return read_package_info(pubspecs[0])
