"""
Pytest configuration and fixtures
"""

from pathlib import Path

import pytest

from dartimport.pubspec import PackageInfo

PUBSPEC = """\
name: myapp
description: A sample Flutter application.
version: 1.0.0+1

environment:
  sdk: ">=2.12.0 <3.0.0"
"""


@pytest.fixture
def package_info():
    """Package info for an imaginary project rooted at /proj"""
    return PackageInfo(project_root="/proj", project_name="myapp")


@pytest.fixture
def dart_project(tmp_path) -> Path:
    """A Dart project on disk with a pubspec.yaml and an empty lib folder"""
    root = tmp_path.resolve() / "myapp"
    (root / "lib").mkdir(parents=True)
    (root / "pubspec.yaml").write_text(PUBSPEC, encoding="utf-8")
    return root


@pytest.fixture
def write_dart(dart_project):
    """Write a Dart file below the project root and return its path"""

    def _write(relative: str, *lines: str) -> Path:
        path = dart_project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
