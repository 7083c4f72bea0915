"""
Utilities for converting Dart ``package:`` imports into relative imports.

A Dart file inside a package's ``lib`` folder can import its siblings either
through the package name (``import 'package:myapp/models/user.dart';``) or
by a path relative to itself (``import '../models/user.dart';``).  This
package rewrites the former into the latter, reading the package name from
the project's ``pubspec.yaml``.

Example::

    # Fix a single file
    dartimport fix lib/screens/home.dart

    # Fix every file under lib/
    dartimport fix-all --project-root path/to/project

The CLI is built on top of :mod:`click` and exposes two subcommands
``fix`` and ``fix‑all``.  See ``dartimport.cli`` for details.
"""

__all__ = [
    "ConfigurationError",
    "DescriptorResolutionError",
    "PackageInfo",
    "fix_all",
    "fix_file",
    "fix_imports",
    "relativize",
    "sort_imports",
]

from .fixer import (  # noqa: F401
    ConfigurationError,
    fix_all,
    fix_file,
    fix_imports,
    relativize,
    sort_imports,
)
from .pubspec import DescriptorResolutionError, PackageInfo  # noqa: F401
