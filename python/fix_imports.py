#!/usr/bin/env python
import json
import sys
from pathlib import Path

USAGE = (
    "Usage: fix_imports.py '{\"file\": \"/path/lib/a.dart\"}'\n"
    "       fix_imports.py '{\"project_root\": \"/path\", \"all\": true, \"sort\": true}'"
)


def main():
    if len(sys.argv) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    try:
        payload = json.loads(sys.argv[1])
        if payload.get("all"):
            target = Path(payload["project_root"]).resolve()
        else:
            target = Path(payload["file"]).resolve()
        sort = bool(payload.get("sort", False))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        print(f"Invalid payload: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        # Import here so the extension fails gracefully if dartimport isn't installed yet
        from dartimport.fixer import ConfigurationError, fix_all, fix_file
        from dartimport.pubspec import DescriptorResolutionError
    except ImportError as e:
        print("Could not import 'dartimport'. Make sure it is installed in the selected Python environment.", file=sys.stderr)
        print(str(e), file=sys.stderr)
        sys.exit(3)

    if payload.get("all"):
        report = fix_all(target, sort=sort)
        for path, message in report.failed.items():
            print(f"{path}: {message}", file=sys.stderr)
        print(f"{report.total} imports fixed in {len(report.changed)} files.")
        sys.exit(1 if report.failed else 0)

    try:
        count = fix_file(target, sort=sort)
    except (DescriptorResolutionError, ConfigurationError, OSError, UnicodeDecodeError) as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    message = "No lines changed." if count == 0 else f"{count} imports fixed."
    print(message + (" All imports sorted." if sort else ""))
    sys.exit(0)


if __name__ == "__main__":
    main()
