"""pubspec.yaml lookup tests"""
import pytest

from dartimport.pubspec import (
    DescriptorResolutionError,
    PackageInfo,
    fetch_package_info,
    find_pubspecs,
    read_package_info,
)


def test_fetch_package_info(dart_project, write_dart):
    dart_file = write_dart("lib/screens/home.dart", "import 'dart:async';")

    info = fetch_package_info(dart_file, search_root=dart_project)

    assert info == PackageInfo(project_root=str(dart_project), project_name="myapp")


def test_no_pubspec_found(tmp_path):
    dart_file = tmp_path / "lib" / "a.dart"

    with pytest.raises(DescriptorResolutionError, match="0 found"):
        fetch_package_info(dart_file, search_root=tmp_path)


def test_nested_pubspecs_are_ambiguous(dart_project, write_dart):
    inner = dart_project / "packages" / "inner"
    (inner / "lib").mkdir(parents=True)
    (inner / "pubspec.yaml").write_text("name: inner\n", encoding="utf-8")
    dart_file = write_dart("packages/inner/lib/a.dart", "")

    assert find_pubspecs(dart_file, search_root=dart_project) == [
        inner / "pubspec.yaml",
        dart_project / "pubspec.yaml",
    ]
    with pytest.raises(DescriptorResolutionError, match="2 found"):
        fetch_package_info(dart_file, search_root=dart_project)


def test_search_stops_at_search_root(dart_project, write_dart):
    (dart_project / "lib" / "pubspec.yaml").write_text("name: nested\n", encoding="utf-8")
    dart_file = write_dart("lib/a.dart", "")

    assert find_pubspecs(dart_file, search_root=dart_project / "lib") == [
        dart_project / "lib" / "pubspec.yaml",
    ]


def test_name_is_stripped(tmp_path):
    pubspec = tmp_path / "pubspec.yaml"
    pubspec.write_text("name:    spaced_app   \nversion: 1.0.0\n", encoding="utf-8")

    assert read_package_info(pubspec).project_name == "spaced_app"


def test_indented_name_keys_are_ignored(tmp_path):
    pubspec = tmp_path / "pubspec.yaml"
    pubspec.write_text(
        "name: top\ndependencies:\n  foo:\n    name: not_this_one\n", encoding="utf-8"
    )

    assert read_package_info(pubspec).project_name == "top"


@pytest.mark.parametrize(
    "text, match",
    [
        ("version: 1.0.0\n", "0 found"),
        ("name: a\nname: b\n", "2 found"),
        ("name:\n", "match regex"),
    ],
)
def test_bad_name_lines(tmp_path, text, match):
    pubspec = tmp_path / "pubspec.yaml"
    pubspec.write_text(text, encoding="utf-8")

    with pytest.raises(DescriptorResolutionError, match=match):
        read_package_info(pubspec)
