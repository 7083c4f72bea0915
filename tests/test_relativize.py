"""Path relativization tests"""
import posixpath

import pytest

from dartimport.fixer import relativize


@pytest.mark.parametrize(
    "file_dir, import_path, expected",
    [
        ("a/b", "a/c", "../c"),
        ("", "foo/bar", "foo/bar"),
        ("a/b/c", "a/b/c/d", "d"),
        ("screens", "models/user.dart", "../models/user.dart"),
        ("a/b/c", "a/b", ".."),
        ("a/b", "a/b", ""),
        ("", "", ""),
        ("x/y", "main.dart", "../../main.dart"),
    ],
)
def test_relativize(file_dir, import_path, expected):
    assert relativize(file_dir, import_path, "/") == expected


def test_file_dir_uses_host_separator():
    assert relativize("a\\b", "a/c/d.dart", "\\") == "../c/d.dart"


def test_import_path_always_split_on_slash():
    # A backslash in the import path is part of a segment name
    assert relativize("a", "a\\b", "\\") == "../a\\b"


def test_comparison_is_case_sensitive():
    assert relativize("Models", "models/user.dart", "/") == "../models/user.dart"


@pytest.mark.parametrize(
    "file_dir, import_path",
    [
        ("a", "a/b/c/d.dart"),
        ("a/b/c/d/e/f", "a/b/c/d/e/f/g.dart"),
        ("", "x.dart"),
    ],
)
def test_prefix_has_no_parent_segments(file_dir, import_path):
    result = relativize(file_dir, import_path, "/")
    assert ".." not in result.split("/")
    assert import_path.endswith(result)


@pytest.mark.parametrize(
    "file_dir, import_path",
    [
        ("a/b/c", "x/y.dart"),
        ("one", "two/three/four.dart"),
        ("p/q/r/s/t/u", "v.dart"),
    ],
)
def test_no_common_prefix_ascends_whole_depth(file_dir, import_path):
    result = relativize(file_dir, import_path, "/").split("/")
    depth = len(file_dir.split("/"))
    assert result[:depth] == [".."] * depth
    assert result[depth:] == import_path.split("/")


@pytest.mark.parametrize(
    "file_dir, import_path",
    [
        ("", ""),
        ("a", ""),
        ("", "a"),
        ("a/b/c", "a/b/x/y"),
        ("lib1/src/widgets", "lib1/models/user.dart"),
        ("a/b/c/d/e/f", "a/b/c/x/y/z"),
        ("q1/w2/e3", "r4/t5/y6/u7/i8/o9"),
        ("same/path", "same/path"),
        ("a/b/c/d", "a"),
    ],
)
def test_navigating_result_lands_on_target(file_dir, import_path):
    result = relativize(file_dir, import_path, "/")
    landed = posixpath.normpath(posixpath.join("/root", file_dir, result))
    assert landed == posixpath.normpath(posixpath.join("/root", import_path))
