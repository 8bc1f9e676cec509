"""Tests for canonical path resolution."""

import pytest

from memfs.shell.path_resolver import (
    ROOT,
    ancestors,
    basename,
    child_prefix,
    depth,
    dirname,
    is_within,
    normalize,
    rebase,
)


class TestNormalize:
    """Tests for normalize()."""

    def test_relative_path_joins_cwd(self):
        assert normalize("a/b/../c", "/x") == "/x/a/c"

    def test_parent_segments_stop_at_root(self):
        assert normalize("../../etc", "/a/b") == "/etc"
        assert normalize("../../../x", "/a") == "/x"

    def test_empty_path_is_cwd(self):
        assert normalize("", "/home/user") == "/home/user"
        assert normalize("") == ROOT

    def test_root_cwd_gets_no_double_separator(self):
        assert normalize("docs", ROOT) == "/docs"

    def test_absolute_path_ignores_cwd(self):
        assert normalize("/etc/hosts", "/home") == "/etc/hosts"

    def test_redundant_separators_and_dots_are_dropped(self):
        assert normalize("//a///./b/", "/") == "/a/b"
        assert normalize(".", "/a") == "/a"
        assert normalize("./", ROOT) == ROOT

    def test_dotdot_at_root_is_noop(self):
        assert normalize("..", ROOT) == ROOT
        assert normalize("/../..", "/a") == ROOT

    @pytest.mark.parametrize("path", [
        "/",
        "/a",
        "/a/b/c",
        "//a//b",
        "/a/./b/../c",
        "/../../x/y/",
        "/names with spaces/x.txt",
    ])
    def test_idempotent_on_absolute_paths(self, path):
        once = normalize(path)
        assert normalize(once) == once
        assert normalize(once, "/somewhere/else") == once


class TestPathParts:
    """Tests for dirname, basename and the prefix helpers."""

    def test_dirname(self):
        assert dirname("/a/b/c") == "/a/b"
        assert dirname("/a") == ROOT
        assert dirname(ROOT) == ROOT

    def test_basename(self):
        assert basename("/a/b/c.txt") == "c.txt"
        assert basename("/a") == "a"
        assert basename(ROOT) == ""

    def test_child_prefix(self):
        assert child_prefix(ROOT) == "/"
        assert child_prefix("/a") == "/a/"

    def test_is_within_matches_whole_segments(self):
        assert is_within("/a", "/a")
        assert is_within("/a/b/c", "/a")
        assert is_within("/anything", ROOT)
        assert not is_within("/ab", "/a")
        assert not is_within("/a", "/a/b")

    def test_rebase(self):
        assert rebase("/a", "/a", "/z") == "/z"
        assert rebase("/a/b/c", "/a", "/z/y") == "/z/y/b/c"

    def test_depth(self):
        assert depth(ROOT) == 0
        assert depth("/a") == 1
        assert depth("/a/b/c") == 3

    def test_ancestors_nearest_first_without_root(self):
        assert ancestors("/a/b/c") == ["/a/b", "/a"]
        assert ancestors("/a") == []
