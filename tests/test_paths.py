import contextlib

import pytest

import gw
from gwlib.paths import (
    POINTER_CONTENT,
    is_path_current_worktree,
    rel_display_path,
    write_pointer_file,
)


@pytest.mark.parametrize(
    "branch, expected",
    [
        ("feature/login", "feature-login"),
        ("feature/auth/login", "feature-auth-login"),
        ("main", "main"),
        ("feature-login", "feature-login"),
    ],
)
def test_sanitize_branch(branch, expected):
    assert gw.sanitize_branch(branch) == expected


@pytest.mark.parametrize("branch", ["a/b/c", "a\\b", "/lead", "trail/", "plain"])
def test_sanitize_is_idempotent_and_separator_free(branch):
    once = gw.sanitize_branch(branch)
    assert gw.sanitize_branch(once) == once
    assert "/" not in once and "\\" not in once


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/org/repo.git",
        "git@github.com:org/repo.git",
        "https://github.com/org/repo",
        "https://github.com/org/repo/",
        "git@example.com:repo.git",
    ],
)
def test_dir_from_url(url):
    assert gw.dir_from_url(url) == "repo"


def test_find_root_from_subdirectory(tmp_path):
    (tmp_path / ".store").mkdir()
    sub = tmp_path / "main" / "src" / "lib"
    sub.mkdir(parents=True)
    assert gw.find_root(str(sub)) == str(tmp_path)
    assert gw.find_root(str(tmp_path)) == str(tmp_path)


def test_find_root_fails_without_store(tmp_path):
    with pytest.raises(gw.PreconditionError, match="not a git-work project"):
        gw.find_root(str(tmp_path))


def test_worktree_dirs_lists_visible_directories(tmp_path):
    (tmp_path / ".store").mkdir()
    (tmp_path / "main").mkdir()
    (tmp_path / "feature-login").mkdir()
    (tmp_path / "notes.txt").write_text("x")
    write_pointer_file(str(tmp_path))

    assert gw.worktree_dirs(str(tmp_path)) == ["feature-login", "main"]
    assert (tmp_path / ".git").read_text() == POINTER_CONTENT


def test_is_path_current_worktree(tmp_path, monkeypatch):
    target = tmp_path / "here"
    (target / "deeper").mkdir(parents=True)
    with contextlib.ExitStack() as stack:
        stack.enter_context(monkeypatch.context())
        monkeypatch.chdir(target / "deeper")
        assert is_path_current_worktree(str(target))
        assert not is_path_current_worktree(str(tmp_path / "her"))


def test_rel_display_path(tmp_path):
    root = tmp_path / "project"
    wt = root / "feature"
    assert rel_display_path(str(wt), str(root), force_absolute=False) == "project/feature"
    assert rel_display_path(str(wt), str(root), force_absolute=True) == str(wt)
    outside = tmp_path / "elsewhere"
    assert rel_display_path(str(outside), str(root), force_absolute=False) == str(outside)
