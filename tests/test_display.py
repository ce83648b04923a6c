import os

import pytest

import gw
from gwlib import display
from gwlib.display import ColorMode, format_worktree_rows
from gwlib.shell import shell_snippet


def _entries(root):
    return [
        {"path": os.path.join(root, "main"), "dir_name": "main", "branch": "main",
         "head": "abc1234567", "is_head": True, "locked": False, "prunable": False},
        {"path": os.path.join(root, "feature-x"), "dir_name": "feature-x",
         "branch": "feature/x", "head": "def4567890", "is_head": False,
         "locked": True, "prunable": False},
    ]


def test_rows_show_markers_and_relative_paths(tmp_path, monkeypatch):
    root = str(tmp_path)
    monkeypatch.chdir(tmp_path)
    lines = format_worktree_rows(_entries(root), root, color_mode=ColorMode.NEVER)

    assert len(lines) == 2
    assert lines[0].startswith(" H  main")
    assert "main" in lines[0]
    assert "abc1234567" in lines[0]
    assert lines[1].startswith(" L  feature-x")
    assert "feature/x" in lines[1]


def test_current_worktree_is_listed_first(tmp_path, monkeypatch):
    root = str(tmp_path)
    (tmp_path / "feature-x").mkdir()
    monkeypatch.chdir(tmp_path / "feature-x")
    lines = format_worktree_rows(_entries(root), root, color_mode=ColorMode.NEVER)
    assert lines[0].startswith("•L  feature-x")


def test_absolute_paths(tmp_path, monkeypatch):
    root = str(tmp_path)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COLUMNS", "300")
    lines = format_worktree_rows(
        _entries(root), root, color_mode=ColorMode.NEVER, force_absolute=True
    )
    assert lines[0].endswith(os.path.join(root, "main"))


def test_color_modes(monkeypatch):
    assert display.color_enabled(ColorMode.ALWAYS)
    assert not display.color_enabled(ColorMode.NEVER)

    class Tty:
        def isatty(self):
            return True

    assert display.color_enabled(ColorMode.AUTO, Tty())
    monkeypatch.setenv("NO_COLOR", "1")
    assert not display.color_enabled(ColorMode.AUTO, Tty())


def test_always_color_emits_escapes(tmp_path, monkeypatch):
    root = str(tmp_path)
    monkeypatch.chdir(tmp_path)
    lines = format_worktree_rows(_entries(root), root, color_mode=ColorMode.ALWAYS)
    assert "\033[" in lines[1]


def test_list_text_for_project(project):
    gw.create(str(project), "feature/y")
    text = gw.list_worktrees_text(str(project), color=ColorMode.NEVER)
    lines = text.splitlines()
    assert lines[0].startswith("•H  main")
    assert any("feature-y" in line and "feature/y" in line for line in lines)
    assert ".store" not in text


def test_list_text_dirty_marker(project):
    (project / "main" / "README.md").write_text("changed\n")
    text = gw.list_worktrees_text(str(project), show_status=True, color=ColorMode.NEVER)
    assert text.splitlines()[0].startswith("•!  main")


def test_raw_listing_is_git_output(project):
    text = gw.list_worktrees_text(str(project), raw=True)
    assert "(bare)" in text
    assert os.path.join(str(project), "main") in text


@pytest.mark.parametrize("shell", ["bash", "zsh"])
def test_posix_shell_snippet(shell):
    snippet = shell_snippet(shell)
    assert snippet.startswith("gw() {")
    assert "command git-work" in snippet
    assert 'cd "$output"' in snippet


def test_fish_shell_snippet():
    snippet = shell_snippet("fish")
    assert snippet.startswith("function gw")
    assert "command git-work $argv" in snippet


def test_unsupported_shell():
    with pytest.raises(gw.PreconditionError, match="unsupported shell 'tcsh'"):
        shell_snippet("tcsh")
