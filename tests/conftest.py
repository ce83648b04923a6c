import os
import shutil
import subprocess
from pathlib import Path

import pytest

HOOK_SCRIPT = """\
#!/bin/sh
set -eu
cmd="$1"
shift || true

case "$cmd" in
  trust)
    if [ "${1:-}" = "--show" ]; then
      if [ -f ".trusted" ]; then
        echo "trusted"
      fi
      exit 0
    fi
    touch .trusted
    exit 0
    ;;
  run)
    task="$1"
    if [ "$task" = "hook-fail" ]; then
      echo "hook failed" >&2
      exit 1
    fi
    if [ "$task" = "hook-missing" ]; then
      echo "mise ERROR no task named hook-missing found" >&2
      exit 1
    fi
    echo "$task" > hook-ran
    exit 0
    ;;
  *)
    echo "unknown command" >&2
    exit 1
    ;;
esac
"""


def git(*args, cwd=None, check=True):
    return subprocess.run(
        ["git", *args], cwd=cwd, check=check, capture_output=True, text=True
    )


@pytest.fixture(autouse=True)
def isolated_git(tmp_path, monkeypatch):
    """Keep user/system git config and user settings out of every test."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("GW_PROJECT_ROOT", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.fixture
def make_normal_repo(tmp_path):
    def _make(name="myrepo"):
        repo = tmp_path / name
        repo.mkdir()
        git("init", "-b", "main", cwd=repo)
        (repo / "README.md").write_text("# Test\n")
        (repo / "src.py").write_text("print('hi')\n")
        git("add", ".", cwd=repo)
        git("commit", "-m", "initial", cwd=repo)
        return repo

    return _make


@pytest.fixture
def origin_repo(tmp_path):
    normal = tmp_path / "origin_normal"
    normal.mkdir()
    git("init", "-b", "main", cwd=normal)
    (normal / "README.md").write_text("# Test\n")
    git("add", ".", cwd=normal)
    git("commit", "-m", "init", cwd=normal)
    bare = tmp_path / "origin.git"
    git("clone", "--bare", str(normal), str(bare), cwd=tmp_path)
    return bare


def disable_hooks(project):
    store = Path(project) / ".store"
    git("config", "git-work.hooks.mise.task", "", cwd=store)
    git("config", "git-work.hooks.mise.trust", "false", cwd=store)


@pytest.fixture
def project(tmp_path, origin_repo, monkeypatch):
    """A cloned project with hooks disabled; cwd is its main worktree."""
    import gw

    root = tmp_path / "project"
    gw.clone_project(str(origin_repo), str(root))
    disable_hooks(root)
    monkeypatch.chdir(root / "main")
    return root


def create_remote_branch(origin_bare, branch_name):
    tmp = Path(origin_bare).parent / f"tmp_clone_{branch_name.replace('/', '_')}"
    git("clone", str(origin_bare), str(tmp))
    git("checkout", "-b", branch_name, cwd=tmp)
    (tmp / f"{branch_name.replace('/', '_')}.txt").write_text("branch file\n")
    git("add", ".", cwd=tmp)
    git("commit", "-m", f"add {branch_name}", cwd=tmp)
    git("push", "origin", branch_name, cwd=tmp)
    shutil.rmtree(tmp)


def delete_remote_branch(origin_bare, branch_name):
    git("branch", "-D", branch_name, cwd=origin_bare)


@pytest.fixture
def hook_tool(tmp_path, monkeypatch):
    """Put a fake `mise` first on PATH."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "mise"
    script.write_text(HOOK_SCRIPT)
    script.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return script
