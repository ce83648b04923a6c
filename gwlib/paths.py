# gwlib/paths.py
import os
from typing import List, Optional

from gwlib.errors import PreconditionError

STORE_DIR = ".store"
POINTER_FILE = ".git"
POINTER_CONTENT = f"gitdir: ./{STORE_DIR}\n"


def sanitize_branch(name: str) -> str:
    """Turn a branch name into a directory name by replacing path separators."""
    return name.replace("/", "-").replace("\\", "-")


def dir_from_url(url: str) -> str:
    """Derive the default clone directory from a remote URL, as `git clone` does."""
    name = url.rstrip("/").rsplit("/", 1)[-1]
    # scp-like URLs without a path separator: host:repo.git
    name = name.rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def store_path(root: str) -> str:
    return os.path.join(root, STORE_DIR)


def worktree_path(root: str, branch: str) -> str:
    return os.path.join(root, sanitize_branch(branch))


def is_project_root(path: str) -> bool:
    return os.path.isdir(os.path.join(path, STORE_DIR))


def find_root(start_dir: Optional[str] = None) -> str:
    """Walk upward from start_dir until a directory holding the shared store is found."""
    current = os.path.abspath(start_dir or os.getcwd())
    while True:
        if is_project_root(current):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            raise PreconditionError(f"not a git-work project (no {STORE_DIR}/ found)")
        current = parent


def worktree_dirs(root: str) -> List[str]:
    """Names of the visible directories directly under the project root."""
    return sorted(
        entry
        for entry in os.listdir(root)
        if not entry.startswith(".") and os.path.isdir(os.path.join(root, entry))
    )


def is_path_current_worktree(path: str) -> bool:
    """Check if the current directory is inside the given worktree path."""
    try:
        cur = os.path.realpath(os.getcwd())
        p = os.path.realpath(path)
        return cur == p or cur.startswith(p + os.sep)
    except OSError:
        return False


def rel_display_path(path: str, root: str, force_absolute: bool) -> str:
    """Return the path relative to the project root's parent unless absolute output is forced."""
    if force_absolute:
        return os.path.abspath(path)
    abs_path = os.path.abspath(path)
    abs_root = os.path.abspath(root)
    if abs_path.startswith(abs_root + os.sep):
        return os.path.relpath(abs_path, os.path.dirname(abs_root))
    return abs_path


def write_pointer_file(root: str) -> None:
    """Write <root>/.git redirecting git to the shared store."""
    with open(os.path.join(root, POINTER_FILE), "w") as f:
        f.write(POINTER_CONTENT)
