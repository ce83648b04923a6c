# gwlib/clone.py
import os
import sys

from gwlib.branches import detect_default_branch, set_upstream
from gwlib.convert import FETCH_REFSPEC
from gwlib.errors import PreconditionError, StepError
from gwlib.git_ops import run_git_checked
from gwlib.paths import dir_from_url, store_path, worktree_path, write_pointer_file


def clone_project(url, directory=None):
    """Clone url into the worktree layout and return the primary worktree path.

    No rollback: the destination did not exist beforehand, so a failed clone
    leaves a directory the caller can discard.
    """
    root = os.path.abspath(directory or dir_from_url(url))
    if os.path.exists(root):
        raise PreconditionError(f"directory '{root}' already exists")

    store = store_path(root)
    print(f"cloning {url} into {root}", file=sys.stderr)
    run_git_checked(["clone", "--bare", url, store], None, "clone failed")

    try:
        write_pointer_file(root)
    except OSError as e:
        raise StepError(f"failed to write .git pointer: {e.strerror}")

    branch = detect_default_branch(store)
    run_git_checked(["symbolic-ref", "HEAD", f"refs/heads/{branch}"], store, "failed to set HEAD")

    worktree_dir = worktree_path(root, branch)
    run_git_checked(["worktree", "add", worktree_dir, branch], store, "worktree add failed")

    run_git_checked(["config", "core.bare", "true"], store, "failed to configure store")
    run_git_checked(
        ["config", "--replace-all", "remote.origin.fetch", FETCH_REFSPEC],
        store,
        "failed to configure fetch",
    )
    run_git_checked(["fetch", "--all"], store, "fetch failed")
    set_upstream(branch, worktree_dir)
    return worktree_dir
