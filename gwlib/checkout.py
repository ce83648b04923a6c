# gwlib/checkout.py
import os
import sys

from gwlib.branches import local_branch_exists, remote_branch_exists
from gwlib.errors import (
    AmbiguousMatchError,
    HookError,
    NoMatchError,
    PreconditionError,
)
from gwlib.fuzzy import MatchKind, resolve
from gwlib.git_ops import run_git, run_git_checked
from gwlib.hooks import POST_WORKTREE_CREATE, HookContext, run_hook
from gwlib.parsing import list_worktrees
from gwlib.paths import sanitize_branch, store_path, worktree_dirs


def _worktree_add_args(branch, worktree_dir, store):
    """Pick the `git worktree add` form: track remote, reuse local, or new branch."""
    if remote_branch_exists(branch, store):
        if local_branch_exists(branch, store):
            return ["worktree", "add", worktree_dir, branch]
        return ["worktree", "add", "--track", "-b", branch, worktree_dir, f"origin/{branch}"]
    if local_branch_exists(branch, store):
        return ["worktree", "add", worktree_dir, branch]
    return ["worktree", "add", "-b", branch, worktree_dir]


def _rollback_worktree(store, worktree_dir, branch, branch_existed=False):
    removed = run_git(["worktree", "remove", "--force", worktree_dir], store)
    if not removed.ok:
        print(f"rollback: worktree remove failed: {removed.output}", file=sys.stderr)
    if branch_existed:
        tip = run_git(["rev-parse", "--short", branch], store).output
        print(
            f"rollback: deleting branch '{branch}' which existed before (was {tip}); "
            f"restore with: git branch {branch} {tip}",
            file=sys.stderr,
        )
    deleted = run_git(["branch", "-D", branch], store)
    if not deleted.ok:
        print(f"rollback: branch delete failed: {deleted.output}", file=sys.stderr)


def create_worktree(root, branch):
    """Add a worktree for branch, run the creation hook, and undo both if the hook fails."""
    store = store_path(root)
    worktree_dir = os.path.join(root, sanitize_branch(branch))
    branch_existed = local_branch_exists(branch, store)

    run_git_checked(_worktree_add_args(branch, worktree_dir, store), store, "worktree add failed")
    print(f"created worktree '{sanitize_branch(branch)}' for branch '{branch}'", file=sys.stderr)

    ctx = HookContext(
        root=root,
        worktree_dir=worktree_dir,
        branch=branch,
        source_worktree=os.getcwd(),
    )
    result = run_hook(POST_WORKTREE_CREATE, ctx)
    if result.failed:
        _rollback_worktree(store, worktree_dir, branch, branch_existed)
        raise HookError(result.message)
    return worktree_dir


def _check_collision(root, branch, dir_name):
    if dir_name not in worktree_dirs(root):
        return
    for wt in list_worktrees(root):
        if wt["dir_name"] == dir_name and wt["branch"] and wt["branch"] != branch:
            raise PreconditionError(
                f"worktree directory '{dir_name}' already exists for branch '{wt['branch']}'"
            )
    raise PreconditionError(f"worktree '{dir_name}' already exists")


def create(root, branch):
    """Explicit creation (`checkout -b`)."""
    _check_collision(root, branch, sanitize_branch(branch))
    return create_worktree(root, branch)


def _remote_branch_for(token, store):
    for candidate in (token, sanitize_branch(token)):
        if remote_branch_exists(candidate, store):
            return candidate
    return None


def checkout(root, token):
    """Switch to the worktree best matching token, creating it from a remote branch if needed."""
    sanitized = sanitize_branch(token)
    match = resolve(sanitized, worktree_dirs(root))

    if match.kind == MatchKind.EXACT:
        return os.path.join(root, match.name)
    if match.kind == MatchKind.SINGLE:
        print(f"fuzzy match: '{token}' -> '{match.name}'", file=sys.stderr)
        return os.path.join(root, match.name)
    if match.kind == MatchKind.AMBIGUOUS:
        raise AmbiguousMatchError(token, match.names)

    remote_branch = _remote_branch_for(token, store_path(root))
    if remote_branch is None:
        raise NoMatchError(f"no worktree found for '{token}' (use -b to create one)")

    print(f"creating worktree from remote branch: '{remote_branch}'", file=sys.stderr)
    return create_worktree(root, remote_branch)
