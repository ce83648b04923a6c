# gwlib/remove.py
import os
import sys

from gwlib.branches import delete_branch, head_branch
from gwlib.errors import AbortedError, AmbiguousMatchError, NoMatchError, PreconditionError
from gwlib.fuzzy import MatchKind, resolve
from gwlib.git_ops import run_git_checked
from gwlib.parsing import find_head_worktree, list_worktrees
from gwlib.paths import is_path_current_worktree, sanitize_branch, store_path, worktree_path


def resolve_target(root, token, worktrees=None):
    """Find the worktree entry token refers to, by raw branch name or fuzzy directory name."""
    if worktrees is None:
        worktrees = list_worktrees(root)
    worktrees = [wt for wt in worktrees if wt["branch"]]

    for wt in worktrees:
        if wt["branch"] == token:
            return wt

    match = resolve(sanitize_branch(token), [wt["dir_name"] for wt in worktrees])
    if match.kind == MatchKind.AMBIGUOUS:
        raise AmbiguousMatchError(token, match.names)
    if match.kind == MatchKind.NONE:
        raise NoMatchError(f"worktree '{token}' does not exist")
    if match.kind == MatchKind.SINGLE:
        print(f"fuzzy match: '{token}' -> '{match.name}'", file=sys.stderr)
    for wt in worktrees:
        if wt["dir_name"] == match.name:
            return wt
    raise NoMatchError(f"worktree '{token}' does not exist")


def confirm_removal(target):
    """Ask on stderr; only 'y' or 'yes' proceed."""
    if target["dir_name"] == target["branch"]:
        label = f"'{target['branch']}'"
    else:
        label = f"'{target['dir_name']}' (branch '{target['branch']}')"
    print(f"delete worktree {label}? [y/N]: ", end="", file=sys.stderr)
    sys.stderr.flush()
    try:
        answer = input()
    except EOFError:
        raise AbortedError()
    if answer.strip().lower() not in ("y", "yes"):
        raise AbortedError()


def remove_worktree(root, token, force=False, yes=False):
    """Remove the worktree token resolves to and delete its branch.

    Returns the head worktree's path when the current directory was inside
    the removed worktree, otherwise None.
    """
    worktrees = list_worktrees(root)
    target = resolve_target(root, token, worktrees)
    branch = target["branch"]

    if target["is_head"] and not force:
        raise PreconditionError(f"refusing to remove HEAD branch '{branch}' (use --force)")
    if not yes:
        confirm_removal(target)

    worktree_dir = target["path"]
    if not os.path.isdir(worktree_dir):
        raise PreconditionError(f"worktree '{target['dir_name']}' does not exist")

    store = store_path(root)
    inside = is_path_current_worktree(worktree_dir)
    if inside:
        # git cannot run from a deleted working directory
        os.chdir(root)

    remove_args = ["worktree", "remove", worktree_dir]
    if force:
        remove_args.insert(2, "--force")
    run_git_checked(remove_args, store, "worktree remove failed")
    delete_branch(branch, store, force=force)

    if not inside:
        print(f"removed '{branch}'", file=sys.stderr)
        return None

    head_wt = find_head_worktree(worktrees)
    if head_wt is not None and head_wt is not target:
        destination = head_wt["path"]
    else:
        head = head_branch(root)
        destination = worktree_path(root, head) if head and head != branch else root
    print(f"removed '{branch}', switching to '{os.path.basename(destination)}'", file=sys.stderr)
    return destination
