# gwlib/sync.py
"""Fetch, then prune worktrees whose remote-tracking branch has disappeared.

Best effort throughout: a failed fetch, worktree removal or branch deletion
is reported and the remaining entries are still processed. The head
worktree is never pruned.
"""
import sys
from typing import List, NamedTuple

from gwlib.branches import delete_branch, head_branch_or_fallback, remote_branch_exists
from gwlib.git_ops import run_git
from gwlib.parsing import list_worktrees
from gwlib.paths import store_path


class SyncReport(NamedTuple):
    stale: List[dict]
    pruned: int = 0
    failed: int = 0
    dry_run: bool = False


def find_stale(root, head):
    store = store_path(root)
    return [
        wt
        for wt in list_worktrees(root)
        if wt["branch"]
        and wt["branch"] != head
        and not wt["is_head"]
        and not remote_branch_exists(wt["branch"], store)
    ]


def _prune(store, stale, force):
    pruned = failed = 0
    for wt in stale:
        remove_args = ["worktree", "remove", wt["path"]]
        if force:
            remove_args.insert(2, "--force")
        result = run_git(remove_args, store)
        if not result.ok:
            print(f"warning: could not remove '{wt['branch']}': {result.output}", file=sys.stderr)
            failed += 1
            continue
        delete_branch(wt["branch"], store, force=force)
        pruned += 1

    result = run_git(["worktree", "prune"], store)
    if not result.ok:
        print(f"warning: worktree prune failed: {result.output}", file=sys.stderr)
    return pruned, failed


def sync_project(root, dry_run=False, force=False):
    store = store_path(root)

    print("fetching...", file=sys.stderr)
    fetched = run_git(["fetch", "--all", "--prune"], store)
    if not fetched.ok:
        print(f"warning: fetch failed: {fetched.output}", file=sys.stderr)

    head = head_branch_or_fallback(root)
    stale = find_stale(root, head)

    if not stale:
        print("nothing to prune", file=sys.stderr)
        return SyncReport(stale=[], dry_run=dry_run)

    if dry_run:
        print("would prune:", file=sys.stderr)
        for wt in stale:
            print(f"  {wt['branch']}", file=sys.stderr)
        return SyncReport(stale=stale, dry_run=True)

    pruned, failed = _prune(store, stale, force)
    summary = f"pruned {pruned} worktree(s)"
    if failed:
        summary += f", {failed} failed"
    print(summary, file=sys.stderr)
    return SyncReport(stale=stale, pruned=pruned, failed=failed)
