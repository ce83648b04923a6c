# gwlib/parsing.py
import os

from gwlib.branches import head_branch
from gwlib.errors import GitCommandError
from gwlib.git_ops import run_git
from gwlib.paths import store_path


def parse_worktree_porcelain(text):
    """
    Parse `git worktree list --porcelain` output. Return a list of dict entries:
    {
      "path": str,
      "head": str,            # short SHA (10 chars) if available, else ""
      "branch": str or None,  # branch name, or None when detached/bare
      "bare": bool,
      "locked": bool,
      "prunable": bool,
      "detached": bool,
    }
    """
    entries = []
    block = {}

    def push_block():
        if "path" not in block:
            return
        block.setdefault("head", "")
        block.setdefault("branch", None)
        block.setdefault("bare", False)
        block.setdefault("locked", False)
        block.setdefault("prunable", False)
        block.setdefault("detached", False)
        block["head"] = block["head"][:10]
        entries.append(block.copy())

    for ln in text.splitlines():
        if not ln.strip():
            continue
        if ln.startswith("worktree "):
            push_block()
            block = {"path": ln.split(" ", 1)[1].strip()}
        elif ln.startswith("HEAD "):
            block["head"] = ln.split(" ", 1)[1].strip()
        elif ln.startswith("branch "):
            ref = ln.split(" ", 1)[1].strip()
            if ref.startswith("refs/heads/"):
                ref = ref[len("refs/heads/") :]
            block["branch"] = ref
        elif ln == "bare":
            block["bare"] = True
        elif ln == "detached":
            block["detached"] = True
        elif ln.startswith("locked"):
            block["locked"] = True
        elif ln.startswith("prunable"):
            block["prunable"] = True

    push_block()
    return entries


def list_worktrees(root):
    """Live worktree listing for a project, one dict per branch directory.

    The store itself never counts as a worktree, whether git reports it as
    the bare entry or, after an in-place conversion, as the main working tree.
    Each entry gains "dir_name" and "is_head".
    """
    store = store_path(root)
    result = run_git(["worktree", "list", "--porcelain"], store)
    if not result.ok:
        raise GitCommandError("worktree list failed", result.output)

    head = head_branch(root)
    real_store = os.path.realpath(store)
    real_root = os.path.realpath(root)
    worktrees = []
    for entry in parse_worktree_porcelain(result.output):
        real_path = os.path.realpath(entry["path"])
        if entry["bare"] or real_path in (real_store, real_root):
            continue
        entry["dir_name"] = os.path.basename(entry["path"].rstrip(os.sep))
        entry["is_head"] = head is not None and entry["branch"] == head
        worktrees.append(entry)
    return worktrees


def find_head_worktree(worktrees):
    for wt in worktrees:
        if wt["is_head"]:
            return wt
    return None
