# gwlib/api.py
from gwlib.checkout import checkout, create
from gwlib.clone import clone_project
from gwlib.convert import init_project
from gwlib.display import ColorMode, list_worktrees_text
from gwlib.errors import (
    AbortedError,
    AmbiguousMatchError,
    GitWorkError,
    HookError,
    NoMatchError,
    PreconditionError,
)
from gwlib.fuzzy import Match, MatchKind, resolve
from gwlib.hooks import HookContext, HookResult, HookStatus, run_hook
from gwlib.parsing import list_worktrees, parse_worktree_porcelain
from gwlib.paths import dir_from_url, find_root, sanitize_branch, worktree_dirs
from gwlib.remove import remove_worktree
from gwlib.sync import SyncReport, sync_project

__all__ = [
    # lifecycle
    "init_project",
    "clone_project",
    "checkout",
    "create",
    "remove_worktree",
    "sync_project",
    "SyncReport",
    # resolution
    "resolve",
    "Match",
    "MatchKind",
    # paths
    "sanitize_branch",
    "dir_from_url",
    "find_root",
    "worktree_dirs",
    # parsing
    "parse_worktree_porcelain",
    "list_worktrees",
    # hooks
    "run_hook",
    "HookContext",
    "HookResult",
    "HookStatus",
    # display
    "list_worktrees_text",
    "ColorMode",
    # errors
    "GitWorkError",
    "PreconditionError",
    "AmbiguousMatchError",
    "NoMatchError",
    "HookError",
    "AbortedError",
]
