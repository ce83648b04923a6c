#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.10"
# dependencies = [
#   "tomli>=2.0.0; python_version < '3.11'",
#   "tomli-w>=1.0.0",
# ]
# ///

# Thin compatibility shim: delegates to gwlib and re-exports public API

from gwlib.api import (
    AbortedError,
    AmbiguousMatchError,
    ColorMode,
    GitWorkError,
    HookContext,
    HookError,
    HookResult,
    HookStatus,
    Match,
    MatchKind,
    NoMatchError,
    PreconditionError,
    SyncReport,
    checkout,
    clone_project,
    create,
    dir_from_url,
    find_root,
    init_project,
    list_worktrees,
    list_worktrees_text,
    parse_worktree_porcelain,
    remove_worktree,
    resolve,
    run_hook,
    sanitize_branch,
    sync_project,
    worktree_dirs,
)
from gwlib.cli import main  # CLI entrypoint

__all__ = [
    "main",
    "init_project",
    "clone_project",
    "checkout",
    "create",
    "remove_worktree",
    "sync_project",
    "SyncReport",
    "resolve",
    "Match",
    "MatchKind",
    "sanitize_branch",
    "dir_from_url",
    "find_root",
    "worktree_dirs",
    "parse_worktree_porcelain",
    "list_worktrees",
    "run_hook",
    "HookContext",
    "HookResult",
    "HookStatus",
    "list_worktrees_text",
    "ColorMode",
    "GitWorkError",
    "PreconditionError",
    "AmbiguousMatchError",
    "NoMatchError",
    "HookError",
    "AbortedError",
]

if __name__ == "__main__":
    main()
