# gwlib/hooks.py
"""Post-creation setup for new worktrees.

The only event that does work is POST_WORKTREE_CREATE: when `mise` is on
PATH, trust is propagated from the worktree the command was run in and the
configured setup task is executed inside the new worktree. Missing tool and
undefined task are skips; anything else that fails is reported as FAIL so the
caller can roll the worktree back.
"""
import re
import shutil
import sys
from typing import NamedTuple, Optional

from gwlib.config import hook_task, hook_trust_enabled
from gwlib.git_ops import run_tool

HOOK_TOOL = "mise"

POST_WORKTREE_CREATE = "post_worktree_create"
POST_CHECKOUT = "post_checkout"

_MISSING_TASK_RE = re.compile(
    r"(no task named|task .* not found|unknown task|task .* missing)", re.IGNORECASE
)


class HookStatus:
    OK = "ok"
    SKIP = "skip"
    FAIL = "fail"


class HookResult(NamedTuple):
    status: str
    message: str = ""

    @property
    def failed(self):
        return self.status == HookStatus.FAIL


class HookContext(NamedTuple):
    root: str
    worktree_dir: str
    branch: str
    source_worktree: Optional[str] = None


def _skip(message):
    print(f"hook: {message}", file=sys.stderr)
    return HookResult(HookStatus.SKIP, message)


def _propagate_trust(tool, ctx):
    if not ctx.source_worktree:
        return HookResult(HookStatus.SKIP, "no source worktree")
    shown = run_tool(tool, ["trust", "--show"], ctx.source_worktree)
    if not shown.ok:
        return HookResult(HookStatus.FAIL, f"{HOOK_TOOL} trust --show failed: {shown.output}")
    if not shown.output:
        return HookResult(HookStatus.SKIP, "source worktree is not trusted")
    applied = run_tool(tool, ["trust"], ctx.worktree_dir)
    if not applied.ok:
        return HookResult(HookStatus.FAIL, f"{HOOK_TOOL} trust failed: {applied.output}")
    return HookResult(HookStatus.OK)


def _run_task(tool, task, ctx):
    result = run_tool(tool, ["run", task], ctx.worktree_dir)
    if result.ok:
        return HookResult(HookStatus.OK)
    if _MISSING_TASK_RE.search(result.output):
        return _skip(f"{HOOK_TOOL} task {task} not defined; skipping")
    return HookResult(HookStatus.FAIL, f"{HOOK_TOOL} run {task} failed: {result.output}")


def _post_worktree_create(ctx):
    tool = shutil.which(HOOK_TOOL)
    if tool is None:
        return _skip(f"{HOOK_TOOL} not found; skipping trust and task")

    if hook_trust_enabled(ctx.root):
        trust = _propagate_trust(tool, ctx)
        if trust.failed:
            return trust

    task = hook_task(ctx.root)
    if task:
        return _run_task(tool, task, ctx)
    return HookResult(HookStatus.OK)


def run_hook(event, ctx):
    """Run the hook for event; returns a HookResult and never raises on tool failure."""
    if event == POST_WORKTREE_CREATE:
        return _post_worktree_create(ctx)
    return HookResult(HookStatus.OK)
