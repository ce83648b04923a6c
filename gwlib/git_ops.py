# gwlib/git_ops.py
import subprocess
from typing import NamedTuple, Optional, Sequence

from gwlib.errors import GitCommandError


class GitResult(NamedTuple):
    ok: bool
    output: str


def _run(cmd: Sequence[str], cwd: Optional[str]) -> GitResult:
    """Run cmd, folding stderr into stdout and trimming the result."""
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except (FileNotFoundError, NotADirectoryError) as e:
        return GitResult(False, str(e))
    return GitResult(result.returncode == 0, (result.stdout or "").strip())


def run_git(cmd_args: Sequence[str], cwd: Optional[str] = None) -> GitResult:
    """Execute a git command in cwd. Never raises on a non-zero exit."""
    return _run(["git"] + list(cmd_args), cwd)


def run_git_checked(cmd_args: Sequence[str], cwd: Optional[str], step: str) -> str:
    """Like run_git but raises GitCommandError naming the failed step."""
    result = run_git(cmd_args, cwd)
    if not result.ok:
        raise GitCommandError(step, result.output)
    return result.output


def run_tool(executable: str, cmd_args: Sequence[str], cwd: Optional[str] = None) -> GitResult:
    """Run an external helper tool with the same result shape as run_git."""
    return _run([executable] + list(cmd_args), cwd)
