# gwlib/branches.py
import sys

from gwlib.config import fallback_branch
from gwlib.git_ops import run_git
from gwlib.paths import store_path


def head_branch(root):
    """The store's default branch (its symbolic HEAD), or None if undeterminable."""
    result = run_git(["symbolic-ref", "--short", "HEAD"], store_path(root))
    if result.ok and result.output:
        return result.output
    return None


def head_branch_or_fallback(root):
    return head_branch(root) or fallback_branch()


def local_branch_exists(branch_name, cwd):
    """Check if refs/heads/<branch_name> exists."""
    return run_git(["show-ref", "--verify", "--quiet", f"refs/heads/{branch_name}"], cwd).ok


def remote_branch_exists(branch_name, cwd, remote="origin"):
    """Check for a remote-tracking branch with exactly this name."""
    return run_git(
        ["show-ref", "--verify", "--quiet", f"refs/remotes/{remote}/{branch_name}"], cwd
    ).ok


def remote_exists(cwd, remote="origin"):
    return run_git(["remote", "get-url", remote], cwd).ok


def detect_default_branch(store):
    """Find the branch a fresh clone should check out first.

    The store's symbolic HEAD wins when it names a branch that really exists;
    otherwise the first listed branch, otherwise the configured fallback.
    """
    result = run_git(["symbolic-ref", "--short", "HEAD"], store)
    if result.ok and result.output and local_branch_exists(result.output, store):
        return result.output

    listing = run_git(["branch", "--list", "--format=%(refname:short)"], store)
    if listing.ok:
        for line in listing.output.splitlines():
            if line.strip():
                return line.strip()
    return fallback_branch()


def set_upstream(branch_name, cwd, remote="origin"):
    """Point branch at <remote>/<branch> when that ref exists. Warning-only."""
    if not remote_branch_exists(branch_name, cwd, remote):
        return False
    result = run_git(
        ["branch", f"--set-upstream-to={remote}/{branch_name}", branch_name], cwd
    )
    if not result.ok:
        print(
            f"warning: could not set upstream for '{branch_name}': {result.output}",
            file=sys.stderr,
        )
    return result.ok


def delete_branch(branch_name, cwd, force=False):
    """Delete a branch; failures are reported as warnings and return False."""
    flag = "-D" if force else "-d"
    result = run_git(["branch", flag, branch_name], cwd)
    if not result.ok:
        print(
            f"warning: could not delete branch '{branch_name}': {result.output}",
            file=sys.stderr,
        )
    return result.ok
