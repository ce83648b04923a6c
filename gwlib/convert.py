# gwlib/convert.py
"""Convert a plain repository into the worktree layout, in place.

    <root>/.git/  ->  <root>/.store/        shared store
                      <root>/.git           pointer file: gitdir: ./.store
    <root>/*      ->  <root>/<branch>/*     primary worktree

Every step up to and including the worktree linkage is undone if a later one
fails. Popping the stash and setting the upstream happen after that point and
only warn.
"""
import os
import sys

from gwlib.branches import head_branch, remote_exists, set_upstream
from gwlib.errors import GitWorkError, PreconditionError, StepError
from gwlib.git_ops import run_git, run_git_checked
from gwlib.linkage import WorktreeLinkage
from gwlib.paths import (
    POINTER_FILE,
    STORE_DIR,
    sanitize_branch,
    store_path,
    worktree_path,
    write_pointer_file,
)

STASH_MESSAGE = "git-work init"
FETCH_REFSPEC = "+refs/heads/*:refs/remotes/origin/*"


def _mark_bare(store):
    run_git_checked(["config", "core.bare", "true"], store, "failed to configure store")


class _Conversion:
    def __init__(self, root):
        self.root = root
        self.git_dir = os.path.join(root, POINTER_FILE)
        self.store = store_path(root)
        self.branch = None
        self.worktree_dir = None
        self.stashed = False
        self.original_config = None
        self.store_moved = False
        self.pointer_written = False
        self.created_dir = False
        self.moved = []
        self.linkage = None

    def run(self):
        self.branch = self._current_branch()
        self.worktree_dir = worktree_path(self.root, self.branch)
        self.stashed = self._stash_changes()
        try:
            self._move_git_to_store()
            self._write_pointer()
            self._configure_store()
            self._move_files()
            self._link_worktree()
        except GitWorkError:
            self._rollback()
            raise

        self._finish()
        return self.worktree_dir

    def _current_branch(self):
        result = run_git(["symbolic-ref", "--short", "HEAD"], self.root)
        if not result.ok or not result.output:
            raise PreconditionError(f"could not determine current branch: {result.output}")
        return result.output

    def _stash_changes(self):
        status = run_git_checked(
            ["status", "--porcelain", "--untracked-files=no"], self.root, "git status failed"
        )
        if not status:
            return False
        run_git_checked(
            ["stash", "push", "-m", STASH_MESSAGE], self.root, "failed to stash changes"
        )
        return True

    def _move_git_to_store(self):
        try:
            with open(os.path.join(self.git_dir, "config"), "rb") as f:
                self.original_config = f.read()
        except OSError:
            self.original_config = None
        try:
            os.rename(self.git_dir, self.store)
        except OSError as e:
            raise StepError(f"failed to move .git to {STORE_DIR}: {e.strerror}")
        self.store_moved = True

    def _write_pointer(self):
        try:
            write_pointer_file(self.root)
        except OSError as e:
            raise StepError(f"failed to write .git pointer: {e.strerror}")
        self.pointer_written = True

    def _configure_store(self):
        run_git_checked(["config", "core.bare", "false"], self.store, "failed to configure store")
        if remote_exists(self.store):
            run_git_checked(
                ["config", "--replace-all", "remote.origin.fetch", FETCH_REFSPEC],
                self.store,
                "failed to configure fetch",
            )
        else:
            print("warning: no remote 'origin' configured", file=sys.stderr)

    def _move_files(self):
        try:
            os.mkdir(self.worktree_dir)
        except OSError as e:
            raise StepError(f"failed to create worktree directory: {e.strerror}")
        self.created_dir = True

        keep = {STORE_DIR, POINTER_FILE, os.path.basename(self.worktree_dir)}
        for entry in sorted(os.listdir(self.root)):
            if entry in keep:
                continue
            try:
                os.rename(
                    os.path.join(self.root, entry), os.path.join(self.worktree_dir, entry)
                )
            except OSError as e:
                raise StepError(f"failed to move '{entry}' into worktree: {e.strerror}")
            self.moved.append(entry)

    def _link_worktree(self):
        self.linkage = WorktreeLinkage.for_branch(self.root, self.branch)
        try:
            self.linkage.write()
        except OSError as e:
            raise StepError(f"failed to write worktree linkage: {e.strerror}")
        # Files are already in place; only the index has to be built from HEAD.
        run_git_checked(["reset", "--quiet"], self.worktree_dir, "failed to build worktree index")

    def _finish(self):
        result = run_git(["config", "core.bare", "true"], self.store)
        if not result.ok:
            print(f"warning: could not mark store as bare: {result.output}", file=sys.stderr)
        set_upstream(self.branch, self.worktree_dir)
        if self.stashed:
            popped = run_git(["stash", "pop"], self.worktree_dir)
            if not popped.ok:
                print(
                    f"warning: failed to pop stash ({popped.output}); "
                    "uncommitted changes remain stashed",
                    file=sys.stderr,
                )

    def _rollback(self):
        print("rollback: restoring original repository layout", file=sys.stderr)
        if self.linkage is not None:
            self._undo("remove worktree linkage", self.linkage.remove)
            self._undo("remove worktree metadata", self._remove_empty_worktrees_dir)
        for entry in reversed(self.moved):
            self._undo(
                f"move '{entry}' back",
                os.rename,
                os.path.join(self.worktree_dir, entry),
                os.path.join(self.root, entry),
            )
        if self.created_dir:
            self._undo("remove worktree directory", os.rmdir, self.worktree_dir)
        if self.pointer_written:
            self._undo("remove .git pointer", os.remove, self.git_dir)
        if self.store_moved:
            if self.original_config is not None:
                self._undo("restore config", self._restore_config)
            self._undo(f"move {STORE_DIR} back to .git", os.rename, self.store, self.git_dir)
        if self.stashed:
            popped = run_git(["stash", "pop"], self.root)
            if not popped.ok:
                print(f"rollback: stash pop failed: {popped.output}", file=sys.stderr)

    def _undo(self, what, func, *args):
        try:
            func(*args)
        except OSError as e:
            print(f"rollback: {what} failed: {e}", file=sys.stderr)

    def _remove_empty_worktrees_dir(self):
        parent = os.path.join(self.store, "worktrees")
        if os.path.isdir(parent) and not os.listdir(parent):
            os.rmdir(parent)

    def _restore_config(self):
        with open(os.path.join(self.store, "config"), "wb") as f:
            f.write(self.original_config)


def _repair(root):
    """Rerun on a converted project: re-assert configuration, recreate a missing primary worktree."""
    store = store_path(root)
    _mark_bare(store)
    if not os.path.exists(os.path.join(root, POINTER_FILE)):
        write_pointer_file(root)

    branch = head_branch(root)
    if branch is None:
        raise PreconditionError(f"could not determine HEAD branch of {STORE_DIR}/")

    worktree_dir = worktree_path(root, branch)
    if os.path.isdir(worktree_dir):
        return worktree_dir

    print(f"repairing: recreating missing worktree '{sanitize_branch(branch)}'", file=sys.stderr)
    pruned = run_git(["worktree", "prune"], store)
    if not pruned.ok:
        print(f"warning: worktree prune failed: {pruned.output}", file=sys.stderr)

    linkage = WorktreeLinkage.for_branch(root, branch)
    try:
        linkage.remove()
        os.mkdir(worktree_dir)
        linkage.write()
    except OSError as e:
        raise StepError(f"failed to recreate worktree directory: {e.strerror}")
    run_git_checked(["reset", "--hard", "--quiet"], worktree_dir, "failed to check out worktree")
    return worktree_dir


def init_project(directory=None):
    """Convert the repository at directory (default: cwd) and return the primary worktree path."""
    root = os.path.abspath(directory or os.getcwd())
    git_dir = os.path.join(root, POINTER_FILE)

    if os.path.isdir(store_path(root)):
        if os.path.isdir(git_dir):
            raise PreconditionError(
                f"already initialized (found {STORE_DIR}/ next to a .git/ directory)"
            )
        return _repair(root)
    if not os.path.isdir(git_dir):
        raise PreconditionError("not a git repository (no .git/ directory)")

    return _Conversion(root).run()
