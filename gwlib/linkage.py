# gwlib/linkage.py
import os
import shutil
from typing import NamedTuple

from gwlib.paths import POINTER_FILE, sanitize_branch, store_path


class WorktreeLinkage(NamedTuple):
    """The files git reads to treat an existing directory as a linked worktree.

    Inside the store, worktrees/<name>/ holds a back-reference to the
    worktree's pointer file (gitdir), the path to the common store
    (commondir) and the checked-out ref (HEAD). The worktree directory holds
    a forward pointer to that metadata directory.
    """

    store: str
    worktree_dir: str
    branch: str

    @classmethod
    def for_branch(cls, root, branch):
        return cls(
            store=os.path.abspath(store_path(root)),
            worktree_dir=os.path.join(os.path.abspath(root), sanitize_branch(branch)),
            branch=branch,
        )

    @property
    def meta_dir(self):
        return os.path.join(self.store, "worktrees", sanitize_branch(self.branch))

    @property
    def pointer_path(self):
        return os.path.join(self.worktree_dir, POINTER_FILE)

    def files(self):
        """Map of absolute file path to content for every linkage file."""
        return {
            os.path.join(self.meta_dir, "gitdir"): self.pointer_path + "\n",
            os.path.join(self.meta_dir, "commondir"): "../..\n",
            os.path.join(self.meta_dir, "HEAD"): f"ref: refs/heads/{self.branch}\n",
            self.pointer_path: f"gitdir: {self.meta_dir}\n",
        }

    def write(self):
        os.makedirs(self.meta_dir, exist_ok=True)
        for path, content in self.files().items():
            with open(path, "w") as f:
                f.write(content)

    def remove(self):
        """Delete the metadata directory and the forward pointer, if present."""
        if os.path.isdir(self.meta_dir):
            shutil.rmtree(self.meta_dir)
        if os.path.isfile(self.pointer_path):
            os.remove(self.pointer_path)
