# gwlib/resolution.py
import os
from typing import Optional

from gwlib.errors import PreconditionError
from gwlib.paths import find_root, is_project_root

ROOT_ENV_VAR = "GW_PROJECT_ROOT"


def get_project_root_with_source(cwd: Optional[str] = None):
    """Resolve the project root with priority:
    1) walk upward from the current directory
    2) env var GW_PROJECT_ROOT
    Returns (root:str|None, source:str|None, meta:dict).
    meta contains useful info for error messages.
    """
    meta = {"env": os.environ.get(ROOT_ENV_VAR)}

    try:
        return (find_root(cwd), "auto", meta)
    except PreconditionError:
        pass

    if meta["env"]:
        env_root = os.path.abspath(os.path.expanduser(meta["env"]))
        if is_project_root(env_root):
            return (env_root, "env", meta)
        return (None, "env_invalid", meta)

    return (None, None, meta)


def get_project_root(cwd: Optional[str] = None) -> str:
    """Like get_project_root_with_source but raises with a coded message."""
    root, source, meta = get_project_root_with_source(cwd)
    if root:
        return root
    if source == "env_invalid":
        raise PreconditionError(
            f"[E002] {ROOT_ENV_VAR} does not point to a git-work project: {meta['env']}"
        )
    raise PreconditionError(
        "[E001] not a git-work project (no .store/ found here or in any parent directory)"
    )
