# gwlib/config.py
import os
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib as tomli
else:
    import tomli
import tomli_w

from gwlib.git_ops import run_git
from gwlib.paths import store_path

HOOK_TRUST_KEY = "git-work.hooks.mise.trust"
HOOK_TASK_KEY = "git-work.hooks.mise.task"
DEFAULT_HOOK_TASK = "worktree:setup"

DEFAULT_CONFIG = {
    "fallback_branch": "main",
    "color": "auto",
    "absolute_paths": False,
}


def get_config_path():
    """Get the path to the user config file following XDG Base Directory spec."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        config_dir = Path(xdg_config_home) / "git-work"
    else:
        config_dir = Path.home() / ".config" / "git-work"
    return config_dir / "config.toml"


def load_config():
    """Load user configuration with fallback to defaults."""
    config = dict(DEFAULT_CONFIG)
    config_path = get_config_path()
    if not config_path.exists():
        return config
    try:
        with open(config_path, "rb") as f:
            config.update(tomli.load(f))
    except (OSError, tomli.TOMLDecodeError) as e:
        print(f"warning: could not load {config_path}: {e}", file=sys.stderr)
    return config


def save_config(config):
    """Save the user configuration, creating its directory when needed."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)


def coerce_value(key, raw):
    """Convert a command-line string into the type the key's default has."""
    default = DEFAULT_CONFIG.get(key)
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"expected a boolean for '{key}', got '{raw}'")
    if key == "color" and raw not in ("auto", "always", "never"):
        raise ValueError("color must be one of: auto, always, never")
    return raw


def fallback_branch():
    return load_config().get("fallback_branch") or DEFAULT_CONFIG["fallback_branch"]


# Repository configuration lives in the shared store's own git config.


def store_config_bool(root, key, default):
    result = run_git(["config", "--get", "--bool", key], store_path(root))
    if not result.ok or not result.output:
        return default
    return result.output == "true"


def store_config_string(root, key, default):
    result = run_git(["config", "--get", key], store_path(root))
    if not result.ok:
        return default
    return result.output


def hook_trust_enabled(root):
    return store_config_bool(root, HOOK_TRUST_KEY, True)


def hook_task(root):
    """Configured setup task name, or None when explicitly disabled."""
    task = store_config_string(root, HOOK_TASK_KEY, DEFAULT_HOOK_TASK)
    return task or None
