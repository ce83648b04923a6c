# gwlib/display.py
import os
import shutil
import sys
from typing import NamedTuple

from gwlib.git_ops import run_git, run_git_checked
from gwlib.parsing import list_worktrees
from gwlib.paths import is_path_current_worktree, rel_display_path, store_path

HEAD_WIDTH = 10
SEP = "  "
MAX_DIR_WIDTH = 30
MAX_BRANCH_WIDTH = 40


class ColorMode:
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class Palette(NamedTuple):
    bold: str = ""
    dim: str = ""
    red: str = ""
    yellow: str = ""
    magenta: str = ""
    reset: str = ""


ANSI = Palette("\033[1m", "\033[2m", "\033[31m", "\033[33m", "\033[35m", "\033[0m")
PLAIN = Palette()


def color_enabled(color_mode, stream=None):
    if color_mode == ColorMode.ALWAYS:
        return True
    if color_mode == ColorMode.AUTO:
        stream = stream or sys.stdout
        return stream.isatty() and os.environ.get("NO_COLOR") is None
    return False


def _has_tracked_changes(path):
    result = run_git(["status", "--porcelain", "--untracked-files=no"], path)
    return result.ok and bool(result.output)


def _state_marker(entry, dirty):
    """One character: ! dirty, H head worktree, L locked, P prunable."""
    if dirty:
        return "!"
    if entry.get("is_head"):
        return "H"
    if entry.get("locked"):
        return "L"
    if entry.get("prunable"):
        return "P"
    return " "


def _fit(text, width):
    if len(text) <= width:
        return text.ljust(width)
    if width <= 1:
        return text[:width]
    return text[: width - 1] + "…"


def _column_widths(entries):
    term_width = shutil.get_terminal_size(fallback=(80, 24)).columns
    avail = max(term_width - (2 + len(SEP) * 3 + HEAD_WIDTH), 30)
    longest_dir = max((len(e["dir_name"]) for e in entries), default=0)
    longest_branch = max((len(e.get("branch") or "") for e in entries), default=0)
    dir_width = min(longest_dir, MAX_DIR_WIDTH, avail // 3)
    branch_width = min(longest_branch, MAX_BRANCH_WIDTH, avail // 3)
    path_width = max(avail - dir_width - branch_width - len(SEP), 10)
    return dir_width, branch_width, path_width


def format_worktree_rows(
    entries, root, show_status=False, color_mode=ColorMode.AUTO, force_absolute=False
):
    """Render list_worktrees() entries as aligned rows.

    Columns: two marker characters (• current, then the state marker),
    directory, branch, abbreviated head commit and path. The current
    worktree sorts first, the head worktree second, the rest by directory.
    """
    palette = ANSI if color_enabled(color_mode) else PLAIN
    state_colors = {"!": palette.red, "L": palette.yellow, "P": palette.magenta}

    rows = []
    for entry in entries:
        current = is_path_current_worktree(entry["path"])
        rank = 0 if current else (1 if entry.get("is_head") else 2)
        rows.append((rank, entry["dir_name"].lower(), current, entry))
    rows.sort(key=lambda row: row[:2])

    dir_width, branch_width, path_width = _column_widths(entries)

    lines = []
    for _, _, current, entry in rows:
        dirty = show_status and _has_tracked_changes(entry["path"])
        state = _state_marker(entry, dirty)
        if state in state_colors:
            state = f"{state_colors[state]}{state}{palette.reset}"
        markers = ("•" if current else " ") + state

        directory = _fit(entry["dir_name"], dir_width)
        if current:
            directory = f"{palette.bold}{directory}{palette.reset}"
        branch = _fit(entry.get("branch") or "(detached)", branch_width)
        head = (entry.get("head") or "").ljust(HEAD_WIDTH)[:HEAD_WIDTH]
        path = _fit(rel_display_path(entry["path"], root, force_absolute), path_width)
        path = f"{palette.dim}{path}{palette.reset}"

        lines.append(SEP.join([markers, directory, branch, head, path]).rstrip())
    return lines


def list_worktrees_text(
    root, raw=False, show_status=False, color=ColorMode.AUTO, absolute=False
):
    """Text for `git-work list`; raw mode is plain `git worktree list` output."""
    if raw:
        return run_git_checked(["worktree", "list"], store_path(root), "worktree list failed")

    entries = list_worktrees(root)
    if not entries:
        print("no worktrees found", file=sys.stderr)
        return ""
    return "\n".join(
        format_worktree_rows(
            entries,
            root,
            show_status=show_status,
            color_mode=color,
            force_absolute=absolute,
        )
    )
