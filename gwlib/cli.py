# gwlib/cli.py
import argparse
import sys

from gwlib.checkout import checkout, create
from gwlib.clone import clone_project
from gwlib.config import (
    DEFAULT_CONFIG,
    coerce_value,
    get_config_path,
    load_config,
    save_config,
)
from gwlib.convert import init_project
from gwlib.display import ColorMode, list_worktrees_text
from gwlib.errors import GitWorkError
from gwlib.remove import remove_worktree
from gwlib.resolution import get_project_root
from gwlib.shell import SUPPORTED_SHELLS, shell_snippet
from gwlib.sync import sync_project


def build_parser():
    parser = argparse.ArgumentParser(
        prog="git-work",
        description="Branch-per-directory workflows on top of git worktree",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    activate_parser = subparsers.add_parser(
        "activate", help="Print shell integration (eval it in your shell rc)"
    )
    activate_parser.add_argument("shell", choices=SUPPORTED_SHELLS)

    clone_parser = subparsers.add_parser(
        "clone", aliases=["cl"], help="Clone a repo into the worktree layout"
    )
    clone_parser.add_argument("url", help="Repository URL")
    clone_parser.add_argument(
        "directory", nargs="?", help="Target directory (default: derived from URL)"
    )

    subparsers.add_parser("init", help="Convert the current repo to the worktree layout")

    checkout_parser = subparsers.add_parser(
        "checkout", aliases=["co"], help="Switch to a branch worktree (fuzzy match)"
    )
    checkout_parser.add_argument("branch", help="Branch or worktree name")
    checkout_parser.add_argument(
        "-b",
        dest="create",
        action="store_true",
        help="Create a new worktree for the branch",
    )

    rm_parser = subparsers.add_parser("rm", help="Remove a worktree and its branch")
    rm_parser.add_argument("branch", help="Branch or worktree name")
    rm_parser.add_argument(
        "--force",
        action="store_true",
        help="Use 'git branch -D' and allow removing the HEAD branch",
    )
    rm_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    sync_parser = subparsers.add_parser(
        "sync", aliases=["s"], help="Fetch and prune stale worktrees"
    )
    sync_parser.add_argument(
        "-n", "--dry-run", action="store_true", help="Show what would be pruned"
    )
    sync_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Force removal of dirty worktrees and unmerged branches",
    )

    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List all worktrees")
    list_parser.add_argument(
        "--raw", action="store_true", help="Show raw `git worktree list` output"
    )
    list_parser.add_argument(
        "--status",
        action="store_true",
        help="Show '!' marker for dirty worktrees (slower)",
    )
    list_parser.add_argument(
        "--color",
        choices=[ColorMode.AUTO, ColorMode.ALWAYS, ColorMode.NEVER],
        default=None,
        help="Colorize output (default from config: auto)",
    )
    list_parser.add_argument(
        "--absolute",
        action="store_true",
        default=None,
        help="Show absolute paths instead of relative",
    )

    config_parser = subparsers.add_parser("config", help="Show or change user settings")
    config_parser.add_argument(
        "action", nargs="?", choices=["show", "get", "set", "path"], default="show"
    )
    config_parser.add_argument("key", nargs="?", choices=sorted(DEFAULT_CONFIG))
    config_parser.add_argument("value", nargs="?")

    return parser


def _run_config(args):
    if args.action == "path":
        return str(get_config_path())
    config = load_config()
    if args.action == "show":
        return "\n".join(f"{k} = {config[k]!r}" for k in sorted(config))
    if not args.key:
        raise GitWorkError(f"config {args.action} requires a key")
    if args.action == "get":
        return str(config.get(args.key))
    if args.value is None:
        raise GitWorkError("config set requires a value")
    try:
        config[args.key] = coerce_value(args.key, args.value)
    except ValueError as e:
        raise GitWorkError(str(e))
    save_config(config)
    print(f"{args.key} set in {get_config_path()}", file=sys.stderr)
    return None


def dispatch(args):
    """Run the selected command and return what should go to stdout, or None."""
    command = args.command
    if command == "activate":
        return shell_snippet(args.shell)
    if command in ("clone", "cl"):
        return clone_project(args.url, args.directory)
    if command == "init":
        return init_project()
    if command == "config":
        return _run_config(args)

    root = get_project_root()
    if command in ("checkout", "co"):
        if args.create:
            return create(root, args.branch)
        return checkout(root, args.branch)
    if command == "rm":
        return remove_worktree(root, args.branch, force=args.force, yes=args.yes)
    if command in ("sync", "s"):
        sync_project(root, dry_run=args.dry_run, force=args.force)
        return None
    if command in ("list", "ls"):
        config = load_config()
        color = args.color or config.get("color", ColorMode.AUTO)
        absolute = args.absolute if args.absolute is not None else config.get("absolute_paths")
        return list_worktrees_text(
            root,
            raw=args.raw,
            show_status=args.status,
            color=color,
            absolute=bool(absolute),
        )
    raise GitWorkError(f"unknown command '{command}'")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(1)

    try:
        output = dispatch(args)
    except GitWorkError as e:
        print(f"git-work: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("", file=sys.stderr)
        sys.exit(130)

    if output:
        print(output.rstrip("\n"))
