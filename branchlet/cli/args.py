"""Command-line argument parsing for branchlet."""

import argparse
from branchlet.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="branchlet",
        description="Create, list and delete git worktrees",
        epilog="Settings are read from ~/.branchlet/settings.json and <repo>/.branchlet.json",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"Branchlet v{__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    create = subparsers.add_parser("create", help="Create a worktree")
    create.add_argument("-n", "--name", help="Directory name of the new worktree")
    create.add_argument("-s", "--source", help="Branch to start from (local or <remote>/<branch>)")
    create.add_argument(
        "-b",
        "--branch",
        help="Branch to create or check out (default: source, without remote prefix)",
    )

    list_cmd = subparsers.add_parser("list", help="List worktrees")
    list_cmd.add_argument(
        "--json",
        action="store_true",
        help="Print JSON (default when stdout is not a terminal)",
    )

    delete = subparsers.add_parser("delete", help="Delete a worktree")
    target = delete.add_mutually_exclusive_group()
    target.add_argument("-n", "--name", help="Directory name of the worktree")
    target.add_argument("-p", "--path", help="Path of the worktree")
    delete.add_argument(
        "-f", "--force", action="store_true", help="Delete even with uncommitted changes"
    )

    branches = subparsers.add_parser("branches", help="List branches")
    branches.add_argument(
        "--remote",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Include remote branches (default: showRemoteBranches setting)",
    )

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
