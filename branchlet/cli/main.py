"""Command-line interface for branchlet"""

import os
import sys
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from branchlet.cli.args import build_parser
from branchlet.config import load_config
from branchlet.core import WorktreeOrchestrator
from branchlet.exceptions import BranchletError, ValidationError
from branchlet.logging_config import get_logger, setup_logging
from branchlet.services.git_service import GitService

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def print_warnings(warnings: List[str]) -> None:
    """Print non-fatal problems on stderr."""
    for warning in warnings:
        err_console.print(f"[yellow]Warning: {escape(warning)}[/yellow]", soft_wrap=True)


def run_create(orchestrator: WorktreeOrchestrator, args) -> int:
    """Create a worktree and print its path on stdout."""
    result = orchestrator.create(args.name or "", args.source or "", args.branch)
    print_warnings(result.warnings)
    console.print(result.path, markup=False, highlight=False, soft_wrap=True)
    return 0


def run_list(orchestrator: WorktreeOrchestrator, args) -> int:
    """List worktrees as a table, or JSON for scripts."""
    worktrees = orchestrator.list_worktrees()

    if args.json or not console.is_terminal:
        console.print_json(data=[wt.to_dict() for wt in worktrees])
        return 0

    table = Table()
    table.add_column("Path")
    table.add_column("Branch")
    table.add_column("Commit")
    for wt in worktrees:
        branch = escape(wt.branch) if wt.branch else "[dim](detached)[/dim]"
        if wt.is_main:
            branch += " [cyan](main)[/cyan]"
        table.add_row(escape(wt.path), branch, wt.commit_hash[:7])
    console.print(table)
    return 0


def run_delete(orchestrator: WorktreeOrchestrator, args) -> int:
    """Delete a worktree addressed by name or path."""
    target = args.path or args.name
    if not target:
        raise ValidationError("Missing required argument: --name (-n) or --path (-p)")

    result = orchestrator.delete_worktree(target, force=args.force)
    print_warnings(result.warnings)
    err_console.print(f"[green]Deleted worktree {escape(result.worktree.path)}[/green]", soft_wrap=True)
    if result.branch_deleted:
        err_console.print(f"[green]Deleted branch {escape(result.worktree.branch)}[/green]")
    return 0


def run_branches(orchestrator: WorktreeOrchestrator, args) -> int:
    """List branches, one per line; the current branch is starred."""
    for branch in orchestrator.list_branches(args.remote):
        marker = "*" if branch.is_current else " "
        console.print(f"{marker} {branch.name}", markup=False, highlight=False, soft_wrap=True)
    return 0


COMMANDS: Dict[str, Callable[[WorktreeOrchestrator, object], int]] = {
    "create": run_create,
    "list": run_list,
    "delete": run_delete,
    "branches": run_branches,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    parsed_args = parser.parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    if not parsed_args.command:
        parser.print_usage(sys.stderr)
        err_console.print("[red]Error: No command given (create, list, delete, branches)[/red]")
        return 1

    try:
        git_service = GitService(os.getcwd())
        repo_info = git_service.get_repository_info()
        config = load_config(repo_info.path)
        logger.debug(f"Configuration: {config.to_dict()}")

        orchestrator = WorktreeOrchestrator(config=config, git_service=git_service)
        return COMMANDS[parsed_args.command](orchestrator, parsed_args)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except BranchletError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
