"""Git-related services for branchlet."""

from .runner import GitCommandRunner
from .worktrees import WorktreeService, parse_worktree_porcelain
from .branch_queries import BranchQueries, parse_branch_output

__all__ = [
    "GitCommandRunner",
    "WorktreeService",
    "BranchQueries",
    "parse_worktree_porcelain",
    "parse_branch_output",
]
