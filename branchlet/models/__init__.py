"""Data models for branchlet."""

from .branch import Branch
from .command import CommandResult, PostCreateResult
from .files import CopyFailure, CopyResult
from .worktree import CreateRequest, CreateResult, DeleteResult, Worktree

__all__ = [
    "Branch",
    "CommandResult",
    "CopyFailure",
    "CopyResult",
    "CreateRequest",
    "CreateResult",
    "DeleteResult",
    "PostCreateResult",
    "Worktree",
]
