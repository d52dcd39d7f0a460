"""Worktree data models."""

from dataclasses import dataclass, field
from typing import List, Optional

from branchlet.models.command import CommandResult, PostCreateResult


@dataclass(frozen=True)
class Worktree:
    """A git-registered worktree."""

    path: str
    branch: str  # Empty when detached
    commit_hash: str
    is_main: bool = False
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def is_detached(self) -> bool:
        return not self.branch

    @property
    def name(self) -> str:
        """Directory name of the worktree."""
        return self.path.rstrip("/\\").replace("\\", "/").rsplit("/", 1)[-1]

    def to_dict(self) -> dict:
        """Convert to the JSON shape used by ``branchlet list --json``."""
        return {
            "path": self.path,
            "branch": self.branch,
            "commit": self.commit_hash,
        }

    def __str__(self) -> str:
        branch = self.branch or "(detached)"
        main_marker = " (main)" if self.is_main else ""
        return f"{branch} @ {self.path}{main_marker}"


@dataclass(frozen=True)
class CreateRequest:
    """Fully resolved input for one worktree creation."""

    name: str
    source_branch: str
    new_branch: str
    base_path: str
    is_remote_source: bool = False


@dataclass
class CreateResult:
    """Outcome of a successful create: the worktree path plus non-fatal warnings."""

    path: str
    branch: str
    copied_files: List[str] = field(default_factory=list)
    post_create_results: List[PostCreateResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class DeleteResult:
    """Outcome of a successful delete."""

    worktree: Worktree
    branch_deleted: bool = False
    branch_result: Optional[CommandResult] = None
    warnings: List[str] = field(default_factory=list)
