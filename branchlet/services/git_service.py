"""Git service: the narrow set of git operations branchlet needs."""
import os
from dataclasses import dataclass
from typing import List, Optional

from branchlet.exceptions import NotAGitRepositoryError
from branchlet.logging_config import get_logger
from branchlet.models.branch import Branch
from branchlet.models.command import CommandResult
from branchlet.models.worktree import Worktree
from branchlet.services.git import BranchQueries, GitCommandRunner, WorktreeService
from branchlet.services.git.runner import PathLike

logger = get_logger(__name__)


@dataclass(frozen=True)
class RepositoryInfo:
    """Top-level working directory of the current repository."""
    path: str


class GitService:
    """Builds git invocations and parses their output into models.

    Everything goes through one GitCommandRunner, so tests can swap in a
    fake runner (or mock this class) without a git installation.
    """

    def __init__(self, repo_path: Optional[PathLike] = None, runner: Optional[GitCommandRunner] = None):
        """Initialize the service.

        Args:
            repo_path: Directory git commands run in (current directory if None)
            runner: Command runner, defaults to one bound to repo_path
        """
        self.repo_path = os.fspath(repo_path) if repo_path is not None else os.getcwd()
        self.runner = runner or GitCommandRunner(self.repo_path)
        self.branch_queries = BranchQueries(self.runner)
        self.worktree_service = WorktreeService(self.runner)

    def get_repository_info(self) -> RepositoryInfo:
        """Resolve the top-level directory of the repository.

        Raises:
            NotAGitRepositoryError: When invoked outside a repository
        """
        result = self.runner.run(["rev-parse", "--show-toplevel"])
        toplevel = result.stdout.strip()
        if not result.success or not toplevel:
            logger.debug(f"rev-parse failed in {self.repo_path}: {result.stderr.strip()}")
            raise NotAGitRepositoryError(self.repo_path)
        return RepositoryInfo(path=os.path.abspath(toplevel))

    def list_branches(self, include_remote: bool = True) -> List[Branch]:
        """List branches, local first, then remote when requested."""
        return self.branch_queries.list_branches(include_remote)

    def branch_exists(self, name: str) -> bool:
        """Check whether a local branch exists."""
        return self.branch_queries.branch_exists(name)

    def list_worktrees(self) -> List[Worktree]:
        """List registered worktrees, main working tree first."""
        return self.worktree_service.list_worktrees()

    def create_worktree(
        self,
        path: PathLike,
        source_branch: str,
        new_branch: str,
        is_remote_source: bool = False,
    ) -> CommandResult:
        """Add a worktree at path.

        Remote source with a different local name: create new_branch tracking
        the remote ref. Local source: check out new_branch when it already
        exists, otherwise create it from source_branch. Git's own checks
        (branch checked out elsewhere, existing path, bad ref) come back as a
        failed CommandResult.
        """
        if is_remote_source:
            if new_branch and new_branch != source_branch:
                return self.worktree_service.add_worktree(
                    path, source_branch, new_branch=new_branch, track=True
                )
            return self.worktree_service.add_worktree(path, source_branch)

        if new_branch == source_branch or self.branch_exists(new_branch):
            logger.debug(f"Attaching worktree to existing branch {new_branch}")
            return self.worktree_service.add_worktree(path, new_branch)

        return self.worktree_service.add_worktree(path, source_branch, new_branch=new_branch)

    def remove_worktree(self, path: PathLike, force: bool = False) -> CommandResult:
        """Remove the worktree at path."""
        return self.worktree_service.remove_worktree(path, force)

    def prune_worktrees(self) -> CommandResult:
        """Prune metadata of worktrees whose directories are gone."""
        return self.worktree_service.prune_worktrees()

    def delete_branch(self, name: str, force: bool = False) -> CommandResult:
        """Delete a local branch."""
        return self.branch_queries.delete_branch(name, force)
