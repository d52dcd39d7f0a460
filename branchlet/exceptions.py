"""Custom exceptions for branchlet"""

from typing import Optional, Sequence


class BranchletError(Exception):
    """Base exception for all branchlet errors."""
    pass


class ValidationError(BranchletError):
    """Exception raised for invalid user input, before anything is mutated."""
    pass


class NotFoundError(BranchletError):
    """Exception raised when a branch or worktree cannot be found."""
    pass


class NotAGitRepositoryError(NotFoundError):
    """Exception raised when the working directory is not inside a repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        error_msg = "Not a git repository"
        if path:
            error_msg += f": {path}"
        super().__init__(error_msg)


class BranchNotFoundError(NotFoundError):
    """Exception raised when a source branch does not exist."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Source branch '{branch}' does not exist")


class WorktreeNotFoundError(NotFoundError):
    """Exception raised when no registered worktree matches a path or name."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"No worktree found matching '{target}'")


class GitCommandError(BranchletError):
    """Exception raised when a mutating git command exits non-zero."""

    def __init__(
        self,
        operation: str,
        args: Optional[Sequence[str]] = None,
        exit_code: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        self.operation = operation
        self.args_list = list(args or [])
        self.exit_code = exit_code
        self.stderr = stderr or ""

        error_msg = f"Git operation '{operation}' failed"
        if exit_code is not None:
            error_msg += f" (exit {exit_code})"
        if self.stderr.strip():
            error_msg += f": {self.stderr.strip()}"

        super().__init__(error_msg)


class GitNotFoundError(BranchletError):
    """Exception raised when the git executable cannot be spawned."""

    def __init__(self, message: Optional[str] = None):
        error_msg = "Could not run the git executable"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class ConfigError(BranchletError):
    """Exception raised when a configuration file cannot be loaded."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Invalid configuration in {path}: {message}")
