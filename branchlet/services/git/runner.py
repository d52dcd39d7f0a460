"""Git command runner for branchlet."""

import os
from typing import Optional, Sequence, Union

import git

from branchlet.exceptions import GitNotFoundError
from branchlet.logging_config import get_logger
from branchlet.models.command import CommandResult

logger = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class GitCommandRunner:
    """Runs the external git executable and captures its output.

    A non-zero exit status is returned, never raised; callers inspect
    ``CommandResult.success``. No timeout is applied.
    """

    def __init__(self, cwd: Optional[PathLike] = None):
        """Initialize the runner.

        Args:
            cwd: Default working directory for commands (current directory if None)
        """
        self.cwd = os.fspath(cwd) if cwd is not None else None

    def run(self, args: Sequence[str], cwd: Optional[PathLike] = None) -> CommandResult:
        """Run ``git <args>`` and wait for it to finish.

        Args:
            args: Arguments passed to git
            cwd: Working directory, overriding the runner default

        Returns:
            CommandResult with stdout, stderr and exit code

        Raises:
            GitNotFoundError: If git cannot be spawned at all
        """
        working_dir = os.fspath(cwd) if cwd is not None else self.cwd
        command = ["git", *args]
        try:
            status, stdout, stderr = git.Git(working_dir).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except (git.exc.GitCommandNotFound, OSError) as e:
            logger.debug(f"Could not spawn {' '.join(command)}: {e}")
            raise GitNotFoundError(str(e)) from e

        logger.debug(f"{' '.join(command)} -> exit {status}")
        return CommandResult(stdout=stdout or "", stderr=stderr or "", exit_code=status)

