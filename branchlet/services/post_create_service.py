"""Runs the configured post-create commands inside a new worktree."""

import os
import subprocess
from typing import List, Mapping, Optional, Sequence, Union

from branchlet.logging_config import get_logger
from branchlet.models.command import CommandResult, PostCreateResult
from branchlet.services.path_template import expand_variables

logger = get_logger(__name__)

# Exit code reported when the shell itself could not be started
SPAWN_FAILED = -1


class PostCreateService:
    """Executes shell commands one after another in a directory.

    A failing command never stops the sequence; the caller decides how to
    report it.
    """

    def run_command(self, command: str, cwd: Union[str, "os.PathLike[str]"]) -> CommandResult:
        """Run one shell command and wait for it."""
        try:
            completed = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
                errors="replace",
                cwd=cwd,
            )
        except OSError as e:
            logger.debug(f"Could not start {command!r}: {e}")
            return CommandResult(stdout="", stderr=str(e), exit_code=SPAWN_FAILED)

        return CommandResult(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_code=completed.returncode,
        )

    def run(
        self,
        commands: Sequence[str],
        cwd: Union[str, "os.PathLike[str]"],
        variables: Optional[Mapping[str, str]] = None,
    ) -> List[PostCreateResult]:
        """Run commands sequentially in cwd.

        Args:
            commands: Shell commands, in order
            cwd: Directory to run them in (the new worktree)
            variables: $VARIABLES expanded in each command before it runs

        Returns:
            One PostCreateResult per non-blank command, in order
        """
        results: List[PostCreateResult] = []
        for raw_command in commands:
            if not raw_command.strip():
                continue
            command = expand_variables(raw_command, variables or {})

            logger.info(f"Running post-create command: {command}")
            result = self.run_command(command, cwd)
            if result.success:
                if result.stdout.strip():
                    logger.debug(result.stdout.rstrip())
            else:
                logger.warning(f"Post-create command failed (exit {result.exit_code}): {command}")

            results.append(PostCreateResult(command=command, result=result))
        return results
