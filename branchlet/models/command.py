"""Subprocess result models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Captured output of one subprocess invocation."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class PostCreateResult:
    """A post-create command together with its result."""

    command: str
    result: CommandResult

    @property
    def success(self) -> bool:
        return self.result.success

    def warning(self) -> str:
        """Warning text shown when the command failed."""
        message = f"post-create command failed: {self.command} (exit {self.result.exit_code})"
        stderr = self.result.stderr.strip()
        if stderr:
            message += f"\n{stderr}"
        return message
