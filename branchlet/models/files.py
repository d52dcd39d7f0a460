"""File copy models."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class CopyFailure:
    """A file that could not be copied into a new worktree."""

    path: str  # Relative to the repository root
    reason: str

    def warning(self) -> str:
        return f"failed to copy {self.path}: {self.reason}"


@dataclass
class CopyResult:
    """Files copied into a worktree plus the per-file failures."""

    copied: List[str] = field(default_factory=list)
    failures: List[CopyFailure] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [failure.warning() for failure in self.failures]
