"""Worktree orchestration for branchlet."""

from .orchestrator import CreateStage, WorktreeOrchestrator

__all__ = ["CreateStage", "WorktreeOrchestrator"]
