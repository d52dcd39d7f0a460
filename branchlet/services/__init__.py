"""Services used by the worktree orchestrator."""
