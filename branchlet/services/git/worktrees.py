"""Worktree operations service for branchlet."""

import os
from typing import Any, Dict, List, Optional

from branchlet.logging_config import get_logger
from branchlet.models.command import CommandResult
from branchlet.models.worktree import Worktree
from branchlet.services.git.runner import GitCommandRunner, PathLike

logger = get_logger(__name__)


def _build_worktree(record: Dict[str, Any], is_main: bool) -> Optional[Worktree]:
    """Turn one parsed porcelain record into a Worktree, None if unusable."""
    path = record.get("path", "")
    if not path:
        return None
    return Worktree(
        path=path,
        branch=record.get("branch", ""),
        commit_hash=record.get("HEAD", ""),
        is_main=is_main,
        is_locked=record.get("locked", False),
        is_prunable=record.get("prunable", False),
    )


def parse_worktree_porcelain(output: str) -> List[Worktree]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name     (or "detached")
        (blank line between worktrees)

    Records without a ``worktree`` line are skipped. The first usable
    record git reports is the main working tree.
    """
    records: List[Dict[str, Any]] = []
    current: Dict[str, Any] = {}

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            # Empty line marks end of worktree entry
            if current:
                records.append(current)
                current = {}
            continue

        key, _, value = line.partition(" ")
        value = value.strip()
        if key == "worktree":
            if current:
                # Missing separator; start a new record anyway
                records.append(current)
                current = {}
            current["path"] = value
        elif key == "HEAD":
            current["HEAD"] = value
        elif key == "branch":
            if value.startswith("refs/heads/"):
                current["branch"] = value[len("refs/heads/"):]
            else:
                current["branch"] = value
        elif key == "detached":
            current["branch"] = ""
        elif key == "locked":
            current["locked"] = True
        elif key == "prunable":
            current["prunable"] = True
        else:
            logger.debug(f"Ignoring worktree porcelain line: {line!r}")

    # Handle last entry if no trailing blank line
    if current:
        records.append(current)

    worktrees: List[Worktree] = []
    for record in records:
        worktree = _build_worktree(record, is_main=not worktrees)
        if worktree is None:
            logger.debug(f"Skipping worktree record without a path: {record}")
            continue
        worktrees.append(worktree)
    return worktrees


class WorktreeService:
    """Service for managing git worktrees."""

    def __init__(self, runner: GitCommandRunner):
        """Initialize the worktree service.

        Args:
            runner: Runner used for every git invocation
        """
        self.runner = runner

    def list_worktrees(self) -> List[Worktree]:
        """Get all registered worktrees, main working tree first.

        A failing listing command yields an empty list.
        """
        result = self.runner.run(["worktree", "list", "--porcelain"])
        if not result.success:
            logger.warning(f"Could not list worktrees: {result.stderr.strip()}")
            return []

        worktrees = parse_worktree_porcelain(result.stdout)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def add_worktree(
        self,
        path: PathLike,
        commitish: str,
        new_branch: Optional[str] = None,
        track: bool = False,
    ) -> CommandResult:
        """Run ``git worktree add``.

        Args:
            path: Directory for the new worktree
            commitish: Branch or commit to check out (start point with new_branch)
            new_branch: Create this branch at commitish (-b)
            track: Mark commitish as upstream of new_branch
        """
        args = ["worktree", "add"]
        if track:
            args.append("--track")
        if new_branch:
            args.extend(["-b", new_branch])
        args.extend([os.fspath(path), commitish])

        result = self.runner.run(args)
        if result.success:
            logger.info(f"Created worktree at {os.fspath(path)}")
        return result

    def remove_worktree(self, path: PathLike, force: bool = False) -> CommandResult:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked
        """
        args = ["worktree", "remove", os.fspath(path)]
        if force:
            args.append("--force")

        result = self.runner.run(args)
        if result.success:
            logger.info(f"Removed worktree at {os.fspath(path)}")
        return result

    def prune_worktrees(self) -> CommandResult:
        """Prune administrative data of worktrees whose directory is gone."""
        result = self.runner.run(["worktree", "prune"])
        if result.success:
            logger.info("Pruned orphaned worktree metadata")
        return result
