"""Branch query service for branchlet."""

from typing import List, Optional

from branchlet.logging_config import get_logger
from branchlet.models.branch import Branch
from branchlet.models.command import CommandResult
from branchlet.services.git.runner import GitCommandRunner

logger = get_logger(__name__)

LOCAL_PREFIX = "refs/heads/"
REMOTE_PREFIX = "refs/remotes/"

# "*" marks the checked-out branch; full refnames keep "<remote>/HEAD" intact
BRANCH_FORMAT = "--format=%(HEAD)%(refname)"


def parse_branch_line(line: str) -> Optional[Branch]:
    """Parse one line of ``git branch --format=%(HEAD)%(refname)`` output.

    Returns:
        The Branch, or None for blank or unrecognised lines
    """
    line = line.strip()
    if not line:
        return None

    is_current = line.startswith("*")
    ref = line.lstrip("*").strip()

    if ref.startswith(LOCAL_PREFIX):
        name = ref[len(LOCAL_PREFIX):]
        return Branch(name=name, is_remote=False, is_current=is_current) if name else None
    if ref.startswith(REMOTE_PREFIX):
        name = ref[len(REMOTE_PREFIX):]
        # Remote names always look like "<remote>/<branch>"
        if "/" not in name.strip("/"):
            return None
        return Branch(name=name, is_remote=True, is_current=False)
    return None


def parse_branch_output(output: str, include_remote: bool = True) -> List[Branch]:
    """Parse branch listing output, local branches first.

    Unparseable lines are skipped so one odd entry does not hide the rest.
    """
    local: List[Branch] = []
    remote: List[Branch] = []
    for line in output.splitlines():
        branch = parse_branch_line(line)
        if branch is None:
            if line.strip():
                logger.debug(f"Skipping unrecognised branch line: {line!r}")
            continue
        if branch.is_remote:
            if include_remote:
                remote.append(branch)
        else:
            local.append(branch)
    return local + remote


class BranchQueries:
    """Service for querying and deleting branches."""

    def __init__(self, runner: GitCommandRunner):
        """Initialize the branch queries service.

        Args:
            runner: Runner used for every git invocation
        """
        self.runner = runner

    def list_branches(self, include_remote: bool = True) -> List[Branch]:
        """List branches, local first, then remote when requested.

        The "<remote>/HEAD" alias is kept; callers filter it if needed.
        A failing listing command yields an empty list.
        """
        args = ["branch", BRANCH_FORMAT]
        if include_remote:
            args.insert(1, "--all")

        result = self.runner.run(args)
        if not result.success:
            logger.warning(f"Could not list branches: {result.stderr.strip()}")
            return []

        branches = parse_branch_output(result.stdout, include_remote=include_remote)
        logger.debug(f"Found {len(branches)} branches")
        return branches

    def branch_exists(self, name: str) -> bool:
        """Check whether a local branch exists."""
        result = self.runner.run(["rev-parse", "--verify", "--quiet", f"{LOCAL_PREFIX}{name}"])
        return result.success

    def delete_branch(self, name: str, force: bool = False) -> CommandResult:
        """Delete a local branch.

        Args:
            name: Branch to delete
            force: Delete even if not merged (-D instead of -d)
        """
        result = self.runner.run(["branch", "-D" if force else "-d", name])
        if result.success:
            logger.info(f"Deleted branch {name}")
        else:
            logger.debug(f"Failed to delete branch {name}: {result.stderr.strip()}")
        return result
