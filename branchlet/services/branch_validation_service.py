"""Name validation service for branchlet."""

import re
from typing import Optional

# Characters git forbids anywhere in a ref name
_INVALID_REF_CHARS = re.compile(r"[\s~^:?*\[\\\x00-\x1f\x7f]")
_INVALID_DIR_CHARS = set('<>:"|?*\x00')


class BranchValidationService:
    """Pure checks run before anything touches the repository."""

    @staticmethod
    def validate_directory_name(name: str) -> Optional[str]:
        """
        Check a worktree directory name.

        Args:
            name: Proposed directory name

        Returns:
            An error message, or None if the name is usable
        """
        if not name or not name.strip():
            return "Directory name cannot be empty"
        if "/" in name or "\\" in name:
            return "Directory name cannot contain path separators"
        if name.startswith("."):
            return "Directory name cannot start with '.'"
        if name != name.strip():
            return "Directory name cannot start or end with whitespace"
        bad = sorted({ch for ch in name if ch in _INVALID_DIR_CHARS})
        if bad:
            return f"Directory name contains invalid characters: {' '.join(repr(ch) for ch in bad)}"
        return None

    @staticmethod
    def validate_branch_name(name: str) -> Optional[str]:
        """
        Check a branch name against git's ref naming rules.

        Args:
            name: Proposed branch name

        Returns:
            An error message, or None if git would accept the name
        """
        if not name or not name.strip():
            return "Branch name cannot be empty"
        if _INVALID_REF_CHARS.search(name):
            if re.search(r"\s", name):
                return "Branch name cannot contain spaces"
            return "Branch name contains characters not allowed by git"
        if name.startswith("-"):
            return "Branch name cannot start with '-'"
        if name == "HEAD" or name == "@":
            return f"'{name}' is not a valid branch name"
        if name.startswith("/") or name.endswith("/") or "//" in name:
            return "Branch name cannot start or end with '/' or contain '//'"
        if ".." in name:
            return "Branch name cannot contain '..'"
        if "@{" in name:
            return "Branch name cannot contain '@{'"
        if name.endswith("."):
            return "Branch name cannot end with '.'"
        for component in name.split("/"):
            if component.startswith("."):
                return "Branch name components cannot start with '.'"
            if component.endswith(".lock"):
                return "Branch name components cannot end with '.lock'"
        return None

    @staticmethod
    def resolve_new_branch(source_branch: str, explicit_branch: Optional[str], is_remote_source: bool) -> str:
        """
        Work out the branch a new worktree should check out.

        An explicit name always wins. Without one, a remote source such as
        "origin/feat/x" yields "feat/x" (everything up to the first "/"
        stripped) so git creates a local tracking branch; any other source
        is used unchanged.
        """
        if explicit_branch:
            return explicit_branch
        if is_remote_source and "/" in source_branch:
            return source_branch.split("/", 1)[1]
        return source_branch
