"""Worktree path templates and $VARIABLE expansion."""

import os
import re
from typing import Mapping

BASE_PATH = "BASE_PATH"
WORKTREE_PATH = "WORKTREE_PATH"
BRANCH_NAME = "BRANCH_NAME"
SOURCE_BRANCH = "SOURCE_BRANCH"

_VARIABLE_RE = re.compile(r"\$(\{)?([A-Z][A-Z0-9_]*)(?(1)\})")


def expand_variables(text: str, variables: Mapping[str, str]) -> str:
    """Replace ``$NAME`` / ``${NAME}`` tokens with values from variables.

    Unknown tokens are left untouched so mistakes stay visible.
    """

    def replace(match: "re.Match[str]") -> str:
        name = match.group(2)
        if name in variables:
            return variables[name]
        return match.group(0)

    return _VARIABLE_RE.sub(replace, text)


def sanitize_path_component(value: str) -> str:
    """Make a branch name usable as a single directory name."""
    return value.replace("/", "-").replace("\\", "-")


def resolve_worktree_path(
    template: str,
    base_path: str,
    name: str,
    branch: str = "",
    source: str = "",
) -> str:
    """Expand a path template into the absolute path of a new worktree.

    ``$BASE_PATH`` is the repository directory name; ``$BRANCH_NAME`` and
    ``$SOURCE_BRANCH`` have "/" replaced by "-". Relative results are taken
    relative to the repository's parent directory and the worktree name is
    appended. No filesystem access happens here.

    Examples:
        "$BASE_PATH.worktree" with base_path "/src/app", name "feat"
        -> "/src/app.worktree/feat"
    """
    repo_root = os.path.normpath(os.path.abspath(base_path))
    parent_dir = os.path.dirname(repo_root)

    expanded = expand_variables(template, {
        BASE_PATH: os.path.basename(repo_root),
        BRANCH_NAME: sanitize_path_component(branch),
        SOURCE_BRANCH: sanitize_path_component(source),
    })
    expanded = os.path.expanduser(expanded)

    if not os.path.isabs(expanded):
        expanded = os.path.join(parent_dir, expanded)
    return os.path.normpath(os.path.join(expanded, name))


def command_variables(repo_root: str, worktree_path: str, branch: str, source: str) -> dict:
    """Variables available to post-create commands."""
    return {
        BASE_PATH: os.path.basename(os.path.normpath(repo_root)),
        WORKTREE_PATH: worktree_path,
        BRANCH_NAME: branch,
        SOURCE_BRANCH: source,
    }
