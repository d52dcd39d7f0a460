"""Configuration handling for branchlet"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from branchlet.exceptions import ConfigError
from branchlet.logging_config import get_logger

logger = get_logger(__name__)

LOCAL_CONFIG_FILE_NAME = ".branchlet.json"
GLOBAL_CONFIG_DIR = Path.home() / ".branchlet"
GLOBAL_CONFIG_FILE = GLOBAL_CONFIG_DIR / "settings.json"

DEFAULT_COPY_PATTERNS = [".env*", ".vscode/**"]
DEFAULT_COPY_IGNORES = [
    "**/node_modules/**",
    "**/dist/**",
    "**/.git/**",
    "**/Thumbs.db",
    "**/.DS_Store",
]
DEFAULT_PATH_TEMPLATE = "$BASE_PATH.worktree"

# Python field name -> key used in the JSON settings files
_JSON_KEYS = {
    "worktree_copy_patterns": "worktreeCopyPatterns",
    "worktree_copy_ignores": "worktreeCopyIgnores",
    "worktree_path_template": "worktreePathTemplate",
    "post_create_cmd": "postCreateCmd",
    "terminal_command": "terminalCommand",
    "delete_branch_with_worktree": "deleteBranchWithWorktree",
    "show_remote_branches": "showRemoteBranches",
}


@dataclass(frozen=True)
class WorktreeConfig:
    """Worktree settings with validation.

    Every field has a default, so an empty settings file is valid.
    """

    # Files replicated from the repository into new worktrees
    worktree_copy_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_COPY_PATTERNS))
    worktree_copy_ignores: List[str] = field(default_factory=lambda: list(DEFAULT_COPY_IGNORES))

    # Where new worktrees go
    worktree_path_template: str = DEFAULT_PATH_TEMPLATE

    # Shell commands run inside a new worktree, in order
    post_create_cmd: List[str] = field(default_factory=list)

    terminal_command: str = ""
    delete_branch_with_worktree: bool = False
    show_remote_branches: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_string_list("worktree_copy_patterns")
        self._validate_string_list("worktree_copy_ignores")
        self._validate_string_list("post_create_cmd")
        self._validate_type("worktree_path_template", str)
        self._validate_type("terminal_command", str)
        self._validate_type("delete_branch_with_worktree", bool)
        self._validate_type("show_remote_branches", bool)
        self._validate_path_template()

    def _validate_string_list(self, name: str):
        """Validate a field is a list of strings."""
        value = getattr(self, name)
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError(f"{_JSON_KEYS[name]} must be a list of strings, got {value!r}")

    def _validate_type(self, name: str, expected: type):
        """Validate a scalar field has the expected type."""
        value = getattr(self, name)
        if not isinstance(value, expected):
            raise ValueError(
                f"{_JSON_KEYS[name]} must be a {expected.__name__}, got {type(value).__name__}"
            )

    def _validate_path_template(self):
        """Validate the path template is not blank."""
        if not self.worktree_path_template.strip():
            raise ValueError("worktreePathTemplate cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary keyed like the JSON settings files."""
        return {_JSON_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "WorktreeConfig":
        """Create WorktreeConfig from a dictionary.

        Accepts the camelCase JSON keys as well as the Python field names;
        unknown keys such as "$schema" are ignored.
        """
        filtered = {}
        for name, json_key in _JSON_KEYS.items():
            if json_key in config_dict:
                filtered[name] = config_dict[json_key]
            elif name in config_dict:
                filtered[name] = config_dict[name]
        return cls(**filtered)


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Read one JSON settings file, returning {} when it does not exist."""
    if not path.is_file():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(str(path), f"invalid JSON ({e})") from e
    except OSError as e:
        raise ConfigError(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(str(path), "expected a JSON object")

    logger.debug(f"Loaded settings from {path}")
    return data


def load_config(
    repo_root: Optional[Union[str, Path]] = None,
    global_config_file: Optional[Path] = None,
) -> WorktreeConfig:
    """Load worktree settings for a repository.

    Defaults are overridden by the global settings file, which is in turn
    overridden by the project's .branchlet.json.

    Args:
        repo_root: Repository root holding the project settings file
        global_config_file: Override for ~/.branchlet/settings.json

    Returns:
        The merged WorktreeConfig

    Raises:
        ConfigError: If a settings file is unreadable or invalid
    """
    sources = [global_config_file or GLOBAL_CONFIG_FILE]
    if repo_root is not None:
        sources.append(Path(repo_root) / LOCAL_CONFIG_FILE_NAME)

    merged: Dict[str, Any] = {}
    for source in sources:
        data = _read_config_file(source)
        try:
            # Validate each file on its own so errors name the right file
            WorktreeConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(str(source), str(e)) from e
        merged.update(data)

    return WorktreeConfig.from_dict(merged)
