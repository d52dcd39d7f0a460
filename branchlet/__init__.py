"""
branchlet - Git worktree management from the terminal
"""

from .__version__ import __version__
from .config import WorktreeConfig, load_config
from .core import WorktreeOrchestrator
from .cli.main import main

__all__ = ["WorktreeConfig", "WorktreeOrchestrator", "load_config", "main", "__version__"]
