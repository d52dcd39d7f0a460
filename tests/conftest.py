"""Pytest fixtures for branchlet tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from branchlet.config import WorktreeConfig
from branchlet.models.branch import Branch
from branchlet.models.command import CommandResult
from branchlet.models.worktree import Worktree
from branchlet.services.git_service import GitService, RepositoryInfo


def ok(stdout: str = "") -> CommandResult:
    """Successful CommandResult."""
    return CommandResult(stdout=stdout, stderr="", exit_code=0)


def failed(stderr: str, exit_code: int = 128) -> CommandResult:
    """Failed CommandResult."""
    return CommandResult(stdout="", stderr=stderr, exit_code=exit_code)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve so paths compare equal to what git reports
        yield Path(tmpdir).resolve()


@pytest.fixture
def isolated_global_config(temp_dir, monkeypatch):
    """Point the global settings file somewhere empty."""
    settings = temp_dir / "home" / ".branchlet" / "settings.json"
    monkeypatch.setattr("branchlet.config.GLOBAL_CONFIG_FILE", settings)
    return settings


@pytest.fixture
def no_copy_config():
    """Config that neither copies files nor runs commands."""
    return WorktreeConfig(worktree_copy_patterns=[], worktree_copy_ignores=[])


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a Git repository with a couple of extra branches."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.git.checkout('-b', 'feature/test-feature')
    (repo_path / "feature.txt").write_text("Feature content\n")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature")

    repo.git.checkout('main')
    repo.git.branch('bugfix')

    yield repo


@pytest.fixture
def cloned_repo(git_repo_with_branches, temp_dir):
    """Clone of git_repo_with_branches, so origin/* remote branches exist."""
    clone_path = temp_dir / "clone"
    clone = git.Repo.clone_from(git_repo_with_branches.working_dir, clone_path)
    clone.config_writer().set_value("user", "name", "Test User").release()
    clone.config_writer().set_value("user", "email", "test@example.com").release()

    yield clone

    clone.close()


@pytest.fixture
def mock_git_service():
    """Create a mock GitService that never touches a repository."""
    service = Mock(spec=GitService)
    service.get_repository_info = Mock(return_value=RepositoryInfo(path="/work/app"))
    service.list_branches = Mock(return_value=[
        Branch(name="main", is_remote=False, is_current=True),
        Branch(name="develop"),
        Branch(name="origin/HEAD", is_remote=True),
        Branch(name="origin/main", is_remote=True),
        Branch(name="origin/feat/x", is_remote=True),
    ])
    service.list_worktrees = Mock(return_value=[
        Worktree(path="/work/app", branch="main", commit_hash="a" * 40, is_main=True),
        Worktree(path="/work/app.worktree/docs", branch="docs", commit_hash="b" * 40),
    ])
    service.create_worktree = Mock(return_value=ok())
    service.remove_worktree = Mock(return_value=ok())
    service.prune_worktrees = Mock(return_value=ok())
    service.delete_branch = Mock(return_value=ok())
    return service


@pytest.fixture
def mock_file_copy_service():
    """File copy service that copies nothing."""
    from branchlet.models.files import CopyResult
    from branchlet.services.file_copy_service import FileCopyService

    service = Mock(spec=FileCopyService)
    service.copy_files = Mock(return_value=CopyResult())
    return service


@pytest.fixture
def mock_post_create_service():
    """Post-create service that runs nothing."""
    from branchlet.services.post_create_service import PostCreateService

    service = Mock(spec=PostCreateService)
    service.run = Mock(return_value=[])
    return service
