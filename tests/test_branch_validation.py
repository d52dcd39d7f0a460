"""Tests for directory/branch name validation and branch resolution"""
import pytest

from branchlet.services.branch_validation_service import BranchValidationService


class TestValidateDirectoryName:
    """Test worktree directory name checks."""

    @pytest.mark.parametrize("name", ["my-feature", "feat_1", "release-2.0", "x"])
    def test_valid_names(self, name):
        """Test ordinary names pass."""
        assert BranchValidationService.validate_directory_name(name) is None

    @pytest.mark.parametrize(
        "name,fragment",
        [
            ("", "empty"),
            ("   ", "empty"),
            ("a/b", "separators"),
            ("a\\b", "separators"),
            (".hidden", "'.'"),
            (" padded", "whitespace"),
            ("what?", "invalid characters"),
            ("a<b>", "invalid characters"),
        ],
    )
    def test_invalid_names(self, name, fragment):
        """Test each rejected name gets a descriptive error."""
        error = BranchValidationService.validate_directory_name(name)
        assert error is not None
        assert fragment in error


class TestValidateBranchName:
    """Test git ref name checks."""

    @pytest.mark.parametrize("name", ["main", "feat/x-1", "feature/deep/nested", "v1.2", "user@host"])
    def test_valid_names(self, name):
        """Test names git accepts pass."""
        assert BranchValidationService.validate_branch_name(name) is None

    def test_spaces_rejected(self):
        """Test whitespace gets its own message."""
        assert BranchValidationService.validate_branch_name("branch with spaces") == (
            "Branch name cannot contain spaces"
        )

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "a~b",
            "a^b",
            "a:b",
            "a?b",
            "a*b",
            "a[b",
            "a\\b",
            "-leading",
            "HEAD",
            "@",
            "/lead",
            "trail/",
            "a//b",
            "a..b",
            "a@{b",
            "dot.",
            "feat/.hidden",
            "feat/x.lock",
        ],
    )
    def test_invalid_names(self, name):
        """Test names git would refuse are rejected."""
        assert BranchValidationService.validate_branch_name(name) is not None


class TestResolveNewBranch:
    """Test which branch a new worktree checks out."""

    def test_explicit_branch_wins(self):
        """Test an explicit branch overrides everything."""
        assert BranchValidationService.resolve_new_branch("origin/feat/x", "mine", True) == "mine"

    def test_remote_source_strips_remote(self):
        """Test only the remote name is stripped."""
        assert BranchValidationService.resolve_new_branch("origin/feat/x", None, True) == "feat/x"

    def test_local_source_used_as_is(self):
        """Test a local source is reused unchanged."""
        assert BranchValidationService.resolve_new_branch("main", None, False) == "main"
        assert BranchValidationService.resolve_new_branch("feat/x", "", False) == "feat/x"

    def test_remote_head_alias(self):
        """Test origin/HEAD resolves to HEAD, which is then invalid."""
        branch = BranchValidationService.resolve_new_branch("origin/HEAD", None, True)
        assert branch == "HEAD"
        assert BranchValidationService.validate_branch_name(branch) is not None
