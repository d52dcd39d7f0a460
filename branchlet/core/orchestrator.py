"""Core functionality for branchlet: creating and deleting worktrees."""

import os
from enum import Enum
from typing import List, Optional, Union

from branchlet.config import WorktreeConfig
from branchlet.exceptions import (
    BranchletError,
    BranchNotFoundError,
    GitCommandError,
    ValidationError,
    WorktreeNotFoundError,
)
from branchlet.logging_config import get_logger
from branchlet.models.branch import Branch
from branchlet.models.worktree import CreateRequest, CreateResult, DeleteResult, Worktree
from branchlet.services.branch_validation_service import BranchValidationService
from branchlet.services.file_copy_service import FileCopyService
from branchlet.services.git_service import GitService
from branchlet.services.path_template import command_variables, resolve_worktree_path
from branchlet.services.post_create_service import PostCreateService

logger = get_logger(__name__)


class CreateStage(Enum):
    """Stages a worktree creation goes through."""
    VALIDATING = "validating"
    BRANCH_RESOLVING = "branch-resolving"
    PATH_RESOLVING = "path-resolving"
    GIT_CREATING = "git-creating"
    FILE_COPYING = "file-copying"
    POST_CREATE_RUNNING = "post-create-running"
    DONE = "done"
    REJECTED = "rejected"


def _normalize_path(path: str) -> str:
    return os.path.normcase(os.path.realpath(path))


class WorktreeOrchestrator:
    """Coordinates git, file copying and post-create commands for worktrees.

    Everything that can reject a request runs before the first mutating git
    call. Once git has created the worktree, problems copying files or running
    post-create commands only produce warnings.
    """

    def __init__(
        self,
        repo_path: Optional[str] = None,
        config: Optional[WorktreeConfig] = None,
        git_service: Optional[GitService] = None,
        file_copy_service: Optional[FileCopyService] = None,
        post_create_service: Optional[PostCreateService] = None,
    ):
        """Initialize the orchestrator.

        Args:
            repo_path: Directory inside the repository (current directory if None)
            config: Worktree settings, defaults if None
            git_service: Git service, built from repo_path if None
            file_copy_service: File copy engine
            post_create_service: Post-create command executor
        """
        self.config = config or WorktreeConfig()
        self.git_service = git_service or GitService(repo_path)
        self.file_copy_service = file_copy_service or FileCopyService()
        self.post_create_service = post_create_service or PostCreateService()
        self.stage: Optional[CreateStage] = None

    def _enter(self, stage: CreateStage) -> None:
        logger.debug(f"create: {self.stage.value if self.stage else 'start'} -> {stage.value}")
        self.stage = stage

    def list_worktrees(self) -> List[Worktree]:
        """List registered worktrees, main working tree first."""
        return self.git_service.list_worktrees()

    def list_branches(self, include_remote: Optional[bool] = None) -> List[Branch]:
        """List branches; remote ones follow the showRemoteBranches setting by default."""
        if include_remote is None:
            include_remote = self.config.show_remote_branches
        return self.git_service.list_branches(include_remote)

    def build_create_request(
        self,
        name: str,
        source_branch: str,
        branch: Optional[str] = None,
    ) -> CreateRequest:
        """Validate user input and resolve it into a CreateRequest.

        Args:
            name: Directory name of the new worktree
            source_branch: Existing local or remote branch to start from
            branch: Branch to create or check out; derived from source_branch if omitted

        Raises:
            ValidationError: For missing or malformed names
            NotFoundError: If source_branch does not exist or this is not a repository
        """
        self.stage = None
        try:
            self._enter(CreateStage.VALIDATING)
            if not name:
                raise ValidationError("Missing required argument: --name (-n)")
            if not source_branch:
                raise ValidationError("Missing required argument: --source (-s)")

            dir_error = BranchValidationService.validate_directory_name(name)
            if dir_error:
                raise ValidationError(f"Invalid directory name: {dir_error}")
            if branch:
                branch_error = BranchValidationService.validate_branch_name(branch)
                if branch_error:
                    raise ValidationError(f"Invalid branch name: {branch_error}")

            self._enter(CreateStage.BRANCH_RESOLVING)
            repo_info = self.git_service.get_repository_info()
            branches = self.git_service.list_branches(self.config.show_remote_branches)
            source = next((b for b in branches if b.name == source_branch), None)
            if source is None:
                raise BranchNotFoundError(source_branch)

            new_branch = BranchValidationService.resolve_new_branch(
                source_branch, branch, source.is_remote
            )
            branch_error = BranchValidationService.validate_branch_name(new_branch)
            if branch_error:
                raise ValidationError(f"Invalid branch name '{new_branch}': {branch_error}")

            self._enter(CreateStage.PATH_RESOLVING)
            worktree_path = resolve_worktree_path(
                self.config.worktree_path_template,
                repo_info.path,
                name,
                new_branch,
                source_branch,
            )
        except BranchletError:
            self._enter(CreateStage.REJECTED)
            raise

        return CreateRequest(
            name=name,
            source_branch=source_branch,
            new_branch=new_branch,
            base_path=os.path.dirname(worktree_path),
            is_remote_source=source.is_remote,
        )

    def create_worktree(self, request: CreateRequest) -> CreateResult:
        """Create a worktree for a resolved request.

        Git failures are raised as GitCommandError; nothing exists on disk
        yet at that point. File copy and post-create failures are returned
        as warnings on an otherwise successful result.
        """
        if not request.new_branch:
            self._enter(CreateStage.REJECTED)
            raise ValidationError("New branch name must be resolved before creating a worktree")

        worktree_path = os.path.join(request.base_path, request.name)
        repo_root = self.git_service.get_repository_info().path

        self._enter(CreateStage.GIT_CREATING)
        git_result = self.git_service.create_worktree(
            worktree_path,
            request.source_branch,
            request.new_branch,
            request.is_remote_source,
        )
        if not git_result.success:
            self._enter(CreateStage.REJECTED)
            raise GitCommandError(
                "worktree add",
                exit_code=git_result.exit_code,
                stderr=git_result.stderr,
            )

        result = CreateResult(path=worktree_path, branch=request.new_branch)

        self._enter(CreateStage.FILE_COPYING)
        try:
            copy_result = self.file_copy_service.copy_files(
                repo_root,
                worktree_path,
                self.config.worktree_copy_patterns,
                self.config.worktree_copy_ignores,
            )
        except OSError as e:
            logger.warning(f"Copying files into {worktree_path} failed: {e}")
            result.warnings.append(f"failed to copy files: {e}")
        else:
            result.copied_files = copy_result.copied
            result.warnings.extend(copy_result.warnings)

        self._enter(CreateStage.POST_CREATE_RUNNING)
        variables = command_variables(
            repo_root, worktree_path, request.new_branch, request.source_branch
        )
        result.post_create_results = self.post_create_service.run(
            self.config.post_create_cmd, worktree_path, variables
        )
        result.warnings.extend(r.warning() for r in result.post_create_results if not r.success)

        self._enter(CreateStage.DONE)
        logger.info(f"Worktree ready at {worktree_path} on branch {request.new_branch}")
        return result

    def create(self, name: str, source_branch: str, branch: Optional[str] = None) -> CreateResult:
        """Validate, resolve and create in one call."""
        return self.create_worktree(self.build_create_request(name, source_branch, branch))

    def find_worktree(self, target: str, worktrees: Optional[List[Worktree]] = None) -> Worktree:
        """Find a registered worktree by path, falling back to directory name.

        Raises:
            WorktreeNotFoundError: If nothing matches
        """
        if worktrees is None:
            worktrees = self.list_worktrees()

        normalized = _normalize_path(target)
        for wt in worktrees:
            if _normalize_path(wt.path) == normalized:
                return wt

        if os.sep not in target and "/" not in target:
            matches = [wt for wt in worktrees if wt.name == target and not wt.is_main]
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise ValidationError(
                    f"Several worktrees are named '{target}'; pass the full path instead"
                )

        raise WorktreeNotFoundError(target)

    def delete_worktree(self, path: Union[str, Worktree], force: bool = False) -> DeleteResult:
        """Remove a worktree and, if configured, its branch.

        Branch deletion failures are returned as warnings because the
        worktree itself is already gone by then.

        Raises:
            WorktreeNotFoundError: If path is not a registered worktree
            ValidationError: When asked to delete the main working tree
            GitCommandError: If git refuses to remove the worktree
        """
        worktree = path if isinstance(path, Worktree) else self.find_worktree(path)
        if worktree.is_main:
            raise ValidationError(f"Cannot delete the main working tree: {worktree.path}")

        if os.path.isdir(worktree.path):
            git_result = self.git_service.remove_worktree(worktree.path, force)
            operation = "worktree remove"
        else:
            logger.info(f"Worktree directory {worktree.path} is missing, pruning instead")
            git_result = self.git_service.prune_worktrees()
            operation = "worktree prune"
        if not git_result.success:
            raise GitCommandError(operation, exit_code=git_result.exit_code, stderr=git_result.stderr)

        result = DeleteResult(worktree=worktree)

        if self.config.delete_branch_with_worktree and worktree.branch:
            branch_result = self.git_service.delete_branch(worktree.branch, force)
            result.branch_result = branch_result
            if branch_result.success:
                result.branch_deleted = True
            else:
                stderr = branch_result.stderr.strip() or f"exit {branch_result.exit_code}"
                logger.warning(f"Could not delete branch {worktree.branch}: {stderr}")
                result.warnings.append(f"failed to delete branch '{worktree.branch}': {stderr}")

        return result
