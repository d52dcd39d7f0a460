"""Copies untracked helper files (.env, editor settings) into new worktrees."""

import os
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple, Union

import pathspec

from branchlet.logging_config import get_logger
from branchlet.models.files import CopyFailure, CopyResult

logger = get_logger(__name__)


def _normalize_pattern(pattern: str) -> str:
    """Make a user pattern usable with Path.glob."""
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    pattern = pattern.lstrip("/")
    # A trailing "**" means "everything below", files included
    if pattern == "**" or pattern.endswith("/**"):
        pattern += "/*"
    return pattern


class FileCopyService:
    """Service for replicating files matching glob patterns into a worktree."""

    def find_files(
        self,
        repo_root: Union[str, Path],
        include_patterns: Sequence[str],
        exclude_patterns: Sequence[str] = (),
    ) -> List[str]:
        """Find files under repo_root matching include_patterns.

        Patterns are globs relative to repo_root and support "**". Exclude
        patterns use .gitignore syntax. Literal patterns that match nothing
        are not an error, and patterns pathlib rejects are skipped.

        Returns:
            Relative POSIX paths in discovery order, without duplicates
        """
        files, _ = self._collect(Path(repo_root), include_patterns, exclude_patterns)
        return files

    def _collect(
        self,
        root: Path,
        include_patterns: Sequence[str],
        exclude_patterns: Sequence[str],
    ) -> Tuple[List[str], List[CopyFailure]]:
        """Matching files plus one CopyFailure per unusable pattern."""
        ignore_spec = pathspec.GitIgnoreSpec.from_lines(exclude_patterns)
        found: Dict[str, None] = {}
        failures: List[CopyFailure] = []

        for raw_pattern in include_patterns:
            pattern = _normalize_pattern(raw_pattern)
            if not pattern:
                continue
            if ".." in pattern.split("/"):
                logger.warning(f"Ignoring copy pattern outside the repository: {raw_pattern}")
                continue

            try:
                paths = list(self._expand(root, pattern))
            except ValueError as e:
                # e.g. "**.json": "**" must be a whole path component before Python 3.13
                logger.warning(f"Invalid copy pattern {raw_pattern}: {e}")
                failures.append(CopyFailure(path=raw_pattern, reason=f"invalid pattern ({e})"))
                continue

            for path in paths:
                rel = path.relative_to(root).as_posix()
                if rel in found:
                    continue
                if ignore_spec.match_file(rel):
                    logger.debug(f"Ignoring {rel}")
                    continue
                found[rel] = None

        return list(found), failures
    def _expand(self, root: Path, pattern: str) -> Iterable[Path]:
        """Yield files for one normalized pattern."""
        if not any(ch in pattern for ch in "*?["):
            candidate = root / pattern
            if candidate.is_file():
                yield candidate
            elif candidate.is_dir():
                # A bare directory copies everything below it
                yield from (p for p in sorted(candidate.rglob("*")) if p.is_file())
            else:
                logger.debug(f"Optional copy source {pattern} not found")
            return

        yield from (p for p in sorted(root.glob(pattern)) if p.is_file())

    def copy_files(
        self,
        repo_root: Union[str, Path],
        dest_dir: Union[str, Path],
        include_patterns: Sequence[str],
        exclude_patterns: Sequence[str] = (),
    ) -> CopyResult:
        """Copy matching files from repo_root to the same place under dest_dir.

        Existing destination files are overwritten. A file that cannot be
        copied is recorded in the result and the remaining files are still
        attempted.

        Args:
            repo_root: Source repository root
            dest_dir: Root of the new worktree
            include_patterns: Globs selecting files to copy
            exclude_patterns: .gitignore-style patterns to skip

        Returns:
            CopyResult listing copied relative paths and per-file failures
        """
        root = Path(repo_root)
        dest = Path(dest_dir)
        result = CopyResult()

        if not include_patterns:
            return result

        files, result.failures = self._collect(root, include_patterns, exclude_patterns)
        dest_resolved = dest.resolve()
        for rel in files:
            source = root / rel
            # The new worktree may live inside the repository
            if source.resolve() == dest_resolved or dest_resolved in source.resolve().parents:
                continue

            target = dest / rel
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, target)
            except OSError as e:
                reason = e.strerror or str(e)
                logger.warning(f"Failed to copy {rel}: {reason}")
                result.failures.append(CopyFailure(path=rel, reason=reason))
                continue

            logger.debug(f"Copied {rel} to {os.fspath(dest)}")
            result.copied.append(rel)

        if result.copied:
            logger.info(f"Copied {len(result.copied)} file(s) into {os.fspath(dest)}")
        return result
