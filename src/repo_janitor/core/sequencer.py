"""
Cleanup sequence for a single repository.

This module brings one working copy to a known-clean state by running a
fixed sequence of git operations:
- Hard reset of tracked files
- Checkout of the primary branch
- Removal of untracked files and directories
- Pull with pruning of stale remote-tracking references
- Forced deletion of every other local branch
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from repo_janitor.core.branches import BranchInspector
from repo_janitor.core.executor import CommandExecutor
from repo_janitor.exceptions import CleanupError
from repo_janitor.models.cleanup import (
    CleanupResult,
    CleanupStatus,
    CleanupStep,
    CommandOutcome,
)

logger = logging.getLogger(__name__)

# Checked in order of preference.
PRIMARY_BRANCHES = ("master", "main")


class CleanupSequencer:
    """
    Runs the cleanup steps for one repository.

    Steps run strictly in order and the first failure ends the run for that
    repository. Nothing is rolled back: a repository that fails mid-sequence
    is left in the state produced by its last successful step.
    """

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        inspector: Optional[BranchInspector] = None,
    ):
        self.executor = executor or CommandExecutor()
        self.inspector = inspector or BranchInspector(self.executor)

    def run(self, repository_path: Path) -> CleanupResult:
        """
        Clean a repository.

        Args:
            repository_path: Root of the working copy

        Returns:
            CleanupResult describing success or the failing step
        """
        path = Path(repository_path)
        started = time.monotonic()
        primary_branch = None

        try:
            self.reset_hard(path)
            primary_branch = self.checkout_primary(path)
            self.clean_untracked(path)
            self.pull(path)
            deleted = self.prune_local_branches(path)
        except CleanupError as e:
            logger.info(f"Cleanup of {path} failed at step '{e.step.value}': {e.message}")
            return CleanupResult(
                repository_path=path,
                status=CleanupStatus.ERROR,
                failed_step=e.step,
                error=e.message,
                output=e.output,
                primary_branch=primary_branch,
                duration_seconds=time.monotonic() - started,
            )

        logger.info(f"Cleaned {path} on '{primary_branch}', deleted {len(deleted)} branches")
        return CleanupResult(
            repository_path=path,
            status=CleanupStatus.SUCCESS,
            primary_branch=primary_branch,
            deleted_branches=deleted,
            duration_seconds=time.monotonic() - started,
        )

    def reset_hard(self, repository_path: Path) -> None:
        """Discard staged and unstaged changes to tracked files."""
        self._run_step(CleanupStep.RESET, repository_path, "reset", "--hard")

    def checkout_primary(self, repository_path: Path) -> str:
        """
        Check out the primary branch.

        Returns:
            Name of the branch that was checked out

        Raises:
            CleanupError: If no primary branch exists or checkout fails
        """
        branches, listing = self.inspector.inspect(repository_path, CleanupStep.CHECKOUT)
        primary = find_primary_branch(branches)

        if primary is None:
            raise CleanupError(
                CleanupStep.CHECKOUT,
                "no master/main branch found",
                listing,
            )

        self._run_step(CleanupStep.CHECKOUT, repository_path, "checkout", primary)
        return primary

    def clean_untracked(self, repository_path: Path) -> None:
        """Remove untracked files and directories."""
        self._run_step(CleanupStep.CLEAN, repository_path, "clean", "-fd")

    def pull(self, repository_path: Path) -> None:
        """Pull from upstream, pruning remote-tracking references."""
        self._run_step(CleanupStep.PULL, repository_path, "pull", "-p")

    def prune_local_branches(self, repository_path: Path) -> List[str]:
        """
        Force-delete every local branch except the primary ones.

        Branches are listed again since checkout and pull change them.

        Returns:
            Names of the deleted branches, in deletion order
        """
        branches = self.inspector.list_branches(repository_path, CleanupStep.PRUNE_BRANCHES)
        deleted = []

        for branch in branches:
            if branch in PRIMARY_BRANCHES:
                continue

            self._run_step(CleanupStep.PRUNE_BRANCHES, repository_path, "branch", "-D", branch)
            deleted.append(branch)

        return deleted

    def _run_step(self, step: CleanupStep, repository_path: Path, *args: str) -> CommandOutcome:
        """Run a git command, raising CleanupError if it fails."""
        outcome = self.executor.execute(repository_path, *args)

        if not outcome.success:
            raise CleanupError(step, outcome.error, outcome)

        return outcome


def find_primary_branch(branches: List[str]) -> Optional[str]:
    """Return the preferred primary branch present in branches, if any."""
    for candidate in PRIMARY_BRANCHES:
        if candidate in branches:
            return candidate

    return None
