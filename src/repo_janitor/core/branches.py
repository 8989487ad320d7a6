"""Local branch listing for a working copy."""

import logging
from pathlib import Path
from typing import List, Tuple

from repo_janitor.core.executor import CommandExecutor
from repo_janitor.exceptions import CleanupError
from repo_janitor.models.cleanup import CleanupStep, CommandOutcome

logger = logging.getLogger(__name__)

# "*" marks the current branch, "+" a branch checked out in a linked worktree.
BRANCH_MARKERS = ("* ", "+ ")


def parse_branch_output(output: str) -> List[str]:
    """
    Parse `git branch` output into branch names.

    Lines are trimmed and stripped of a leading marker; empty lines are
    dropped. The order of git's output is preserved.
    """
    branches = []

    for line in output.split("\n"):
        line = line.strip()

        for marker in BRANCH_MARKERS:
            if line.startswith(marker):
                line = line[len(marker):].strip()
                break

        if line:
            branches.append(line)

    return branches


class BranchInspector:
    """Lists the local branches of a repository."""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def list_branches(
        self,
        repository_path: Path,
        step: CleanupStep,
    ) -> List[str]:
        """
        List local branches of a repository.

        Args:
            repository_path: Root of the working copy
            step: Cleanup step to attribute a failure to

        Returns:
            Branch names in git's output order

        Raises:
            CleanupError: If the listing command fails
        """
        branches, _ = self.inspect(repository_path, step)
        return branches

    def inspect(
        self,
        repository_path: Path,
        step: CleanupStep,
    ) -> Tuple[List[str], CommandOutcome]:
        """List local branches along with the outcome of the listing command."""
        outcome = self.executor.execute(repository_path, "branch", "--no-color")

        if not outcome.success:
            raise CleanupError(step, outcome.error, outcome)

        branches = parse_branch_output(outcome.output)
        logger.debug(f"Branches in {repository_path}: {branches}")
        return branches, outcome
