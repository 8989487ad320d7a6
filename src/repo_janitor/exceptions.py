"""Exceptions raised by Repo Janitor."""

from typing import Optional

from repo_janitor.models.cleanup import CleanupStep, CommandOutcome


class RepoJanitorError(Exception):
    """Base exception for Repo Janitor."""


class ConfigError(RepoJanitorError):
    """Raised when a configuration file cannot be loaded."""


class DiscoveryError(RepoJanitorError):
    """Raised when the repository search cannot read the filesystem."""


class CleanupError(RepoJanitorError):
    """Raised when a cleanup step fails for a repository."""

    def __init__(
        self,
        step: CleanupStep,
        message: str,
        outcome: Optional[CommandOutcome] = None,
    ):
        super().__init__(message)
        self.step = step
        self.message = message
        self.outcome = outcome

    @property
    def output(self) -> str:
        """Captured output of the command behind the failure."""
        return self.outcome.output if self.outcome else ""
