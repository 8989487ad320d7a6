"""
Pydantic models for repository cleanup runs.

This module provides data models for:
- Captured git command outcomes
- Per-repository cleanup results
- Batch reporting across all discovered repositories
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class CleanupStep(str, Enum):
    """Steps of the cleanup sequence, in execution order."""

    RESET = "reset"
    CHECKOUT = "checkout"
    CLEAN = "clean"
    PULL = "pull"
    PRUNE_BRANCHES = "prune_branches"


class CleanupStatus(str, Enum):
    """Final status of a repository cleanup."""

    SUCCESS = "success"
    ERROR = "error"


class CommandOutcome(BaseModel):
    """Outcome of a single git invocation."""

    repository_path: Path = Field(..., description="Working directory of the command")
    command: List[str] = Field(
        default_factory=list,
        description="Full argument list that was executed"
    )
    output: str = Field(default="", description="Combined stdout and stderr")
    returncode: Optional[int] = Field(
        default=None,
        description="Exit status, None if the process never completed"
    )
    error: Optional[str] = Field(
        default=None,
        description="Error message when the command failed"
    )

    class Config:
        frozen = True

    @property
    def success(self) -> bool:
        """Whether the command completed without error."""
        return self.error is None


class CleanupResult(BaseModel):
    """Result of cleaning a single repository."""

    repository_path: Path = Field(..., description="Root of the working copy")
    status: CleanupStatus = Field(..., description="Final status of the cleanup")
    failed_step: Optional[CleanupStep] = Field(
        default=None,
        description="Step that failed, if any"
    )
    error: Optional[str] = Field(
        default=None,
        description="Error message of the failing step"
    )
    output: str = Field(
        default="",
        description="Captured output of the failing command"
    )
    primary_branch: Optional[str] = Field(
        default=None,
        description="Primary branch that was checked out"
    )
    deleted_branches: List[str] = Field(
        default_factory=list,
        description="Local branches deleted during the run"
    )
    duration_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Wall-clock time spent on this repository"
    )

    class Config:
        frozen = True

    @property
    def succeeded(self) -> bool:
        return self.status == CleanupStatus.SUCCESS


class BatchReport(BaseModel):
    """Report generated after a cleanup run over all repositories."""

    timestamp: datetime = Field(..., description="When the run finished")
    root: Path = Field(..., description="Directory that was searched")
    repositories_found: int = Field(
        default=0,
        ge=0,
        description="Number of working copies discovered"
    )
    successful: int = Field(
        default=0,
        ge=0,
        description="Number of repositories cleaned successfully"
    )
    failed: int = Field(
        default=0,
        ge=0,
        description="Number of repositories whose cleanup failed"
    )
    results: List[CleanupResult] = Field(
        default_factory=list,
        description="Individual results, ordered by repository path"
    )

    @property
    def failures(self) -> List[CleanupResult]:
        """Results of the repositories that failed."""
        return [result for result in self.results if not result.succeeded]
