"""
Pydantic models for Repo Janitor.

This package contains data models for:
- Git command outcomes
- Per-repository cleanup results
- Batch reports
"""

from repo_janitor.models.cleanup import (
    BatchReport,
    CleanupResult,
    CleanupStatus,
    CleanupStep,
    CommandOutcome,
)

__all__ = [
    "BatchReport",
    "CleanupResult",
    "CleanupStatus",
    "CleanupStep",
    "CommandOutcome",
]
