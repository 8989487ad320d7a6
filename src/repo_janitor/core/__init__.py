"""
Core modules for Repo Janitor.

This package contains the core business logic for:
- Running git commands
- Discovering working copies
- Inspecting local branches
- Cleaning a single repository
- Cleaning many repositories concurrently
"""

from repo_janitor.core.branches import BranchInspector, parse_branch_output
from repo_janitor.core.executor import CommandExecutor
from repo_janitor.core.locator import RepositoryLocator
from repo_janitor.core.runner import BatchRunner
from repo_janitor.core.sequencer import (
    PRIMARY_BRANCHES,
    CleanupSequencer,
    find_primary_branch,
)

__all__ = [
    "BranchInspector",
    "parse_branch_output",
    "CommandExecutor",
    "RepositoryLocator",
    "BatchRunner",
    "PRIMARY_BRANCHES",
    "CleanupSequencer",
    "find_primary_branch",
]
