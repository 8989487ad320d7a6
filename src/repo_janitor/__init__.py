"""
Repo Janitor - bulk cleanup of git working copies.

This package finds every git repository below a directory and resets each
one to a clean checkout of its primary branch, processing repositories
concurrently.
"""

__version__ = "0.1.0"

from repo_janitor.config import Config, load_config

__all__ = [
    "__version__",
    "Config",
    "load_config",
]
