"""Discovery of git working copies beneath a root directory."""

import logging
import os
from pathlib import Path
from typing import List

from repo_janitor.exceptions import DiscoveryError

logger = logging.getLogger(__name__)


class RepositoryLocator:
    """
    Finds the roots of git working copies under a directory.

    A directory is a working copy when it directly contains the marker entry
    (``.git`` by default, either a directory or a gitfile). Once a working
    copy is found its subtree is never searched, so no returned path is
    nested inside another.
    """

    DEFAULT_MARKER = ".git"

    def __init__(self, marker: str = DEFAULT_MARKER):
        self.marker = marker

    def find_repositories(self, root: Path) -> List[Path]:
        """
        Walk the tree under root and collect working-copy roots.

        Args:
            root: Directory to start the search from

        Returns:
            Sorted list of absolute working-copy root paths

        Raises:
            DiscoveryError: If any directory in the tree cannot be listed
        """
        start = Path(root).absolute()
        pending = [start]
        repositories: List[Path] = []

        while pending:
            directory = pending.pop()
            logger.debug(f"Examining {directory}")

            is_repository, subdirectories = self._inspect(directory)

            if is_repository:
                logger.info(f"Found repository: {directory}")
                repositories.append(directory)
                continue

            pending.extend(subdirectories)

        return sorted(repositories)

    def _inspect(self, directory: Path) -> tuple[bool, List[Path]]:
        """List a directory once, returning (is_repository, subdirectories)."""
        subdirectories = []

        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.name == self.marker:
                        return True, []
                    if entry.is_dir(follow_symlinks=False):
                        subdirectories.append(Path(entry.path))
        except OSError as e:
            raise DiscoveryError(f"Cannot read directory {directory}: {e}") from e

        return False, subdirectories
