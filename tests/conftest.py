"""
Pytest configuration and shared fixtures for Repo Janitor tests.
"""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, Iterable, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from repo_janitor.core.executor import CommandExecutor
from repo_janitor.models.cleanup import CommandOutcome

GIT_IDENTITY = {
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
}


@pytest.fixture
def temp_directory() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir).resolve()


@pytest.fixture
def git() -> Callable[..., str]:
    """Run a git command in a directory and return its stdout."""

    def run(cwd: Path, *args: str) -> str:
        env = os.environ.copy()
        env.update(GIT_IDENTITY)
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            env=env,
            check=True
        )
        return result.stdout

    return run


@pytest.fixture
def upstream_repo(temp_directory: Path, git) -> Path:
    """Create a bare repository with a single commit on main."""
    seed_path = temp_directory / "seed"
    seed_path.mkdir()

    git(seed_path, "init")
    git(seed_path, "symbolic-ref", "HEAD", "refs/heads/main")
    (seed_path / "README.md").write_text("# Test Repository\n")
    git(seed_path, "add", ".")
    git(seed_path, "commit", "-m", "Initial commit")

    bare_path = temp_directory / "origin.git"
    git(temp_directory, "clone", "--bare", str(seed_path), str(bare_path))
    shutil.rmtree(seed_path)

    return bare_path


@pytest.fixture
def clone_repo(temp_directory: Path, upstream_repo: Path, git) -> Callable[[str], Path]:
    """Factory cloning the upstream repository into a workspace directory."""
    workspace = temp_directory / "workspace"
    workspace.mkdir()

    def clone(name: str) -> Path:
        target = workspace / name
        target.parent.mkdir(parents=True, exist_ok=True)
        git(workspace, "clone", str(upstream_repo), str(target))
        return target

    return clone


@pytest.fixture
def make_outcome() -> Callable[..., CommandOutcome]:
    """Factory for CommandOutcome objects as the executor would build them."""

    def build(
        path: Path,
        args: Iterable[str],
        output: str = "",
        returncode: int = 0
    ) -> CommandOutcome:
        command = ["git", *args]
        error = None

        if returncode != 0:
            error = f"'{' '.join(command)}' exited with status {returncode}"

        return CommandOutcome(
            repository_path=path,
            command=command,
            output=output,
            returncode=returncode,
            error=error
        )

    return build


@pytest.fixture
def scripted_executor(make_outcome) -> Callable[..., MagicMock]:
    """
    Factory for a mock executor with scripted responses.

    branch_listings are returned in turn for `git branch --no-color`, the
    last one repeating. failures maps an argument tuple to (output, status).
    Every other command succeeds with empty output.
    """

    def build(
        branch_listings: Optional[list] = None,
        failures: Optional[Dict[Tuple[str, ...], Tuple[str, int]]] = None
    ) -> MagicMock:
        listings = list(branch_listings or ["* main\n"])
        failing = failures or {}
        executor = MagicMock(spec=CommandExecutor)

        def execute(path, *args):
            if args in failing:
                output, returncode = failing[args]
                return make_outcome(path, args, output, returncode)

            if args == ("branch", "--no-color"):
                output = listings.pop(0) if len(listings) > 1 else listings[0]
                return make_outcome(path, args, output)

            return make_outcome(path, args)

        executor.execute.side_effect = execute
        return executor

    return build


def executed_commands(executor: MagicMock) -> list:
    """Argument tuples passed to a mock executor, in call order."""
    return [call.args[1:] for call in executor.execute.call_args_list]


@pytest.fixture
def commands_of() -> Callable[[MagicMock], list]:
    return executed_commands
