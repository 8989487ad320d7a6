"""Git command execution with combined output capture."""

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from repo_janitor.models.cleanup import CommandOutcome

logger = logging.getLogger(__name__)


class CommandExecutor:
    """
    Runs git commands inside a working directory.

    Standard output and standard error are merged into a single stream so
    diagnostics keep their natural interleaving. Failures never raise: a
    non-zero exit, a timeout or a git binary that cannot be started all come
    back as a CommandOutcome carrying an error message.
    """

    def __init__(self, git_executable: str = "git", timeout: Optional[float] = None):
        self.git_executable = git_executable
        self.timeout = timeout

    def execute(self, working_directory: Path, *args: str) -> CommandOutcome:
        """
        Run git with the given arguments.

        Args:
            working_directory: Directory to run the command in
            *args: Arguments passed to git

        Returns:
            CommandOutcome with the combined output and error signal
        """
        command = [self.git_executable, *args]
        display = " ".join(command)
        logger.debug(f"Running '{display}' in {working_directory}")

        try:
            result = subprocess.run(
                command,
                cwd=working_directory,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="replace",
                env=self._command_env(),
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            return CommandOutcome(
                repository_path=working_directory,
                command=command,
                output=self._decode(e.output),
                error=f"'{display}' timed out after {self.timeout} seconds",
            )
        except OSError as e:
            return CommandOutcome(
                repository_path=working_directory,
                command=command,
                error=f"Failed to run '{display}': {e}",
            )

        error = None
        if result.returncode != 0:
            error = f"'{display}' exited with status {result.returncode}"
            logger.debug(f"{error} in {working_directory}")

        return CommandOutcome(
            repository_path=working_directory,
            command=command,
            output=result.stdout or "",
            returncode=result.returncode,
            error=error,
        )

    def _command_env(self) -> dict:
        """Environment for git, with interactive credential prompts disabled."""
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        return env

    @staticmethod
    def _decode(output) -> str:
        if output is None:
            return ""
        if isinstance(output, bytes):
            return output.decode(errors="replace")
        return output
