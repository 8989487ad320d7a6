"""
Configuration management for repo-janitor.

Every setting has a default matching the standard behavior, so no
configuration file is needed. A TOML file can be supplied explicitly via
the --config flag; it is never searched for.

Example config.toml:

    git_executable = "/usr/local/bin/git"
    command_timeout = 300
    max_workers = 8
"""

from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from repo_janitor.exceptions import ConfigError


class Config(BaseModel):
    """Main configuration model for repo-janitor."""

    git_executable: str = Field(
        default="git",
        description="git binary to invoke",
    )
    marker_directory: str = Field(
        default=".git",
        description="Entry whose presence marks a working-copy root",
    )
    command_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds before a git command is killed (no limit by default)",
    )
    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum repositories cleaned at once (one per repository by default)",
    )


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from a file or use defaults.

    Args:
        config_path: Optional explicit path to a TOML config file.

    Returns:
        Config instance with loaded or default values.

    Raises:
        ConfigError: If the file does not exist or is invalid.
    """
    if not config_path:
        return Config()

    path = Path(config_path)

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
