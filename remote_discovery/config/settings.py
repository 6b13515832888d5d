"""
Override settings for the git repository URL and ref.

Values are read from environment variables (GIT_REPOSITORY_URL,
GIT_REPOSITORY_REF) or from a YAML file:

    git:
      repository:
        url: https://github.com/owner/repo
        ref: ${BRANCH_NAME:-main}
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from remote_discovery.exceptions import ConfigurationError

GIT_URL = "git.repository.url"
GIT_BRANCH = "git.repository.ref"


class GitRemoteSettings(BaseSettings):
    """Explicit repository URL and ref overrides.

    Blank values are treated as unset so that an empty environment variable
    does not mask auto-discovery.
    """

    model_config = SettingsConfigDict(
        env_prefix="GIT_REPOSITORY_",
        case_sensitive=False,
        frozen=True,
    )

    url: str | None = Field(default=None, description=f"Repository URL override ({GIT_URL})")
    ref: str | None = Field(default=None, description=f"Repository branch/ref override ({GIT_BRANCH})")

    @field_validator("url", "ref", mode="before")
    @classmethod
    def blank_as_unset(cls, v: Any) -> Any:
        """Map empty or whitespace-only strings to None."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @staticmethod
    def env_var(key: str) -> str:
        """Return the environment variable backing a configuration key.

        Example:
            >>> GitRemoteSettings.env_var("git.repository.url")
            'GIT_REPOSITORY_URL'
        """
        return key.replace(".", "_").upper()

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> GitRemoteSettings:
        """Load settings from a YAML file with environment variable interpolation.

        Values present in the file take priority over environment variables.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            GitRemoteSettings instance

        Raises:
            ConfigurationError: If the file is missing, unreadable or malformed
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        git_section = config_dict.get("git") or {}
        repository = git_section.get("repository") or {} if isinstance(git_section, dict) else None
        if not isinstance(repository, dict):
            raise ConfigurationError("'git.repository' must be a mapping with 'url' and/or 'ref'")

        values = {key: repository[key] for key in ("url", "ref") if repository.get(key) is not None}
        try:
            return cls(**values)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports ${VAR_NAME} (required) and ${VAR_NAME:-default} (optional).
        YAML comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        lines = []
        for line in content.splitlines(keepends=True):
            if line.lstrip().startswith("#"):
                lines.append(line)
            else:
                lines.append(pattern.sub(replace_var, line))
        return "".join(lines)
