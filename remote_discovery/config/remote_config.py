"""Repository URL and ref for the code under test.

Explicit settings win. Without them the values are discovered from the local
git checkout, once per GitRemoteConfig instance. The composing application
creates one instance at startup and hands it to whatever needs the values.

Example:
    >>> from remote_discovery.config import GitRemoteConfig
    >>> config = GitRemoteConfig()
    >>> config.get_url()
    'https://github.com/owner/repo'
    >>> config.get_branch()
    'main'
"""

import threading
from pathlib import Path

import structlog

from remote_discovery.config.settings import GIT_BRANCH, GIT_URL, GitRemoteSettings
from remote_discovery.exceptions import ConfigurationError
from remote_discovery.git.locator import find_repository_root
from remote_discovery.git.models import ResolvedRemote
from remote_discovery.git.resolver import RemoteResolver

log = structlog.get_logger(__name__)


class GitRemoteConfig:
    """Provides the git URL and ref, preferring configured overrides.

    Discovery runs lazily, only when a requested value is not overridden, and
    at most once; concurrent first callers wait on a lock and share the result.
    """

    def __init__(
        self,
        settings: GitRemoteSettings | None = None,
        resolver: RemoteResolver | None = None,
        start: str | Path | None = None,
    ) -> None:
        """Initialize the config.

        Args:
            settings: Override settings. Defaults to GitRemoteSettings() read
                from the environment.
            resolver: Resolver used for discovery
            start: Directory discovery starts from (default: current directory)
        """
        self.settings = settings if settings is not None else GitRemoteSettings()
        self.resolver = resolver if resolver is not None else RemoteResolver()
        self._start = start
        self._resolved: ResolvedRemote | None = None
        self._lock = threading.Lock()

    def resolved(self) -> ResolvedRemote:
        """Return the discovered remote, running discovery on first call."""
        if self._resolved is None:
            with self._lock:
                if self._resolved is None:
                    self._resolved = self.resolver.resolve(find_repository_root(self._start))
                    log.debug("git_remote_discovered", branch=self._resolved.branch, url=self._resolved.url)
        return self._resolved

    def get_url(self) -> str:
        """Return the repository URL.

        Raises:
            ConfigurationError: If no override is set and discovery failed
        """
        if self.settings.url is not None:
            return self.settings.url

        url = self.resolved().url
        if url is None:
            raise ConfigurationError(
                f"Unable to resolve git URL, specify {GIT_URL} "
                f"(environment variable {GitRemoteSettings.env_var(GIT_URL)})",
                key=GIT_URL,
            )
        return url

    def get_branch(self) -> str:
        """Return the repository branch.

        Raises:
            ConfigurationError: If no override is set and discovery failed
        """
        if self.settings.ref is not None:
            return self.settings.ref

        branch = self.resolved().branch
        if branch is None:
            raise ConfigurationError(
                f"Unable to resolve git branch, specify {GIT_BRANCH} "
                f"(environment variable {GitRemoteSettings.env_var(GIT_BRANCH)})",
                key=GIT_BRANCH,
            )
        return branch
