"""remote-discovery: repository URL and branch of the code under test.

Auto-discovers the canonical HTTPS URL and branch of the git checkout the
process runs in, with explicit overrides taking priority.

Example:
    >>> from remote_discovery import GitRemoteConfig
    >>> config = GitRemoteConfig()
    >>> print(config.get_url(), config.get_branch())
"""

from remote_discovery.config import GIT_BRANCH, GIT_URL, GitRemoteConfig, GitRemoteSettings
from remote_discovery.exceptions import ConfigurationError
from remote_discovery.git import RemoteResolver, ResolvedRemote, find_repository_root, resolve_remote

__version__ = "0.1.0"

__all__ = [
    "GIT_BRANCH",
    "GIT_URL",
    "ConfigurationError",
    "GitRemoteConfig",
    "GitRemoteSettings",
    "RemoteResolver",
    "ResolvedRemote",
    "find_repository_root",
    "resolve_remote",
]
