"""Configuration for remote-discovery.

Key Components:
    - GitRemoteSettings: URL/ref overrides from environment or YAML
    - GitRemoteConfig: Override-first access to the URL and ref, falling back
      to auto-discovery

Example:
    >>> from remote_discovery.config import GitRemoteConfig, GitRemoteSettings
    >>> config = GitRemoteConfig(GitRemoteSettings.from_yaml("config.yaml"))
    >>> config.get_url()
"""

from remote_discovery.config.remote_config import GitRemoteConfig
from remote_discovery.config.settings import GIT_BRANCH, GIT_URL, GitRemoteSettings

__all__ = ["GIT_BRANCH", "GIT_URL", "GitRemoteConfig", "GitRemoteSettings"]
