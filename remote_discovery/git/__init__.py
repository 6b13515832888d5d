"""Git remote auto-discovery.

This package finds the git checkout enclosing a directory and works out which
remote URL and branch the checked-out commit corresponds to, without any
configuration.

Example:
    >>> from remote_discovery.git import resolve_remote
    >>> remote = resolve_remote()
    >>> print(f"{remote.url} @ {remote.branch}")
    https://github.com/owner/repo @ main
"""

from remote_discovery.git.locator import find_repository_root
from remote_discovery.git.models import UNRESOLVED, RemoteReference, ResolvedRemote
from remote_discovery.git.parser import RemoteUrl
from remote_discovery.git.resolver import RemoteResolver, resolve_remote

__all__ = [
    # Main API
    "RemoteResolver",
    "find_repository_root",
    "resolve_remote",
    # Parser
    "RemoteUrl",
    # Models
    "RemoteReference",
    "ResolvedRemote",
    "UNRESOLVED",
]
