"""Git remote data models.

This module defines the value types produced while matching the checked-out
commit against remote-tracking references.

Example:
    >>> from remote_discovery.git.models import RemoteReference
    >>> ref = RemoteReference(
    ...     name="refs/remotes/origin/main",
    ...     commit="3f2a9c...",
    ...     remote_name="origin",
    ... )
    >>> ref.branch
    'main'
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RemoteReference:
    """A remote-tracking reference found in the repository.

    Attributes:
        name: Fully-qualified ref name (e.g., 'refs/remotes/origin/main')
        commit: Hex SHA of the commit the ref points at
        remote_name: Configured remote owning the ref, None if no configured
            remote matches the ref prefix
    """

    name: str
    commit: str
    remote_name: str | None = None

    @property
    def branch(self) -> str:
        """Return the branch token, the part after the last '/'.

        Returns:
            Branch name
        """
        return self.name.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ResolvedRemote:
    """Outcome of remote resolution.

    Either field may be None independently: a branch can be known even when
    the remote URL cannot be normalized.

    Attributes:
        branch: Branch name of the matched remote-tracking reference
        url: Remote URL in https://host/owner/repo form
    """

    branch: str | None = None
    url: str | None = None

    @property
    def is_resolved(self) -> bool:
        """Return True when both branch and URL are known."""
        return self.branch is not None and self.url is not None


UNRESOLVED = ResolvedRemote()
