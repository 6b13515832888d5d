"""Resolve the remote URL and branch of the checked-out commit.

The resolver matches the HEAD commit against every remote-tracking reference
instead of asking for the tracking branch of the current local branch. CI
systems frequently check out a detached HEAD, where there is no local branch
to ask about, while the remote-tracking refs are still present.

When several remote-tracking refs point at HEAD, refs whose name contains
'upstream' win over refs containing 'origin', which win over anything else.
Within one class the first ref in name order is taken.

Key Exports:
    RemoteResolver: Resolution against an already located ``.git`` directory.
    resolve_remote: Locate the repository from a directory and resolve it.

Example:
    >>> from remote_discovery.git import resolve_remote
    >>> remote = resolve_remote()
    >>> print(remote.url, remote.branch)
    https://github.com/owner/repo main

Failure Handling:
    Resolution is best effort. Missing repositories, unborn branches, refs
    that match nothing and remote URLs that cannot be normalized all produce
    None for the affected field and a log entry; nothing is raised.

Dependencies:
    Requires GitPython (gitpython) package for repository access.
"""

import configparser
from collections.abc import Iterable
from pathlib import Path

import git
import structlog
from git.exc import GitError, ODBError

from remote_discovery.exceptions import InvalidGitUrlError
from remote_discovery.git.locator import find_repository_root
from remote_discovery.git.models import UNRESOLVED, RemoteReference, ResolvedRemote
from remote_discovery.git.parser import RemoteUrl

log = structlog.get_logger(__name__)

REMOTE_REFS_PREFIX = "refs/remotes/"


class RemoteResolver:
    """Derives a ResolvedRemote from local repository metadata.

    Attributes:
        PREFERRED_REMOTES: Substrings of ref names, in order of preference,
            used to pick one ref when several point at HEAD.
    """

    PREFERRED_REMOTES: tuple[str, ...] = ("upstream", "origin")

    def resolve(self, git_dir: Path | None) -> ResolvedRemote:
        """Resolve branch and remote URL for the commit checked out in ``git_dir``.

        Args:
            git_dir: Path to the ``.git`` entry, as returned by
                find_repository_root(). None yields UNRESOLVED.

        Returns:
            ResolvedRemote; either field may be None.
        """
        if git_dir is None:
            log.debug("git_dir_missing")
            return UNRESOLVED

        try:
            with git.Repo(Path(git_dir).parent) as repo:
                return self._resolve_repo(repo)
        except (GitError, ODBError, OSError, ValueError) as e:
            log.debug("git_remote_resolution_failed", git_dir=str(git_dir), error=str(e), exc_info=True)
            return UNRESOLVED

    def head_references(self, git_dir: Path | None) -> list[RemoteReference]:
        """List remote-tracking refs pointing at HEAD, most preferred first.

        Args:
            git_dir: Path to the ``.git`` entry, or None.

        Returns:
            Ranked matching references; empty when nothing can be resolved.
        """
        if git_dir is None:
            return []

        try:
            with git.Repo(Path(git_dir).parent) as repo:
                return self.rank(self._head_matches(repo))
        except (GitError, ODBError, OSError, ValueError) as e:
            log.debug("git_head_references_failed", git_dir=str(git_dir), error=str(e), exc_info=True)
            return []

    def _resolve_repo(self, repo: git.Repo) -> ResolvedRemote:
        reference = self.select_reference(self._head_matches(repo))
        if reference is None:
            return UNRESOLVED

        branch = reference.branch
        log.info("git_ref_resolved", ref=reference.name, branch=branch)

        url = self._remote_url(repo, reference)
        if url is not None:
            log.info("git_url_resolved", remote=reference.remote_name, url=url)

        return ResolvedRemote(branch=branch, url=url)

    def _head_matches(self, repo: git.Repo) -> list[RemoteReference]:
        head = self.head_commit(repo)
        if head is None:
            return []

        matches = [ref for ref in self.list_remote_references(repo) if ref.commit == head]
        if not matches:
            log.debug("git_no_remote_reference_for_head", head=head)
        return matches

    @staticmethod
    def head_commit(repo: git.Repo) -> str | None:
        """Return the hex SHA of the HEAD commit, or None for an unborn branch."""
        try:
            return repo.head.commit.hexsha
        except ValueError as e:
            log.debug("git_head_unresolved", error=str(e))
            return None

    def list_remote_references(self, repo: git.Repo) -> list[RemoteReference]:
        """List remote-tracking refs sorted by fully-qualified name.

        Symbolic ``refs/remotes/<remote>/HEAD`` pointers are skipped, they
        only mirror the remote's default branch.

        Args:
            repo: Open repository

        Returns:
            References with their target commit and owning remote
        """
        remote_names = [remote.name for remote in repo.remotes]

        references = []
        for ref in sorted(repo.references, key=lambda r: r.path):
            if not ref.path.startswith(REMOTE_REFS_PREFIX) or ref.path.endswith("/HEAD"):
                continue
            try:
                commit = ref.commit.hexsha
            except ValueError as e:
                log.debug("git_ref_unreadable", ref=ref.path, error=str(e))
                continue
            references.append(
                RemoteReference(name=ref.path, commit=commit, remote_name=owning_remote(ref.path, remote_names))
            )
        return references

    @classmethod
    def rank(cls, matches: list[RemoteReference]) -> list[RemoteReference]:
        """Order matches by preference, keeping name order inside each class.

        Args:
            matches: References pointing at HEAD, in enumeration order

        Returns:
            The same references, preferred ones first
        """
        ranked: list[RemoteReference] = []
        for preferred in cls.PREFERRED_REMOTES:
            ranked.extend(ref for ref in matches if preferred in ref.name and ref not in ranked)
        ranked.extend(ref for ref in matches if ref not in ranked)
        return ranked

    @classmethod
    def select_reference(cls, matches: list[RemoteReference]) -> RemoteReference | None:
        """Pick the reference to report among refs pointing at HEAD.

        Selection logic:
            1. No matches: None
            2. One match: that match
            3. Several: the first match containing 'upstream', else the first
               containing 'origin', else the first match overall

        Args:
            matches: References pointing at HEAD, in enumeration order

        Returns:
            Selected reference or None
        """
        if not matches:
            return None
        if len(matches) > 1:
            log.debug("git_multiple_remote_references", refs=[ref.name for ref in matches])
        return cls.rank(matches)[0]

    def _remote_url(self, repo: git.Repo, reference: RemoteReference) -> str | None:
        if reference.remote_name is None:
            log.info("git_remote_not_configured", ref=reference.name)
            return None

        urls = remote_urls(repo, reference.remote_name)
        if not urls:
            log.info("git_remote_url_missing", remote=reference.remote_name)
            return None

        try:
            return RemoteUrl.parse(urls[0]).https_url
        except InvalidGitUrlError as e:
            log.info("git_remote_url_unsupported", remote=reference.remote_name, url=urls[0], reason=e.message)
            return None


def owning_remote(ref_name: str, remote_names: Iterable[str]) -> str | None:
    """Find the configured remote a remote-tracking ref belongs to.

    Remote names may contain '/', so the longest configured name that
    prefixes the ref wins.

    Args:
        ref_name: Fully-qualified ref name, e.g. 'refs/remotes/origin/main'
        remote_names: Names of the configured remotes

    Returns:
        Remote name, or None when no configured remote owns the ref

    Example:
        >>> owning_remote("refs/remotes/team/fork/main", ["team", "team/fork"])
        'team/fork'
    """
    for name in sorted(remote_names, key=len, reverse=True):
        if ref_name.startswith(f"{REMOTE_REFS_PREFIX}{name}/"):
            return name
    return None


def remote_urls(repo: git.Repo, remote_name: str) -> list[str]:
    """Return the configured URLs of a remote, in configuration order."""
    with repo.config_reader() as reader:
        try:
            return list(reader.get_values(f'remote "{remote_name}"', "url"))
        except configparser.Error:
            return []


def resolve_remote(start: str | Path | None = None) -> ResolvedRemote:
    """Locate the repository containing ``start`` and resolve its remote.

    Args:
        start: Directory to search from (default: current directory)

    Returns:
        ResolvedRemote; UNRESOLVED outside of a git checkout.
    """
    return RemoteResolver().resolve(find_repository_root(start))
