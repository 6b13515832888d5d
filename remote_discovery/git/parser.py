"""Git remote URL parsing and HTTPS normalization.

Remote URLs come in several transports. All of them are reduced to a host and
a path so that an unauthenticated HTTPS URL can be derived from any of them.

Supported URL formats:
    SCP-like SSH:
        - git@github.com:owner/repo.git
        - github.com:owner/repo

    URL syntax:
        - ssh://git@github.com:22/owner/repo.git
        - git://github.com/owner/repo.git
        - https://github.com/owner/repo.git
        - http://gitea.local:3000/owner/repo

Only paths of exactly two segments (owner/repo) normalize to HTTPS. Nested
group paths such as ``group/subgroup/repo`` are rejected rather than guessed.

Example:
    >>> from remote_discovery.git.parser import RemoteUrl
    >>> RemoteUrl.parse("git@github.com:owner/repo.git").https_url
    'https://github.com/owner/repo'
"""

import re
from dataclasses import dataclass

from remote_discovery.exceptions import InvalidGitUrlError

SUPPORTED_SCHEMES = frozenset({"ssh", "git", "http", "https", "git+ssh", "ssh+git"})

HTTPS_URL_TEMPLATE = "https://{host}/{owner}/{repo}"


@dataclass(frozen=True)
class RemoteUrl:
    """A parsed remote URL.

    Instances are created through :meth:`parse`; the constructor does no
    validation.

    Attributes:
        url: Original URL (whitespace trimmed)
        scheme: Transport scheme, 'ssh' for SCP-like URLs
        host: Hostname without user info or port
        path: Path component as written in the URL
    """

    # scheme://[user@]host[:port][/path]
    URL_PATTERN = re.compile(
        r"^(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*)://"
        r"(?:(?P<user>[^@/]+)@)?"
        r"(?P<host>[^:/@]+)"
        r"(?::(?P<port>\d*))?"
        r"(?P<path>/.*)?$"
    )

    # [user@]host:path, no scheme
    SCP_PATTERN = re.compile(r"^(?:(?P<user>[^@/:]+)@)?(?P<host>[^/:@]+):(?P<path>.+)$")

    url: str
    scheme: str
    host: str
    path: str

    @classmethod
    def parse(cls, url: str) -> "RemoteUrl":
        """Parse a git remote URL.

        Args:
            url: Remote URL as found in the git configuration

        Returns:
            Parsed RemoteUrl

        Raises:
            InvalidGitUrlError: If the URL is empty, a local path, or uses an
                unsupported scheme
        """
        url = url.strip()
        if not url:
            raise InvalidGitUrlError(url, reason="Empty URL")

        if "://" in url:
            match = cls.URL_PATTERN.match(url)
            if not match:
                raise InvalidGitUrlError(url, reason="Missing host")
            scheme = match.group("scheme").lower()
            if scheme not in SUPPORTED_SCHEMES:
                raise InvalidGitUrlError(url, reason=f"Unsupported scheme '{scheme}'")
            return cls(url=url, scheme=scheme, host=match.group("host"), path=match.group("path") or "")

        match = cls.SCP_PATTERN.match(url)
        if not match:
            raise InvalidGitUrlError(url, reason="Local paths have no host")
        return cls(url=url, scheme="ssh", host=match.group("host"), path=match.group("path"))

    @property
    def segments(self) -> list[str]:
        """Return the path split on '/', ignoring leading and trailing slashes."""
        return self.path.strip("/").split("/")

    @property
    def https_url(self) -> str:
        """Return the canonical https://host/owner/repo URL.

        The original host is kept whatever the transport was; port and user
        info are dropped. A trailing '.git' is removed from the repository name.

        Raises:
            InvalidGitUrlError: If the path is not exactly owner/repo
        """
        segments = self.segments
        if len(segments) != 2:
            raise InvalidGitUrlError(self.url, reason=f"Expected owner/repo path, got '{self.path}'")

        owner, repo = segments[0], segments[1].removesuffix(".git")
        if not owner or not repo:
            raise InvalidGitUrlError(self.url, reason="Owner and repo must not be empty")

        return HTTPS_URL_TEMPLATE.format(host=self.host, owner=owner, repo=repo)
