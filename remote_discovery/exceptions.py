"""Exception hierarchy for remote-discovery.

Exception Hierarchy:
    RemoteDiscoveryError (base)
    ├── ConfigurationError
    └── GitDiscoveryError
        └── InvalidGitUrlError

Only ConfigurationError is meant to reach callers of the public API. Git
discovery problems are caught inside the resolver and degrade to an
unresolved value.

Example Usage:
    >>> from remote_discovery.exceptions import ConfigurationError
    >>> try:
    ...     url = config.get_url()
    ... except ConfigurationError as e:
    ...     print(e.message)
    Unable to resolve git URL, specify git.repository.url
"""


class RemoteDiscoveryError(Exception):
    """Base exception for all remote-discovery errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(RemoteDiscoveryError):
    """Configuration-related errors.

    Raised when a required value is neither configured explicitly nor
    discoverable from the local repository, or when a settings file is
    unreadable or invalid.

    Attributes:
        key: The configuration key the caller must set, if known
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            key: Configuration key that needs to be set
        """
        super().__init__(message)
        self.key = key


class GitDiscoveryError(RemoteDiscoveryError):
    """Base exception for git metadata discovery errors.

    Attributes:
        message: Error message
        hint: Optional hint for resolution
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            hint: Optional hint for resolution
        """
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Format error message with hint.

        Returns:
            Formatted error message with optional hint
        """
        if self.hint:
            return f"{self.message}\n\nHint: {self.hint}"
        return self.message


class InvalidGitUrlError(GitDiscoveryError):
    """Raised when a remote URL cannot be normalized to owner/repo form.

    Attributes:
        url: The offending URL
    """

    def __init__(self, url: str, reason: str | None = None) -> None:
        """Initialize exception.

        Args:
            url: The invalid URL
            reason: Optional reason for the error
        """
        msg = f"Invalid Git URL format: {url}"
        if reason:
            msg += f" ({reason})"

        super().__init__(
            message=msg,
            hint=(
                "Expected formats:\n"
                "  - git@github.com:owner/repo.git\n"
                "  - https://github.com/owner/repo.git"
            ),
        )
        self.url = url
