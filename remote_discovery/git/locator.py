"""Locate the git metadata directory of the current checkout.

The walk starts at the working directory and moves towards the filesystem
root, returning the first ``.git`` entry it sees. Code running outside a
checkout is normal, so not finding one returns None instead of raising.
"""

from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

GIT_DIR_NAME = ".git"

# Upper bound on parent hops, independent of reaching the filesystem root
DEFAULT_MAX_DEPTH = 256


def find_repository_root(start: str | Path | None = None, max_depth: int = DEFAULT_MAX_DEPTH) -> Path | None:
    """Find the nearest ``.git`` entry in ``start`` or one of its parents.

    Args:
        start: Directory to start from. Defaults to the current working
            directory. The path is made absolute and symlinks are resolved.
        max_depth: Maximum number of directories to inspect.

    Returns:
        Path to the ``.git`` directory (or ``.git`` file for worktrees), or
        None if no repository is found.

    Example:
        >>> git_dir = find_repository_root()
        >>> if git_dir is not None:
        ...     print(git_dir.parent)
    """
    current = Path.cwd() if start is None else Path(start)
    current = current.resolve()

    for _ in range(max_depth):
        candidate = current / GIT_DIR_NAME
        try:
            if candidate.exists():
                log.debug("git_dir_found", path=str(candidate))
                return candidate
        except OSError as e:
            log.debug("git_dir_probe_failed", path=str(candidate), error=str(e))

        parent = current.parent
        if parent == current:
            log.debug("git_dir_not_found", start=str(start or Path.cwd()))
            return None
        current = parent

    log.info("git_dir_search_depth_exceeded", max_depth=max_depth, last=str(current))
    return None
