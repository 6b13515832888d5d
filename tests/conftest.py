"""Pytest configuration and shared fixtures."""

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clean_override_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep overrides from the developer's environment out of the tests."""
    monkeypatch.delenv("GIT_REPOSITORY_URL", raising=False)
    monkeypatch.delenv("GIT_REPOSITORY_REF", raising=False)


def run_git(repo: Path, *args: str) -> str:
    """Run a git command in ``repo`` and return its stripped stdout."""
    result = subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository with a single commit.

    Returns:
        Path to the working tree
    """
    repo = tmp_path / "checkout"
    repo.mkdir()

    run_git(repo, "init")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "user.name", "Test User")

    readme = repo / "README.md"
    readme.write_text("# Test Repository\n")
    run_git(repo, "add", "README.md")
    run_git(repo, "commit", "-m", "Initial commit")

    return repo


@pytest.fixture
def add_remote_ref(git_repo: Path) -> Callable[..., None]:
    """Return a helper that adds a remote and a tracking ref at HEAD.

    The helper takes the remote name, its URL (None to skip adding the remote)
    and the branch names to create under refs/remotes/<remote>/.
    """

    def _add(remote: str, url: str | None, *branches: str) -> None:
        if url is not None:
            run_git(git_repo, "remote", "add", remote, url)
        for branch in branches:
            run_git(git_repo, "update-ref", f"refs/remotes/{remote}/{branch}", "HEAD")

    return _add
