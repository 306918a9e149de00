"""Test configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from git import Actor, Repo

TEST_USER = Actor("Test User", "test@example.com")
AUTHOR_A = Actor("Author A", "a@x.com")
AUTHOR_B = Actor("Author B", "b@x.com")


def write_git_config(path: Path, name: str, email: str) -> None:
    """Write a git config file with a user section."""
    path.write_text(f"[user]\n\tname = {name}\n\temail = {email}\n")


@pytest.fixture(autouse=True)
def git_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate tests from the developer's git configuration.

    Returns:
        Path of the global git config file used by the test
    """
    home = tmp_path / "home"
    home.mkdir()
    config = home / ".gitconfig"
    write_git_config(config, TEST_USER.name, TEST_USER.email)

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    # Run outside any repository so only the global config is visible
    monkeypatch.chdir(tmp_path)
    return config


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[tuple[Path, Path], None, None]:
    """Create a local repository with a bare remote holding three branches.

    Remote branches:
        feature-a: last commit by a@x.com
        feature-b: last commit by b@x.com
        feature-c: last commit by a@x.com

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    local_path = tmp_path / "local"
    remote_path.mkdir()
    local_path.mkdir()

    Repo.init(remote_path, bare=True)
    local_repo = Repo.init(local_path)

    local_repo.config_writer().set_value("user", "name", TEST_USER.name).release()
    local_repo.config_writer().set_value("user", "email", TEST_USER.email).release()

    # Initial commit stays local so the remote only holds the feature branches
    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=TEST_USER, committer=TEST_USER)
    main_branch = local_repo.active_branch

    origin = local_repo.create_remote("origin", url=str(remote_path))

    def create_branch(name: str, author: Actor) -> None:
        """Create a branch with one commit by author and push it."""
        branch = local_repo.create_head(name, main_branch.commit)
        branch.checkout()

        test_file = local_path / f"{name}.txt"
        test_file.write_text(f"{name} content")
        local_repo.index.add([f"{name}.txt"])
        local_repo.index.commit(f"Add {name}", author=author, committer=author)

        origin.push(name)

    create_branch("feature-a", AUTHOR_A)
    create_branch("feature-b", AUTHOR_B)
    create_branch("feature-c", AUTHOR_A)

    main_branch.checkout()
    origin.fetch()

    yield local_path, remote_path

    # Cleanup is handled by pytest's tmp_path fixture


def remote_heads(remote_path: Path) -> list[str]:
    """Get the branch names stored in a bare remote."""
    return [head.name for head in Repo(remote_path).heads]
