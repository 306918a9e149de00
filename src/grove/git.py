"""Git repository operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from git import Git, GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError, Repo

logger = logging.getLogger(__name__)

REMOTE_PREFIX = "origin/"
UNKNOWN_USER = "Unknown User"
UNKNOWN_EMAIL = "Unknown Email"
UNKNOWN_AUTHOR = "Unknown"

REMOTES_NAMESPACE = "refs/remotes"
# NUL separated, refnames cannot contain NUL
REF_FORMAT = "%(objecttype)%00%(symref)%00%(refname)%00%(authorname)%00%(authoremail)"


class GitError(Exception):
    """Git operation error."""


class ConfigUnavailable(GitError):
    """The ambient git configuration could not be read."""


class RepositoryOpenFailed(GitError):
    """The given path is not a usable git repository."""


class DeleteCommandFailed(GitError):
    """`git push --delete` exited with a non-zero status."""


@dataclass(frozen=True)
class UserIdentity:
    """User identity from the git configuration."""

    name: str
    email: str


@dataclass(frozen=True)
class BranchInfo:
    """Remote branch and the author of its tip commit."""

    name: str
    author_name: str
    author_email: str


def _read_config_value(git: Git, key: str, fallback: str) -> str:
    try:
        return git.config("--get", key)
    except GitCommandNotFound as err:
        raise ConfigUnavailable(f"Failed to read git configuration: {err}") from err
    except GitCommandError as err:
        # Exit status 1 means the key is not set
        if err.status == 1:
            return fallback
        raise ConfigUnavailable(f"Failed to read git configuration: {err}") from err


def read_user_identity(git: Optional[Git] = None) -> UserIdentity:
    """Read the user name and email from the ambient git configuration.

    Args:
        git: Command wrapper to run ``git config`` with, defaults to one
            running in the current working directory

    Raises:
        ConfigUnavailable: If git or its configuration cannot be read
    """
    if git is None:
        git = Git()
    return UserIdentity(
        name=_read_config_value(git, "user.name", UNKNOWN_USER),
        email=_read_config_value(git, "user.email", UNKNOWN_EMAIL),
    )


def strip_remote_prefix(name: str) -> str:
    """Remove the leading ``origin/`` from a remote branch name."""
    if name.startswith(REMOTE_PREFIX):
        return name[len(REMOTE_PREFIX) :]
    return name


def _decode_field(value: bytes) -> str:
    return value.decode("utf-8", errors="replace")


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository."""
        try:
            self.repo: Repo = Repo(path)
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise RepositoryOpenFailed(f"Failed to open repository: {err}") from err
        self.path = Path(path)
        logger.debug("Opened repository at %s", self.path)

    def _iter_remote_refs(self) -> Iterator[list[bytes]]:
        """Yield the raw ``for-each-ref`` fields of every remote ref."""
        try:
            output = self.repo.git.for_each_ref(
                f"--format={REF_FORMAT}",
                REMOTES_NAMESPACE,
                stdout_as_string=False,
            )
        except GitCommandError as err:
            raise GitError(f"Failed to list remote branches: {err}") from err
        for line in output.splitlines():
            yield line.split(b"\0")

    def get_remote_branches(self) -> list[BranchInfo]:
        """Get all remote branches with the author of their last commit.

        Branch names have the ``origin/`` prefix removed. Refs whose names
        cannot be decoded are skipped with a warning.

        Raises:
            GitError: If a branch tip cannot be resolved to a commit
        """
        branches: list[BranchInfo] = []
        for object_type, symref, refname, author_name, author_email in self._iter_remote_refs():
            # Symbolic refs such as origin/HEAD alias another branch
            if symref:
                continue

            raw_name = refname[len(REMOTES_NAMESPACE) + 1 :]
            try:
                ref_name = raw_name.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("Skipping remote branch with undecodable name: %r", raw_name)
                continue

            if object_type != b"commit":
                raise GitError(f"Failed to read last commit of {ref_name}: points to a {object_type.decode()}")

            branches.append(
                BranchInfo(
                    name=strip_remote_prefix(ref_name),
                    author_name=_decode_field(author_name) or UNKNOWN_AUTHOR,
                    author_email=_decode_field(author_email.strip(b"<>")) or UNKNOWN_AUTHOR,
                )
            )

        logger.debug("Found %d remote branches", len(branches))
        return branches

    def delete_remote_branch(self, branch_name: str) -> None:
        """Delete a branch on the origin remote.

        Runs ``git push origin --delete <branch_name>`` in the repository.

        Raises:
            DeleteCommandFailed: If the push exits with a non-zero status
        """
        logger.debug("Running git push origin --delete %s in %s", branch_name, self.repo.working_dir)
        try:
            self.repo.git.push("origin", "--delete", branch_name)
        except GitCommandError as err:
            raise DeleteCommandFailed(f"Failed to delete branch {branch_name}: {err}") from err
