"""Grouping and filtering of remote branches by author."""

import logging
from typing import Callable, Iterable

from grove.git import BranchInfo

logger = logging.getLogger(__name__)


def count_by_email(branches: Iterable[BranchInfo]) -> dict[str, int]:
    """Count branches per author email, in order of first appearance."""
    counts: dict[str, int] = {}
    for branch in branches:
        counts[branch.author_email] = counts.get(branch.author_email, 0) + 1
    return counts


def filter_by_email(branches: Iterable[BranchInfo], email: str) -> list[BranchInfo]:
    """Get the branches whose author email is exactly ``email``."""
    return [branch for branch in branches if branch.author_email == email]


def cleanup_branches(
    branches: Iterable[BranchInfo],
    email: str,
    confirm: Callable[[str], bool],
    delete: Callable[[str], None],
) -> list[str]:
    """Delete the branches authored by ``email`` that the user confirms.

    Args:
        branches: Remote branches to consider
        email: Author email selecting the candidates
        confirm: Asked once per candidate with the branch name
        delete: Called with the branch name of each confirmed candidate

    Returns:
        Names of the deleted branches, in the order they were deleted.

    Raises:
        GitError: Whatever ``delete`` raises; remaining candidates are left alone
    """
    deleted: list[str] = []
    for branch in filter_by_email(branches, email):
        if not confirm(branch.name):
            logger.debug("Keeping %s", branch.name)
            continue
        delete(branch.name)
        deleted.append(branch.name)
    return deleted
