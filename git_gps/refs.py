"""Choose the git reference embedded in a link."""

from __future__ import annotations

from .models import RepoSnapshot


def resolve_ref(snapshot: RepoSnapshot, permalink: bool) -> str:
    """Return the commit for permalinks, the branch otherwise.

    A detached HEAD has no branch to point at, so it always yields the commit.
    """

    if permalink or snapshot.is_detached:
        return snapshot.head_commit
    return snapshot.head_branch_name or snapshot.head_commit
