"""Pick the remote that represents where the code lives online."""

from __future__ import annotations

import logging

from .models import Remote, RepoSnapshot

logger = logging.getLogger(__name__)


def select_remote(snapshot: RepoSnapshot, preferred_remote_name: str) -> Remote | None:
    """Return the upstream remote, else the preferred one, else the first, else None."""

    upstream = snapshot.find_remote(snapshot.upstream_remote_name)
    if upstream is not None:
        logger.debug("Using upstream remote %s", upstream.name)
        return upstream

    preferred = snapshot.find_remote(preferred_remote_name)
    if preferred is not None:
        logger.debug("Using preferred remote %s", preferred.name)
        return preferred

    if snapshot.remotes:
        first = snapshot.remotes[0]
        logger.debug("Falling back to first remote %s", first.name)
        return first

    return None
