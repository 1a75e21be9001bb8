"""Detect snapshots whose links would point at the wrong lines."""

from __future__ import annotations

from .exceptions import GitGpsError, UntrackedFileError
from .models import ConsistencyReport, FileStatus, RepoSnapshot, WarningKind


def check_consistency(snapshot: RepoSnapshot) -> ConsistencyReport:
    errors: list[GitGpsError] = []
    warnings: list[WarningKind] = []
    if snapshot.ahead_count > 0:
        warnings.append(WarningKind.AHEAD_OF_UPSTREAM)
    if snapshot.behind_count > 0:
        warnings.append(WarningKind.BEHIND_UPSTREAM)
    if snapshot.file_status is FileStatus.UNTRACKED:
        errors.append(UntrackedFileError())
    elif snapshot.file_status is FileStatus.MODIFIED:
        # no diff against the remote blob, so line numbers cannot be remapped
        warnings.append(WarningKind.FILE_MODIFIED)
    return ConsistencyReport(errors=tuple(errors), warnings=tuple(warnings))
