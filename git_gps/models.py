"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .exceptions import GitGpsError, ValidationError


@dataclass(frozen=True)
class Remote:
    """A configured git remote."""

    name: str
    fetch_url: str | None = None
    push_url: str | None = None

    @property
    def url(self) -> str | None:
        return self.fetch_url or self.push_url


class FileStatus(str, Enum):
    UNTRACKED = "untracked"
    MODIFIED = "modified"
    CLEAN = "clean"


@dataclass(frozen=True)
class RepoSnapshot:
    """Repository state queried once per invocation."""

    remotes: tuple[Remote, ...]
    head_commit: str
    upstream_remote_name: str | None = None
    head_branch_name: str | None = None
    ahead_count: int = 0
    behind_count: int = 0
    file_status: FileStatus = FileStatus.CLEAN
    root: Path | None = None

    @property
    def is_detached(self) -> bool:
        return not self.head_branch_name

    def find_remote(self, name: str | None) -> Remote | None:
        if not name:
            return None
        for remote in self.remotes:
            if remote.name == name:
                return remote
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root) if self.root else None,
            "remotes": [
                {"name": r.name, "fetchUrl": r.fetch_url, "pushUrl": r.push_url}
                for r in self.remotes
            ],
            "upstreamRemoteName": self.upstream_remote_name,
            "headBranchName": self.head_branch_name,
            "headCommit": self.head_commit,
            "aheadCount": self.ahead_count,
            "behindCount": self.behind_count,
            "fileStatus": self.file_status.value,
        }


@dataclass(frozen=True)
class LineSelection:
    """One-based, inclusive line range."""

    line_start: int
    line_end: int

    def __post_init__(self) -> None:
        if self.line_start < 1:
            raise ValidationError(f"Line numbers start at 1, got {self.line_start}.")
        if self.line_end < self.line_start:
            raise ValidationError(
                f"Line range end ({self.line_end}) is before its start ({self.line_start})."
            )

    @classmethod
    def single(cls, line: int) -> LineSelection:
        return cls(line, line)

    @property
    def is_single_line(self) -> bool:
        return self.line_start == self.line_end


@dataclass(frozen=True)
class LinkRequest:
    filepath: str
    selection: LineSelection
    permalink: bool = False
    use_custom_url: bool = False

    def __post_init__(self) -> None:
        if not self.filepath.strip("/"):
            raise ValidationError("File path cannot be empty.")

    def to_dict(self) -> dict[str, Any]:
        return {
            "filepath": self.filepath,
            "lineStart": self.selection.line_start,
            "lineEnd": self.selection.line_end,
            "permalink": self.permalink,
            "useCustomUrl": self.use_custom_url,
        }


class HostKind(str, Enum):
    """URL layout conventions of supported hosting services."""

    GITHUB = "github"
    BITBUCKET = "bitbucket"


class WarningKind(str, Enum):
    AHEAD_OF_UPSTREAM = "ahead-of-upstream"
    BEHIND_UPSTREAM = "behind-upstream"
    FILE_MODIFIED = "file-modified"

    @property
    def message(self) -> str:
        return _WARNING_MESSAGES[self]


_WARNING_MESSAGES = {
    WarningKind.AHEAD_OF_UPSTREAM: (
        "Local HEAD is ahead of its upstream, the linked lines may not exist on the remote yet"
    ),
    WarningKind.BEHIND_UPSTREAM: (
        "Local HEAD is behind its upstream, the linked lines may have moved on the remote"
    ),
    WarningKind.FILE_MODIFIED: (
        "Current file is modified, line number will most likely be wrong "
        "(partially modified files are not supported)"
    ),
}


@dataclass(frozen=True)
class ConsistencyReport:
    errors: tuple[GitGpsError, ...] = ()
    warnings: tuple[WarningKind, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class LinkResult:
    url: str
    warnings: tuple[WarningKind, ...] = ()


@dataclass
class LinkTrace:
    """Every intermediate value computed while building a link."""

    snapshot: RepoSnapshot
    request: LinkRequest
    remote: Remote | None = None
    remote_url: str | None = None
    base_url: str | None = None
    host_kind: HostKind | None = None
    ref: str | None = None
    url: str | None = None
    warnings: list[WarningKind] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "snapshot": self.snapshot.to_dict(),
            "request": self.request.to_dict(),
            "remote": self.remote.name if self.remote else None,
            "remoteUrl": self.remote_url,
            "baseUrl": self.base_url,
            "hostKind": self.host_kind.value if self.host_kind else None,
            "ref": self.ref,
            "url": self.url,
            "warnings": [w.value for w in self.warnings],
            "error": self.error,
        }
