"""Query a real repository and map it into a RepoSnapshot."""

from __future__ import annotations

import logging
from pathlib import Path

from . import git
from .exceptions import GitCommandError, NoActiveEditorError, NotAGitRepositoryError
from .models import FileStatus, RepoSnapshot

logger = logging.getLogger(__name__)

_UNMERGED_MODIFIED = {"UU", "AA"}


def resolve_repo_root(file_path: Path) -> Path:
    file_path = file_path.expanduser()
    if not file_path.exists():
        raise NoActiveEditorError(f"File not found: {file_path}")
    if file_path.is_dir():
        raise NoActiveEditorError(f"Not a file: {file_path}")
    try:
        return git.rev_parse_toplevel(file_path.parent)
    except GitCommandError as exc:
        raise NotAGitRepositoryError(
            f"Currently opened file is not in a git repository: {file_path}"
        ) from exc


def classify_status(codes: str | None) -> FileStatus:
    """Map a porcelain v1 status pair onto the three states links care about."""

    if codes is None:
        return FileStatus.CLEAN
    if codes in ("??", "!!") or (codes[0] == "A" and codes not in _UNMERGED_MODIFIED):
        return FileStatus.UNTRACKED
    if codes in _UNMERGED_MODIFIED or "M" in codes or codes[0] in ("R", "C"):
        return FileStatus.MODIFIED
    return FileStatus.CLEAN


def get_repo_snapshot(file_path: Path) -> RepoSnapshot:
    root = resolve_repo_root(file_path)
    remotes = tuple(git.list_remotes(root))
    branch = git.head_branch(root)
    try:
        commit = git.head_commit(root)
    except GitCommandError as exc:
        # no commits yet, so nothing in the repository has a URL
        logger.debug("HEAD does not resolve: %s", exc.stderr.strip())
        commit = ""
    upstream = git.upstream_remote(root, branch) if branch else None
    ahead, behind = git.ahead_behind(root) if upstream else (0, 0)
    status = classify_status(git.status_codes(root, file_path.expanduser().resolve()))
    if not commit:
        status = FileStatus.UNTRACKED
    snapshot = RepoSnapshot(
        root=root,
        remotes=remotes,
        upstream_remote_name=upstream,
        head_branch_name=branch,
        head_commit=commit,
        ahead_count=ahead,
        behind_count=behind,
        file_status=status,
    )
    logger.debug("Repository snapshot: %s", snapshot)
    return snapshot


def get_git_identity_name(root: Path) -> str:
    return git.get_config_local_or_global(root, "user.name") or ""


def get_workspace_folder_name(root: Path) -> str | None:
    return root.name or None


def relative_filepath(root: Path, file_path: Path) -> str:
    resolved = file_path.expanduser().resolve()
    try:
        relative = resolved.relative_to(root.resolve())
    except ValueError as exc:
        raise NotAGitRepositoryError(f"{file_path} is outside of {root}") from exc
    return relative.as_posix()
