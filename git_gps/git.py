"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable

from .exceptions import GitCommandError
from .models import Remote

logger = logging.getLogger(__name__)


def run_git(
    args: Iterable[str],
    *,
    cwd: Path,
    raise_on_error: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and optionally raise on failure."""

    cmd = ["git", *args]
    logger.debug("Running command: %s (cwd=%s)", " ".join(cmd), cwd)
    proc = subprocess.run(
        cmd,
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=False,
    )
    if raise_on_error and proc.returncode != 0:
        raise GitCommandError(cmd, proc.returncode, proc.stderr)
    return proc


def rev_parse_toplevel(path: Path) -> Path:
    proc = run_git(["rev-parse", "--show-toplevel"], cwd=path)
    return Path(proc.stdout.strip())


def list_remotes(path: Path) -> list[Remote]:
    """Return remotes in the order git reports them."""

    proc = run_git(["remote", "-v"], cwd=path)
    order: list[str] = []
    urls: dict[str, dict[str, str]] = {}
    for raw in proc.stdout.splitlines():
        parts = raw.split()
        if len(parts) < 2:
            continue
        name, url = parts[0], parts[1]
        kind = parts[2].strip("()") if len(parts) > 2 else "fetch"
        if name not in urls:
            order.append(name)
            urls[name] = {}
        urls[name].setdefault(kind, url)
    # remotes without any url are not listed by `remote -v`
    for name in _remote_names(path):
        if name not in urls:
            order.append(name)
            urls[name] = {}
    return [
        Remote(name=name, fetch_url=urls[name].get("fetch"), push_url=urls[name].get("push"))
        for name in order
    ]


def _remote_names(path: Path) -> list[str]:
    proc = run_git(["remote"], cwd=path)
    return [line.strip() for line in proc.stdout.splitlines() if line.strip()]


def head_branch(path: Path) -> str | None:
    proc = run_git(["symbolic-ref", "-q", "--short", "HEAD"], cwd=path, raise_on_error=False)
    if proc.returncode == 0:
        return proc.stdout.strip() or None
    return None


def head_commit(path: Path) -> str:
    proc = run_git(["rev-parse", "HEAD"], cwd=path)
    return proc.stdout.strip()


def upstream_remote(path: Path, branch: str) -> str | None:
    value = get_config(path, f"branch.{branch}.remote", scope="local")
    # "." means the branch tracks another local branch
    if not value or value == ".":
        return None
    return value


def ahead_behind(path: Path) -> tuple[int, int]:
    """Return (ahead, behind) counts relative to the upstream, or (0, 0) without one."""

    proc = run_git(
        ["rev-list", "--left-right", "--count", "HEAD...@{upstream}"],
        cwd=path,
        raise_on_error=False,
    )
    if proc.returncode != 0:
        return 0, 0
    parts = proc.stdout.split()
    if len(parts) != 2:
        return 0, 0
    return int(parts[0]), int(parts[1])


def status_codes(path: Path, file_path: Path) -> str | None:
    """Return the two-letter porcelain status of a single file, or None when clean."""

    proc = run_git(
        ["status", "--porcelain=v1", "--ignored", "--", str(file_path)],
        cwd=path,
    )
    for raw in proc.stdout.splitlines():
        if len(raw) >= 2:
            return raw[:2]
    return None


def get_config(path: Path, key: str, *, scope: str | None = None) -> str | None:
    args = ["config"]
    if scope:
        args.append(f"--{scope}")
    args.extend(["--get", key])
    proc = run_git(args, cwd=path, raise_on_error=False)
    # exit code 1 means the key is unset
    if proc.returncode == 1:
        return None
    if proc.returncode != 0:
        raise GitCommandError(["git", *args], proc.returncode, proc.stderr)
    return proc.stdout.strip()


def get_config_local_or_global(path: Path, key: str) -> str | None:
    value = get_config(path, key, scope="local")
    if value:
        return value
    return get_config(path, key, scope="global")
