"""Resolve settings from CLI overrides, environment variables and git config."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from . import git
from .exceptions import ValidationError

DEFAULT_PREFERRED_REMOTE = "origin"
DEFAULT_CUSTOM_URL = "https://github.com/{username}/{folderName}/tree/{ref}/{filepath}#{lineGithub}"

ENV_PREFERRED_REMOTE = "GITGPS_PREFERRED_REMOTE"
ENV_CUSTOM_URL_ENABLED = "GITGPS_CUSTOM_URL_ENABLED"
ENV_CUSTOM_URL = "GITGPS_CUSTOM_URL"

GIT_PREFERRED_REMOTE = "gitgps.preferredRemote"
GIT_CUSTOM_URL_ENABLED = "gitgps.customUrlEnabled"
GIT_CUSTOM_URL = "gitgps.customUrl"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """User-tunable behaviour of link generation."""

    preferred_remote: str = DEFAULT_PREFERRED_REMOTE
    custom_url_enabled: bool = False
    custom_url_template: str = DEFAULT_CUSTOM_URL


def load_settings(
    repo_root: Path | None = None,
    *,
    preferred_remote: str | None = None,
    custom_url_enabled: bool | None = None,
    custom_url_template: str | None = None,
) -> Settings:
    """Merge CLI overrides, environment and git config, in that order of precedence."""

    remote = preferred_remote or _lookup(repo_root, ENV_PREFERRED_REMOTE, GIT_PREFERRED_REMOTE)
    template = custom_url_template or _lookup(repo_root, ENV_CUSTOM_URL, GIT_CUSTOM_URL)
    if custom_url_enabled is None:
        if custom_url_template:
            custom_url_enabled = True
        else:
            raw = _lookup(repo_root, ENV_CUSTOM_URL_ENABLED, GIT_CUSTOM_URL_ENABLED)
            custom_url_enabled = parse_bool(raw, name="custom URL enabled") if raw else False
    return Settings(
        preferred_remote=remote or DEFAULT_PREFERRED_REMOTE,
        custom_url_enabled=custom_url_enabled,
        custom_url_template=template or DEFAULT_CUSTOM_URL,
    )


def parse_bool(value: str, *, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValidationError(f"Invalid boolean for {name}: {value!r}")


def _lookup(repo_root: Path | None, env_var: str, git_key: str) -> str | None:
    raw = os.environ.get(env_var)
    if raw:
        return raw
    if repo_root is None:
        return None
    return git.get_config_local_or_global(repo_root, git_key)
