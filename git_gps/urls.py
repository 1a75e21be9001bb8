"""Rewrite remote transport URLs into browsable links to file lines."""

from __future__ import annotations

import re
from typing import Mapping, assert_never
from urllib.parse import quote, urlsplit

from .exceptions import ValidationError
from .models import HostKind, LineSelection

# Ports are not understood: `ssh://git@host:2222/owner/repo` is read as host
# `host` with path `2222/owner/repo`. No hosted remote seen so far uses one.
# An explicit `http://` scheme is kept as is; every other transport becomes https.
_TRANSPORT_RE = re.compile(
    r"^(?:(?P<scheme>https?)://|[a-z][a-z0-9+.-]*://)?"
    r"(?:[^@/]+@)?"
    r"(?:(?P<host>[^:/]+):(?P<path>.*?)|(?P<location>[^:]+?))"
    r"(?:\.git)?$",
    re.IGNORECASE,
)

_PLACEHOLDER_RE = re.compile(r"(?<!\\)\{([^{}]*?)(?<!\\)\}")


def normalize_remote_url(remote_url: str) -> str:
    """Turn `git@host:owner/repo.git` and friends into `https://host/owner/repo`."""

    url = remote_url.strip().rstrip("/")
    match = _TRANSPORT_RE.match(url)
    if not match:
        raise ValidationError(f"Unsupported remote URL: {remote_url}")
    if match.group("location") is not None:
        host, _, path = match.group("location").partition("/")
    else:
        host, path = match.group("host"), match.group("path")
    if not host:
        raise ValidationError(f"Unsupported remote URL: {remote_url}")
    scheme = (match.group("scheme") or "https").lower()
    path = path.strip("/")
    if not path:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}/{path}"


def classify_host(base_url: str) -> HostKind:
    authority = urlsplit(base_url).netloc.lower()
    if "bitbucket" in authority:
        return HostKind.BITBUCKET
    return HostKind.GITHUB


def format_lines(selection: LineSelection, host_kind: HostKind) -> str:
    start, end = selection.line_start, selection.line_end
    if host_kind is HostKind.GITHUB:
        if selection.is_single_line:
            return f"L{start}"
        return f"L{start}-L{end}"
    elif host_kind is HostKind.BITBUCKET:
        if selection.is_single_line:
            return f"{start}"
        return f"{start}:{end}"
    else:
        assert_never(host_kind)


def synthesize(
    remote_url: str,
    ref: str,
    filepath: str,
    selection: LineSelection,
    *,
    head_commit: str | None = None,
    branch_name: str | None = None,
) -> str:
    """Build the link to `filepath` at `ref` on the host behind `remote_url`.

    Bitbucket addresses content by commit, so its path always carries
    `head_commit` (falling back to `ref`) and the branch only travels in the
    `at` query parameter.
    """

    path = _quote_path(filepath)
    if not path:
        raise ValidationError("File path cannot be empty.")
    base = normalize_remote_url(remote_url)
    host_kind = classify_host(base)
    lines = format_lines(selection, host_kind)
    if host_kind is HostKind.GITHUB:
        return f"{base}/blob/{_quote_path(ref)}/{path}#{lines}"
    elif host_kind is HostKind.BITBUCKET:
        commit = _quote_path(head_commit or ref)
        query = f"?at={_quote_path(branch_name)}" if branch_name else ""
        return f"{base}/src/{commit}/{path}{query}#lines-{lines}"
    else:
        assert_never(host_kind)


def render_custom_url(template: str, variables: Mapping[str, str | None]) -> str:
    """Replace `{name}` placeholders; `\\{name\\}` stays as written and unknown names vanish."""

    return _PLACEHOLDER_RE.sub(lambda match: variables.get(match.group(1)) or "", template)


def _quote_path(value: str) -> str:
    return quote(value.strip("/"), safe="/")
