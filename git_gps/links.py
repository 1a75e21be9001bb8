"""High-level orchestration: from a repository snapshot to a line link."""

from __future__ import annotations

import logging

from .checks import check_consistency
from .config import Settings
from .exceptions import GitGpsError, NoRemotesError, NoRemoteUrlError
from .models import HostKind, LinkRequest, LinkResult, LinkTrace, Remote, RepoSnapshot
from .refs import resolve_ref
from .remotes import select_remote
from .urls import classify_host, format_lines, normalize_remote_url, render_custom_url, synthesize

logger = logging.getLogger(__name__)


def custom_url_variables(
    snapshot: RepoSnapshot,
    request: LinkRequest,
    identity_name: str,
    folder_name: str | None,
) -> dict[str, str | None]:
    return {
        "username": identity_name.replace(" ", ""),
        "ref": resolve_ref(snapshot, request.permalink),
        "lineGithub": format_lines(request.selection, HostKind.GITHUB),
        "lineBitbucket": format_lines(request.selection, HostKind.BITBUCKET),
        "filepath": request.filepath,
        "folderName": folder_name,
    }


def build_link(
    snapshot: RepoSnapshot,
    request: LinkRequest,
    settings: Settings,
    identity_name: str = "",
    folder_name: str | None = None,
) -> LinkResult:
    """Produce the link for `request`, raising a GitGpsError when none can exist."""

    trace = _run(snapshot, request, settings, identity_name, folder_name)
    if trace.url is None:
        raise GitGpsError("No URL was produced")
    return LinkResult(url=trace.url, warnings=tuple(trace.warnings))


def trace_link(
    snapshot: RepoSnapshot,
    request: LinkRequest,
    settings: Settings,
    identity_name: str = "",
    folder_name: str | None = None,
) -> LinkTrace:
    """Run the same steps as build_link but keep every intermediate value."""

    trace = LinkTrace(snapshot=snapshot, request=request)
    try:
        return _run(snapshot, request, settings, identity_name, folder_name, trace=trace)
    except GitGpsError as exc:
        trace.error = f"{type(exc).__name__}: {exc}"
        return trace


def _run(
    snapshot: RepoSnapshot,
    request: LinkRequest,
    settings: Settings,
    identity_name: str,
    folder_name: str | None,
    *,
    trace: LinkTrace | None = None,
) -> LinkTrace:
    trace = trace or LinkTrace(snapshot=snapshot, request=request)

    remote: Remote | None = None
    if not request.use_custom_url:
        remote = select_remote(snapshot, settings.preferred_remote)
        trace.remote = remote

    trace.ref = resolve_ref(snapshot, request.permalink)

    # an untracked file has no URL whatever the remote situation is
    report = check_consistency(snapshot)
    trace.warnings.extend(report.warnings)
    if not report.ok:
        raise report.errors[0]

    if request.use_custom_url:
        variables = custom_url_variables(snapshot, request, identity_name, folder_name)
        trace.url = render_custom_url(settings.custom_url_template, variables)
        logger.debug("Rendered custom URL %s", trace.url)
        return trace

    if remote is None:
        raise NoRemotesError()
    remote_url = remote.url
    if not remote_url:
        raise NoRemoteUrlError(remote.name)
    trace.remote_url = remote_url
    trace.base_url = normalize_remote_url(remote_url)
    trace.host_kind = classify_host(trace.base_url)
    trace.url = synthesize(
        remote_url,
        trace.ref,
        request.filepath,
        request.selection,
        head_commit=snapshot.head_commit,
        branch_name=snapshot.head_branch_name,
    )
    logger.debug("Synthesized %s URL %s", trace.host_kind.value, trace.url)
    return trace
