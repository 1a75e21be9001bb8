"""Typer-based CLI for git-gps."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, NoReturn

import typer

from . import __version__, actions, render
from .config import Settings, load_settings
from .exceptions import GitGpsError, NoActiveEditorError, NotAGitRepositoryError
from .links import build_link, trace_link
from .models import LineSelection, LinkRequest, RepoSnapshot
from .selection import parse_line_selection, split_location
from .snapshot import (
    get_git_identity_name,
    get_repo_snapshot,
    get_workspace_folder_name,
    relative_filepath,
)

app = typer.Typer(
    help="Open or copy links to lines of code on GitHub and Bitbucket",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

logger = logging.getLogger(__name__)

FILE_HELP = "File to link. May carry the lines, e.g. src/app.py:12-15."
LINE_HELP = "Line or range to link: 12, 12-15 or L12-L15 (defaults to 1)."
REMOTE_HELP = "Remote to prefer when the branch has no upstream (default: origin)."
CUSTOM_URL_HELP = "URL template to use instead of the remote. Implies --custom."
CUSTOM_HELP = "Render the configured custom URL template instead of the remote URL."


@dataclass
class Invocation:
    """Inputs collected for a single command run."""

    snapshot: RepoSnapshot
    request: LinkRequest
    settings: Settings
    identity_name: str
    folder_name: str | None


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-gps {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-gps version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)


@app.command("open", help="Open the line in a browser, pinned to the current branch")
def open_live(
    location: str | None = typer.Argument(None, help=FILE_HELP),
    line: str | None = typer.Option(None, "--line", "-l", help=LINE_HELP),
    remote: str | None = typer.Option(None, "--remote", help=REMOTE_HELP),
    custom_url: str | None = typer.Option(None, "--custom-url", help=CUSTOM_URL_HELP),
    custom: bool | None = typer.Option(None, "--custom/--no-custom", help=CUSTOM_HELP),
) -> None:
    _deliver(location, line, remote, custom_url, custom, permalink=False, action=_open)


@app.command("open-permalink", help="Open the line in a browser, pinned to the current commit")
def open_permalink(
    location: str | None = typer.Argument(None, help=FILE_HELP),
    line: str | None = typer.Option(None, "--line", "-l", help=LINE_HELP),
    remote: str | None = typer.Option(None, "--remote", help=REMOTE_HELP),
    custom_url: str | None = typer.Option(None, "--custom-url", help=CUSTOM_URL_HELP),
    custom: bool | None = typer.Option(None, "--custom/--no-custom", help=CUSTOM_HELP),
) -> None:
    _deliver(location, line, remote, custom_url, custom, permalink=True, action=_open)


@app.command("copy", help="Copy a link to the line, pinned to the current branch")
def copy_live(
    location: str | None = typer.Argument(None, help=FILE_HELP),
    line: str | None = typer.Option(None, "--line", "-l", help=LINE_HELP),
    remote: str | None = typer.Option(None, "--remote", help=REMOTE_HELP),
    custom_url: str | None = typer.Option(None, "--custom-url", help=CUSTOM_URL_HELP),
    custom: bool | None = typer.Option(None, "--custom/--no-custom", help=CUSTOM_HELP),
) -> None:
    _deliver(location, line, remote, custom_url, custom, permalink=False, action=_copy)


@app.command("copy-permalink", help="Copy a link to the line, pinned to the current commit")
def copy_permalink(
    location: str | None = typer.Argument(None, help=FILE_HELP),
    line: str | None = typer.Option(None, "--line", "-l", help=LINE_HELP),
    remote: str | None = typer.Option(None, "--remote", help=REMOTE_HELP),
    custom_url: str | None = typer.Option(None, "--custom-url", help=CUSTOM_URL_HELP),
    custom: bool | None = typer.Option(None, "--custom/--no-custom", help=CUSTOM_HELP),
) -> None:
    _deliver(location, line, remote, custom_url, custom, permalink=True, action=_copy)


@app.command("url", help="Print the link to the line")
def print_url(
    location: str | None = typer.Argument(None, help=FILE_HELP),
    line: str | None = typer.Option(None, "--line", "-l", help=LINE_HELP),
    permalink: bool = typer.Option(False, "--permalink", "-p", help="Pin the link to the current commit."),
    remote: str | None = typer.Option(None, "--remote", help=REMOTE_HELP),
    custom_url: str | None = typer.Option(None, "--custom-url", help=CUSTOM_URL_HELP),
    custom: bool | None = typer.Option(None, "--custom/--no-custom", help=CUSTOM_HELP),
) -> None:
    _deliver(location, line, remote, custom_url, custom, permalink=permalink, action=typer.echo)


@app.command("debug", help="Show every value computed while building the link")
def debug(
    location: str | None = typer.Argument(None, help=FILE_HELP),
    line: str | None = typer.Option(None, "--line", "-l", help=LINE_HELP),
    permalink: bool = typer.Option(False, "--permalink", "-p", help="Pin the link to the current commit."),
    remote: str | None = typer.Option(None, "--remote", help=REMOTE_HELP),
    custom_url: str | None = typer.Option(None, "--custom-url", help=CUSTOM_URL_HELP),
    custom: bool | None = typer.Option(None, "--custom/--no-custom", help=CUSTOM_HELP),
    as_json: bool = typer.Option(False, "--json", help="Output JSON for scripting."),
) -> None:
    try:
        inv = _collect(location, line, remote, custom_url, custom, permalink)
    except GitGpsError as err:
        _fail(str(err))
    trace = trace_link(inv.snapshot, inv.request, inv.settings, inv.identity_name, inv.folder_name)
    if as_json:
        typer.echo(json.dumps(trace.to_dict(), indent=2))
    else:
        render.show_trace(trace)
    if trace.error:
        raise typer.Exit(1)


def _collect(
    location: str | None,
    line: str | None,
    remote: str | None,
    custom_url: str | None,
    custom: bool | None,
    permalink: bool,
) -> Invocation:
    if not location:
        raise NoActiveEditorError()
    path, location_selection = split_location(location)
    if line:
        selection = parse_line_selection(line)
    else:
        selection = location_selection or LineSelection.single(1)
    snapshot = get_repo_snapshot(path)
    root = snapshot.root
    if root is None:
        raise NotAGitRepositoryError()
    settings = load_settings(
        root,
        preferred_remote=remote,
        custom_url_enabled=custom,
        custom_url_template=custom_url,
    )
    request = LinkRequest(
        filepath=relative_filepath(root, path),
        selection=selection,
        permalink=permalink,
        use_custom_url=settings.custom_url_enabled,
    )
    identity = get_git_identity_name(root) if settings.custom_url_enabled else ""
    return Invocation(
        snapshot=snapshot,
        request=request,
        settings=settings,
        identity_name=identity,
        folder_name=get_workspace_folder_name(root),
    )


def _deliver(
    location: str | None,
    line: str | None,
    remote: str | None,
    custom_url: str | None,
    custom: bool | None,
    *,
    permalink: bool,
    action: Callable[[str], None],
) -> None:
    try:
        inv = _collect(location, line, remote, custom_url, custom, permalink)
        logger.debug("Link request: %s", inv.request)
        result = build_link(inv.snapshot, inv.request, inv.settings, inv.identity_name, inv.folder_name)
        render.show_warnings(result.warnings)
        action(result.url)
    except GitGpsError as err:
        _fail(str(err))


def _open(url: str) -> None:
    actions.open_url(url)
    render.success(f"Opened {url}")


def _copy(url: str) -> None:
    actions.copy_to_clipboard(url)
    render.success(f"Copied {url}")


def _fail(message: str, code: int = 1) -> NoReturn:
    render.error(message)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
