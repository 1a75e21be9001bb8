"""Rich UI helpers for terminal output."""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.table import Table

from .models import LinkTrace, WarningKind

console = Console()
err_console = Console(stderr=True, soft_wrap=True)


def success(message: str) -> None:
    err_console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    err_console.print(f"[yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    err_console.print(f"[red]✗[/red] {message}", style="red")


def show_warnings(warnings: Iterable[WarningKind]) -> None:
    for kind in warnings:
        warning(kind.message)


def show_trace(trace: LinkTrace) -> None:
    """Print every intermediate value of a link computation."""

    snapshot = trace.snapshot
    table = Table(title="Repository snapshot", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Root", str(snapshot.root or "?"))
    table.add_row("Branch", snapshot.head_branch_name or "(detached)")
    table.add_row("Commit", snapshot.head_commit or "?")
    table.add_row("Upstream remote", snapshot.upstream_remote_name or "-")
    table.add_row("Ahead / behind", f"{snapshot.ahead_count} / {snapshot.behind_count}")
    table.add_row("File status", snapshot.file_status.value)
    console.print(table)

    remotes = Table(title="Remotes", show_header=True, header_style="bold cyan")
    remotes.add_column("Name", style="cyan")
    remotes.add_column("Fetch URL")
    remotes.add_column("Push URL")
    for remote in snapshot.remotes:
        remotes.add_row(remote.name, remote.fetch_url or "-", remote.push_url or "-")
    console.print(remotes)

    request = trace.request
    result = Table(title="Link", show_header=True, header_style="bold cyan")
    result.add_column("Step", style="cyan")
    result.add_column("Value")
    result.add_row("File", request.filepath)
    result.add_row("Lines", f"{request.selection.line_start}-{request.selection.line_end}")
    result.add_row("Mode", "permalink" if request.permalink else "live")
    result.add_row("Custom URL", "yes" if request.use_custom_url else "no")
    result.add_row("Selected remote", trace.remote.name if trace.remote else "-")
    result.add_row("Remote URL", trace.remote_url or "-")
    result.add_row("Base URL", trace.base_url or "-")
    result.add_row("Host kind", trace.host_kind.value if trace.host_kind else "-")
    result.add_row("Ref", trace.ref or "-")
    result.add_row("URL", trace.url or "-")
    result.add_row("Warnings", "\n".join(w.message for w in trace.warnings) or "-")
    if trace.error:
        result.add_row("Error", f"[red]{trace.error}[/red]")
    console.print(result)
