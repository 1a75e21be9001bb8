"""Hand a finished link to the browser or the system clipboard."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
import webbrowser

from .exceptions import ActionError

logger = logging.getLogger(__name__)

CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["clip"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
]


def open_url(url: str) -> None:
    logger.debug("Opening %s", url)
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as exc:
        raise ActionError(f"Could not open URL '{url}' in browser: {exc}") from exc
    if not opened:
        raise ActionError(f"No browser available to open '{url}'. Please open it manually.")


def find_clipboard_command() -> list[str] | None:
    for command in CLIPBOARD_COMMANDS:
        if shutil.which(command[0]):
            return command
    return None


def copy_to_clipboard(text: str) -> None:
    command = find_clipboard_command()
    if command is None:
        raise ActionError(
            f"No clipboard tool found on {sys.platform}. Install one of: "
            + ", ".join(c[0] for c in CLIPBOARD_COMMANDS)
        )
    logger.debug("Copying with %s", " ".join(command))
    try:
        subprocess.run(command, input=text, text=True, capture_output=True, check=True)
    except subprocess.CalledProcessError as exc:
        stderr_output = exc.stderr.strip() if exc.stderr else "N/A"
        raise ActionError(
            f"Clipboard command '{subprocess.list2cmdline(exc.cmd)}' failed "
            f"(rc={exc.returncode}). Stderr: '{stderr_output}'"
        ) from exc
