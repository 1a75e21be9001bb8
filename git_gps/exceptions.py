"""Custom exception hierarchy for git-gps."""


class GitGpsError(Exception):
    """Base error for all custom exceptions."""


class NoActiveEditorError(GitGpsError):
    """Raised when there is no file to link."""

    def __init__(self, message: str = "No file to link") -> None:
        super().__init__(message)


class NotAGitRepositoryError(GitGpsError):
    """Raised when the file lives outside any git working tree."""

    def __init__(self, message: str = "File is not in a git repository") -> None:
        super().__init__(message)


class NoRemotesError(GitGpsError):
    """Raised when the repository has no remotes and custom URLs are off."""

    def __init__(self, message: str = "Current git repository has no remotes") -> None:
        super().__init__(message)


class NoRemoteUrlError(GitGpsError):
    """Raised when the selected remote has neither a fetch nor a push URL."""

    def __init__(self, remote_name: str | None = None) -> None:
        message = "No remote URL"
        if remote_name:
            message = f"Remote '{remote_name}' has no URL"
        super().__init__(message)
        self.remote_name = remote_name


class UntrackedFileError(GitGpsError):
    """Raised when the file has never been committed."""

    def __init__(self, message: str = "Current file is untracked, and has no remote URL") -> None:
        super().__init__(message)


class GitCommandError(GitGpsError):
    """Raised when a git invocation fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str | None = None):
        message = "Git command failed"
        if command:
            message = f"Git command failed: {' '.join(command)}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""


class ValidationError(GitGpsError):
    """Raised when user input is invalid."""


class ActionError(GitGpsError):
    """Raised when the URL cannot be opened or copied."""
