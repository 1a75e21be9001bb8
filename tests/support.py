"""Temporary git repositories for tests that talk to the git executable."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

SAMPLE_LINES = "".join(f"line {n}\n" for n in range(1, 21))


def git(cwd: Path, *args: str) -> str:
    proc = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test User",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout.strip()


@unittest.skipIf(shutil.which("git") is None, "git executable not available")
class GitRepoTestCase(unittest.TestCase):
    """Provides `self.repo`, a fresh repository on branch main with one commit."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name).resolve()

        global_config = self.tmp / "gitconfig"
        global_config.write_text("")
        env = {
            "GIT_CONFIG_GLOBAL": str(global_config),
            "GIT_CONFIG_NOSYSTEM": "1",
            "GIT_CEILING_DIRECTORIES": str(self.tmp),
        }
        patcher = mock.patch.dict(os.environ, env)
        patcher.start()
        self.addCleanup(patcher.stop)
        for var in ("GITGPS_PREFERRED_REMOTE", "GITGPS_CUSTOM_URL_ENABLED", "GITGPS_CUSTOM_URL"):
            os.environ.pop(var, None)

        self.repo = self.tmp / "project"
        self.repo.mkdir()
        git(self.repo, "init", "-q", "-b", "main")
        self.src = self.repo / "src"
        self.src.mkdir()
        self.file = self.src / "app.py"
        self.file.write_text(SAMPLE_LINES)
        git(self.repo, "add", "src/app.py")
        git(self.repo, "commit", "-q", "-m", "Initial commit")

    def commit_file(self, path: Path, content: str, message: str = "Update") -> str:
        path.write_text(content)
        git(self.repo, "add", str(path.relative_to(self.repo)))
        git(self.repo, "commit", "-q", "-m", message)
        return self.head()

    def head(self) -> str:
        return git(self.repo, "rev-parse", "HEAD")

    def add_remote(self, name: str, url: str) -> None:
        git(self.repo, "remote", "add", name, url)

    def make_bare_remote(self, name: str) -> Path:
        bare = self.tmp / f"{name}.git"
        git(self.tmp, "init", "-q", "--bare", str(bare))
        self.add_remote(name, str(bare))
        return bare
