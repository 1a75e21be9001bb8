"""End-to-end tests for the git-gps commands against a scratch repository."""

from __future__ import annotations

import json
from unittest import mock

from typer.testing import CliRunner

from git_gps.cli import app
from git_gps.models import RepoSnapshot

from support import SAMPLE_LINES, GitRepoTestCase, git


class CliTests(GitRepoTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.runner = CliRunner()
        self.add_remote("origin", "git@github.com:owner/project.git")
        self.commit = self.head()

    def invoke(self, *args: str):
        return self.runner.invoke(app, list(args))

    def test_url_live(self) -> None:
        result = self.invoke("url", f"{self.file}:3-4")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            result.stdout.strip(),
            "https://github.com/owner/project/blob/main/src/app.py#L3-L4",
        )

    def test_url_permalink_with_line_option(self) -> None:
        result = self.invoke("url", str(self.file), "--line", "7", "--permalink")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            result.stdout.strip(),
            f"https://github.com/owner/project/blob/{self.commit}/src/app.py#L7",
        )

    def test_defaults_to_first_line(self) -> None:
        result = self.invoke("url", str(self.file))

        self.assertTrue(result.stdout.strip().endswith("#L1"))

    def test_preferred_remote_option(self) -> None:
        self.add_remote("bb", "git@bitbucket.org:team/project.git")

        result = self.invoke("url", str(self.file), "--line", "2-5", "--remote", "bb")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            result.stdout.strip(),
            f"https://bitbucket.org/team/project/src/{self.commit}/src/app.py?at=main#lines-2:5",
        )

    def test_custom_url(self) -> None:
        git(self.repo, "config", "user.name", "Jane Doe")

        result = self.invoke(
            "url",
            str(self.file),
            "--line",
            "4",
            "--custom-url",
            "https://code.example.com/{username}/{folderName}/{ref}/{filepath}#{lineGithub}",
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            result.stdout.strip(),
            "https://code.example.com/JaneDoe/project/main/src/app.py#L4",
        )

    def test_open_uses_browser(self) -> None:
        with mock.patch("git_gps.cli.actions.open_url") as open_mock:
            result = self.invoke("open", f"{self.file}:5")

        self.assertEqual(result.exit_code, 0, result.output)
        open_mock.assert_called_once_with("https://github.com/owner/project/blob/main/src/app.py#L5")

    def test_open_permalink_uses_browser(self) -> None:
        with mock.patch("git_gps.cli.actions.open_url") as open_mock:
            result = self.invoke("open-permalink", f"{self.file}:5")

        self.assertEqual(result.exit_code, 0, result.output)
        open_mock.assert_called_once_with(
            f"https://github.com/owner/project/blob/{self.commit}/src/app.py#L5"
        )

    def test_copy_commands_use_clipboard(self) -> None:
        expected = {
            "copy": "https://github.com/owner/project/blob/main/src/app.py#L2-L3",
            "copy-permalink": f"https://github.com/owner/project/blob/{self.commit}/src/app.py#L2-L3",
        }
        for command, url in expected.items():
            with self.subTest(command=command):
                with mock.patch("git_gps.cli.actions.copy_to_clipboard") as copy_mock:
                    result = self.invoke(command, f"{self.file}:2-3")

                self.assertEqual(result.exit_code, 0, result.output)
                copy_mock.assert_called_once_with(url)

    def test_modified_file_warns_but_succeeds(self) -> None:
        self.file.write_text(SAMPLE_LINES + "more\n")

        result = self.invoke("url", str(self.file))

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("modified", result.output)
        self.assertIn("https://github.com/owner/project/blob/main/src/app.py#L1", result.output)

    def test_untracked_file_fails(self) -> None:
        new_file = self.src / "new.py"
        new_file.write_text("x = 1\n")

        with mock.patch("git_gps.cli.actions.open_url") as open_mock:
            result = self.invoke("open", str(new_file))

        self.assertEqual(result.exit_code, 1)
        self.assertIn("untracked", result.output)
        open_mock.assert_not_called()

    def test_no_remotes_fails(self) -> None:
        git(self.repo, "remote", "remove", "origin")

        result = self.invoke("url", str(self.file))

        self.assertEqual(result.exit_code, 1)
        self.assertIn("no remotes", result.output)

    def test_missing_file_argument_fails(self) -> None:
        result = self.invoke("url")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("No file to link", result.output)

    def test_directory_argument_fails(self) -> None:
        for path in (self.repo, self.src):
            with self.subTest(path=path):
                result = self.invoke("url", str(path))

                self.assertEqual(result.exit_code, 1)
                self.assertIn("Not a file", result.output)
                self.assertNotIn("https://", result.stdout)

    def test_snapshot_without_root_fails(self) -> None:
        snapshot = RepoSnapshot(remotes=(), head_commit=self.commit, head_branch_name="main")

        with mock.patch("git_gps.cli.get_repo_snapshot", return_value=snapshot):
            result = self.invoke("url", str(self.file))

        self.assertEqual(result.exit_code, 1)
        self.assertIn("not in a git repository", result.output)

    def test_bad_line_selection_fails(self) -> None:
        result = self.invoke("url", str(self.file), "--line", "zero")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid line selection", result.output)

    def test_debug_json(self) -> None:
        result = self.invoke("debug", str(self.file), "--line", "9-10", "--json")

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.stdout)
        self.assertEqual(data["remote"], "origin")
        self.assertEqual(data["ref"], "main")
        self.assertEqual(data["hostKind"], "github")
        self.assertEqual(data["snapshot"]["headCommit"], self.commit)
        self.assertEqual(data["request"]["filepath"], "src/app.py")
        self.assertEqual(data["url"], "https://github.com/owner/project/blob/main/src/app.py#L9-L10")
        self.assertIsNone(data["error"])

    def test_debug_reports_failure(self) -> None:
        new_file = self.src / "new.py"
        new_file.write_text("x = 1\n")

        result = self.invoke("debug", str(new_file), "--json")

        self.assertEqual(result.exit_code, 1)
        data = json.loads(result.stdout)
        self.assertIsNone(data["url"])
        self.assertIn("UntrackedFileError", data["error"])

    def test_debug_table(self) -> None:
        result = self.invoke("debug", str(self.file))

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Repository snapshot", result.output)
        self.assertIn("origin", result.output)
