"""
Tests for RepositorySync.

git is never run: subprocess.run is replaced by a recorder that returns
canned results per git subcommand.
"""
import subprocess
from unittest.mock import MagicMock

import pytest

from phlog.core.exceptions import SyncError
from phlog.core.logging_manager import PhlogLogger
from phlog.sync.repository import RepositorySync


class GitRecorder:
    """Stand-in for subprocess.run recording git invocations."""

    def __init__(self, outputs=None, fail=None, missing=False):
        self.calls = []
        self.outputs = outputs or {}
        self.fail = fail
        self.missing = missing

    def __call__(self, command, cwd=None, **kwargs):
        self.calls.append((command, cwd))
        if self.missing:
            raise FileNotFoundError("git")
        subcommand = command[1]
        if subcommand == self.fail:
            raise subprocess.CalledProcessError(
                128, command, output="", stderr=f"fatal: {subcommand} failed\n"
            )
        return subprocess.CompletedProcess(
            command, 0, stdout=self.outputs.get(subcommand, ""), stderr=""
        )

    @property
    def subcommands(self):
        return [command[1] for command, _ in self.calls]


@pytest.fixture
def git(monkeypatch):
    """Install a GitRecorder; call the fixture to configure it."""
    def _install(**kwargs):
        recorder = GitRecorder(**kwargs)
        monkeypatch.setattr(subprocess, "run", recorder)
        return recorder
    return _install


@pytest.fixture
def checkout(tmp_path):
    """Directory that already looks like a git checkout."""
    repo = tmp_path / "kitchenlog"
    (repo / ".git").mkdir(parents=True)
    return repo


class TestSync:
    """Tests for the clone/reset/pull sequence."""

    def test_clones_when_missing(self, git, tmp_path):
        """Without .git the repository is cloned before reset and pull."""
        recorder = git(outputs={"pull": "Already up to date.\n"})
        repo = tmp_path / "kitchenlog"

        changed = RepositorySync(repo, "https://example.org/log.git").sync()

        assert recorder.subcommands == ["clone", "reset", "pull"]
        clone_command, clone_cwd = recorder.calls[0]
        assert clone_command == ["git", "clone", "https://example.org/log.git", str(repo)]
        assert clone_cwd == str(tmp_path)
        assert changed is True

    def test_existing_checkout_not_cloned(self, git, checkout):
        """An existing checkout is reset and pulled in place."""
        recorder = git(outputs={"pull": "Already up to date.\n"})

        changed = RepositorySync(checkout, "url").sync()

        assert recorder.calls == [
            (["git", "reset", "--hard"], str(checkout)),
            (["git", "pull", "--force", "origin"], str(checkout)),
        ]
        assert changed is False

    def test_new_commits_reported(self, git, checkout):
        """Pull output other than 'Already up to date' means changes."""
        git(outputs={"pull": "Updating abc..def\nFast-forward\n"})
        assert RepositorySync(checkout, "url").sync() is True

    @pytest.mark.parametrize(
        "step,message",
        [("reset", "resetting repo"), ("pull", "pulling changes")],
    )
    def test_failing_step_raises(self, git, checkout, step, message):
        """A failing git step raises SyncError naming the step and git's output."""
        git(fail=step)
        with pytest.raises(SyncError, match=message) as exc_info:
            RepositorySync(checkout, "url").sync()
        assert f"fatal: {step} failed" in str(exc_info.value)

    def test_failed_clone_stops(self, git, tmp_path):
        """No reset or pull after a failed clone."""
        recorder = git(fail="clone")
        with pytest.raises(SyncError, match="cloning repo"):
            RepositorySync(tmp_path / "kitchenlog", "url").sync()
        assert recorder.subcommands == ["clone"]

    def test_git_missing(self, git, checkout):
        """A missing git executable raises SyncError."""
        git(missing=True)
        with pytest.raises(SyncError, match="git executable not found"):
            RepositorySync(checkout, "url").sync()

    def test_logs_summary(self, git, checkout):
        """The sync result goes to the operation log."""
        git(outputs={"pull": "Already up to date.\n"})
        logger = MagicMock(spec=PhlogLogger)
        RepositorySync(checkout, "url", logger=logger).sync()
        logger.log_operation.assert_called_once_with(
            "repository_sync",
            {"repo_dir": str(checkout), "repo_url": "url", "cloned": False, "updated": False},
        )
