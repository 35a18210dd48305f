#!/usr/bin/env python3
"""
repository.py
-------------
Fetch or update the kitchen log git repository.

Before parsing, the checkout must reflect the remote:
    1. Clone the repository if the checkout has no ``.git`` directory
    2. Hard-reset the worktree, discarding local modifications
    3. Pull ``origin`` (forced); being already up to date is fine

Any failing git step raises SyncError with git's own error output. There
is no retry.

Usage:
    from phlog.sync.repository import RepositorySync

    RepositorySync(repo_dir, repo_url, logger=logger).sync()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import subprocess
from pathlib import Path
from typing import List, Optional

# --- Local imports ---
from phlog.core.exceptions import SyncError
from phlog.core.logging_manager import PhlogLogger, safe_logger


GIT = "git"
REMOTE = "origin"


class RepositorySync:
    """
    Clone-or-update a git checkout.

    Attributes:
        repo_dir: Local checkout directory
        repo_url: Remote URL to clone from
        logger: Optional logger
    """

    def __init__(
        self,
        repo_dir: Path,
        repo_url: str,
        logger: Optional[PhlogLogger] = None,
    ) -> None:
        self.repo_dir = repo_dir
        self.repo_url = repo_url
        self.logger = logger

    @property
    def is_checkout(self) -> bool:
        """True when repo_dir already holds a git repository."""
        return (self.repo_dir / ".git").exists()

    def _git(self, step: str, args: List[str], cwd: Optional[Path] = None) -> str:
        """
        Run one git command.

        Args:
            step: Step name used in error messages and logs
            args: Arguments after ``git``
            cwd: Working directory (defaults to repo_dir)

        Returns:
            Captured stdout

        Raises:
            SyncError: If git is missing or exits non-zero
        """
        command = [GIT, *args]
        safe_logger(self.logger).log_debug(f"Running {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                cwd=str(cwd if cwd is not None else self.repo_dir),
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise SyncError(f"Error while {step}: git executable not found") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            raise SyncError(f"Error while {step}: {detail}") from e
        return result.stdout

    def clone(self) -> None:
        """Clone repo_url into repo_dir."""
        self.repo_dir.parent.mkdir(parents=True, exist_ok=True)
        self._git(
            "cloning repo",
            ["clone", self.repo_url, str(self.repo_dir)],
            cwd=self.repo_dir.parent,
        )

    def reset(self) -> None:
        """Discard local changes in the worktree."""
        self._git("resetting repo", ["reset", "--hard"])

    def pull(self) -> bool:
        """
        Pull the remote's changes.

        Returns:
            True if new commits arrived, False if already up to date
        """
        output = self._git("pulling changes", ["pull", "--force", REMOTE])
        return "Already up to date" not in output

    def sync(self) -> bool:
        """
        Bring the checkout up to date with the remote.

        Returns:
            True if the checkout changed (fresh clone or new commits)

        Raises:
            SyncError: If any git step fails
        """
        log = safe_logger(self.logger)
        cloned = False
        if not self.is_checkout:
            log.log_info(f"Cloning {self.repo_url} into {self.repo_dir}")
            self.clone()
            cloned = True

        self.reset()
        updated = self.pull()

        log.log_operation(
            "repository_sync",
            {
                "repo_dir": str(self.repo_dir),
                "repo_url": self.repo_url,
                "cloned": cloned,
                "updated": updated,
            },
        )
        return cloned or updated
