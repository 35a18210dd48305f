"""Journal repository synchronization."""

from phlog.sync.repository import RepositorySync

__all__ = ["RepositorySync"]
