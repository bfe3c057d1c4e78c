"""Git operations used by the release run."""

from .repository import GitError, Repository

__all__ = ["GitError", "Repository"]
