"""Workspace store implementations."""

from repospaces.store.base import WorkspacesStore
from repospaces.store.local import LocalWorkspacesStore

__all__ = ["LocalWorkspacesStore", "WorkspacesStore"]
