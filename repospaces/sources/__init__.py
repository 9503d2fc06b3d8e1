"""Workspace sources: fetch raw workspace data and normalise it."""

from repospaces.sources.cloud import CloudWorkspaceSource, WorkspacesApi
from repospaces.sources.local import LocalWorkspaceSource

__all__ = ["CloudWorkspaceSource", "LocalWorkspaceSource", "WorkspacesApi"]
