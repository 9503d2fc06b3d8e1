"""Workspace descriptor model.

A workspace is a named, ordered grouping of repositories.  Cloud workspaces
come from the remote workspaces API and describe repositories by their
remote URL; local workspaces come from a file on disk and describe
repositories by their filesystem path.

All descriptors are frozen: once loaded they never change.  Use
``Workspace`` (the union) and ``match`` on the class to pick per-variant
behaviour.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from repospaces.models.enums import WorkspaceType
from repospaces.models.repository import LocalPathQuery, RepoInfo

_PATH_SEPARATORS = re.compile(r"[\\/]")

UNKNOWN_REPOSITORY_NAME = "unknown"


# ---------------------------------------------------------------------------
# Repository descriptors
# ---------------------------------------------------------------------------


class CloudRepositoryDescriptor(BaseModel):
    """A repository referenced by a cloud workspace."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    url: str | None = None
    provider: str | None = None
    provider_organization_name: str | None = None

    def search_query(self) -> LocalPathQuery:
        """Build the local-path search key (URL, provider and owner together)."""
        return LocalPathQuery(
            remote_url=self.url or "",
            repo_info=RepoInfo(
                name=self.name,
                provider=self.provider,
                owner=self.provider_organization_name,
            ),
        )


class LocalRepositoryDescriptor(BaseModel):
    """A repository referenced by a local workspace.  ``local_path`` is authoritative."""

    model_config = ConfigDict(frozen=True)

    local_path: str
    name: str

    @classmethod
    def from_path(cls, local_path: str) -> LocalRepositoryDescriptor:
        return cls(local_path=local_path, name=repository_name_from_path(local_path))


def repository_name_from_path(local_path: str) -> str:
    """Return the final segment of *local_path*, or ``"unknown"`` if there is none.

    Both ``/`` and ``\\`` count as separators so paths written on Windows
    resolve the same way.
    """
    segments = [segment for segment in _PATH_SEPARATORS.split(local_path) if segment]
    return segments[-1] if segments else UNKNOWN_REPOSITORY_NAME


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


class CloudWorkspace(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    repositories: tuple[CloudRepositoryDescriptor, ...] = ()

    @property
    def type(self) -> WorkspaceType:
        return WorkspaceType.CLOUD


class LocalWorkspace(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    repositories: tuple[LocalRepositoryDescriptor, ...] = ()

    @property
    def type(self) -> WorkspaceType:
        return WorkspaceType.LOCAL


Workspace = CloudWorkspace | LocalWorkspace
RepositoryDescriptor = CloudRepositoryDescriptor | LocalRepositoryDescriptor
