"""Data models for workspaces and repositories."""

from repospaces.models.api import WorkspacesResponse
from repospaces.models.enums import AddressScheme, CollapsibleState, WorkspaceType
from repospaces.models.files import (
    CloudWorkspaceFileData,
    LocalWorkspaceEntry,
    LocalWorkspaceFileData,
    LocalWorkspaceRepositoryEntry,
)
from repospaces.models.repository import LocalPathQuery, RepoInfo, Repository, RepositoryAddress
from repospaces.models.workspace import (
    CloudRepositoryDescriptor,
    CloudWorkspace,
    LocalRepositoryDescriptor,
    LocalWorkspace,
    RepositoryDescriptor,
    Workspace,
)

__all__ = [
    # Enums
    "AddressScheme",
    # Workspaces
    "CloudRepositoryDescriptor",
    "CloudWorkspace",
    # Files
    "CloudWorkspaceFileData",
    "CollapsibleState",
    "LocalPathQuery",
    "LocalRepositoryDescriptor",
    "LocalWorkspace",
    "LocalWorkspaceEntry",
    "LocalWorkspaceFileData",
    "LocalWorkspaceRepositoryEntry",
    # Repositories
    "RepoInfo",
    "Repository",
    "RepositoryAddress",
    "RepositoryDescriptor",
    "Workspace",
    "WorkspaceType",
    # API schemas
    "WorkspacesResponse",
]
