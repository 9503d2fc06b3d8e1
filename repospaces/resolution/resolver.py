"""Repository path resolver -- turns a workspace repository descriptor into
an opened repository, or decides there is none.

Resolution order for a cloud repository:

1. The remembered local path from the durable path map (not checked for
   existence; the opener decides whether it is still a repository).
2. The first candidate of a local-path search keyed by remote URL,
   provider and owner.  All candidates are kept on the location so a
   caller can offer a choice.
3. A virtual ``vfs`` address derived from the remote URL.
4. Nothing -- the repository is a placeholder.

A local repository always resolves to its stored path.

Collaborator failures propagate; isolating them per repository is the
tree node's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from repospaces.models.repository import Repository, RepositoryAddress
from repospaces.models.workspace import (
    CloudRepositoryDescriptor,
    CloudWorkspace,
    LocalRepositoryDescriptor,
    LocalWorkspace,
    RepositoryDescriptor,
    Workspace,
)
from repospaces.resolution.address import AuthorityMetadata, build_virtual_address

if TYPE_CHECKING:
    from repospaces.git.base import LocalPathSearch, RepositoryOpener
    from repospaces.managers.workspaces import WorkspacesService


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class RepositoryLocation(BaseModel):
    """Where a repository should be opened from."""

    model_config = ConfigDict(frozen=True)

    address: RepositoryAddress | None = None
    candidates: tuple[str, ...] = Field(default=(), description="Every local path the search returned")
    remembered: bool = False
    """True when the address came from the durable path map."""

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1


class ResolvedRepository(BaseModel):
    model_config = ConfigDict(frozen=True)

    descriptor: RepositoryDescriptor
    location: RepositoryLocation
    repository: Repository | None = None

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def is_placeholder(self) -> bool:
        return self.repository is None


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class RepositoryPathResolver:
    def __init__(
        self,
        service: WorkspacesService,
        search: LocalPathSearch,
        opener: RepositoryOpener,
    ) -> None:
        self._service = service
        self._search = search
        self._opener = opener

    async def resolve(self, workspace: Workspace, descriptor: RepositoryDescriptor) -> ResolvedRepository:
        """Locate and open one repository of *workspace*."""
        location = await self.locate(workspace, descriptor)

        repository: Repository | None = None
        if location.address is not None:
            repository = await self._opener.open(location.address)

        if repository is None:
            logger.debug("Workspace {}: {} is unresolved", workspace.id, descriptor.name)
        return ResolvedRepository(descriptor=descriptor, location=location, repository=repository)

    async def locate(self, workspace: Workspace, descriptor: RepositoryDescriptor) -> RepositoryLocation:
        match workspace, descriptor:
            case LocalWorkspace(), LocalRepositoryDescriptor():
                return RepositoryLocation(address=RepositoryAddress.from_path(descriptor.local_path))
            case CloudWorkspace(), CloudRepositoryDescriptor():
                return await self._locate_cloud(workspace, descriptor)
            case _:
                msg = f"{type(descriptor).__name__} does not belong to a {type(workspace).__name__}"
                raise TypeError(msg)

    async def _locate_cloud(self, workspace: CloudWorkspace, descriptor: CloudRepositoryDescriptor) -> RepositoryLocation:
        remembered = await self._service.get_cloud_workspace_repo_path(workspace.id, descriptor.id)
        if remembered:
            return RepositoryLocation(address=RepositoryAddress.from_path(remembered), remembered=True)

        candidates = tuple(await self._search.get_local_repo_paths(descriptor.search_query()))
        if candidates:
            location = RepositoryLocation(address=RepositoryAddress.from_path(candidates[0]), candidates=candidates)
            if location.is_ambiguous:
                logger.info(
                    "Workspace {}: {} has {} local clones, using {}",
                    workspace.id,
                    descriptor.name,
                    len(candidates),
                    candidates[0],
                )
            return location

        metadata = AuthorityMetadata(owner=descriptor.provider_organization_name)
        address = build_virtual_address(descriptor.url, descriptor.provider, metadata)
        return RepositoryLocation(address=address)
