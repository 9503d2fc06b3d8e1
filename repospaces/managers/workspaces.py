"""Workspace resolution service.

Owns the two in-memory workspace caches (cloud and local).  Each cache is
unset (``None``) until first demand, then holds the list the source
returned -- possibly empty, which is a loaded state and is never re-fetched
implicitly.  ``invalidate`` is the only way back to unset.

The durable cloud repo -> local path map is not cached here; both path
operations go straight to the store.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from loguru import logger

from repospaces.sources.cloud import CloudWorkspaceSource
from repospaces.sources.local import LocalWorkspaceSource

if TYPE_CHECKING:
    from repospaces.models.workspace import CloudWorkspace, LocalWorkspace, Workspace
    from repospaces.sources.cloud import WorkspacesApi
    from repospaces.store.base import WorkspacesStore


class WorkspaceNotFoundError(LookupError):
    """Raised when no cloud or local workspace has the given ID."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(f"Workspace '{workspace_id}' not found")


T = TypeVar("T")


class _LazyCache(Generic[T]):
    """A load-once list with a single in-flight fetch.

    Concurrent first callers wait on one lock, so only the first of them
    fetches.  ``clear`` bumps a generation counter: a fetch that started
    before the clear still returns its result to its caller, but does not
    write it back into the cache.
    """

    def __init__(self, name: str, loader: Callable[[], Awaitable[list[T]]]) -> None:
        self._name = name
        self._loader = loader
        self._items: list[T] | None = None
        self._generation = 0
        self._lock = asyncio.Lock()

    async def get(self) -> list[T]:
        items = self._items
        if items is not None:
            return items

        async with self._lock:
            items = self._items
            if items is not None:
                return items

            generation = self._generation
            logger.debug("Loading {} workspaces", self._name)
            items = await self._loader()
            if generation == self._generation:
                self._items = items
            else:
                logger.debug("{} workspaces invalidated during load, result not cached", self._name)
            return items

    def clear(self) -> None:
        self._generation += 1
        self._items = None


class WorkspacesService:
    """Lists and looks up cloud and local workspaces.

    Constructed once per session and passed to whoever needs it (the tree
    nodes, the CLI).  Collaborator failures propagate to the caller.
    """

    def __init__(self, api: WorkspacesApi, store: WorkspacesStore) -> None:
        self._store = store
        self._cloud: _LazyCache[CloudWorkspace] = _LazyCache("cloud", CloudWorkspaceSource(api).load)
        self._local: _LazyCache[LocalWorkspace] = _LazyCache("local", LocalWorkspaceSource(store).load)

    # -- Listing ---------------------------------------------------------------

    async def list_workspaces(self) -> list[Workspace]:
        """Cloud workspaces first, then local workspaces, each in source order."""
        workspaces: list[Workspace] = []
        workspaces.extend(await self._cloud.get())
        workspaces.extend(await self._local.get())
        return workspaces

    async def get_cloud_workspace(self, workspace_id: str) -> CloudWorkspace | None:
        for workspace in await self._cloud.get():
            if workspace.id == workspace_id:
                return workspace
        return None

    async def get_local_workspace(self, workspace_id: str) -> LocalWorkspace | None:
        for workspace in await self._local.get():
            if workspace.id == workspace_id:
                return workspace
        return None

    async def get_workspace(self, workspace_id: str) -> Workspace:
        """Look a workspace up in both caches.  Raises ``WorkspaceNotFoundError`` if missing."""
        workspace = await self.get_cloud_workspace(workspace_id) or await self.get_local_workspace(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)
        return workspace

    # -- Cloud repo path map ---------------------------------------------------

    async def get_cloud_workspace_repo_path(self, workspace_id: str, repo_id: str) -> str | None:
        return await self._store.get_cloud_workspace_repo_path(workspace_id, repo_id)

    async def update_cloud_workspace_repo_local_path(self, workspace_id: str, repo_id: str, local_path: str) -> None:
        """Remember *local_path* for a cloud repository.

        Takes effect for tree nodes only after they are refreshed.
        """
        await self._store.write_cloud_workspace_disk_path_to_map(workspace_id, repo_id, local_path)
        logger.info("Cloud workspace {}: repo {} now resolves to {}", workspace_id, repo_id, local_path)

    # -- Cache control ---------------------------------------------------------

    def invalidate(self) -> None:
        """Discard both workspace caches; the next access re-fetches."""
        self._cloud.clear()
        self._local.clear()
        logger.debug("Workspace caches invalidated")
